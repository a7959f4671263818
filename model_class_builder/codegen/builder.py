"""Assemble class models from column schemas and relationship maps."""

from typing import Optional, List

from ..database.models import ColumnSchema, RelationshipMaps
from ..database.type_mappers import TypeMapper
from ..errors import UnsupportedTypeError
from .models import ClassModel, FieldModel


class ClassModelBuilder:
    """Builds a :class:`ClassModel` from introspected metadata."""

    def __init__(self, type_mapper: Optional[TypeMapper] = None):
        self.type_mapper = type_mapper or TypeMapper()

    def build(
        self,
        class_name: str,
        columns: List[ColumnSchema],
        relationships: Optional[RelationshipMaps] = None,
    ) -> ClassModel:
        """Create the class model.

        Args:
            class_name: Name of the generated class
            columns: Result-set columns, in order
            relationships: Key lookups for the source table; None when the
                columns come from a query or command

        Returns:
            ClassModel with one field per column, in column order

        Raises:
            UnsupportedTypeError: if a column type has no Python equivalent
        """
        relationships = relationships or RelationshipMaps()
        fields = [self._build_field(col, relationships) for col in columns]

        return ClassModel(
            class_name=class_name,
            fields=fields,
            referencing_tables=list(relationships.referencing_tables),
        )

    def _build_field(self, column: ColumnSchema, relationships: RelationshipMaps) -> FieldModel:
        try:
            target_type, size = self.type_mapper.map(
                column.native_type, column.nullable, column.max_size
            )
        except UnsupportedTypeError as e:
            raise UnsupportedTypeError(
                f"Column '{column.name}' has unsupported type {column.type_name}",
                type_name=column.type_name,
                column=column.name,
            ) from e

        reference = relationships.foreign_keys.get(column.name)
        return FieldModel(
            name=column.name,
            target_type=target_type,
            size_constraint=size,
            is_primary_key=column.name in relationships.primary_keys,
            has_unique_constraint=column.name in relationships.unique_constraints,
            unique_constraint=relationships.unique_constraints.get(column.name),
            references=str(reference) if reference is not None else None,
        )


def build_class_model(
    class_name: str,
    columns: List[ColumnSchema],
    relationships: Optional[RelationshipMaps] = None,
    type_mapper: Optional[TypeMapper] = None,
) -> ClassModel:
    """Build a class model with a one-off :class:`ClassModelBuilder`."""
    return ClassModelBuilder(type_mapper).build(class_name, columns, relationships)
