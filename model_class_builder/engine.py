"""Model class generation: ties introspection, model building and rendering."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, List, Any, Union

from sqlalchemy.engine import Connection

from .codegen import ClassModelBuilder, WrapMode, render_class
from .database import SchemaIntrospector, TypeMapper
from .database.models import ColumnSchema, RelationshipMaps
from .errors import GenerationError

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    """Files produced by a batch run."""
    written: List[Path] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)


def table_file_name(schema: str, table: str) -> str:
    """File name for a table's generated module."""
    return f"{schema}_{table}.py"


def save_class(content: str, path: Union[str, Path]) -> Path:
    """Write generated source to ``path``, creating parent directories.

    Raises:
        GenerationError: if the file cannot be written
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise GenerationError(
            f"Cannot write {path}: {e}",
            details={"path": str(path)},
        ) from e
    logger.debug("Saved %s", path)
    return path


class ModelClassBuilder:
    """Generates dataclass source from tables, queries and select constructs.

    "Outer" classes are standalone modules (docstring and imports); "inner"
    classes are the bare class body, for pasting into an existing module.

    Example usage:
        with engine.connect() as conn:
            builder = ModelClassBuilder(conn, namespace="sales")
            source = builder.outer_class_from_table("sales", "orders")
            save_class(source, "models/sales_orders.py")
    """

    def __init__(
        self,
        connection: Connection,
        namespace: Optional[str] = None,
        include_attributes: bool = True,
        type_mapper: Optional[TypeMapper] = None,
    ):
        self.connection = connection
        self.namespace = namespace
        self.include_attributes = include_attributes
        self.introspector = SchemaIntrospector(connection)
        self.builder = ClassModelBuilder(type_mapper)

    def outer_class_from_table(self, schema: Optional[str], table: str, class_name: Optional[str] = None) -> str:
        return self._class_from_table(schema, table, class_name, WrapMode.TOP_LEVEL)

    def outer_class_from_query(self, query: str, class_name: str) -> str:
        return self._class_from_source(query, class_name, WrapMode.TOP_LEVEL)

    def outer_class_from_command(self, command: Any, class_name: str) -> str:
        return self._class_from_source(command, class_name, WrapMode.TOP_LEVEL)

    def inner_class_from_table(self, schema: Optional[str], table: str, class_name: Optional[str] = None) -> str:
        return self._class_from_table(schema, table, class_name, WrapMode.NESTED)

    def inner_class_from_query(self, query: str, class_name: str) -> str:
        return self._class_from_source(query, class_name, WrapMode.NESTED)

    def inner_class_from_command(self, command: Any, class_name: str) -> str:
        return self._class_from_source(command, class_name, WrapMode.NESTED)

    def generate_all_classes(self, output_dir: Union[str, Path]) -> BatchResult:
        """Generate one module per table into ``output_dir``.

        Tables whose file already exists are skipped. The first failure
        propagates and stops the batch; files written before it stay on disk,
        so running again picks up where it stopped.
        """
        output = Path(output_dir)
        result = BatchResult()

        for schema, table in self.introspector.list_tables():
            path = output / table_file_name(schema, table)
            if path.exists():
                logger.info("Skipping %s.%s, %s already exists", schema, table, path)
                result.skipped.append(path)
                continue

            content = self.outer_class_from_table(schema, table)
            result.written.append(save_class(content, path))
            logger.info("Generated %s.%s -> %s", schema, table, path)

        return result

    def _class_from_table(self, schema: Optional[str], table: str, class_name: Optional[str], mode: WrapMode) -> str:
        columns = self.introspector.get_table_columns(schema, table)
        relationships = self.introspector.get_relationship_maps(schema, table)
        return self._render(class_name or table, columns, relationships, mode)

    def _class_from_source(self, source: Any, class_name: str, mode: WrapMode) -> str:
        columns = self.introspector.get_column_schema(source)
        return self._render(class_name, columns, None, mode)

    def _render(
        self,
        class_name: str,
        columns: List[ColumnSchema],
        relationships: Optional[RelationshipMaps],
        mode: WrapMode,
    ) -> str:
        model = self.builder.build(class_name, columns, relationships)
        return render_class(
            model,
            mode=mode,
            namespace=self.namespace,
            include_attributes=self.include_attributes,
        )
