"""Catalog introspection over a SQLAlchemy connection."""

import logging
import uuid
from contextlib import contextmanager
from typing import Optional, List, Dict, Set, Tuple, Any, Iterator

from sqlalchemy import inspect
from sqlalchemy.engine import Connection
from sqlalchemy.engine.reflection import Inspector
from sqlalchemy.exc import NoSuchTableError, SQLAlchemyError
from sqlalchemy.types import TypeEngine

from ..errors import IntrospectionError
from .models import ColumnSchema, ColumnRef, RelationshipMaps

logger = logging.getLogger(__name__)


def _length_of(native_type: TypeEngine) -> Optional[int]:
    length = getattr(native_type, "length", None)
    return length if isinstance(length, int) else None


def _columns_from_reflection(reflected: List[Dict[str, Any]]) -> List[ColumnSchema]:
    return [
        ColumnSchema(
            name=col["name"],
            native_type=col["type"],
            nullable=col.get("nullable", True),
            max_size=_length_of(col["type"]),
        )
        for col in reflected
    ]


class SchemaIntrospector:
    """Reads column schemas and key relationships from a live connection.

    Every call builds a fresh SQLAlchemy ``Inspector`` so reflected metadata
    is never cached between requests. All operations are read-only; the only
    statements issued outside of catalog reflection are the temporary view used
    to describe an ad-hoc query, which is dropped and rolled back.
    """

    # System schemas never listed for batch generation
    EXCLUDED_SCHEMAS: set = {'information_schema', 'pg_catalog'}

    # Dialects that reject SAVEPOINT; the scratch view is only dropped there
    NO_SAVEPOINT_DIALECTS: set = {'duckdb'}

    def __init__(self, connection: Connection):
        self.connection = connection

    def _inspector(self) -> Inspector:
        return inspect(self.connection)

    @contextmanager
    def _catalog_errors(self, what: str) -> Iterator[None]:
        """Re-raise driver and reflection failures as IntrospectionError."""
        try:
            yield
        except SQLAlchemyError as e:
            raise IntrospectionError(
                f"Failed to read {what}: {e}",
                details={"source": what},
            ) from e

    @contextmanager
    def _scratch_transaction(self) -> Iterator[None]:
        """Savepoint that is always rolled back, where the dialect has one."""
        if self.connection.dialect.name in self.NO_SAVEPOINT_DIALECTS:
            yield
            return

        savepoint = self.connection.begin_nested()
        try:
            yield
        finally:
            savepoint.rollback()

    def _qualified(self, schema: Optional[str], table: str) -> str:
        return f"{schema}.{table}" if schema else table

    # Column schema

    def get_column_schema(self, source: Any) -> List[ColumnSchema]:
        """Describe the result columns of a query string or prepared command.

        Args:
            source: SQL text, or a ``Select``/``TextualSelect`` construct

        Returns:
            Columns in result-set order
        """
        if isinstance(source, str):
            return self.get_query_columns(source)
        if hasattr(source, "selected_columns"):
            return self.get_command_columns(source)
        raise TypeError(
            f"Expected SQL text or a select construct, got {type(source).__name__}"
        )

    def get_table_columns(self, schema: Optional[str], table: str) -> List[ColumnSchema]:
        """Get the columns of a table or view from the catalog.

        Raises:
            IntrospectionError: if the table does not exist or the catalog query fails
        """
        name = self._qualified(schema, table)
        logger.debug("Reflecting columns of %s", name)

        with self._catalog_errors(f"columns of {name}"):
            inspector = self._inspector()
            if not inspector.has_table(table, schema=schema):
                raise IntrospectionError(
                    f"Table {name} does not exist",
                    details={"schema": schema, "table": table},
                )
            reflected = inspector.get_columns(table, schema=schema)

        return _columns_from_reflection(reflected)

    def get_query_columns(self, query: str) -> List[ColumnSchema]:
        """Describe an ad-hoc query without fetching any rows.

        The query is wrapped in a temporary view inside a savepoint; the view
        is reflected like a table, then dropped and the savepoint rolled back,
        so nothing the statement does is committed.

        Views do not carry the NOT NULL flag of their base columns, so every
        column described this way is reported nullable. Pass a select
        construct to keep nullability.
        """
        view_name = f"_mcb_{uuid.uuid4().hex}"
        quoted = self.connection.dialect.identifier_preparer.quote(view_name)
        logger.debug("Describing query through temporary view %s", view_name)

        with self._catalog_errors("query result columns"), self._scratch_transaction():
            self.connection.exec_driver_sql(
                f"CREATE TEMPORARY VIEW {quoted} AS {query}"
            )
            try:
                reflected = self._inspector().get_columns(view_name)
            finally:
                self.connection.exec_driver_sql(f"DROP VIEW IF EXISTS {quoted}")

        return _columns_from_reflection(reflected)

    def get_command_columns(self, command: Any) -> List[ColumnSchema]:
        """Describe a select construct from its declared columns.

        No statement is sent to the database; SQLAlchemy already knows the
        type of every selected column.
        """
        columns = []
        for element in command.selected_columns:
            columns.append(ColumnSchema(
                name=element.key,
                native_type=element.type,
                nullable=getattr(element, "nullable", True),
                max_size=_length_of(element.type),
            ))
        return columns

    # Relationships

    def get_primary_key_columns(self, schema: Optional[str], table: str) -> Set[str]:
        """Get the columns of the table's primary key."""
        name = self._qualified(schema, table)
        logger.debug("Reading primary key of %s", name)

        with self._catalog_errors(f"primary key of {name}"):
            pk = self._inspector().get_pk_constraint(table, schema=schema)
        return set(pk.get("constrained_columns") or [])

    def get_unique_constraints(self, schema: Optional[str], table: str) -> Dict[str, Optional[str]]:
        """Map each column in a unique constraint to the constraint name.

        Only declared unique constraints count, not unique indexes. A column
        in several constraints keeps the name of the last one the catalog
        returns.
        """
        name = self._qualified(schema, table)
        logger.debug("Reading unique constraints of %s", name)

        with self._catalog_errors(f"unique constraints of {name}"):
            constraints = self._inspector().get_unique_constraints(table, schema=schema)

        unique = {}
        for constraint in constraints:
            for column in constraint.get("column_names") or []:
                unique[column] = constraint.get("name")
        return unique

    def get_foreign_key_columns(self, schema: Optional[str], table: str) -> Dict[str, ColumnRef]:
        """Map each foreign key column to the column it references."""
        name = self._qualified(schema, table)
        logger.debug("Reading foreign keys of %s", name)

        with self._catalog_errors(f"foreign keys of {name}"):
            inspector = self._inspector()
            foreign_keys = inspector.get_foreign_keys(table, schema=schema)
            local_schema = schema or inspector.default_schema_name

        references = {}
        for fk in foreign_keys:
            referred_schema = fk.get("referred_schema") or local_schema
            for local, remote in zip(fk["constrained_columns"], fk["referred_columns"]):
                references[local] = ColumnRef(
                    schema=referred_schema,
                    table=fk["referred_table"],
                    column=remote,
                )
        return references

    def get_referencing_tables(self, schema: Optional[str], table: str) -> List[str]:
        """List every table holding a foreign key that points at this table.

        Returns:
            Fully qualified ``schema.table`` names in catalog order
        """
        name = self._qualified(schema, table)
        logger.debug("Scanning for tables that reference %s", name)

        referencing = []
        with self._catalog_errors(f"tables referencing {name}"):
            inspector = self._inspector()
            target_schema = schema or inspector.default_schema_name

            for child_schema, child_table in self._iter_tables(inspector):
                try:
                    foreign_keys = inspector.get_foreign_keys(child_table, schema=child_schema)
                except NoSuchTableError:
                    # Dropped after it was listed
                    logger.debug("Skipping %s.%s, no longer exists", child_schema, child_table)
                    continue

                for fk in foreign_keys:
                    referred_schema = fk.get("referred_schema") or child_schema
                    if fk["referred_table"] != table or referred_schema != target_schema:
                        continue
                    child = f"{child_schema}.{child_table}"
                    if child not in referencing:
                        referencing.append(child)
        return referencing

    def get_relationship_maps(self, schema: Optional[str], table: str) -> RelationshipMaps:
        """Run all four relationship lookups for one table."""
        return RelationshipMaps(
            primary_keys=self.get_primary_key_columns(schema, table),
            foreign_keys=self.get_foreign_key_columns(schema, table),
            unique_constraints=self.get_unique_constraints(schema, table),
            referencing_tables=self.get_referencing_tables(schema, table),
        )

    # Catalog

    def list_tables(self) -> List[Tuple[str, str]]:
        """Get every (schema, table) pair in the user schemas."""
        with self._catalog_errors("table list"):
            return list(self._iter_tables(self._inspector()))

    def _iter_tables(self, inspector: Inspector) -> Iterator[Tuple[str, str]]:
        for schema in inspector.get_schema_names():
            if schema.lower() in self.EXCLUDED_SCHEMAS:
                continue
            for table in inspector.get_table_names(schema=schema):
                yield schema, table
