"""Database data models for schema introspection."""

from typing import Optional, List, Dict, Set
from dataclasses import dataclass, field

from sqlalchemy.exc import CompileError
from sqlalchemy.types import TypeEngine


@dataclass(frozen=True)
class ColumnSchema:
    """One column of a table or query result set."""
    name: str
    native_type: TypeEngine
    nullable: bool = True
    max_size: Optional[int] = None

    @property
    def type_name(self) -> str:
        """Native type as the dialect spells it, for messages."""
        try:
            return str(self.native_type)
        except CompileError:
            return type(self.native_type).__name__


@dataclass(frozen=True)
class ColumnRef:
    """A fully qualified column reference (target of a foreign key)."""
    schema: str
    table: str
    column: str

    def __str__(self) -> str:
        return f"{self.schema}.{self.table}.{self.column}"


@dataclass
class RelationshipMaps:
    """Key and constraint lookups for one table, keyed by column name."""
    primary_keys: Set[str] = field(default_factory=set)
    unique_constraints: Dict[str, Optional[str]] = field(default_factory=dict)
    foreign_keys: Dict[str, ColumnRef] = field(default_factory=dict)
    referencing_tables: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (
            self.primary_keys
            or self.unique_constraints
            or self.foreign_keys
            or self.referencing_tables
        )
