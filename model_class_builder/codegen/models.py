"""Intermediate class model consumed by the code emitter."""

from typing import Optional, List
from dataclasses import dataclass, field


@dataclass
class FieldModel:
    """One field of a generated class."""
    name: str
    target_type: str
    size_constraint: Optional[int] = None
    is_primary_key: bool = False
    has_unique_constraint: bool = False
    unique_constraint: Optional[str] = None
    references: Optional[str] = None

    @property
    def is_optional(self) -> bool:
        return self.target_type.startswith("Optional[")


@dataclass
class ClassModel:
    """A generated class: name, ordered fields and the tables pointing at it."""
    class_name: str
    fields: List[FieldModel] = field(default_factory=list)
    referencing_tables: List[str] = field(default_factory=list)

    def has_size_constraints(self) -> bool:
        return any(f.size_constraint is not None for f in self.fields)
