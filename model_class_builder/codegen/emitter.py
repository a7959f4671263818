"""Render class models as Python dataclass source."""

import keyword
import re
from enum import Enum
from typing import Optional, List, Set

from .models import ClassModel, FieldModel

INDENT = "    "


class WrapMode(str, Enum):
    """How a generated class is wrapped."""
    TOP_LEVEL = "top_level"  # standalone module with docstring and imports
    NESTED = "nested"        # bare class body for embedding elsewhere


def _referenced_modules(model: ClassModel) -> Set[str]:
    """Modules named by qualified field types (``datetime.date`` -> ``datetime``)."""
    modules = set()
    for f in model.fields:
        base = f.target_type
        if f.is_optional:
            base = base[len("Optional["):-1]
        if "." in base:
            modules.add(base.rsplit(".", 1)[0])
    return modules


def _module_header(model: ClassModel, namespace: Optional[str], include_attributes: bool) -> List[str]:
    lines = []
    if namespace:
        lines.append(f'"""Generated models for {namespace}."""')
        lines.append("")

    for module in sorted(_referenced_modules(model)):
        lines.append(f"import {module}")

    if include_attributes and model.has_size_constraints():
        lines.append("from dataclasses import dataclass, field")
    else:
        lines.append("from dataclasses import dataclass")

    if any(f.is_optional for f in model.fields):
        lines.append("from typing import Optional")

    lines.append("")
    lines.append("")
    return lines


def python_identifier(name: str) -> str:
    """Turn a column or table name into a valid Python identifier.

    Invalid characters become underscores, a leading digit gets an
    underscore prefix and keywords get a trailing underscore
    (``order date`` -> ``order_date``, ``class`` -> ``class_``).
    """
    identifier = re.sub(r"\W", "_", name)
    if not identifier or identifier[0].isdigit():
        identifier = f"_{identifier}"
    if keyword.iskeyword(identifier):
        identifier = f"{identifier}_"
    return identifier


def _field_lines(f: FieldModel, indent: str, include_attributes: bool) -> List[str]:
    lines = []
    name = python_identifier(f.name)
    if name != f.name:
        lines.append(f"{indent}# column {f.name!r}")
    if f.is_primary_key:
        lines.append(f"{indent}# primary key column")
    if f.has_unique_constraint:
        if f.unique_constraint:
            lines.append(f"{indent}# unique constraint {f.unique_constraint}")
        else:
            lines.append(f"{indent}# unique constraint")
    if f.references:
        lines.append(f"{indent}# references {f.references}")

    if include_attributes and f.size_constraint is not None:
        lines.append(f"{indent}# max length {f.size_constraint}")
        lines.append(
            f'{indent}{name}: {f.target_type} = field(metadata={{"max_length": {f.size_constraint}}})'
        )
    else:
        lines.append(f"{indent}{name}: {f.target_type}")
    return lines


def render_class(
    model: ClassModel,
    mode: WrapMode = WrapMode.NESTED,
    namespace: Optional[str] = None,
    include_attributes: bool = True,
) -> str:
    """Render a class model to Python source.

    In TOP_LEVEL mode the class is preceded by a module docstring naming the
    namespace and the imports its fields need; a Python module is its own
    enclosing scope, so the class itself stays at column zero and nothing
    needs closing after it. NESTED mode emits the class alone.

    Args:
        model: Class to render
        mode: Wrapping mode
        namespace: Namespace named in the module docstring (TOP_LEVEL only)
        include_attributes: Emit max-length metadata for bounded strings

    Returns:
        Source text ending in a newline
    """
    lines = []
    if mode == WrapMode.TOP_LEVEL:
        lines.extend(_module_header(model, namespace, include_attributes))

    if model.referencing_tables:
        lines.append(f"# referencing tables: {', '.join(model.referencing_tables)}")

    lines.append("@dataclass")
    lines.append(f"class {python_identifier(model.class_name)}:")

    for f in model.fields:
        lines.extend(_field_lines(f, INDENT, include_attributes))

    if not model.fields:
        lines.append(f"{INDENT}pass")

    return "\n".join(lines) + "\n"
