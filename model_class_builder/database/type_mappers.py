"""Mapping from database column types to Python field types.

Native types are resolved through SQLAlchemy's own ``python_type`` so every
type a dialect can reflect is covered without a hand-written lookup table.
"""

from typing import Optional, Tuple

from sqlalchemy.types import NullType, TypeEngine

from ..errors import UnsupportedTypeError

# Python type that stands for bounded text; it is never widened to Optional
STRING_TYPE = "str"

# SQL Server reports varchar(max) with this length
UNBOUNDED_LENGTH = 2147483647


def _unsupported(native_type: TypeEngine) -> UnsupportedTypeError:
    return UnsupportedTypeError(
        f"No Python type for database type {native_type!r}",
        type_name=type(native_type).__name__,
    )


def python_type_name(native_type: TypeEngine) -> str:
    """Return the canonical Python name for a SQLAlchemy type.

    Builtins are returned bare (``int``, ``str``); anything else is qualified
    with its module (``datetime.datetime``, ``decimal.Decimal``).

    Raises:
        UnsupportedTypeError: if the type has no Python equivalent
    """
    # Newer SQLAlchemy reports ``object`` for NullType instead of raising
    if isinstance(native_type, NullType):
        raise _unsupported(native_type)

    try:
        py_type = native_type.python_type
    except NotImplementedError as e:
        raise _unsupported(native_type) from e

    if py_type is object:
        raise _unsupported(native_type)

    if py_type.__module__ == "builtins":
        return py_type.__name__
    return f"{py_type.__module__}.{py_type.__qualname__}"


def is_bounded(max_size: Optional[int]) -> bool:
    """Whether a reported column size is a real limit."""
    return max_size is not None and 0 < max_size < UNBOUNDED_LENGTH


class TypeMapper:
    """Column type mapping strategy used by the class model builder.

    Subclass and override :meth:`type_name` to target a different naming
    scheme; the nullability and size rules stay the same.
    """

    def type_name(self, native_type: TypeEngine) -> str:
        return python_type_name(native_type)

    def map(
        self,
        native_type: TypeEngine,
        nullable: bool,
        max_size: Optional[int] = None,
    ) -> Tuple[str, Optional[int]]:
        """Map a native column type to a Python type and an optional size limit.

        Args:
            native_type: Dialect type of the column
            nullable: Whether the column accepts NULL
            max_size: Declared column length, if any

        Returns:
            Tuple of (target type string, size constraint or None)
        """
        target_type = self.type_name(native_type)

        if target_type == STRING_TYPE:
            return target_type, max_size if is_bounded(max_size) else None

        if nullable:
            target_type = f"Optional[{target_type}]"
        return target_type, None


def map_type(
    native_type: TypeEngine,
    nullable: bool,
    max_size: Optional[int] = None,
) -> Tuple[str, Optional[int]]:
    """Map a column type with the default :class:`TypeMapper`."""
    return TypeMapper().map(native_type, nullable, max_size)
