"""Error types for model-class-builder.

Every error carries a stable ``code`` so the CLI and callers can report
failures without matching on message text.
"""

from typing import Optional, Dict, Any


class ModelBuilderError(Exception):
    """Base exception for model generation errors."""

    code = "MODEL_BUILDER_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})

    def to_dict(self) -> Dict[str, Any]:
        """Error as a plain dict; ``details`` is left out when empty."""
        result = {"code": self.code, "message": self.message}
        if self.details:
            result["details"] = self.details
        return result


class IntrospectionError(ModelBuilderError):
    """Error connecting to the database or running a catalog query."""

    code = "INTROSPECTION_ERROR"


class UnsupportedTypeError(ModelBuilderError):
    """A native column type has no Python equivalent."""

    code = "UNSUPPORTED_TYPE"

    def __init__(
        self,
        message: str,
        type_name: Optional[str] = None,
        column: Optional[str] = None,
    ):
        details = {"type": type_name, "column": column}
        super().__init__(message, {k: v for k, v in details.items() if v})
        self.type_name = type_name
        self.column = column


class GenerationError(ModelBuilderError):
    """Generated code could not be written out."""

    code = "GENERATION_ERROR"
