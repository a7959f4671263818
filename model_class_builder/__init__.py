"""model-class-builder - generate Python dataclasses from database catalogs."""

from .engine import ModelClassBuilder, BatchResult, save_class
from .errors import ModelBuilderError, IntrospectionError, UnsupportedTypeError, GenerationError

__version__ = "0.1.0"

__all__ = [
    "ModelClassBuilder",
    "BatchResult",
    "save_class",
    "ModelBuilderError",
    "IntrospectionError",
    "UnsupportedTypeError",
    "GenerationError",
]
