"""Python code generation module for model-class-builder.

Turns introspected column schemas into a class model and renders it as
dataclass source.
"""

from .models import ClassModel, FieldModel
from .builder import ClassModelBuilder, build_class_model
from .emitter import WrapMode, render_class

__all__ = [
    "ClassModel",
    "FieldModel",
    "ClassModelBuilder",
    "build_class_model",
    "WrapMode",
    "render_class",
]
