"""Database introspection module for model-class-builder.

This module reads column schemas and key relationships from any database
SQLAlchemy can reflect, and maps native column types to Python types.
"""

from .models import ColumnSchema, ColumnRef, RelationshipMaps
from .introspector import SchemaIntrospector
from .type_mappers import TypeMapper, map_type, python_type_name
from .connections import resolve_database_url, open_engine

__all__ = [
    # Data models
    "ColumnSchema",
    "ColumnRef",
    "RelationshipMaps",
    # Introspection
    "SchemaIntrospector",
    # Type mapping
    "TypeMapper",
    "map_type",
    "python_type_name",
    # Connections
    "resolve_database_url",
    "open_engine",
]
