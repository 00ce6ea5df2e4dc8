"""
Plain-data description of the entity registry consumed by the generator.
"""

from .entities import (
    EntitySchema,
    FieldSchema,
    MethodSchema,
    RelationKind,
    Schema,
)
from .loader import load_metadata, load_schema
from .metadata import MethodMetadata, MethodMetadataTable, MethodRef
from .types import PREDECLARED_TYPES, TypeKind, TypeRef, TypeSpec, parse_type

__all__ = [
    "EntitySchema",
    "FieldSchema",
    "MethodSchema",
    "RelationKind",
    "Schema",
    "MethodMetadata",
    "MethodMetadataTable",
    "MethodRef",
    "PREDECLARED_TYPES",
    "TypeKind",
    "TypeRef",
    "TypeSpec",
    "parse_type",
    "load_metadata",
    "load_schema",
]
