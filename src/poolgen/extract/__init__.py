"""
Extraction of generation-ready descriptors from a prepared registry snapshot.
"""

from .assembler import build_entity_descriptor
from .catalog import OPERATORS, build_type_catalog
from .deps import DependencyTracker, named_types
from .descriptors import (
    CONDITION_FUNCS,
    CallConvention,
    EntityDescriptor,
    FieldDescriptor,
    MethodDescriptor,
    OperatorDef,
    ParamDescriptor,
    ReturnDescriptor,
    TypeDescriptor,
)
from .fields import extract_fields
from .methods import SPECIFIC_METHODS, extract_methods, resolve_method_metadata

__all__ = [
    "build_entity_descriptor",
    "OPERATORS",
    "build_type_catalog",
    "DependencyTracker",
    "named_types",
    "CONDITION_FUNCS",
    "CallConvention",
    "EntityDescriptor",
    "FieldDescriptor",
    "MethodDescriptor",
    "OperatorDef",
    "ParamDescriptor",
    "ReturnDescriptor",
    "TypeDescriptor",
    "extract_fields",
    "SPECIFIC_METHODS",
    "extract_methods",
    "resolve_method_metadata",
]
