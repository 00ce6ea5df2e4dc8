"""
Method extraction.

Each declared method becomes a typed wrapper that forwards to the core's
dynamic dispatch. Method types carry no parameter names, so those are
looked up in the metadata table, in this order:

1. the entity that declares the method;
2. the mixins applied to the entity, most recently applied first;
3. the entity-less entry of methods defined by the core itself.
"""

from __future__ import annotations

from poolgen.config import PoolConfig
from poolgen.errors import MethodMetadataError, make_entity_error
from poolgen.extract.deps import DependencyTracker
from poolgen.extract.descriptors import MethodDescriptor, ParamDescriptor, ReturnDescriptor
from poolgen.sanitize import sanitized_type
from poolgen.schema.entities import EntitySchema, MethodSchema, Schema
from poolgen.schema.metadata import MethodMetadata, MethodMetadataTable, MethodRef
from poolgen.schema.types import TypeKind

# These methods have their own hand-written wrappers in every pool file
SPECIFIC_METHODS = frozenset({"Create", "Search", "First", "All"})


def resolve_method_metadata(
    schema: Schema,
    entity: EntitySchema,
    method_name: str,
    table: MethodMetadataTable,
) -> MethodMetadata:
    """
    Find the metadata entry of a method.

    Args:
        schema: Prepared snapshot
        entity: Entity the method is generated for
        method_name: Method name
        table: Metadata table

    Returns:
        The first matching entry

    Raises:
        MethodMetadataError: If no tier has an entry for the method
    """
    refs = [
        MethodRef(entity.name, method_name),
        *(MethodRef(m, method_name) for m in reversed(schema.applied_mixins(entity))),
        MethodRef("", method_name),
    ]
    for ref in refs:
        entry = table.get(ref)
        if entry is not None:
            return entry
    raise make_entity_error(
        MethodMetadataError,
        "No parameter names found in the entity, its mixins or the default entries",
        entity.name,
        method=method_name,
    )


def extract_methods(
    schema: Schema,
    entity: EntitySchema,
    table: MethodMetadataTable,
    tracker: DependencyTracker,
    pool: PoolConfig | None = None,
) -> list[MethodDescriptor]:
    """
    Build the method descriptors of an entity, sorted by method name.

    Args:
        schema: Prepared snapshot
        entity: Prepared entity
        table: Metadata table for parameter names and docs
        tracker: Dependency tracker of the entity's file, updated in place
        pool: Namespaces of the generated package and of the core

    Returns:
        Method descriptors, without the specific methods
    """
    pool = pool or PoolConfig()
    result = []
    for method in sorted(entity.methods, key=lambda m: m.name):
        if method.name in SPECIFIC_METHODS:
            continue
        meta = resolve_method_metadata(schema, entity, method.name, table)
        result.append(
            MethodDescriptor(
                name=method.name,
                doc=meta.doc or method.doc,
                params=_process_parameters(entity, method, meta, tracker, pool),
                returns=_process_returns(entity, method, tracker, pool),
            )
        )
    return result


def _process_parameters(
    entity: EntitySchema,
    method: MethodSchema,
    meta: MethodMetadata,
    tracker: DependencyTracker,
    pool: PoolConfig,
) -> list[ParamDescriptor]:
    if len(meta.params) != len(method.params):
        raise make_entity_error(
            MethodMetadataError,
            f"Method declares {len(method.params)} parameter(s) "
            f"but {len(meta.params)} name(s) were found",
            entity.name,
            method=method.name,
        )

    params = []
    last = len(method.params) - 1
    for i, (name, typ) in enumerate(zip(meta.params, method.params)):
        variadic = method.variadic and i == last
        if variadic and typ.kind == TypeKind.SLICE and typ.elem is not None:
            p_type = typ.elem
        else:
            p_type = typ
        type_name, is_rs = sanitized_type(
            entity.name, p_type, collection_type=pool.collection_type, pool_package=pool.package
        )
        params.append(ParamDescriptor(name=name, type=type_name, variadic=variadic, is_rs=is_rs))
        tracker.add(typ, method.name)
    return params


def _process_returns(
    entity: EntitySchema,
    method: MethodSchema,
    tracker: DependencyTracker,
    pool: PoolConfig,
) -> list[ReturnDescriptor]:
    returns = []
    for typ in method.returns:
        type_name, is_rs = sanitized_type(
            entity.name, typ, collection_type=pool.collection_type, pool_package=pool.package
        )
        returns.append(ReturnDescriptor(type=type_name, is_rs=is_rs))
        tracker.add(typ, method.name)
    return returns
