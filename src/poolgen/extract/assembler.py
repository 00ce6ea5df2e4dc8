"""
Assemble complete entity descriptors.
"""

from __future__ import annotations

from poolgen.config import PoolConfig
from poolgen.errors import ErrorContext, SchemaError
from poolgen.extract.catalog import build_type_catalog
from poolgen.extract.deps import DependencyTracker
from poolgen.extract.descriptors import CONDITION_FUNCS, EntityDescriptor
from poolgen.extract.fields import extract_fields
from poolgen.extract.methods import extract_methods
from poolgen.schema.entities import Schema
from poolgen.schema.metadata import MethodMetadataTable


def build_entity_descriptor(
    schema: Schema,
    entity_name: str,
    table: MethodMetadataTable,
    pool: PoolConfig | None = None,
) -> EntityDescriptor:
    """
    Build the descriptor of one entity.

    Each call uses its own dependency tracker and type catalog, so
    descriptors of different entities can be built concurrently.

    Args:
        schema: Prepared snapshot (see prepare_schema)
        entity_name: Entity to describe
        table: Method metadata table
        pool: Namespaces of the generated package and of the core

    Returns:
        Complete EntityDescriptor

    Raises:
        SchemaError: If the entity does not exist
        MethodMetadataError: If a method's parameter names cannot be resolved
        UnresolvedDependencyError: If a type's namespace is unknown
    """
    pool = pool or PoolConfig()
    entity = schema.get_entity(entity_name)
    if entity is None:
        raise SchemaError("Entity not found in registry", ErrorContext(entity=entity_name))

    tracker = DependencyTracker(pool, entity=entity.name)
    fields = extract_fields(entity, tracker, pool)
    types = build_type_catalog(fields)
    methods = extract_methods(schema, entity, table, tracker, pool)

    return EntityDescriptor(
        name=entity.name,
        fields=fields,
        methods=methods,
        types=types,
        deps=tracker.deps,
        condition_funcs=list(CONDITION_FUNCS),
    )
