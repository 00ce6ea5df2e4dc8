"""
Field extraction.
"""

from __future__ import annotations

from poolgen.config import PoolConfig
from poolgen.extract.deps import DependencyTracker
from poolgen.extract.descriptors import FieldDescriptor
from poolgen.sanitize import sanitized_type, type_ident
from poolgen.schema.entities import EntitySchema


def extract_fields(
    entity: EntitySchema,
    tracker: DependencyTracker,
    pool: PoolConfig | None = None,
) -> list[FieldDescriptor]:
    """
    Build the field descriptors of an entity, sorted by field name.

    Relation fields are typed with the target's record set and are always
    searchable. Other fields are searchable when stored or computed from
    a related field.

    Args:
        entity: Prepared entity
        tracker: Dependency tracker of the entity's file, updated in place
        pool: Namespaces of the generated package and of the core

    Returns:
        Field descriptors
    """
    pool = pool or PoolConfig()
    result = []
    for f in sorted(entity.fields, key=lambda f: f.name):
        if f.is_relation:
            typ_str = f"{f.related_entity}Set"
            result.append(
                FieldDescriptor(
                    name=f.name,
                    type=typ_str,
                    san_type=type_ident(typ_str),
                    rel_entity=f.related_entity or "",
                    is_searchable=True,
                    type_is_rs=True,
                )
            )
        else:
            typ_str, _ = sanitized_type(
                entity.name,
                f.type or "",
                collection_type=pool.collection_type,
                pool_package=pool.package,
            )
            result.append(
                FieldDescriptor(
                    name=f.name,
                    type=typ_str,
                    san_type=type_ident(typ_str),
                    is_searchable=f.stored or f.is_related,
                )
            )
        tracker.add(f.type, f.name)
    return result
