"""
Schema preparation.

Before anything is extracted, every entity of the snapshot must carry its
complete shape: the fields and methods contributed by its mixins, and the
fields inlined from the entities it embeds. prepare_schema() returns such a
resolved snapshot; it never mutates its input.
"""

from __future__ import annotations

import logging

from poolgen.errors import ErrorContext, PoolgenError, SchemaError
from poolgen.schema.entities import EntitySchema, FieldSchema, MethodSchema, Schema

logger = logging.getLogger(__name__)


def prepare_schema(
    schema: Schema,
    failures: dict[str, PoolgenError] | None = None,
) -> Schema:
    """
    Merge mixins and embedded fields into every entity.

    Args:
        schema: Registry snapshot
        failures: If given, entities that cannot be prepared are left out of
            the result and their error is stored here under the entity name

    Returns:
        A resolved snapshot (the input itself if it is already resolved)

    Raises:
        SchemaError: If an entity applies an unknown mixin or embeds an unknown
            entity, and no failures dict was given
    """
    if schema.resolved:
        return schema

    def attempt(inflate, entity, *args):
        if failures is None:
            return inflate(entity, *args)
        try:
            return inflate(entity, *args)
        except SchemaError as e:
            logger.debug("Leaving out %s: %s", entity.name, e)
            failures[entity.name] = e
            return None

    mixed = [attempt(_inflate_mixins, entity, schema) for entity in schema.entities]
    by_name = {entity.name: entity for entity in mixed if entity is not None}
    embedded = [attempt(_inflate_embeddings, entity, by_name) for entity in by_name.values()]
    entities = [entity for entity in embedded if entity is not None]

    return schema.model_copy(update={"entities": entities, "resolved": True})


def _inflate_mixins(entity: EntitySchema, schema: Schema) -> EntitySchema:
    """Add the fields and methods of the applied mixins the entity does not declare itself."""
    fields: dict[str, FieldSchema] = {f.name: f for f in entity.fields}
    methods: dict[str, MethodSchema] = {m.name: m for m in entity.methods}

    # Most recently applied mixin first, so that it wins over earlier ones
    for mixin_name in reversed(schema.applied_mixins(entity)):
        mixin = schema.get_mixin(mixin_name)
        if mixin is None:
            raise SchemaError(f"Unknown mixin '{mixin_name}'", ErrorContext(entity=entity.name))
        for f in mixin.fields:
            fields.setdefault(f.name, f)
        for m in mixin.methods:
            methods.setdefault(m.name, m)

    added = len(fields) + len(methods) - len(entity.fields) - len(entity.methods)
    if added:
        logger.debug("Merged %d mixin member(s) into %s", added, entity.name)
    return entity.model_copy(update={"fields": list(fields.values()), "methods": list(methods.values())})


def _inflate_embeddings(entity: EntitySchema, by_name: dict[str, EntitySchema]) -> EntitySchema:
    """Add the fields of embedded entities as non-stored related fields."""
    fields: dict[str, FieldSchema] = {f.name: f for f in entity.fields}

    for embed in entity.fields:
        if not embed.embed:
            continue
        target = by_name.get(embed.related_entity or "")
        if target is None:
            raise SchemaError(
                f"Embedded entity '{embed.related_entity}' not found",
                ErrorContext(entity=entity.name, field=embed.name),
            )
        for f in target.fields:
            if f.name in fields:
                continue
            fields[f.name] = f.model_copy(
                update={"stored": False, "related_path": f"{embed.name}.{f.name}", "embed": False}
            )

    if len(fields) == len(entity.fields):
        return entity
    logger.debug("Inlined %d embedded field(s) into %s", len(fields) - len(entity.fields), entity.name)
    return entity.model_copy(update={"fields": list(fields.values())})
