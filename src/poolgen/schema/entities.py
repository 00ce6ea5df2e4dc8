"""
Entity registry snapshot.

The snapshot is the read-only view of the dynamic ORM core that the
generator works from: entities, the mixin bundles they apply, and the
fields and methods each of them declares.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from poolgen.schema.types import TypeSpec


class RelationKind(StrEnum):
    """Relation kinds of the ORM core."""

    MANY2ONE = "many2one"
    ONE2ONE = "one2one"
    ONE2MANY = "one2many"
    MANY2MANY = "many2many"
    REV2ONE = "rev2one"


class FieldSchema(BaseModel):
    """
    A field of an entity.

    Attributes:
        name: Field name, unique within the entity
        type: Type of the backing struct member (optional for relations)
        relation: Relation kind, None for scalar fields
        related_entity: Target entity of a relation
        stored: Whether the field is persisted
        related_path: Dotted path for fields computed from a related field
        embed: Whether the target entity's fields are inlined in this entity
    """

    name: str
    type: TypeSpec | None = None
    relation: RelationKind | None = None
    related_entity: str | None = None
    stored: bool = True
    related_path: str | None = None
    embed: bool = False

    model_config = ConfigDict(frozen=True)

    @property
    def is_relation(self) -> bool:
        return self.relation is not None

    @property
    def is_related(self) -> bool:
        """Whether this field is computed from a field of a related entity."""
        return bool(self.related_path)


class MethodSchema(BaseModel):
    """
    A method declared on an entity.

    Attributes:
        name: Method name
        params: Parameter types, receiver excluded
        variadic: Whether the last parameter is variadic (its type is then a slice)
        returns: Return types
        doc: Documentation gathered by the core
    """

    name: str
    params: list[TypeSpec] = Field(default_factory=list)
    variadic: bool = False
    returns: list[TypeSpec] = Field(default_factory=list)
    doc: str = ""

    model_config = ConfigDict(frozen=True)


class EntitySchema(BaseModel):
    """
    An entity, or a mixin bundle, of the registry.

    Attributes:
        name: Entity name
        fields: Declared fields
        methods: Declared methods
        mixins: Names of the mixins applied, in application order
    """

    name: str
    fields: list[FieldSchema] = Field(default_factory=list)
    methods: list[MethodSchema] = Field(default_factory=list)
    mixins: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def get_field(self, name: str) -> FieldSchema | None:
        return next((f for f in self.fields if f.name == name), None)

    def get_method(self, name: str) -> MethodSchema | None:
        return next((m for m in self.methods if m.name == name), None)


class Schema(BaseModel):
    """
    Snapshot of the entity registry.

    Attributes:
        entities: Entities to generate pool files for
        mixins: Mixin bundles that entities can apply
        common_mixins: Mixins applied to every entity, before the entity's own
        resolved: Whether mixins and embeddings are already merged into entities
    """

    entities: list[EntitySchema] = Field(default_factory=list)
    mixins: list[EntitySchema] = Field(default_factory=list)
    common_mixins: list[str] = Field(default_factory=list)
    resolved: bool = False

    model_config = ConfigDict(frozen=True)

    @property
    def entity_names(self) -> list[str]:
        return sorted(e.name for e in self.entities)

    def get_entity(self, name: str) -> EntitySchema | None:
        return next((e for e in self.entities if e.name == name), None)

    def get_mixin(self, name: str) -> EntitySchema | None:
        return next((m for m in self.mixins if m.name == name), None)

    def applied_mixins(self, entity: EntitySchema) -> list[str]:
        """
        Names of all mixins applied to the entity, in application order.

        Common mixins are applied before the entity's own.
        """
        return [*self.common_mixins, *entity.mixins]
