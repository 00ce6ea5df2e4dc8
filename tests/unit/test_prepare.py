"""Tests for schema preparation (mixin and embedding merge)."""

import pytest

from poolgen.errors import SchemaError
from poolgen.prepare import prepare_schema
from poolgen.schema import EntitySchema, FieldSchema, MethodSchema, Schema


def _field_names(entity: EntitySchema) -> set[str]:
    return {f.name for f in entity.fields}


class TestMixins:
    def test_common_and_own_mixins_merged(self, registry: Schema) -> None:
        prepared = prepare_schema(registry)
        partner = prepared.get_entity("Partner")

        assert {"ID", "DisplayName", "Street", "City", "Name"} <= _field_names(partner)
        assert partner.get_method("NameGet") is not None
        assert partner.get_method("FormatAddress") is not None
        assert partner.get_method("Greeting") is not None

    def test_result_is_resolved_and_input_untouched(self, registry: Schema) -> None:
        prepared = prepare_schema(registry)

        assert prepared.resolved
        assert not registry.resolved
        assert registry.get_entity("Partner").get_field("ID") is None

    def test_resolved_schema_returned_as_is(self, partner_schema: Schema) -> None:
        assert prepare_schema(partner_schema) is partner_schema

    def test_own_members_win(self) -> None:
        schema = Schema(
            mixins=[
                EntitySchema(
                    name="M",
                    fields=[FieldSchema(name="Name", type="int64")],
                    methods=[MethodSchema(name="Ping", returns=["int64"])],
                )
            ],
            entities=[
                EntitySchema(
                    name="E",
                    mixins=["M"],
                    fields=[FieldSchema(name="Name", type="string")],
                    methods=[MethodSchema(name="Ping", returns=["string"])],
                )
            ],
        )
        entity = prepare_schema(schema).get_entity("E")

        assert str(entity.get_field("Name").type) == "string"
        assert str(entity.get_method("Ping").returns[0]) == "string"

    def test_last_applied_mixin_wins(self) -> None:
        schema = Schema(
            common_mixins=["First"],
            mixins=[
                EntitySchema(name="First", fields=[FieldSchema(name="Code", type="int64")]),
                EntitySchema(name="Second", fields=[FieldSchema(name="Code", type="string")]),
            ],
            entities=[EntitySchema(name="E", mixins=["Second"])],
        )
        entity = prepare_schema(schema).get_entity("E")

        assert str(entity.get_field("Code").type) == "string"

    def test_unknown_mixin(self) -> None:
        schema = Schema(entities=[EntitySchema(name="E", mixins=["Missing"])])

        with pytest.raises(SchemaError, match="Unknown mixin 'Missing'"):
            prepare_schema(schema)

    def test_failures_collected_per_entity(self) -> None:
        schema = Schema(
            entities=[
                EntitySchema(name="Good"),
                EntitySchema(name="Bad", mixins=["Missing"]),
                EntitySchema(
                    name="Embedder",
                    fields=[
                        FieldSchema(name="Inner", relation="many2one", related_entity="Bad", embed=True)
                    ],
                ),
            ]
        )
        failures = {}
        prepared = prepare_schema(schema, failures)

        assert prepared.entity_names == ["Good"]
        assert sorted(failures) == ["Bad", "Embedder"]
        assert isinstance(failures["Bad"], SchemaError)
        assert "Embedded entity 'Bad' not found" in str(failures["Embedder"])


class TestEmbeddings:
    def test_embedded_fields_inlined_as_related(self, registry: Schema) -> None:
        user = prepare_schema(registry).get_entity("User")

        birthday = user.get_field("Birthday")
        assert birthday is not None
        assert not birthday.stored
        assert birthday.related_path == "Partner.Birthday"
        assert birthday.is_related

    def test_embedded_target_mixin_fields_inlined(self, registry: Schema) -> None:
        user = prepare_schema(registry).get_entity("User")

        assert user.get_field("City").related_path == "Partner.City"

    def test_existing_fields_not_replaced(self, registry: Schema) -> None:
        user = prepare_schema(registry).get_entity("User")

        # ID comes from the common mixin, not from the embedded Partner
        assert user.get_field("ID").stored
        assert user.get_field("ID").related_path is None

    def test_relations_stay_relations(self, registry: Schema) -> None:
        manager = prepare_schema(registry).get_entity("User").get_field("Manager")

        assert manager.is_relation
        assert manager.related_entity == "Partner"

    def test_unknown_embedded_entity(self) -> None:
        schema = Schema(
            entities=[
                EntitySchema(
                    name="E",
                    fields=[
                        FieldSchema(
                            name="Other", relation="many2one", related_entity="Ghost", embed=True
                        )
                    ],
                )
            ]
        )

        with pytest.raises(SchemaError, match="Embedded entity 'Ghost' not found"):
            prepare_schema(schema)
