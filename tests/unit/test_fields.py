"""Tests for field extraction."""

from poolgen.extract import DependencyTracker, extract_fields
from poolgen.schema import EntitySchema, FieldSchema, Schema


def test_partner_fields(partner_entity: EntitySchema) -> None:
    fields = extract_fields(partner_entity, DependencyTracker())

    assert [f.name for f in fields] == ["Manager", "Name"]
    manager, name = fields
    assert manager.type == "PartnerSet"
    assert manager.san_type == "PartnerSet"
    assert manager.rel_entity == "Partner"
    assert manager.type_is_rs
    assert manager.is_searchable
    assert name.type == "string"
    assert name.san_type == "String"
    assert name.rel_entity == ""
    assert not name.type_is_rs


def test_fields_sorted_by_name(prepared_registry: Schema) -> None:
    fields = extract_fields(prepared_registry.get_entity("Partner"), DependencyTracker())
    names = [f.name for f in fields]

    assert names == sorted(names)
    assert len(names) == len(set(names))


def test_searchable_flag() -> None:
    entity = EntitySchema(
        name="E",
        fields=[
            FieldSchema(name="Stored", type="string"),
            FieldSchema(name="Computed", type="string", stored=False),
            FieldSchema(name="Related", type="string", stored=False, related_path="Other.Name"),
            FieldSchema(name="Rel", relation="one2many", related_entity="Other", stored=False),
        ],
    )
    searchable = {f.name: f.is_searchable for f in extract_fields(entity, DependencyTracker())}

    assert searchable == {"Computed": False, "Rel": True, "Related": True, "Stored": True}


def test_pool_types_sanitized() -> None:
    entity = EntitySchema(name="E", fields=[FieldSchema(name="Lines", type="[]pool.LineData")])
    (field,) = extract_fields(entity, DependencyTracker())

    assert field.type == "[]LineData"
    assert field.san_type == "SliceLineData"


def test_field_types_recorded_as_dependencies(prepared_registry: Schema) -> None:
    tracker = DependencyTracker(entity="User")
    extract_fields(prepared_registry.get_entity("User"), tracker)

    assert tracker.deps == [
        "github.com/npiganeau/yep/yep/models",
        "github.com/acme/auth",
        "github.com/npiganeau/yep/yep/models/types",
        "time",
    ]
