"""Shared pytest fixtures for poolgen tests."""

from pathlib import Path

import pytest

from poolgen.config import GeneratorConfig, PoolConfig
from poolgen.prepare import prepare_schema
from poolgen.schema import (
    EntitySchema,
    FieldSchema,
    MethodMetadata,
    MethodMetadataTable,
    MethodSchema,
    Schema,
    load_metadata,
    load_schema,
)


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def registry(fixtures_dir: Path) -> Schema:
    """Return the sample registry snapshot (not prepared)."""
    return load_schema(fixtures_dir / "schema.json")


@pytest.fixture
def prepared_registry(registry: Schema) -> Schema:
    """Return the sample registry snapshot with mixins and embeddings merged."""
    return prepare_schema(registry)


@pytest.fixture
def metadata(fixtures_dir: Path) -> MethodMetadataTable:
    """Return the sample method metadata table."""
    return load_metadata(fixtures_dir / "methods.json")


@pytest.fixture
def pool_config() -> PoolConfig:
    return PoolConfig()


@pytest.fixture
def generator_config() -> GeneratorConfig:
    return GeneratorConfig()


@pytest.fixture
def partner_entity() -> EntitySchema:
    """Return the minimal Partner entity."""
    return EntitySchema(
        name="Partner",
        fields=[
            FieldSchema(name="Name", type="string"),
            FieldSchema(name="Manager", relation="many2one", related_entity="Partner"),
        ],
        methods=[
            MethodSchema(name="Greeting", returns=["string"]),
            MethodSchema(name="Notify", params=["[]string"], variadic=True),
        ],
    )


@pytest.fixture
def partner_schema(partner_entity: EntitySchema) -> Schema:
    """Return a resolved snapshot holding only the minimal Partner entity."""
    return Schema(entities=[partner_entity], resolved=True)


@pytest.fixture
def partner_metadata() -> MethodMetadataTable:
    return MethodMetadataTable(
        [
            MethodMetadata(entity="Partner", method="Greeting", params=[]),
            MethodMetadata(entity="Partner", method="Notify", params=["msgs"]),
        ]
    )
