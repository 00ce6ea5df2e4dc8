"""
Generator configuration models.

Parses poolgen.toml and provides typed configuration for the pipeline:

    [pool]
    package = "pool"
    pool_path = "github.com/npiganeau/yep/pool"
    models_path = "github.com/npiganeau/yep/yep/models"

    [inputs]
    schema = "schema.json"
    metadata = "methods.json"

    [output]
    directory = "pool/"
    clean = false

    [generator]
    workers = 1
"""

from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from poolgen.errors import ConfigError, ErrorContext

DEFAULT_CONFIG_FILE = "poolgen.toml"


class PoolConfig(BaseModel):
    """Namespaces of the generated package and of the ORM core."""

    model_config = ConfigDict(frozen=True)

    package: str = "pool"
    pool_path: str = "github.com/npiganeau/yep/pool"
    models_path: str = "github.com/npiganeau/yep/yep/models"

    @property
    def models_package(self) -> str:
        return self.models_path.rsplit("/", 1)[-1]

    @property
    def collection_type(self) -> str:
        """Type string of the core's generic record collection."""
        return f"{self.models_package}.RecordCollection"


class InputsConfig(BaseModel):
    """Input documents."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    schema_file: str = Field(default="schema.json", alias="schema")
    metadata: str = "methods.json"


class OutputConfig(BaseModel):
    """Output configuration."""

    model_config = ConfigDict(frozen=True)

    directory: str = "pool/"
    clean: bool = False


class RunConfig(BaseModel):
    """Execution options."""

    model_config = ConfigDict(frozen=True)

    workers: int = Field(default=1, ge=1)


class GeneratorConfig(BaseModel):
    """Complete generator configuration."""

    model_config = ConfigDict(frozen=True)

    pool: PoolConfig = Field(default_factory=PoolConfig)
    inputs: InputsConfig = Field(default_factory=InputsConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    generator: RunConfig = Field(default_factory=RunConfig)

    def get_schema_path(self, root: Path) -> Path:
        return _resolve(root, self.inputs.schema_file)

    def get_metadata_path(self, root: Path) -> Path:
        return _resolve(root, self.inputs.metadata)

    def get_output_path(self, root: Path) -> Path:
        """Get absolute output directory path."""
        return _resolve(root, self.output.directory)


def _resolve(root: Path, value: str) -> Path:
    path = Path(value)
    if path.is_absolute():
        return path
    return root / path


def load_config(toml_path: Path) -> GeneratorConfig:
    """
    Load generator configuration from poolgen.toml.

    Args:
        toml_path: Path to poolgen.toml file

    Returns:
        GeneratorConfig with parsed values or defaults

    Raises:
        ConfigError: If the file is not valid TOML or holds invalid values
    """
    if not toml_path.exists():
        return GeneratorConfig()

    try:
        with open(toml_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(str(e), ErrorContext(file=toml_path)) from e

    try:
        return GeneratorConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(str(e), ErrorContext(file=toml_path)) from e
