"""
poolgen - typed pool generation for dynamically typed ORM registries.

From a snapshot of the entity registry, poolgen writes one source file
per entity with a typed model handle, a condition DSL, a record set
wrapper and typed wrappers for every declared method.
"""

from poolgen._version import get_version
from poolgen.config import GeneratorConfig, load_config
from poolgen.errors import PoolgenError
from poolgen.generator import GeneratorResult, PoolGenerator
from poolgen.prepare import prepare_schema
from poolgen.schema import load_metadata, load_schema

__version__ = get_version()

__all__ = [
    "__version__",
    "GeneratorConfig",
    "GeneratorResult",
    "PoolGenerator",
    "PoolgenError",
    "load_config",
    "load_metadata",
    "load_schema",
    "prepare_schema",
]
