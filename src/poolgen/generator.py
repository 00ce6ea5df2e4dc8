"""
Pool generation runner.

The PoolGenerator prepares the registry snapshot once, then builds and
emits one pool file per entity. Entities are independent of each other:
a failure while processing one of them is recorded in the result and
does not prevent the others from being generated.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

from poolgen.config import GeneratorConfig
from poolgen.emit import PoolEmitter, is_generated_file
from poolgen.errors import PoolgenError
from poolgen.extract import EntityDescriptor, build_entity_descriptor
from poolgen.prepare import prepare_schema
from poolgen.schema import MethodMetadataTable, Schema

logger = logging.getLogger(__name__)


@dataclass
class GeneratorResult:
    """
    Outcome of a pool generation run.

    Attributes:
        files_created: Pool files written, sorted
        errors: One "<Entity>: <reason>" line per entity that was not generated
        warnings: Files the run left alone, and similar notices
    """

    files_created: list[Path] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Whether every entity got its pool file."""
        return len(self.errors) == 0

    def add_file(self, path: Path) -> None:
        """Record a written pool file."""
        self.files_created.append(path)

    def add_error(self, error: str) -> None:
        """Record the failure of one entity."""
        self.errors.append(error)

    def add_warning(self, warning: str) -> None:
        """Record a notice for the user."""
        self.warnings.append(warning)

    @property
    def summary(self) -> str:
        return f"{len(self.files_created)} file(s) generated, {len(self.errors)} error(s)"

    def merge(self, other: GeneratorResult) -> None:
        """Fold the result of one entity into the run result."""
        self.files_created.extend(other.files_created)
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)


class PoolGenerator:
    """
    Generate typed pool files for all entities of a registry snapshot.

    Example:
        schema = load_schema(Path("schema.json"))
        metadata = load_metadata(Path("methods.json"))
        result = PoolGenerator(schema, metadata).generate(Path("pool"))
    """

    def __init__(
        self,
        schema: Schema,
        metadata: MethodMetadataTable,
        config: GeneratorConfig | None = None,
    ):
        """
        Initialize generator.

        Args:
            schema: Registry snapshot, resolved or not
            metadata: Method metadata table
            config: Generator configuration (defaults if not provided)
        """
        self.config = config or GeneratorConfig()
        # Entities left out of the prepared snapshot, reported by generate()
        self.failures: dict[str, PoolgenError] = {}
        self.schema = prepare_schema(schema, self.failures)
        self.metadata = metadata
        self.emitter = PoolEmitter(self.config.pool)

    def entity_names(self) -> list[str]:
        return self.schema.entity_names

    def describe(self, entity_name: str) -> EntityDescriptor:
        """Build the descriptor of one entity."""
        if entity_name in self.failures:
            raise self.failures[entity_name]
        return build_entity_descriptor(self.schema, entity_name, self.metadata, self.config.pool)

    def generate_entity(self, entity_name: str, output_dir: Path) -> Path:
        """
        Generate the pool file of one entity.

        Returns:
            Path of the written file
        """
        return self.emitter.write(self.describe(entity_name), output_dir)

    def generate(
        self,
        output_dir: Path | None = None,
        workers: int | None = None,
        clean: bool | None = None,
    ) -> GeneratorResult:
        """
        Generate the pool files of all entities.

        Args:
            output_dir: Output directory (config output directory if not provided)
            workers: Number of worker threads (config value if not provided)
            clean: Remove earlier generated files first (uses config if None)

        Returns:
            GeneratorResult with the files written and per-entity errors
        """
        if output_dir is None:
            output_dir = self.config.get_output_path(Path.cwd())
        workers = workers or self.config.generator.workers

        result = GeneratorResult()
        output_dir.mkdir(parents=True, exist_ok=True)
        should_clean = clean if clean is not None else self.config.output.clean
        if should_clean:
            self._clean(output_dir, result)

        for name, error in self.failures.items():
            logger.error("Failed to generate pool file for model %s: %s", name, error)
            result.add_error(f"{name}: {error}")

        names = self.entity_names()
        if workers > 1 and len(names) > 1:
            with ThreadPoolExecutor(max_workers=min(workers, len(names))) as executor:
                futures = {
                    executor.submit(self._generate_one, name, output_dir): name
                    for name in names
                }
                for future in as_completed(futures):
                    result.merge(future.result())
        else:
            for name in names:
                result.merge(self._generate_one(name, output_dir))

        result.files_created.sort()
        result.errors.sort()
        return result

    def _generate_one(self, entity_name: str, output_dir: Path) -> GeneratorResult:
        """Generate one entity, capturing its failure in the returned result."""
        result = GeneratorResult()
        try:
            result.add_file(self.generate_entity(entity_name, output_dir))
        except (PoolgenError, OSError) as e:
            logger.error("Failed to generate pool file for model %s: %s", entity_name, e)
            result.add_error(f"{entity_name}: {e}")
        return result

    def _clean(self, output_dir: Path, result: GeneratorResult) -> None:
        """Remove pool files written by an earlier run."""
        for path in sorted(output_dir.iterdir()):
            if is_generated_file(path):
                logger.debug("Removing stale pool file %s", path)
                path.unlink()
            elif path.suffix == ".go":
                result.add_warning(f"Keeping hand-written file {path.name}")
