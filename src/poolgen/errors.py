"""
Error types for poolgen loading, extraction and emission.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class PoolgenError(Exception):
    """Base exception for all poolgen errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}: {self.message}"
        return self.message


class ConfigError(PoolgenError):
    """
    Raised when poolgen.toml cannot be read or holds invalid values.
    """

    pass


class SchemaLoadError(PoolgenError):
    """
    Raised when a schema snapshot or a method metadata document cannot be loaded.

    Examples:
    - File not found
    - Invalid JSON
    - Malformed type description
    """

    pass


class SchemaError(PoolgenError):
    """
    Raised when the snapshot references something it does not define.

    Examples:
    - Unknown entity requested for generation
    - Mixin applied to an entity but not declared
    - Embedded field pointing to an unknown entity
    """

    pass


class MethodMetadataError(PoolgenError):
    """
    Raised when the parameter names of a method cannot be resolved.

    Either no lookup tier (entity, mixins, default entry) knows the method,
    or the entry found lists a different number of names than the method
    declares parameters.
    """

    pass


class UnresolvedDependencyError(PoolgenError):
    """
    Raised when a named type used by a field or method has no namespace,
    so the generated file could not import it.
    """

    pass


class InvariantError(PoolgenError, AssertionError):
    """
    Raised by the emitter when a descriptor is incomplete.

    This always points at a bug in extraction, never at bad input.
    """

    pass


class EmitError(PoolgenError):
    """
    Raised when a section template fails to render.
    """

    pass


@dataclass
class ErrorContext:
    """
    Location of an error inside the entity registry.

    Attributes:
        entity: Entity being processed
        method: Optional method name
        field: Optional field name
        file: Optional source document
    """

    entity: str | None = None
    method: str | None = None
    field: str | None = None
    file: Path | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "schema.json: Partner.Greeting"
        """
        parts = []
        if self.entity:
            member = self.method or self.field
            parts.append(f"{self.entity}.{member}" if member else self.entity)
        location = " ".join(parts)
        if self.file:
            return f"{self.file}: {location}" if location else str(self.file)
        return location


def make_entity_error(
    error_cls: type[PoolgenError],
    message: str,
    entity: str,
    method: str | None = None,
    field: str | None = None,
) -> PoolgenError:
    """
    Helper to create an error located on an entity member.

    Args:
        error_cls: PoolgenError subclass to instantiate
        message: Error description
        entity: Entity name
        method: Optional method name
        field: Optional field name

    Returns:
        Error instance with context attached
    """
    context = ErrorContext(entity=entity, method=method, field=field)
    return error_cls(message, context)
