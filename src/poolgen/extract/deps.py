"""
Import tracking for generated files.

Each type that appears in a field or method signature may live in another
package which the generated file then has to import. Anonymous containers
(pointers, slices, arrays, maps) are unwrapped down to the named types they are
built from, so "[]*partner.Partner" records the package of Partner once.
Function, channel and struct literals are kept opaque and contribute nothing.
"""

from __future__ import annotations

from collections.abc import Iterator

from poolgen.config import PoolConfig
from poolgen.errors import ErrorContext, UnresolvedDependencyError
from poolgen.schema.types import TypeKind, TypeRef


def named_types(typ: TypeRef) -> Iterator[TypeRef]:
    """Yield the named types a type is composed of, map keys included."""
    if typ.is_container:
        if typ.key is not None:
            yield from named_types(typ.key)
        if typ.elem is not None:
            yield from named_types(typ.elem)
    elif typ.kind == TypeKind.NAMED:
        yield typ


class DependencyTracker:
    """
    Accumulate the namespaces one generated file depends on.

    The models namespace is always imported; the generated package's own
    namespace never is.
    """

    def __init__(self, pool: PoolConfig | None = None, entity: str | None = None):
        pool = pool or PoolConfig()
        self.entity = entity
        self._base = pool.models_path
        # Short qualifiers of the two well-known packages
        self._aliases = {pool.package: pool.pool_path, pool.models_package: pool.models_path}
        self._seen: set[str] = {pool.models_path, pool.pool_path}
        self._deps: list[str] = []

    def add(self, typ: TypeRef | None, member: str | None = None) -> None:
        """
        Record the namespaces of the given type, if not already recorded.

        Args:
            typ: Type used by a field or a method signature
            member: Field or method name, for error reporting

        Raises:
            UnresolvedDependencyError: If a named type has no namespace
        """
        if typ is None:
            return
        for named in named_types(typ):
            if not named.is_resolved:
                raise UnresolvedDependencyError(
                    f"Cannot resolve the package of type '{named}' (used as '{typ}')",
                    ErrorContext(entity=self.entity, field=member),
                )
            path = self._aliases.get(named.pkg_path, named.pkg_path)
            if path not in self._seen:
                self._seen.add(path)
                self._deps.append(path)

    @property
    def deps(self) -> list[str]:
        """Namespaces to import: the models namespace first, the others sorted."""
        return [self._base, *sorted(self._deps)]
