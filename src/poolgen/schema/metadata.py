"""
Method metadata table.

Parameter names and doc text cannot be recovered from a method's type
alone. A separate source analysis pass collects them, keyed by owning
entity and method name. Methods generated by the core itself have no
owning entity and are keyed with an empty entity name.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field


class MethodRef(NamedTuple):
    """Lookup key of the metadata table."""

    entity: str
    method: str


class MethodMetadata(BaseModel):
    """Parameter names and documentation of one method."""

    entity: str = ""
    method: str
    params: list[str] = Field(default_factory=list)
    doc: str = ""

    model_config = ConfigDict(frozen=True)

    @property
    def ref(self) -> MethodRef:
        return MethodRef(self.entity, self.method)


class MethodMetadataTable:
    """
    Read-only index of MethodMetadata by MethodRef.

    Later entries replace earlier ones with the same key.
    """

    def __init__(self, entries: Iterable[MethodMetadata] = ()):
        self._entries: dict[MethodRef, MethodMetadata] = {}
        for entry in entries:
            self._entries[entry.ref] = entry

    def get(self, ref: MethodRef) -> MethodMetadata | None:
        return self._entries.get(ref)

    def __contains__(self, ref: object) -> bool:
        return ref in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries.values())
