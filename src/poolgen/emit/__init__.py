"""
Rendering of entity descriptors into pool source files.
"""

from .emitter import (
    FILE_EXTENSION,
    GENERATED_MARKER,
    PoolEmitter,
    Section,
    SectionKind,
    go_comment,
    go_results,
    is_generated_file,
)

__all__ = [
    "FILE_EXTENSION",
    "GENERATED_MARKER",
    "PoolEmitter",
    "Section",
    "SectionKind",
    "go_comment",
    "go_results",
    "is_generated_file",
]
