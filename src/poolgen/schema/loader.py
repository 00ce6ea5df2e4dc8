"""
Load registry snapshots and method metadata from JSON documents.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from poolgen.errors import ErrorContext, SchemaLoadError
from poolgen.schema.entities import Schema
from poolgen.schema.metadata import MethodMetadata, MethodMetadataTable

_METADATA_LIST = TypeAdapter(list[MethodMetadata])


def _read_json(path: Path) -> Any:
    context = ErrorContext(file=path)
    try:
        return json.loads(path.read_text())
    except FileNotFoundError as e:
        raise SchemaLoadError("File not found", context) from e
    except json.JSONDecodeError as e:
        raise SchemaLoadError(f"Invalid JSON at line {e.lineno}: {e.msg}", context) from e


def load_schema(path: Path) -> Schema:
    """
    Load a registry snapshot.

    Args:
        path: Path to the JSON snapshot

    Returns:
        Parsed Schema

    Raises:
        SchemaLoadError: If the file is missing or does not describe a registry
    """
    data = _read_json(path)
    try:
        return Schema.model_validate(data)
    except ValidationError as e:
        raise SchemaLoadError(str(e), ErrorContext(file=path)) from e


def load_metadata(path: Path) -> MethodMetadataTable:
    """
    Load the method metadata table.

    The document is either a list of entries or an object holding
    them under "methods".

    Args:
        path: Path to the JSON document

    Returns:
        MethodMetadataTable indexing all entries

    Raises:
        SchemaLoadError: If the file is missing or malformed
    """
    data = _read_json(path)
    if isinstance(data, dict):
        data = data.get("methods", [])
    try:
        entries = _METADATA_LIST.validate_python(data)
    except ValidationError as e:
        raise SchemaLoadError(str(e), ErrorContext(file=path)) from e
    return MethodMetadataTable(entries)
