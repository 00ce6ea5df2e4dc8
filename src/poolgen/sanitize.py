"""
Type name sanitizing.

Two pure string transforms used everywhere a type ends up in generated code:

- sanitized_type() turns a raw type description into the name used inside
  the generated package: the core's record collection becomes the typed
  "<Entity>Set", and qualifiers of the generated package itself are dropped
  ("pool.PartnerData" -> "PartnerData").
- type_ident() turns such a name into a token usable inside an identifier:
  "map[" becomes "Map", "[]" becomes "Slice", "[N]" becomes "ArrayN", "*" becomes
  "Ptr", any other punctuation separates words, and each word is title-cased
  ("map[string][]time.Time" -> "MapStringSliceTimeTime").
"""

from __future__ import annotations

import re

from poolgen.schema.types import TypeRef

DEFAULT_COLLECTION_TYPE = "models.RecordCollection"
DEFAULT_POOL_PACKAGE = "pool"

_WORD_SPLIT = re.compile(r"[^0-9A-Za-z_]+")
_ARRAY_LENGTH = re.compile(r"\[(\d+)\]")


def sanitized_type(
    entity: str,
    typ: TypeRef | str,
    *,
    collection_type: str = DEFAULT_COLLECTION_TYPE,
    pool_package: str = DEFAULT_POOL_PACKAGE,
) -> tuple[str, bool]:
    """
    Return the sanitized name of a type and whether it is a record set.

    Args:
        entity: Name of the entity the type is used in
        typ: Raw type, structured or as a string
        collection_type: Type string of the core's record collection
        pool_package: Name of the generated package

    Returns:
        (type name, is record set)
    """
    typ_str = str(typ)
    if typ_str == collection_type:
        return f"{entity}Set", True
    return re.sub(rf"\b{re.escape(pool_package)}\.", "", typ_str), False


def type_ident(type_name: str) -> str:
    """
    Create a string from the given type name that can be used inside an identifier.

    Args:
        type_name: Sanitized type name

    Returns:
        Identifier-safe token
    """
    text = _ARRAY_LENGTH.sub(r" Array\1 ", type_name)
    text = text.replace("map[", " Map ").replace("[]", " Slice ").replace("*", " Ptr ")
    return "".join(word[:1].upper() + word[1:] for word in _WORD_SPLIT.split(text) if word)
