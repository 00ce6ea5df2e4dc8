"""
Type descriptions for the entity registry snapshot.

A TypeRef is the plain-data stand-in for the runtime type of a field,
a method parameter or a method return value. It can be written either as
a structured object or as a compact Go type string:

    string                      -> basic
    time.Time                   -> named (package "time")
    github.com/x/y/types.Date   -> named (package "types", path "github.com/x/y/types")
    *T, []T, [N]T, map[K]V      -> pointer, slice, array, map
    func(int) string, chan T    -> opaque, kept as written
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict


class TypeKind(StrEnum):
    """Kinds of types found in entity signatures."""

    BASIC = "basic"  # predeclared, no namespace
    NAMED = "named"
    POINTER = "pointer"
    SLICE = "slice"
    ARRAY = "array"
    MAP = "map"
    OPAQUE = "opaque"  # func, chan and struct literals, kept verbatim


# Predeclared identifiers of the target language
PREDECLARED_TYPES = frozenset(
    {
        "bool",
        "byte",
        "complex64",
        "complex128",
        "error",
        "float32",
        "float64",
        "int",
        "int8",
        "int16",
        "int32",
        "int64",
        "rune",
        "string",
        "uint",
        "uint8",
        "uint16",
        "uint32",
        "uint64",
        "uintptr",
        "any",
        "interface {}",
    }
)

CONTAINER_KINDS = frozenset({TypeKind.POINTER, TypeKind.SLICE, TypeKind.ARRAY, TypeKind.MAP})

# Type literals whose components are not tracked
_OPAQUE_PREFIXES = ("func(", "func (", "chan ", "chan<-", "<-chan", "struct {", "struct{")


class TypeRef(BaseModel):
    """
    Structured description of a type.

    Attributes:
        kind: Type kind
        name: Identifier of basic and named types, full text of opaque types
        package: Short package name of named types (e.g. "time")
        pkg_path: Full import path of named types (e.g. "github.com/x/y/types")
        elem: Element type of pointers, slices, arrays and maps
        key: Key type of maps
        length: Length of arrays
    """

    kind: TypeKind
    name: str = ""
    package: str = ""
    pkg_path: str = ""
    elem: TypeRef | None = None
    key: TypeRef | None = None
    length: int = 0

    model_config = ConfigDict(frozen=True)

    @property
    def is_container(self) -> bool:
        return self.kind in CONTAINER_KINDS

    @property
    def is_resolved(self) -> bool:
        """Whether the namespace defining this type is known."""
        return self.kind != TypeKind.NAMED or bool(self.pkg_path)

    def __str__(self) -> str:
        if self.kind == TypeKind.POINTER:
            return f"*{self.elem}"
        if self.kind == TypeKind.SLICE:
            return f"[]{self.elem}"
        if self.kind == TypeKind.ARRAY:
            return f"[{self.length}]{self.elem}"
        if self.kind == TypeKind.MAP:
            return f"map[{self.key}]{self.elem}"
        if self.package:
            return f"{self.package}.{self.name}"
        return self.name


def parse_type(text: str) -> TypeRef:
    """
    Parse a compact type string into a TypeRef.

    Args:
        text: Type string such as "[]*pool.PartnerSet" or "map[string]int64"

    Returns:
        The parsed TypeRef

    Raises:
        ValueError: If the string is empty or malformed
    """
    text = text.strip()
    if not text:
        raise ValueError("empty type description")

    if text.startswith("*"):
        return TypeRef(kind=TypeKind.POINTER, elem=parse_type(text[1:]))
    if text.startswith("[]"):
        return TypeRef(kind=TypeKind.SLICE, elem=parse_type(text[2:]))
    if text.startswith("map["):
        end = _closing_bracket(text, len("map"))
        return TypeRef(
            kind=TypeKind.MAP,
            key=parse_type(text[len("map[") : end]),
            elem=parse_type(text[end + 1 :]),
        )
    if text.startswith("["):
        end = _closing_bracket(text, 0)
        length = text[1:end].strip()
        if not length.isdigit():
            raise ValueError(f"malformed type description: {text!r}")
        return TypeRef(kind=TypeKind.ARRAY, length=int(length), elem=parse_type(text[end + 1 :]))
    if text.replace(" ", "") == "interface{}":
        return TypeRef(kind=TypeKind.BASIC, name="interface {}")
    if text.startswith(_OPAQUE_PREFIXES):
        return TypeRef(kind=TypeKind.OPAQUE, name=text)
    if any(c in text for c in "[]* "):
        raise ValueError(f"malformed type description: {text!r}")
    if text in PREDECLARED_TYPES:
        return TypeRef(kind=TypeKind.BASIC, name=text)

    path, dot, name = text.rpartition(".")
    if not dot:
        return TypeRef(kind=TypeKind.NAMED, name=text)
    if not path or not name:
        raise ValueError(f"malformed type description: {text!r}")
    return TypeRef(
        kind=TypeKind.NAMED,
        name=name,
        package=path.rsplit("/", 1)[-1],
        pkg_path=path,
    )


def _closing_bracket(text: str, start: int) -> int:
    """Return the index of the bracket closing the one at text[start]."""
    depth = 0
    for i in range(start, len(text)):
        if text[i] == "[":
            depth += 1
        elif text[i] == "]":
            depth -= 1
            if depth == 0:
                return i
    raise ValueError(f"unbalanced brackets in type description: {text!r}")


def _coerce_type(value: Any) -> Any:
    if isinstance(value, str):
        return parse_type(value)
    return value


# TypeRef field that also accepts the compact string form
TypeSpec = Annotated[TypeRef, BeforeValidator(_coerce_type)]
