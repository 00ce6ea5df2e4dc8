"""
Per-entity catalog of field types and their condition operators.
"""

from __future__ import annotations

from collections.abc import Iterable

from poolgen.extract.descriptors import FieldDescriptor, OperatorDef, TypeDescriptor

# Every field type gets the same operators
OPERATORS: tuple[OperatorDef, ...] = (
    OperatorDef(name="Equals"),
    OperatorDef(name="NotEquals"),
    OperatorDef(name="Greater"),
    OperatorDef(name="GreaterOrEqual"),
    OperatorDef(name="Lower"),
    OperatorDef(name="LowerOrEqual"),
    OperatorDef(name="LikePattern"),
    OperatorDef(name="Like"),
    OperatorDef(name="NotLike"),
    OperatorDef(name="ILike"),
    OperatorDef(name="NotILike"),
    OperatorDef(name="ILikePattern"),
    OperatorDef(name="In", multi=True),
    OperatorDef(name="NotIn", multi=True),
    OperatorDef(name="ChildOf"),
)


def build_type_catalog(fields: Iterable[FieldDescriptor]) -> list[TypeDescriptor]:
    """
    Extract the distinct field types, sorted by type name.

    The first field seen with a given type decides the entry.

    Args:
        fields: Field descriptors of one entity

    Returns:
        One TypeDescriptor per distinct type
    """
    types: dict[str, TypeDescriptor] = {}
    for f in fields:
        if f.type in types:
            continue
        types[f.type] = TypeDescriptor(
            type=f.type,
            san_type=f.san_type,
            type_is_rs=f.type_is_rs,
            operators=list(OPERATORS),
        )
    return [types[name] for name in sorted(types)]
