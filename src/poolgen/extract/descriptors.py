"""
Generation-ready descriptors.

An EntityDescriptor holds everything the emitter needs to render one
entity's pool file. Descriptors are built fresh from the snapshot on every
run and discarded after emission.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

CONDITION_FUNCS = ("And", "AndNot", "Or", "OrNot")


class CallConvention(StrEnum):
    """How a method wrapper forwards to the core's dynamic dispatch."""

    DISCARD = "discard"  # no return value
    SINGLE = "single"  # Call(), one asserted value
    MULTI = "multi"  # CallMulti(), one asserted value per return


class OperatorDef(BaseModel):
    """A condition operator; multi operators take several values."""

    name: str
    multi: bool = False

    model_config = ConfigDict(frozen=True)


class FieldDescriptor(BaseModel):
    """
    A field of the entity.

    Attributes:
        name: Field name
        type: Sanitized type name ("<Target>Set" for relations)
        san_type: Identifier token of the type
        rel_entity: Target entity of a relation, empty for scalars
        is_searchable: Whether the field can be used in conditions
        type_is_rs: Whether the type is a record set
    """

    name: str
    type: str
    san_type: str
    rel_entity: str = ""
    is_searchable: bool = True
    type_is_rs: bool = False

    model_config = ConfigDict(frozen=True)


class ParamDescriptor(BaseModel):
    """A method parameter; for variadic parameters type is the element type."""

    name: str
    type: str
    variadic: bool = False
    is_rs: bool = False

    model_config = ConfigDict(frozen=True)

    @property
    def declaration(self) -> str:
        """Parameter as written in the wrapper's signature."""
        if self.variadic:
            return f"{self.name} ...{self.type}"
        return f"{self.name} {self.type}"

    @property
    def forwarded(self) -> str:
        """Argument passed to the core's dynamic call."""
        if self.is_rs and self.variadic:
            return f"{self.name}Collections"
        if self.is_rs:
            return f"{self.name}.RecordCollection"
        return self.name


class ReturnDescriptor(BaseModel):
    """A method return value."""

    type: str
    is_rs: bool = False

    model_config = ConfigDict(frozen=True)


class MethodDescriptor(BaseModel):
    """A typed forwarding wrapper for a declared method."""

    name: str
    doc: str = ""
    params: list[ParamDescriptor] = Field(default_factory=list)
    returns: list[ReturnDescriptor] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def convention(self) -> CallConvention:
        if not self.returns:
            return CallConvention.DISCARD
        if len(self.returns) == 1:
            return CallConvention.SINGLE
        return CallConvention.MULTI

    @property
    def variadic(self) -> bool:
        return bool(self.params) and self.params[-1].variadic


class TypeDescriptor(BaseModel):
    """A distinct field type of the entity, with its condition operators."""

    type: str
    san_type: str
    type_is_rs: bool = False
    operators: list[OperatorDef] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def arg_type(self, operator: OperatorDef) -> str:
        """
        Type of the operator's argument.

        Multi operators take a slice of scalars, but a record set
        already holds several records and is passed as is.
        """
        if operator.multi and not self.type_is_rs:
            return f"[]{self.type}"
        return self.type


class EntityDescriptor(BaseModel):
    """Everything needed to render one entity's pool file."""

    name: str
    fields: list[FieldDescriptor] = Field(default_factory=list)
    methods: list[MethodDescriptor] = Field(default_factory=list)
    types: list[TypeDescriptor] = Field(default_factory=list)
    deps: list[str] = Field(default_factory=list)
    condition_funcs: list[str] = Field(default_factory=lambda: list(CONDITION_FUNCS))

    model_config = ConfigDict(frozen=True)

    def get_type(self, type_name: str) -> TypeDescriptor | None:
        return next((t for t in self.types if t.type == type_name), None)

    @property
    def relation_fields(self) -> list[FieldDescriptor]:
        return [f for f in self.fields if f.type_is_rs]
