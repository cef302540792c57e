"""
Type algebra of the data model.

These nodes describe the named types of a model exactly as the author wrote
them. Type references are plain names; they are resolved by the consumers
(backend converter, schema exporter, value converter).
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum as PyEnum
from typing import Union


# Scalar type names every consumer understands, they cannot name a model type
BUILTIN_NAMES = frozenset({"boolean", "integer", "number", "string", "bool", "int", "float", "str"})


class TypeKind(PyEnum):
    """Tag of each kind of data type."""

    STRUCT = "struct"
    ARRAY = "array"
    VARIANT = "variant"
    ENUM = "enum"
    CONSTRAINED = "constrained"


@dataclass(frozen=True)
class Required:
    """The field must be supplied."""


@dataclass(frozen=True)
class Optional:
    """The field may be omitted, it then holds no value."""


@dataclass(frozen=True)
class Default:
    """The field may be omitted, it then holds the value of the expression."""

    expression: str = ""


DefaultType = Union[Required, Optional, Default]


@dataclass
class StructField:
    """A single field of a struct."""

    name: str = ""
    data_type: str = ""
    default: DefaultType = field(default_factory=Required)
    description: str | None = None

    @property
    def is_required(self) -> bool:
        return isinstance(self.default, Required)


@dataclass
class Struct:
    """A struct with a number of fields.

    Parsed instances keep every unrecognized key in an ``extra_fields`` map.
    ``inherit`` names another struct this one builds onto; the schema refers
    to it and schema value conversion accepts its fields. Generated classes
    do not subclass it.
    """

    fields: list[StructField] = field(default_factory=list)
    inherit: str | None = None

    kind = TypeKind.STRUCT

    def references(self) -> Iterator[str]:
        if self.inherit is not None:
            yield self.inherit
        for struct_field in self.fields:
            yield struct_field.data_type


@dataclass
class Array:
    """A list of values of the same type."""

    data_type: str = ""

    kind = TypeKind.ARRAY

    def references(self) -> Iterator[str]:
        yield self.data_type


@dataclass
class Variant:
    """A value of any of a number of types, tried in order when parsing."""

    data_types: list[str] = field(default_factory=list)

    kind = TypeKind.VARIANT

    def references(self) -> Iterator[str]:
        yield from self.data_types


@dataclass
class EnumType:
    """A single case of an enum, optionally carrying a payload."""

    name: str = ""
    data_type: str | None = None
    description: str | None = None


@dataclass
class Enum:
    """A tagged union of named cases."""

    types: list[EnumType] = field(default_factory=list)

    kind = TypeKind.ENUM

    def references(self) -> Iterator[str]:
        for enum_type in self.types:
            if enum_type.data_type is not None:
                yield enum_type.data_type


@dataclass
class ConstrainedType:
    """Wraps another type and requires all constraints to hold.

    Each constraint is an expression in which the wrapped value is ``x``.
    """

    data_type: str = ""
    constraints: list[str] = field(default_factory=list)

    kind = TypeKind.CONSTRAINED

    def references(self) -> Iterator[str]:
        yield self.data_type


DataTypeData = Union[Struct, Array, Variant, Enum, ConstrainedType]


@dataclass
class DataType:
    """A named type of the model."""

    name: str = ""
    data: DataTypeData = field(default_factory=Struct)
    description: str | None = None

    @property
    def kind(self) -> TypeKind:
        return self.data.kind

    def references(self) -> list[str]:
        """All type names referenced by this type, in declaration order."""
        return list(self.data.references())
