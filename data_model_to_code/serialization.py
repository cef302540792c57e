"""
Generic serialization model.

A tree of scalar values, ordered lists and named-field maps. It is the
interchange form between stored instances (YAML, JSON) and compiled types:
generated parsers consume it, generated exporters produce it, and the
schema value converter turns it into typed JSON values.
"""

from __future__ import annotations

from typing import Any, Union


class Value:
    """A single scalar, always held as (whitespace trimmed) text."""

    __slots__ = ("value",)

    def __init__(self, value: str):
        self.value = value.strip()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __repr__(self) -> str:
        return f"Value({self.value!r})"

    def to_python(self) -> str:
        return self.value


class Array:
    """An ordered list of models."""

    __slots__ = ("values",)

    def __init__(self, values: list[SerializationModel] | None = None):
        self.values: list[SerializationModel] = list(values) if values is not None else []

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Array):
            return NotImplemented
        return self.values == other.values

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self):
        return iter(self.values)

    def __getitem__(self, index: int) -> SerializationModel:
        return self.values[index]

    def __repr__(self) -> str:
        return f"Array({self.values!r})"

    def to_python(self) -> list:
        return [value.to_python() for value in self.values]


class Map:
    """A mapping from field name to model, equality ignores key order."""

    __slots__ = ("fields",)

    def __init__(self, fields: dict[str, SerializationModel] | None = None):
        self.fields: dict[str, SerializationModel] = dict(fields) if fields is not None else {}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Map):
            return NotImplemented
        return self.fields == other.fields

    def __len__(self) -> int:
        return len(self.fields)

    def __contains__(self, key: str) -> bool:
        return key in self.fields

    def __getitem__(self, key: str) -> SerializationModel:
        return self.fields[key]

    def get(self, key: str, default: SerializationModel | None = None) -> SerializationModel | None:
        return self.fields.get(key, default)

    def items(self):
        return self.fields.items()

    def keys(self):
        return self.fields.keys()

    def __repr__(self) -> str:
        return f"Map({self.fields!r})"

    def to_python(self) -> dict:
        return {key: value.to_python() for key, value in self.fields.items()}


SerializationModel = Union[Value, Array, Map]


def shape_name(model: SerializationModel) -> str:
    """A human readable name of the shape of a model, used in error messages."""
    if isinstance(model, Value):
        return "a value"
    if isinstance(model, Array):
        return "a list"
    return "a map"


def from_python(obj: Any) -> SerializationModel:
    """Build a model from a generic JSON/YAML tree."""
    if obj is None:
        return Value("")
    if isinstance(obj, bool):
        return Value("true" if obj else "false")
    if isinstance(obj, (int, float, str)):
        return Value(str(obj))
    if isinstance(obj, (list, tuple)):
        return Array([from_python(value) for value in obj])
    if isinstance(obj, dict):
        return Map({key if isinstance(key, str) else str(key): from_python(value) for key, value in obj.items()})
    raise TypeError(f"Cannot convert {type(obj).__name__} to a serialization model")
