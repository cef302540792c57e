"""
Runtime support imported by generated modules.

Generated code refers to this module as ``_runtime``. It provides the
scalar parsers and exporters, the shape checks used by the generated tree
parsers, and a dispatch table so that a type can be parsed or exported by
class. Every generated module registers its classes here, and external
types can be made available to generated code the same way::

    from data_model_to_code import runtime

    runtime.register(Decimal, parse_decimal, export_decimal)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .errors import (
    BooleanConversionError,
    ConstraintError,
    ConversionError,
    DataModelError,
    IntegerConversionError,
    MissingFieldError,
    NumberConversionError,
    ShapeError,
    UnknownEnumCaseError,
    VariantError,
)
from .serialization import Array, Map, SerializationModel, Value, shape_name

__all__ = [
    "MISSING",
    "Array",
    "Map",
    "SerializationModel",
    "Value",
    "shape_name",
    "ConstraintError",
    "ConversionError",
    "DataModelError",
    "MissingFieldError",
    "ShapeError",
    "UnknownEnumCaseError",
    "VariantError",
    "expect_value",
    "expect_list",
    "expect_map",
    "register",
    "parse",
    "export",
]


class _Missing:
    """Marks a constructor argument that was not supplied."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


# Shape checks


def expect_value(model: SerializationModel) -> str:
    if not isinstance(model, Value):
        raise ShapeError("a value", shape_name(model))
    return model.value


def expect_list(model: SerializationModel) -> list[SerializationModel]:
    if not isinstance(model, Array):
        raise ShapeError("a list", shape_name(model))
    return list(model.values)


def expect_map(model: SerializationModel) -> dict[str, SerializationModel]:
    """The fields of a map model, as a copy the caller may consume."""
    if not isinstance(model, Map):
        raise ShapeError("a map", shape_name(model))
    return dict(model.fields)


# Scalars


def parse_bool(model: SerializationModel) -> bool:
    text = expect_value(model)
    if text == "true":
        return True
    if text == "false":
        return False
    raise BooleanConversionError(text)


def parse_int(model: SerializationModel) -> int:
    text = expect_value(model)
    try:
        return int(text)
    except ValueError:
        raise IntegerConversionError(text) from None


def parse_float(model: SerializationModel) -> float:
    text = expect_value(model)
    try:
        return float(text)
    except ValueError:
        raise NumberConversionError(text) from None


def parse_str(model: SerializationModel) -> str:
    return expect_value(model)


def export_bool(value: bool) -> Value:
    return Value("true" if value else "false")


def export_int(value: int) -> Value:
    return Value(str(value))


def export_float(value: float) -> Value:
    return Value(repr(float(value)))


def export_str(value: str) -> Value:
    return Value(value)


# Dispatch table

Parser = Callable[[SerializationModel], Any]
Exporter = Callable[[Any], SerializationModel]

_parsers: dict[type, Parser] = {
    bool: parse_bool,
    int: parse_int,
    float: parse_float,
    str: parse_str,
}

_exporters: dict[type, Exporter] = {
    bool: export_bool,
    int: export_int,
    float: export_float,
    str: export_str,
}


def register(cls: type, parser: Parser, exporter: Exporter) -> None:
    """Make a type available to ``parse`` and ``export``, last registration wins."""
    _parsers[cls] = parser
    _exporters[cls] = exporter


def is_registered(cls: type) -> bool:
    return cls in _parsers


def parse(cls: type, model: SerializationModel) -> Any:
    """Parse a model into an instance of ``cls``."""
    try:
        parser = _parsers[cls]
    except KeyError:
        raise TypeError(f"No parser is registered for {cls.__qualname__}") from None
    return parser(model)


def export(cls: type, value: Any) -> SerializationModel:
    """Export an instance of ``cls`` into a model."""
    try:
        exporter = _exporters[cls]
    except KeyError:
        raise TypeError(f"No exporter is registered for {cls.__qualname__}") from None
    return exporter(value)
