"""
Reading and writing model documents.

A model document is a YAML or JSON map::

    namespace: [shapes]
    headers: {py: "import datetime"}
    macros: {ORIGIN: "0.0"}
    types:
      - name: Point
        type: struct
        data:
          fields:
            - {name: x, type: number, default: {value: $ORIGIN}}
            - {name: label, type: string, default: optional}

Struct field defaults are ``required`` (or absent), ``optional`` or a map
``{value: <expression>}``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from .data_model import (
    Array,
    ConstrainedType,
    DataType,
    Default,
    Enum,
    EnumType,
    Optional,
    Required,
    Struct,
    StructField,
    TypeKind,
    Variant,
)
from .errors import DataModelError, ModelFormatError
from .registry import Registry
from .serialization import from_python

logger = logging.getLogger(__name__)

FORMATS = ("yaml", "json")


def load_registry(path: str | Path) -> Registry:
    """Load a model document, the format follows the file suffix."""
    path = Path(path)
    fmt = "json" if path.suffix.lower() == ".json" else "yaml"
    logger.debug("Loading %s model from %s", fmt, path)
    with open(path, encoding="utf-8") as f:
        return registry_from_text(f.read(), fmt)


def registry_from_text(text: str, fmt: str = "yaml") -> Registry:
    if fmt not in FORMATS:
        raise ValueError(f"Unknown model format {fmt!r}, expected one of {FORMATS}")
    try:
        data = json.loads(text) if fmt == "json" else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ModelFormatError(f"The model is not valid {fmt.upper()}: {e}") from e
    return registry_from_dict(data)


def registry_from_dict(data: Any) -> Registry:
    """Build a registry from a parsed model document."""
    if not isinstance(data, dict):
        raise ModelFormatError("The model must be a map")

    registry = Registry(_namespace(data.get("namespace")))

    for section, setter in (("headers", registry.set_header), ("footers", registry.set_footer)):
        for name, text in _section(data, section).items():
            if not isinstance(text, str):
                raise ModelFormatError("Expected text").add_field(str(name)).add_field(section)
            setter(str(name), text)

    for name, value in _section(data, "macros").items():
        try:
            registry.set_macro(str(name), from_python(value))
        except TypeError as e:
            raise ModelFormatError(str(e)).add_field(str(name)).add_field("macros") from e

    types = data.get("types", [])
    if not isinstance(types, list):
        raise ModelFormatError("Expected a list of types").add_field("types")
    for index, entry in enumerate(types):
        try:
            registry.add(_parse_type(entry))
        except DataModelError as error:
            error.add_index(index).add_field("types")
            raise

    logger.debug("Loaded %d types", len(registry))
    return registry


def _namespace(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [part for part in value.split(".") if part]
    if isinstance(value, list) and all(isinstance(part, str) for part in value):
        return list(value)
    raise ModelFormatError("Expected a list of names").add_field("namespace")


def _section(data: dict, key: str) -> dict:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ModelFormatError("Expected a map").add_field(key)
    return value


def _require(entry: dict, key: str, kind: type = str) -> Any:
    if key not in entry:
        raise ModelFormatError(f'Missing "{key}"')
    value = entry[key]
    if not isinstance(value, kind):
        raise ModelFormatError(f"Expected {kind.__name__}").add_field(key)
    return value


def _optional_text(entry: dict, key: str) -> str | None:
    value = entry.get(key)
    if value is not None and not isinstance(value, str):
        raise ModelFormatError("Expected text").add_field(key)
    return value


def _as_map(value: Any) -> dict:
    if not isinstance(value, dict):
        raise ModelFormatError("Expected a map")
    return value


def _parse_type(entry: Any) -> DataType:
    entry = _as_map(entry)
    name = _require(entry, "name")
    kind_name = _require(entry, "type")
    try:
        kind = TypeKind(kind_name)
    except ValueError:
        kinds = ", ".join(kind.value for kind in TypeKind)
        raise ModelFormatError(f'Unknown type kind "{kind_name}", expected one of {kinds}').add_field("type") from None

    try:
        data = _as_map(entry.get("data") or {})
        parsed = _DATA_PARSERS[kind](data)
    except DataModelError as error:
        error.add_field("data")
        raise
    return DataType(name=name, data=parsed, description=_optional_text(entry, "description"))


def _parse_struct(data: dict) -> Struct:
    fields_data = data.get("fields", [])
    if not isinstance(fields_data, list):
        raise ModelFormatError("Expected a list of fields").add_field("fields")

    fields = []
    for index, entry in enumerate(fields_data):
        try:
            entry = _as_map(entry)
            fields.append(
                StructField(
                    name=_require(entry, "name"),
                    data_type=_require(entry, "type"),
                    default=_parse_default(entry.get("default")),
                    description=_optional_text(entry, "description"),
                )
            )
        except DataModelError as error:
            error.add_index(index).add_field("fields")
            raise
    return Struct(fields=fields, inherit=_optional_text(data, "inherit"))


def _parse_default(value: Any):
    if value is None or value == "required":
        return Required()
    if value == "optional":
        return Optional()
    if isinstance(value, dict) and set(value) == {"value"}:
        return Default(str(value["value"]))
    raise ModelFormatError('Expected "required", "optional" or {value: <expression>}').add_field("default")


def _parse_array(data: dict) -> Array:
    return Array(data_type=_require(data, "type"))


def _parse_variant(data: dict) -> Variant:
    types = _require(data, "types", list)
    for index, name in enumerate(types):
        if not isinstance(name, str):
            raise ModelFormatError("Expected a type name").add_index(index).add_field("types")
    return Variant(data_types=list(types))


def _parse_enum(data: dict) -> Enum:
    cases = []
    for index, entry in enumerate(_require(data, "types", list)):
        try:
            entry = _as_map(entry)
            cases.append(
                EnumType(
                    name=_require(entry, "name"),
                    data_type=_optional_text(entry, "type"),
                    description=_optional_text(entry, "description"),
                )
            )
        except DataModelError as error:
            error.add_index(index).add_field("types")
            raise
    return Enum(types=cases)


def _parse_constrained(data: dict) -> ConstrainedType:
    constraints = data.get("constraints", [])
    if not isinstance(constraints, list):
        raise ModelFormatError("Expected a list of expressions").add_field("constraints")
    return ConstrainedType(data_type=_require(data, "type"), constraints=[str(c) for c in constraints])


_DATA_PARSERS = {
    TypeKind.STRUCT: _parse_struct,
    TypeKind.ARRAY: _parse_array,
    TypeKind.VARIANT: _parse_variant,
    TypeKind.ENUM: _parse_enum,
    TypeKind.CONSTRAINED: _parse_constrained,
}


# Writing


def registry_to_dict(registry: Registry) -> dict[str, Any]:
    """The model document of a registry, the inverse of ``registry_from_dict``."""
    data: dict[str, Any] = {}
    if registry.namespace:
        data["namespace"] = list(registry.namespace)
    if registry.headers:
        data["headers"] = registry.headers
    if registry.footers:
        data["footers"] = registry.footers
    if registry.macros:
        data["macros"] = {name: value.to_python() for name, value in registry.macros.items()}
    data["types"] = [_type_to_dict(data_type) for data_type in registry]
    return data


def dump_registry(registry: Registry, path: str | Path) -> None:
    """Write a model document, the format follows the file suffix."""
    path = Path(path)
    data = registry_to_dict(registry)
    with open(path, "w", encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            json.dump(data, f, indent=2)
            f.write("\n")
        else:
            yaml.safe_dump(data, f, sort_keys=False)


def _type_to_dict(data_type: DataType) -> dict[str, Any]:
    entry: dict[str, Any] = {"name": data_type.name, "type": data_type.kind.value}
    if data_type.description is not None:
        entry["description"] = data_type.description

    data = data_type.data
    match data:
        case Struct():
            body: dict[str, Any] = {"fields": [_field_to_dict(f) for f in data.fields]}
            if data.inherit is not None:
                body["inherit"] = data.inherit
        case Array():
            body = {"type": data.data_type}
        case Variant():
            body = {"types": list(data.data_types)}
        case Enum():
            body = {"types": [_case_to_dict(case) for case in data.types]}
        case ConstrainedType():
            body = {"type": data.data_type, "constraints": list(data.constraints)}
    entry["data"] = body
    return entry


def _field_to_dict(struct_field: StructField) -> dict[str, Any]:
    entry: dict[str, Any] = {"name": struct_field.name, "type": struct_field.data_type}
    match struct_field.default:
        case Optional():
            entry["default"] = "optional"
        case Default(expression=expression):
            entry["default"] = {"value": expression}
    if struct_field.description is not None:
        entry["description"] = struct_field.description
    return entry


def _case_to_dict(case: EnumType) -> dict[str, Any]:
    entry: dict[str, Any] = {"name": case.name}
    if case.data_type is not None:
        entry["type"] = case.data_type
    if case.description is not None:
        entry["description"] = case.description
    return entry
