"""
Conversion of serialization models into typed JSON values.

This is the schema oriented counterpart of the generated tree parsers. The
result is plain JSON data (``bool``, ``int``, ``float``, ``str``, ``list``,
``dict``) that validates against the exported schema.

Unlike the tree parsers, struct conversion is strict: keys that are not
fields of the struct (or of the structs it inherits from) raise
``ExcessFieldsError`` instead of being kept as extra fields. The tree
parsers preserve unknown data for round-tripping, this conversion produces
values for schema validation.
"""

from __future__ import annotations

import logging
from typing import Any

import yaml

from .. import runtime
from ..backend.converter import BUILTIN_TYPES
from ..data_model import ConstrainedType, Default, Enum, Optional, Required, Struct, StructField, TypeKind, Variant
from ..data_model import Array as ArrayType
from ..errors import (
    DataModelError,
    ExcessFieldsError,
    InheritanceError,
    MissingFieldError,
    ShapeError,
    UnknownEnumCaseError,
    UnknownTypeError,
    VariantError,
)
from ..macros import MacroExpander
from ..registry import Registry
from ..serialization import Map, SerializationModel, Value, from_python, shape_name

logger = logging.getLogger(__name__)

_SCALAR_PARSERS = {
    "bool": runtime.parse_bool,
    "int": runtime.parse_int,
    "float": runtime.parse_float,
    "str": runtime.parse_str,
}


class ValueConverter:
    """Converts serialization models into JSON values of registry types."""

    def __init__(self, registry: Registry):
        self.registry = registry.freeze()
        self.expander = MacroExpander(registry.macros)
        self._converters = {
            TypeKind.STRUCT: self._convert_struct,
            TypeKind.ARRAY: self._convert_array,
            TypeKind.VARIANT: self._convert_variant,
            TypeKind.ENUM: self._convert_enum,
            TypeKind.CONSTRAINED: self._convert_constrained,
        }

    def to_json(self, model: SerializationModel, type_name: str) -> Any:
        """
        Convert a model into the JSON value of the named type.

        Args:
            model: The instance to convert
            type_name: A builtin scalar name or a registry type name

        Returns:
            The JSON value

        Raises:
            DataModelError: If the model does not match the type
        """
        if type_name in BUILTIN_TYPES:
            return _SCALAR_PARSERS[BUILTIN_TYPES[type_name]](model)

        data_type = self.registry.get(type_name)
        if data_type is None:
            raise UnknownTypeError(type_name)
        return self._converters[data_type.kind](model, data_type.data)

    def default_value(self, struct_field: StructField) -> Any:
        """
        The JSON value of a field default.

        The expanded expression is read as YAML and converted to the field
        type. Expressions that are not data (for example a constructor call)
        fall back to the expanded text.
        """
        expression = self.expander.expand_text(struct_field.default.expression)
        try:
            data = yaml.safe_load(expression)
            return self.to_json(from_python(data), struct_field.data_type)
        except (yaml.YAMLError, DataModelError, TypeError) as e:
            logger.warning(
                'Using the default of field "%s" as text, it is not a %s value: %s',
                struct_field.name,
                struct_field.data_type,
                e,
            )
            return expression

    def struct_fields(self, struct: Struct) -> list[StructField]:
        """The fields of a struct preceded by the fields it inherits."""
        chain = [struct]
        seen: set[str] = set()
        while chain[0].inherit is not None:
            parent_name = chain[0].inherit
            if parent_name in seen:
                raise InheritanceError(parent_name, "the inheritance is circular")
            seen.add(parent_name)
            parent = self.registry.get(parent_name)
            if parent is None:
                raise UnknownTypeError(parent_name)
            if parent.kind != TypeKind.STRUCT:
                raise InheritanceError(parent_name, f"it is {parent.kind.value}, not a struct")
            chain.insert(0, parent.data)
        return [struct_field for s in chain for struct_field in s.fields]

    def _convert_struct(self, model: SerializationModel, struct: Struct) -> dict[str, Any]:
        remaining = runtime.expect_map(model)
        result = {}
        for struct_field in self.struct_fields(struct):
            if struct_field.name in remaining:
                try:
                    result[struct_field.name] = self.to_json(remaining.pop(struct_field.name), struct_field.data_type)
                except DataModelError as error:
                    error.add_field(struct_field.name)
                    raise
                continue

            match struct_field.default:
                case Required():
                    raise MissingFieldError(struct_field.name)
                case Default():
                    result[struct_field.name] = self.default_value(struct_field)
                case Optional():
                    pass

        if remaining:
            raise ExcessFieldsError(list(remaining))
        return result

    def _convert_array(self, model: SerializationModel, array: ArrayType) -> list[Any]:
        values = []
        for index, element in enumerate(runtime.expect_list(model)):
            try:
                values.append(self.to_json(element, array.data_type))
            except DataModelError as error:
                error.add_index(index)
                raise
        return values

    def _convert_variant(self, model: SerializationModel, variant: Variant) -> Any:
        failures = []
        for name in variant.data_types:
            try:
                return self.to_json(model, name)
            except DataModelError as error:
                failures.append((name, error))
        raise VariantError(failures)

    def _convert_enum(self, model: SerializationModel, enum: Enum) -> Any:
        cases = {enum_type.name: enum_type for enum_type in enum.types}

        if isinstance(model, Value):
            case = cases.get(model.value)
            if case is None or case.data_type is not None:
                raise UnknownEnumCaseError(model.value)
            return model.value

        if isinstance(model, Map) and len(model) == 1:
            ((name, payload),) = model.items()
            case = cases.get(name)
            if case is None or case.data_type is None:
                raise UnknownEnumCaseError(name)
            try:
                return {name: self.to_json(payload, case.data_type)}
            except DataModelError as error:
                error.add_field(name)
                raise

        raise ShapeError("a case name or a map with a single key", shape_name(model))

    def _convert_constrained(self, model: SerializationModel, constrained: ConstrainedType) -> Any:
        # Constraints are not evaluated here
        return self.to_json(model, constrained.data_type)
