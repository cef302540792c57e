"""
JSON Schema export of a registry type and everything it references.
"""

from __future__ import annotations

import logging
from typing import Any

from .. import __version__
from ..data_model import ConstrainedType, DataType, Default, Enum, Struct, TypeKind, Variant
from ..data_model import Array as ArrayType
from ..errors import DataModelError, InheritanceError, UnknownIDError, UnknownTypeError
from ..registry import Registry
from .values import ValueConverter

logger = logging.getLogger(__name__)

SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"

# Builtin type names and their JSON Schema type
SCHEMA_TYPES = {
    "boolean": "boolean",
    "integer": "integer",
    "number": "number",
    "string": "string",
    "bool": "boolean",
    "int": "integer",
    "float": "number",
    "str": "string",
}


def definition_pointer(name: str) -> str:
    return f"#/$defs/{name}"


class SchemaExporter:
    """Builds JSON Schema documents from a registry."""

    def __init__(self, registry: Registry):
        self.registry = registry.freeze()
        self.values = ValueConverter(self.registry)
        self._exporters = {
            TypeKind.STRUCT: self._struct_schema,
            TypeKind.ARRAY: self._array_schema,
            TypeKind.VARIANT: self._variant_schema,
            TypeKind.ENUM: self._enum_schema,
            TypeKind.CONSTRAINED: self._constrained_schema,
        }

    def export_schema(self, root_id: str, schema_id: str = "") -> dict[str, Any]:
        """
        Export the schema of a type.

        Every type reachable from the root is emitted exactly once under
        ``$defs``. Nothing is returned when any reference is dangling.

        Args:
            root_id: Name of the type the document describes
            schema_id: Value of the ``$id`` keyword

        Returns:
            The schema document

        Raises:
            UnknownIDError: If the root type is not in the registry
            UnknownTypeError: If a reachable type refers to an unknown name
        """
        if root_id not in self.registry:
            raise UnknownIDError(root_id)

        definitions: dict[str, dict[str, Any]] = {}
        pending = [root_id]
        while pending:
            name = pending.pop()
            if name in definitions:
                continue

            dependencies: set[str] = set()
            try:
                definitions[name] = self.type_schema(self.registry.get(name), dependencies)
            except DataModelError as error:
                error.add_field(name)
                raise
            pending.extend(sorted(dependencies - definitions.keys()))

        logger.debug("Exported schema of %s with %d definitions", root_id, len(definitions))
        return {
            "$comment": (
                f"This schema is generated by data_model_to_code v{__version__} "
                "to be compatible with the generated data model"
            ),
            "$schema": SCHEMA_DIALECT,
            "$id": schema_id,
            "$ref": definition_pointer(root_id),
            "$defs": {name: definitions[name] for name in self.registry.names() if name in definitions},
        }

    def type_schema(self, data_type: DataType, dependencies: set[str]) -> dict[str, Any]:
        """The fragment of one type, referenced custom types are added to ``dependencies``."""
        schema = self._exporters[data_type.kind](data_type.data, dependencies)
        if data_type.description:
            schema["description"] = data_type.description
        return schema

    def reference(self, name: str, dependencies: set[str]) -> dict[str, Any]:
        if name in SCHEMA_TYPES:
            return {"type": SCHEMA_TYPES[name]}
        if name not in self.registry:
            raise UnknownTypeError(name)
        dependencies.add(name)
        return {"$ref": definition_pointer(name)}

    def _struct_schema(self, struct: Struct, dependencies: set[str]) -> dict[str, Any]:
        properties = {}
        for struct_field in struct.fields:
            try:
                schema = self.reference(struct_field.data_type, dependencies)
                if isinstance(struct_field.default, Default):
                    schema["default"] = self.values.default_value(struct_field)
            except DataModelError as error:
                error.add_field(struct_field.name)
                raise
            if struct_field.description:
                schema["description"] = struct_field.description
            properties[struct_field.name] = schema

        schema = {
            "$comment": "A struct, fields which are not listed are kept as extra fields by the generated parser",
            "type": "object",
            "properties": properties,
            "required": [struct_field.name for struct_field in struct.fields if struct_field.is_required],
        }
        if struct.inherit is not None:
            try:
                parent = self.registry.get(struct.inherit)
                if parent is not None and parent.kind != TypeKind.STRUCT:
                    raise InheritanceError(struct.inherit, f"it is {parent.kind.value}, not a struct")
                schema.update(self.reference(struct.inherit, dependencies))
            except DataModelError as error:
                error.add_field("inherit")
                raise
        return schema

    def _array_schema(self, array: ArrayType, dependencies: set[str]) -> dict[str, Any]:
        return {
            "$comment": "An array of values of the same type",
            "type": "array",
            "items": self.reference(array.data_type, dependencies),
        }

    def _variant_schema(self, variant: Variant, dependencies: set[str]) -> dict[str, Any]:
        alternatives = []
        for index, name in enumerate(variant.data_types):
            try:
                alternatives.append(self.reference(name, dependencies))
            except DataModelError as error:
                error.add_index(index)
                raise
        return {
            "$comment": "A variant holding any of the listed types, the first type which matches is used",
            "anyOf": alternatives,
        }

    def _enum_schema(self, enum: Enum, dependencies: set[str]) -> dict[str, Any]:
        cases = []
        for enum_type in enum.types:
            if enum_type.data_type is None:
                schema = {"type": "string", "pattern": f"^{enum_type.name}$"}
            else:
                try:
                    payload = self.reference(enum_type.data_type, dependencies)
                except DataModelError as error:
                    error.add_field(enum_type.name)
                    raise
                schema = {
                    "type": "object",
                    "properties": {enum_type.name: payload},
                    "required": [enum_type.name],
                    "additionalProperties": False,
                }
            if enum_type.description:
                schema["description"] = enum_type.description
            cases.append(schema)
        return {
            "$comment": (
                "An enum holding exactly one of the listed cases, "
                "either the name of the case or a map from the name of the case to its payload"
            ),
            "oneOf": cases,
        }

    def _constrained_schema(self, constrained: ConstrainedType, dependencies: set[str]) -> dict[str, Any]:
        schema = self.reference(constrained.data_type, dependencies)
        constraints = ", ".join(constrained.constraints)
        schema["$comment"] = f"A constrained type which must keep the following true: [{constraints}]"
        return schema
