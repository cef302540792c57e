"""
Conversion of registry types into backend types for the Python renderer.

The converter is where the structural invariants the renderer depends on are
enforced: field ordering, usable identifiers, unique member names, struct
inheritance and embeddable expressions. Errors are located from the type
name down to the offending field or case.
"""

from __future__ import annotations

import ast
import keyword
import logging

from ..data_model import (
    Array,
    ConstrainedType,
    DataType,
    Default,
    Enum,
    Optional,
    Required,
    Struct,
    StructField,
    TypeKind,
    Variant,
)
from ..errors import (
    DataModelError,
    DuplicateMemberError,
    FieldOrderError,
    InheritanceError,
    InvalidExpressionError,
    InvalidIdentifierError,
    ReservedNameError,
)
from ..macros import MacroExpander
from ..registry import Registry
from .types import (
    BackendArray,
    BackendConstrained,
    BackendEnum,
    BackendEnumCase,
    BackendField,
    BackendStruct,
    BackendType,
    BackendVariant,
    FieldPolicy,
    RefKind,
    TypeRef,
)

logger = logging.getLogger(__name__)

# Model scalar names understood by the runtime and their Python spelling
BUILTIN_TYPES = {
    "boolean": "bool",
    "integer": "int",
    "number": "float",
    "string": "str",
    "bool": "bool",
    "int": "int",
    "float": "float",
    "str": "str",
}

# Names the generated classes use for themselves
RESERVED_FIELD_NAMES = {"self", "extra_fields"}
RESERVED_CASE_NAMES = {"mro"}

# Names the generated module imports or defines for itself
RESERVED_TYPE_NAMES = {"enum", "Iterator", "_runtime"}
GENERATED_FUNCTION_PREFIXES = ("parse_", "export_")


def check_identifier(name: str) -> None:
    if not name.isidentifier() or keyword.iskeyword(name):
        raise InvalidIdentifierError(name)


def check_type_name(name: str) -> None:
    check_identifier(name)
    if name in RESERVED_TYPE_NAMES:
        raise ReservedNameError(name, "the generated module imports it")
    if name.startswith(GENERATED_FUNCTION_PREFIXES):
        raise ReservedNameError(name, "generated functions use the prefix")


def default_accessor(field_name: str) -> str:
    return f"default_{field_name}"


def check_expression(expression: str) -> None:
    try:
        ast.parse(expression, mode="eval")
    except SyntaxError as e:
        raise InvalidExpressionError(expression, e.msg) from e


class PythonConverter:
    """Converts registry types into backend types for Python generation."""

    def __init__(self, registry: Registry, namespace: list[str] | None = None):
        self.registry = registry.freeze()
        self.namespace = list(namespace) if namespace is not None else list(registry.namespace)
        self.expander = MacroExpander(registry.macros)
        self._converters = {
            TypeKind.STRUCT: self._convert_struct,
            TypeKind.ARRAY: self._convert_array,
            TypeKind.VARIANT: self._convert_variant,
            TypeKind.ENUM: self._convert_enum,
            TypeKind.CONSTRAINED: self._convert_constrained,
        }

    def convert_all(self) -> list[BackendType]:
        """Convert every registry type, in registry order."""
        return [self.convert(data_type) for data_type in self.registry]

    def convert(self, data_type: DataType) -> BackendType:
        try:
            check_type_name(data_type.name)
            data = self._converters[data_type.kind](data_type.data)
        except DataModelError as error:
            error.add_field(data_type.name)
            raise

        logger.debug("Converted %s type %s", data_type.kind.value, data_type.name)
        return BackendType(
            name=data_type.name,
            qualified_name=self.qualify(data_type.name),
            description=data_type.description,
            data=data,
        )

    def qualify(self, name: str) -> str:
        return ".".join([*self.namespace, name])

    def resolve(self, name: str) -> TypeRef:
        """Resolve a type name to a reference."""
        if name in BUILTIN_TYPES:
            target = BUILTIN_TYPES[name]
            return TypeRef(name=name, target=target, kind=RefKind.BUILTIN, qualified_name=target)
        if name in self.registry:
            return TypeRef(name=name, target=name, kind=RefKind.CUSTOM, qualified_name=self.qualify(name))

        # External types may be dotted, e.g. "datetime.date"
        for part in name.split("."):
            check_identifier(part)
        return TypeRef(name=name, target=name, kind=RefKind.EXTERNAL, qualified_name=name)

    def _convert_struct(self, struct: Struct) -> BackendStruct:
        # Required fields must come first since they are positional in the constructor
        found_optional = False
        for struct_field in struct.fields:
            if isinstance(struct_field.default, Required):
                if found_optional:
                    raise FieldOrderError(struct_field.name).add_field(struct_field.name)
            else:
                found_optional = True

        inherit = None
        if struct.inherit is not None:
            parent = self.registry.get(struct.inherit)
            if parent is None:
                raise InheritanceError(struct.inherit, "it is not defined in the model")
            if parent.kind != TypeKind.STRUCT:
                raise InheritanceError(struct.inherit, f"it is {parent.kind.value}, not a struct")
            inherit = self.resolve(struct.inherit)

        # Accessors are class attributes, a field must not shadow one
        accessors = {default_accessor(f.name) for f in struct.fields if not f.is_required}

        fields = []
        seen: set[str] = set()
        for struct_field in struct.fields:
            try:
                if struct_field.name in seen:
                    raise DuplicateMemberError(struct_field.name, "field")
                if struct_field.name in accessors:
                    raise DuplicateMemberError(struct_field.name, "default accessor")
                if struct_field.name in RESERVED_FIELD_NAMES:
                    raise InvalidIdentifierError(struct_field.name)
                seen.add(struct_field.name)
                fields.append(self._convert_field(struct_field))
            except DataModelError as error:
                error.add_field(struct_field.name)
                raise

        return BackendStruct(fields=fields, inherit=inherit)

    def _convert_field(self, struct_field: StructField) -> BackendField:
        check_identifier(struct_field.name)
        type_ref = self.resolve(struct_field.data_type)
        accessor = default_accessor(struct_field.name)

        match struct_field.default:
            case Required():
                return BackendField(
                    name=struct_field.name,
                    type_ref=type_ref,
                    policy=FieldPolicy.REQUIRED,
                    description=struct_field.description,
                )
            case Optional():
                type_ref.is_optional = True
                return BackendField(
                    name=struct_field.name,
                    type_ref=type_ref,
                    policy=FieldPolicy.OPTIONAL,
                    description=struct_field.description,
                    default_expression="None",
                    default_accessor=accessor,
                )
            case Default(expression=expression):
                expanded = self.expander.expand_text(expression)
                check_expression(expanded)
                return BackendField(
                    name=struct_field.name,
                    type_ref=type_ref,
                    policy=FieldPolicy.DEFAULT,
                    description=struct_field.description,
                    default_expression=expanded,
                    default_accessor=accessor,
                )
            case _:
                raise TypeError(f"Unknown default policy {struct_field.default!r}")

    def _convert_array(self, array: Array) -> BackendArray:
        return BackendArray(element=self.resolve(array.data_type))

    def _convert_variant(self, variant: Variant) -> BackendVariant:
        alternatives = []
        for index, name in enumerate(variant.data_types):
            try:
                alternatives.append(self.resolve(name))
            except DataModelError as error:
                error.add_index(index)
                raise
        return BackendVariant(alternatives=alternatives)

    def _convert_enum(self, enum: Enum) -> BackendEnum:
        cases = []
        seen: set[str] = set()
        for enum_type in enum.types:
            try:
                check_identifier(enum_type.name)
                if enum_type.name.startswith("_") or enum_type.name in RESERVED_CASE_NAMES:
                    raise InvalidIdentifierError(enum_type.name)
                if enum_type.name in seen:
                    raise DuplicateMemberError(enum_type.name, "enum case")
                seen.add(enum_type.name)
                payload = self.resolve(enum_type.data_type) if enum_type.data_type is not None else None
            except DataModelError as error:
                error.add_field(enum_type.name)
                raise
            cases.append(BackendEnumCase(name=enum_type.name, payload=payload, description=enum_type.description))
        return BackendEnum(cases=cases)

    def _convert_constrained(self, constrained: ConstrainedType) -> BackendConstrained:
        constraints = []
        for index, constraint in enumerate(constrained.constraints):
            try:
                expanded = self.expander.expand_text(constraint)
                check_expression(expanded)
            except DataModelError as error:
                error.add_index(index).add_field("constraints")
                raise
            constraints.append(expanded)
        return BackendConstrained(base=self.resolve(constrained.data_type), constraints=constraints)
