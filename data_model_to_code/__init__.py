"""Data Model to Code

Compiles a declarative data model (structs, arrays, variants, enums and
constrained types) into Python modules with tree parsers and exporters, and
into JSON Schema documents.
"""

__version__ = "0.1.0"

from .codegen import GeneratorConfig, ModelGenerator
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
from .errors import DataModelError
from .loader import dump_registry, load_registry, registry_from_dict, registry_from_text, registry_to_dict
from .registry import Registry
from .schema import SchemaExporter, ValueConverter

__all__ = [
    "Array",
    "ConstrainedType",
    "DataModelError",
    "DataType",
    "Default",
    "Enum",
    "EnumType",
    "GeneratorConfig",
    "ModelGenerator",
    "Optional",
    "Registry",
    "Required",
    "SchemaExporter",
    "Struct",
    "StructField",
    "TypeKind",
    "ValueConverter",
    "Variant",
    "dump_registry",
    "load_registry",
    "registry_from_dict",
    "registry_from_text",
    "registry_to_dict",
]
