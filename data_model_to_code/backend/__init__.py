"""
Backend representation of registry types and the converter producing it.
"""

from .converter import BUILTIN_TYPES, PythonConverter
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

__all__ = [
    "BUILTIN_TYPES",
    "PythonConverter",
    "BackendArray",
    "BackendConstrained",
    "BackendEnum",
    "BackendEnumCase",
    "BackendField",
    "BackendStruct",
    "BackendType",
    "BackendVariant",
    "FieldPolicy",
    "RefKind",
    "TypeRef",
]
