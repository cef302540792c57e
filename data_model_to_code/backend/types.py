"""
Backend type representation.

These nodes are the validated, renderer specific shape of the registry
types. All references are resolved, default expressions are macro expanded
and every name has been checked to be usable in generated code. They are
derived values: re-deriving them from the same registry gives the same
result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class RefKind(Enum):
    """How a referenced type is provided."""

    CUSTOM = "custom"  # Generated from the same registry
    BUILTIN = "builtin"  # A scalar known to the runtime
    EXTERNAL = "external"  # Supplied by the user through the header text


class FieldPolicy(Enum):
    REQUIRED = "required"
    OPTIONAL = "optional"
    DEFAULT = "default"


@dataclass
class TypeRef:
    """A resolved reference to a type."""

    name: str = ""  # Name as written in the model
    target: str = ""  # Spelling in generated code
    kind: RefKind = RefKind.CUSTOM
    qualified_name: str = ""
    is_optional: bool = False

    @property
    def annotation(self) -> str:
        if self.is_optional:
            return f"{self.target} | None"
        return self.target

    @property
    def is_custom(self) -> bool:
        return self.kind == RefKind.CUSTOM

    def unwrapped(self) -> TypeRef:
        """The same reference without the optional wrapper."""
        return TypeRef(
            name=self.name,
            target=self.target,
            kind=self.kind,
            qualified_name=self.qualified_name,
        )


@dataclass
class BackendField:
    name: str = ""
    type_ref: TypeRef = field(default_factory=TypeRef)
    policy: FieldPolicy = FieldPolicy.REQUIRED
    description: str | None = None

    # Expanded default expression (DEFAULT) or "None" (OPTIONAL)
    default_expression: str | None = None

    # Name of the generated default value accessor, None for required fields
    default_accessor: str | None = None

    @property
    def is_required(self) -> bool:
        return self.policy == FieldPolicy.REQUIRED


@dataclass
class BackendStruct:
    fields: list[BackendField] = field(default_factory=list)
    inherit: TypeRef | None = None

    @property
    def required_fields(self) -> list[BackendField]:
        return [f for f in self.fields if f.is_required]

    @property
    def defaulted_fields(self) -> list[BackendField]:
        return [f for f in self.fields if not f.is_required]


@dataclass
class BackendArray:
    element: TypeRef = field(default_factory=TypeRef)


@dataclass
class BackendVariant:
    alternatives: list[TypeRef] = field(default_factory=list)


@dataclass
class BackendEnumCase:
    name: str = ""
    payload: TypeRef | None = None
    description: str | None = None


@dataclass
class BackendEnum:
    cases: list[BackendEnumCase] = field(default_factory=list)

    @property
    def unit_cases(self) -> list[BackendEnumCase]:
        return [case for case in self.cases if case.payload is None]

    @property
    def payload_cases(self) -> list[BackendEnumCase]:
        return [case for case in self.cases if case.payload is not None]


@dataclass
class BackendConstrained:
    base: TypeRef = field(default_factory=TypeRef)
    constraints: list[str] = field(default_factory=list)


BackendData = BackendStruct | BackendArray | BackendVariant | BackendEnum | BackendConstrained


@dataclass
class BackendType:
    """A converted registry type."""

    name: str = ""
    qualified_name: str = ""
    description: str | None = None
    data: BackendData = field(default_factory=BackendStruct)
