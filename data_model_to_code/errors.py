"""
Error types for the data model compiler.

Every error carries a location breadcrumb which is built up while the error
propagates outwards: each frame that descends into a field, list element or
macro prepends its segment with ``add_field`` / ``add_index`` and re-raises
the same error object. The final message reads from the root type down to
the offending leaf, e.g. ``Geometry.Sizes[2].w: Did not pass constraint: x > 0``.
"""

from __future__ import annotations


class DataModelError(Exception):
    """Base class for all errors raised by the compiler and generated code."""

    def __init__(self, cause: str, location: list[str | int] | None = None):
        super().__init__(cause)
        self.cause = cause
        self.location: list[str | int] = list(location) if location else []

    def add_field(self, name: str) -> DataModelError:
        """Prepend a field (or type, key, macro) name to the location."""
        self.location.insert(0, name)
        return self

    def add_index(self, index: int) -> DataModelError:
        """Prepend a list index to the location."""
        self.location.insert(0, index)
        return self

    @property
    def path(self) -> str:
        parts: list[str] = []
        for segment in self.location:
            if isinstance(segment, int):
                parts.append(f"[{segment}]")
            elif parts:
                parts.append(f".{segment}")
            else:
                parts.append(segment)
        return "".join(parts)

    def __str__(self) -> str:
        path = self.path
        if not path:
            return self.cause
        return f"{path}: {self.cause}"


# Structural errors


class StructuralError(DataModelError):
    """The shape of the model violates an invariant."""


class DuplicateNameError(StructuralError):
    def __init__(self, name: str):
        super().__init__(f'The type name "{name}" is already defined')
        self.name = name


class ReservedNameError(StructuralError):
    def __init__(self, name: str, reason: str):
        super().__init__(f'The name "{name}" is reserved: {reason}')
        self.name = name


class RegistryFrozenError(StructuralError):
    def __init__(self, action: str):
        super().__init__(f"The registry is frozen and cannot {action}")


class FieldOrderError(StructuralError):
    def __init__(self, name: str):
        super().__init__(f'The required field "{name}" must be placed before all optional and default fields')
        self.name = name


class InheritanceError(StructuralError):
    def __init__(self, parent: str, reason: str):
        super().__init__(f'Cannot inherit from "{parent}": {reason}')
        self.parent = parent


class DuplicateMemberError(StructuralError):
    def __init__(self, name: str, member_kind: str):
        super().__init__(f'The {member_kind} "{name}" is defined more than once')
        self.name = name


class InvalidIdentifierError(StructuralError):
    def __init__(self, name: str):
        super().__init__(f'"{name}" is not a valid identifier')
        self.name = name


class InvalidExpressionError(StructuralError):
    def __init__(self, expression: str, reason: str):
        super().__init__(f'The expression "{expression}" cannot be embedded: {reason}')
        self.expression = expression


# Reference errors


class TypeReferenceError(DataModelError):
    """A name (type, id or macro) does not resolve."""


class UnknownTypeError(TypeReferenceError):
    def __init__(self, name: str):
        super().__init__(f'The type "{name}" is neither a builtin nor defined in the model')
        self.name = name


class UnknownIDError(TypeReferenceError):
    def __init__(self, name: str):
        super().__init__(f'The type id "{name}" does not exist in the model')
        self.name = name


class UnknownMacroError(TypeReferenceError):
    def __init__(self, name: str):
        super().__init__(f'The macro "{name}" is not defined')
        self.name = name


class CircularMacroError(TypeReferenceError):
    def __init__(self, chain: list[str]):
        super().__init__(f"The macro \"{chain[-1]}\" is used recursively: {' -> '.join(chain)}")
        self.chain = list(chain)


class IncompleteMacroError(TypeReferenceError):
    def __init__(self, text: str):
        super().__init__(f'The string "{text}" begins a macro without naming it')
        self.text = text


class PartialMacroError(TypeReferenceError):
    def __init__(self, name: str, text: str):
        super().__init__(f'The partial macro insertion of "{name}" in "{text}" must be a string')
        self.name = name
        self.text = text


# Parse / convert errors


class ConversionError(DataModelError):
    """A serialization model could not be converted into the requested type."""


class BooleanConversionError(ConversionError):
    def __init__(self, raw: str):
        super().__init__(f'Unable to convert "{raw}" to a boolean')
        self.raw = raw


class IntegerConversionError(ConversionError):
    def __init__(self, raw: str):
        super().__init__(f'Unable to convert "{raw}" to an integer')
        self.raw = raw


class NumberConversionError(ConversionError):
    def __init__(self, raw: str):
        super().__init__(f'Unable to convert "{raw}" to a number')
        self.raw = raw


class ShapeError(ConversionError):
    def __init__(self, expected: str, found: str):
        super().__init__(f"Expected {expected} but found {found}")
        self.expected = expected
        self.found = found


class MissingFieldError(ConversionError):
    def __init__(self, name: str):
        super().__init__(f'Missing required field "{name}"')
        self.name = name


class ExcessFieldsError(ConversionError):
    def __init__(self, names: list[str]):
        quoted = ", ".join(f'"{name}"' for name in names)
        super().__init__(f"The fields [{quoted}] are not part of the struct")
        self.names = list(names)


class UnknownEnumCaseError(ConversionError):
    def __init__(self, name: str):
        super().__init__(f'Unknown enum case "{name}"')
        self.name = name


class VariantError(ConversionError):
    def __init__(self, failures: list[tuple[str, DataModelError]]):
        reasons = "; ".join(f"{name}: {error}" for name, error in failures)
        super().__init__(f"Unable to parse any of the variant types ({reasons})")
        self.failures = list(failures)


class ConstraintError(ConversionError):
    def __init__(self, constraint: str):
        super().__init__(f"Did not pass constraint: {constraint}")
        self.constraint = constraint


# Ingestion


class ModelFormatError(DataModelError):
    """A model document does not have the expected layout."""


# Output


class GeneratedCodeError(DataModelError):
    """Generated code failed validation before it was written."""
