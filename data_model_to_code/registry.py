"""
Registry of the named types of a model.

The registry is filled by ``add`` calls during a build phase and frozen
before it is handed to converters, generators and the schema exporter.
After ``freeze`` every mutation raises, so the consumers may share one
registry without locking.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from .data_model import BUILTIN_NAMES, DataType, TypeKind
from .errors import DuplicateNameError, RegistryFrozenError, ReservedNameError
from .serialization import SerializationModel, Value

logger = logging.getLogger(__name__)


class Registry:
    """Named types plus header, footer and macro tables."""

    def __init__(self, namespace: list[str] | None = None):
        self.namespace: list[str] = list(namespace) if namespace else []
        self._types: dict[str, DataType] = {}
        self._headers: dict[str, str] = {}
        self._footers: dict[str, str] = {}
        self._macros: dict[str, SerializationModel] = {}
        self._frozen = False

    # Build phase

    def add(self, data_type: DataType) -> None:
        """Add a type, the name must not be taken yet nor be a builtin scalar."""
        self._check_mutable(f'add "{data_type.name}"')
        if data_type.name in BUILTIN_NAMES:
            raise ReservedNameError(data_type.name, "it is a builtin type")
        if data_type.name in self._types:
            raise DuplicateNameError(data_type.name)
        self._types[data_type.name] = data_type
        logger.debug("Registered %s type %s", data_type.kind.value, data_type.name)

    def set_header(self, name: str, text: str) -> None:
        self._check_mutable(f'set the header "{name}"')
        self._headers[name] = text

    def set_footer(self, name: str, text: str) -> None:
        self._check_mutable(f'set the footer "{name}"')
        self._footers[name] = text

    def set_macro(self, name: str, value: SerializationModel | str) -> None:
        self._check_mutable(f'set the macro "{name}"')
        self._macros[name] = Value(value) if isinstance(value, str) else value

    def freeze(self) -> Registry:
        """End the build phase, returns the registry for chaining."""
        if not self._frozen:
            logger.debug("Freezing registry with %d types", len(self._types))
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self, action: str) -> None:
        if self._frozen:
            raise RegistryFrozenError(action)

    # Read access

    def get(self, name: str) -> DataType | None:
        return self._types.get(name)

    def get_group(self, kind: TypeKind) -> Iterator[DataType]:
        """All types of one kind, in registry order."""
        return (data_type for data_type in self._types.values() if data_type.kind == kind)

    def names(self) -> list[str]:
        return list(self._types)

    def __iter__(self) -> Iterator[DataType]:
        return iter(list(self._types.values()))

    def __len__(self) -> int:
        return len(self._types)

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def get_header(self, name: str) -> str:
        return self._headers.get(name, "")

    def get_footer(self, name: str) -> str:
        return self._footers.get(name, "")

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    @property
    def footers(self) -> dict[str, str]:
        return dict(self._footers)

    @property
    def macros(self) -> dict[str, SerializationModel]:
        return dict(self._macros)
