"""
Macro expansion for default values and constraint expressions.

A macro is referenced as ``$NAME`` or ``$NAME$`` where ``NAME`` consists of
letters, digits and underscores; ``$$`` stands for a literal dollar sign.
When a string is nothing but a single reference, the whole macro value
replaces it (and may be a list or a map). References embedded in longer
text are replaced textually and must expand to a scalar value.

Expansion is purely textual: nothing is evaluated or coerced here.
"""

from __future__ import annotations

import re

from .errors import (
    CircularMacroError,
    DataModelError,
    IncompleteMacroError,
    PartialMacroError,
    UnknownMacroError,
)
from .serialization import Array, Map, SerializationModel, Value

_NAME_PATTERN = re.compile(r"[A-Za-z0-9_]+")
_SINGLE_REFERENCE_PATTERN = re.compile(r"\$([A-Za-z0-9_]+)\$?")


class MacroExpander:
    """Expands macro references against a macro table."""

    def __init__(self, macros: dict[str, SerializationModel | str]):
        self.macros: dict[str, SerializationModel] = {
            name: Value(value) if isinstance(value, str) else value for name, value in macros.items()
        }

    def expand(self, model: SerializationModel) -> SerializationModel:
        """Expand every macro reference inside a serialization model."""
        return self._expand(model, [])

    def expand_text(self, text: str) -> str:
        """Expand an expression string, the result must be a scalar."""
        expanded = self._expand_string(text, [])
        if not isinstance(expanded, Value):
            single = _SINGLE_REFERENCE_PATTERN.fullmatch(text.strip())
            raise PartialMacroError(single.group(1) if single else text, text)
        return expanded.value

    def _expand(self, model: SerializationModel, stack: list[str]) -> SerializationModel:
        if isinstance(model, Map):
            fields = {}
            for key, value in model.items():
                try:
                    fields[key] = self._expand(value, stack)
                except DataModelError as error:
                    error.add_field(key)
                    raise
            return Map(fields)

        if isinstance(model, Array):
            values = []
            for index, value in enumerate(model):
                try:
                    values.append(self._expand(value, stack))
                except DataModelError as error:
                    error.add_index(index)
                    raise
            return Array(values)

        return self._expand_string(model.value, stack)

    def _expand_string(self, text: str, stack: list[str]) -> SerializationModel:
        text = text.strip()
        single = _SINGLE_REFERENCE_PATTERN.fullmatch(text)
        if single is not None:
            return self._expand_macro(single.group(1), stack)

        pieces: list[str] = []
        index = 0
        while index < len(text):
            start = text.find("$", index)
            if start < 0:
                pieces.append(text[index:])
                break
            pieces.append(text[index:start])

            if text.startswith("$$", start):
                pieces.append("$")
                index = start + 2
                continue

            match = _NAME_PATTERN.match(text, start + 1)
            if match is None:
                raise IncompleteMacroError(text)
            name = match.group(0)
            end = match.end()
            if end < len(text) and text[end] == "$":
                end += 1

            expanded = self._expand_macro(name, stack)
            if not isinstance(expanded, Value):
                raise PartialMacroError(name, text)
            pieces.append(expanded.value)
            index = end

        return Value("".join(pieces))

    def _expand_macro(self, name: str, stack: list[str]) -> SerializationModel:
        if name in stack:
            raise CircularMacroError(stack[stack.index(name) :] + [name])
        if name not in self.macros:
            raise UnknownMacroError(name)

        stack.append(name)
        try:
            return self._expand(self.macros[name], stack)
        finally:
            stack.pop()
