"""
Base class for the per-kind code generators.

Each generator renders the four artifacts of one backend type from a Jinja2
template that defines the macros ``declaration``, ``definition``, ``parser``
and ``exporter``. The macros receive the backend type (``t``), one level of
indentation (``i``) and the context prepared by the generator (``ctx``).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import jinja2

from ..backend import BackendType, TypeRef

# Name of the runtime support module inside generated code
RUNTIME = "_runtime"

ARTIFACTS = ("declaration", "definition", "parser", "exporter")

TEMPLATE_DIR = Path(__file__).parent.parent / "templates" / "python"


def parse_call(type_ref: TypeRef, argument: str) -> str:
    """Expression parsing ``argument`` as the referenced type."""
    if type_ref.is_custom:
        return f"parse_{type_ref.target}({argument})"
    return f"{RUNTIME}.parse({type_ref.target}, {argument})"


def export_call(type_ref: TypeRef, argument: str) -> str:
    """Expression exporting ``argument`` of the referenced type."""
    if type_ref.is_custom:
        return f"export_{type_ref.target}({argument})"
    return f"{RUNTIME}.export({type_ref.target}, {argument})"


def docstring(text: str, indent: str) -> str:
    """Render a description as an indented docstring."""
    text = text.strip().replace("\\", "\\\\").replace('"', '\\"')
    lines = text.splitlines()
    if len(lines) == 1:
        return f'{indent}"""{lines[0]}"""'
    body = "\n".join(f"{indent}{line}" if line.strip() else "" for line in lines)
    return f'{indent}"""\n{body}\n{indent}"""'


def create_environment() -> jinja2.Environment:
    """Set up the Jinja2 environment shared by all generators."""
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        lstrip_blocks=True,
        trim_blocks=True,
        keep_trailing_newline=False,
        undefined=jinja2.StrictUndefined,
    )
    env.filters["parse_call"] = parse_call
    env.filters["export_call"] = export_call
    env.filters["docstring"] = docstring
    env.filters["pyrepr"] = repr
    return env


class TypeGenerator(ABC):
    """Abstract base class for the generator of one kind of type."""

    # Template file name under templates/python
    TEMPLATE: str = ""

    def __init__(self, backend_type: BackendType, env: jinja2.Environment, indent: int = 4):
        """
        Initialize the generator.

        Args:
            backend_type: The converted type to generate code for
            env: Jinja2 environment holding the templates
            indent: Width of one indentation level
        """
        self.backend_type = backend_type
        self.indent = indent
        self.macros = env.get_template(self.TEMPLATE).module

    @abstractmethod
    def prepare_context(self) -> dict[str, Any]:
        """
        Prepare the kind specific template context.

        Returns:
            Dictionary passed to the template macros as ``ctx``
        """

    def declaration(self) -> str:
        """Stub declaration of the class and its parse/export functions."""
        return self._render("declaration")

    def definition(self) -> str:
        """The class definition."""
        return self._render("definition")

    def parser(self) -> str:
        """The ``parse_<Name>`` function."""
        return self._render("parser")

    def exporter(self) -> str:
        """The ``export_<Name>`` function."""
        return self._render("exporter")

    def source_blocks(self) -> list[str]:
        return [self.definition(), self.parser(), self.exporter()]

    def _render(self, artifact: str) -> str:
        macro = getattr(self.macros, artifact)
        text = str(macro(self.backend_type, " " * self.indent, self.prepare_context()))
        return text.strip("\n")
