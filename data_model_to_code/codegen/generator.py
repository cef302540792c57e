"""
Whole-file assembly of the generated Python module and its stub.
"""

from __future__ import annotations

import logging

from .. import __version__
from ..backend import PythonConverter
from ..cli_utils import reconstruct_command_line
from ..data_model import TypeKind
from ..registry import Registry
from .array_generator import ArrayGenerator
from .base import TypeGenerator, create_environment
from .config import GeneratorConfig
from .constrained_generator import ConstrainedGenerator
from .enum_generator import EnumGenerator
from .struct_generator import StructGenerator
from .variant_generator import VariantGenerator

logger = logging.getLogger(__name__)

GENERATORS: dict[TypeKind, type[TypeGenerator]] = {
    TypeKind.STRUCT: StructGenerator,
    TypeKind.ARRAY: ArrayGenerator,
    TypeKind.VARIANT: VariantGenerator,
    TypeKind.ENUM: EnumGenerator,
    TypeKind.CONSTRAINED: ConstrainedGenerator,
}

# Blank lines between top level blocks
SEPARATOR = "\n\n\n"


class ModelGenerator:
    """Generates the source module and the stub of a registry."""

    def __init__(self, registry: Registry, config: GeneratorConfig | None = None):
        self.registry = registry.freeze()
        self.config = config if config is not None else GeneratorConfig()
        self.namespace = self.config.namespace if self.config.namespace is not None else registry.namespace
        self.env = create_environment()

        converter = PythonConverter(self.registry, self.namespace)
        self.backend_types = converter.convert_all()

        kinds = {data_type.name: data_type.kind for data_type in self.registry}
        self.generators = [
            GENERATORS[kinds[backend_type.name]](backend_type, self.env, self.config.indent)
            for backend_type in self.backend_types
        ]

    def get_header(self, name: str) -> str:
        """The ``.pyi`` stub with the declarations of every type."""
        logger.debug("Generating stub for %s", name)
        blocks = [
            self._prefix("prefix.pyi.jinja2", name),
            self.registry.get_header(self.config.stub_key),
            *(generator.declaration() for generator in self.generators),
            self.registry.get_footer(self.config.stub_key),
        ]
        return self._assemble(blocks)

    def get_source(self, name: str) -> str:
        """The ``.py`` module with definitions, parsers and exporters of every type."""
        logger.debug("Generating source for %s", name)
        blocks = [
            self._prefix("prefix.py.jinja2", name),
            self.registry.get_header(self.config.source_key),
        ]
        for generator in self.generators:
            blocks.extend(generator.source_blocks())
        if self.config.register_types:
            blocks.append(self.env.get_template("suffix.py.jinja2").render(types=self.backend_types))
        blocks.append(self.registry.get_footer(self.config.source_key))
        return self._assemble(blocks)

    def _prefix(self, template: str, name: str) -> str:
        return self.env.get_template(template).render(
            name=name,
            namespace=self.namespace,
            generation_comment=self._generation_comment(),
            runtime_import=self._runtime_import(),
        )

    def _generation_comment(self) -> str:
        if not self.config.add_generation_comment:
            return ""
        return f"# Generated by data_model_to_code v{__version__} : {reconstruct_command_line()}"

    def _runtime_import(self) -> str:
        package, _, module = self.config.runtime_module.rpartition(".")
        if not package:
            return f"import {module} as _runtime"
        return f"from {package} import {module} as _runtime"

    @staticmethod
    def _assemble(blocks: list[str]) -> str:
        parts = [block.strip("\n") for block in blocks]
        return SEPARATOR.join(part for part in parts if part) + "\n"
