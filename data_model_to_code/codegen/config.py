"""
Configuration for the code generator.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class GeneratorConfig:
    """Configuration options for code generation."""

    # Width of one indentation level in the generated code
    indent: int = 4

    # Namespace used to qualify type names, None = the registry's namespace
    namespace: list[str] | None = None

    # Add generation comment at top of file
    add_generation_comment: bool = True

    # Import path of the runtime support module in generated code
    runtime_module: str = "data_model_to_code.runtime"

    # Emit the registration block that makes generated classes known to the runtime
    register_types: bool = True

    # Header/footer keys of the two generated artifacts
    source_key: str = "py"
    stub_key: str = "pyi"

    @staticmethod
    def from_dict(d: dict) -> GeneratorConfig:
        """Create a config from a dictionary."""
        config = GeneratorConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "indent": self.indent,
            "namespace": self.namespace,
            "add_generation_comment": self.add_generation_comment,
            "runtime_module": self.runtime_module,
            "register_types": self.register_types,
            "source_key": self.source_key,
            "stub_key": self.stub_key,
        }
