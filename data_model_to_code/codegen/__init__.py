"""
Python code generation from a registry.
"""

from .array_generator import ArrayGenerator
from .base import TypeGenerator, create_environment
from .config import GeneratorConfig
from .constrained_generator import ConstrainedGenerator
from .enum_generator import EnumGenerator
from .generator import GENERATORS, ModelGenerator
from .struct_generator import StructGenerator
from .variant_generator import VariantGenerator

__all__ = [
    "ArrayGenerator",
    "ConstrainedGenerator",
    "EnumGenerator",
    "GENERATORS",
    "GeneratorConfig",
    "ModelGenerator",
    "StructGenerator",
    "TypeGenerator",
    "VariantGenerator",
    "create_environment",
]
