"""
JSON Schema export and schema oriented value conversion.
"""

from .exporter import SCHEMA_DIALECT, SchemaExporter
from .values import ValueConverter

__all__ = ["SCHEMA_DIALECT", "SchemaExporter", "ValueConverter"]
