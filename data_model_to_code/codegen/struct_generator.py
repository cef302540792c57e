"""
Generator for struct types.
"""

from __future__ import annotations

from typing import Any

from ..backend import BackendField, FieldPolicy
from .base import RUNTIME, TypeGenerator


class StructGenerator(TypeGenerator):
    """Struct: a class with one attribute per field plus the extra fields."""

    TEMPLATE = "struct.py.jinja2"

    def prepare_context(self) -> dict[str, Any]:
        fields = self.backend_type.data.fields
        return {
            "signature": self._signature(fields, stub=False),
            "stub_signature": self._signature(fields, stub=True),
        }

    def _signature(self, fields: list[BackendField], stub: bool) -> str:
        # Required fields are positional, they always come first
        params = ["self"]
        for f in fields:
            param = f"{f.name}: {f.type_ref.annotation}"
            if stub and not f.is_required:
                param += " = ..."
            elif f.policy == FieldPolicy.OPTIONAL:
                param += " = None"
            elif f.policy == FieldPolicy.DEFAULT:
                param += f" = {RUNTIME}.MISSING"
            params.append(param)
        params.append(f"extra_fields: {RUNTIME}.Map | None = {'...' if stub else 'None'}")
        return ", ".join(params)
