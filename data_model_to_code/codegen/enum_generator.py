"""
Generator for enum types.
"""

from __future__ import annotations

from typing import Any

from .base import TypeGenerator


class EnumGenerator(TypeGenerator):
    """Enum: a ``Kind`` tag plus the payload of the case, if any."""

    TEMPLATE = "enum.py.jinja2"

    def prepare_context(self) -> dict[str, Any]:
        payloads = [case.payload.target for case in self.backend_type.data.payload_cases]
        targets = list(dict.fromkeys(payloads))
        return {"value_annotation": " | ".join([*targets, "None"])}
