"""
Generator for array types.
"""

from __future__ import annotations

from typing import Any

from .base import TypeGenerator


class ArrayGenerator(TypeGenerator):
    """Array: a list wrapper with the container protocol."""

    TEMPLATE = "array.py.jinja2"

    def prepare_context(self) -> dict[str, Any]:
        element = self.backend_type.data.element
        return {"list_annotation": f"list[{element.annotation}]"}
