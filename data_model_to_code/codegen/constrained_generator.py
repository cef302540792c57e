"""
Generator for constrained types.
"""

from __future__ import annotations

from typing import Any

from .base import TypeGenerator


class ConstrainedGenerator(TypeGenerator):
    """Constrained: wraps a base value which is validated on every assignment."""

    TEMPLATE = "constrained.py.jinja2"

    def prepare_context(self) -> dict[str, Any]:
        return {"base_annotation": self.backend_type.data.base.annotation}
