"""
Generator for variant types.
"""

from __future__ import annotations

from typing import Any

from .base import TypeGenerator


class VariantGenerator(TypeGenerator):
    """Variant: holds a value of one of the alternatives, tried in declared order."""

    TEMPLATE = "variant.py.jinja2"

    def prepare_context(self) -> dict[str, Any]:
        alternatives = self.backend_type.data.alternatives
        targets = list(dict.fromkeys(alt.target for alt in alternatives))
        return {"value_annotation": " | ".join(targets) if targets else "object"}
