"""
Atomic file writer for generated code and schemas.

Ensures that an interrupted or invalid generation never leaves a target
file in an incomplete state.
"""

from __future__ import annotations

import ast
import logging
import tempfile
from collections.abc import Callable
from pathlib import Path

from .errors import GeneratedCodeError

logger = logging.getLogger(__name__)

PYTHON_SUFFIXES = (".py", ".pyi")


def validate_python(content: str) -> None:
    """
    Check that generated Python code parses.

    Raises:
        GeneratedCodeError: If the code is not valid Python
    """
    try:
        ast.parse(content)
    except SyntaxError as e:
        raise GeneratedCodeError(f"Generated Python code is not valid: {e}") from e


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file
    """

    def __init__(self, validator: Callable[[str], None] | None = None):
        """Initialize the atomic writer.

        Args:
            validator: Optional validation function for Python code
        """
        self._validate_python = validator or validate_python

    def write(self, path: Path, content: str, validate: bool = True) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate ``.py`` and ``.pyi`` content before finalizing

        Raises:
            GeneratedCodeError: If validation fails
            OSError: If file operations fail
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)

            if validate and path.suffix in PYTHON_SUFFIXES:
                self._validate_python(content)

            temp_path.replace(path)
        except Exception:
            temp_path.unlink(missing_ok=True)
            raise

        logger.debug("Wrote %s", path)
