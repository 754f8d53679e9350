"""
Atomic file writer for safe code generation.

Ensures that file writes are atomic so an interrupted or failed
generation never leaves a partial module behind.
"""

from __future__ import annotations

import ast
import logging
import tempfile
from collections.abc import Callable
from pathlib import Path

from ..errors import WriteError

logger = logging.getLogger(__name__)


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file
    """

    def __init__(self, validate_python: Callable[[str], None] | None = None):
        """Initialize the atomic writer.

        Args:
            validate_python: Optional validation function for Python code
        """
        self._validate_python = validate_python or self._default_validate_python

    def write(self, path: Path, content: str, validate: bool = True) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before finalizing

        Raises:
            WriteError: If validation fails
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

            if validate:
                self._validate_python(content)

            temp_path.replace(path)
            logger.debug("Wrote %s", path)
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise

    def write_if_not_exists(self, path: Path, content: str, validate: bool = True) -> None:
        """Write content only if the file doesn't exist.

        Raises:
            FileExistsError: If the file already exists
            WriteError: If validation fails
        """
        if path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use --force to overwrite.")
        self.write(path, content, validate)

    def _default_validate_python(self, content: str) -> None:
        """Check that the content parses as Python.

        Raises:
            WriteError: If validation fails
        """
        try:
            ast.parse(content)
        except SyntaxError as e:
            raise WriteError(f"Generated Python code is not valid: {e}") from e
