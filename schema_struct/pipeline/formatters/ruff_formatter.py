"""
Ruff formatter for generated Python code.
"""

from __future__ import annotations

import logging
import subprocess

from ..config import FormatterConfig
from .base import Formatter

logger = logging.getLogger(__name__)


class RuffFormatter(Formatter):
    """Formatter running ``ruff format`` on stdin."""

    def __init__(self):
        self._available: bool | None = None

    def is_available(self) -> bool:
        """Check if ruff is installed."""
        if self._available is None:
            try:
                result = subprocess.run(
                    ["ruff", "--version"],
                    capture_output=True,
                    text=True,
                    timeout=5,
                )
                self._available = result.returncode == 0
            except (subprocess.SubprocessError, FileNotFoundError):
                self._available = False
        return self._available

    def format(self, code: str, config: FormatterConfig) -> str:
        """
        Format Python code using ruff.

        Args:
            code: Python source code to format
            config: Formatter configuration

        Returns:
            Formatted code, or the input if ruff is missing or fails
        """
        if not self.is_available():
            logger.warning("ruff is not installed, leaving generated code unformatted")
            return code

        cmd = [
            "ruff",
            "format",
            "--stdin-filename",
            "generated.py",
            "--line-length",
            str(config.line_length),
            "--target-version",
            config.target_version,
            "-",
        ]
        try:
            result = subprocess.run(cmd, input=code, capture_output=True, text=True, timeout=30)
        except subprocess.SubprocessError as e:
            logger.warning("ruff format failed: %s", e)
            return code

        if result.returncode != 0:
            logger.warning("ruff format failed: %s", result.stderr.strip())
            return code
        return result.stdout
