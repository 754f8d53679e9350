"""
Configuration for the code generator pipeline.

Configuration only affects emission: the resolved type model is the same
whatever options are chosen.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Visibility(str, Enum):
    """Which generated names a module exports through ``__all__``."""

    PUBLIC = "public"  # Every generated type and helper
    ROOT = "root"  # Only the root type and its helpers
    PRIVATE = "private"  # Nothing (``__all__ = []``)


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite the existing file


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to check the generated code parses before writing
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    validate_before_write: bool = True


@dataclass
class FormatterConfig:
    """Configuration for post-processing formatters."""

    # Whether formatting is enabled
    enabled: bool = False

    # Line length for the formatter
    line_length: int = 100

    # Python version target (e.g., "py312", "py313")
    target_version: str = "py312"


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Identifier of the root type (overrides the schema title)
    ident: str | None = None

    # Which generated names are exported
    vis: Visibility = Visibility.PUBLIC

    # Append a summary of every generated type to the root docstring (config key "def")
    include_definition: bool = True

    # Emit required/bounds/enum checks in deserializers
    validate: bool = False

    # Echo the generated code to stderr
    debug: bool = False

    # Add generation comment at top of file
    add_generation_comment: bool = True

    formatter: FormatterConfig = field(default_factory=FormatterConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict[str, Any]) -> CodeGeneratorConfig:
        """Create a config from a dictionary (the JSON config file format)."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if k == "def":
                config.include_definition = bool(v)
            elif k == "vis":
                config.vis = Visibility(v)
            elif k == "formatter":
                config.formatter = FormatterConfig(**v)
            elif k == "output":
                output = dict(v)
                if "mode" in output:
                    output["mode"] = OutputMode(output["mode"])
                config.output = OutputConfig(**output)
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a dictionary."""
        return {
            "ident": self.ident,
            "vis": self.vis.value,
            "def": self.include_definition,
            "validate": self.validate,
            "debug": self.debug,
            "add_generation_comment": self.add_generation_comment,
            "formatter": {
                "enabled": self.formatter.enabled,
                "line_length": self.formatter.line_length,
                "target_version": self.formatter.target_version,
            },
            "output": {
                "mode": self.output.mode.value,
                "validate_before_write": self.output.validate_before_write,
            },
        }
