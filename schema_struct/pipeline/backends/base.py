"""
Base class for code generation backends.

Defines the interface a backend implements to render a TypeModel.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

import jinja2

from ..analyzer.ir_nodes import DefaultValue, TypeModel, TypeNode
from ..config import CodeGeneratorConfig


class CodeBackend(ABC):
    """Abstract base class for code generation backends."""

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    # Templates loaded from the language directory, by kind
    TEMPLATE_KINDS: tuple[str, ...] = ()

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the backend.

        Args:
            config: Code generation configuration
        """
        self.config = config
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
        )
        self.templates = {
            kind: self.jinja_env.get_template(f"{kind}.{self.FILE_EXTENSION}.jinja2") for kind in self.TEMPLATE_KINDS
        }

    @abstractmethod
    def generate(self, model: TypeModel, generation_comment: str = "") -> str:
        """
        Generate code from the type model.

        Args:
            model: The named and defaulted type model
            generation_comment: Header comment text (empty for none)

        Returns:
            Generated code as a string
        """

    @abstractmethod
    def translate_type(self, node: TypeNode) -> str:
        """
        Translate a type model node to a language-specific type string.

        Args:
            node: The type node

        Returns:
            Language-specific type string
        """

    @abstractmethod
    def format_default_value(self, value: DefaultValue) -> str:
        """
        Format a resolved default value for the target language.

        Args:
            value: The resolved default

        Returns:
            Expression constructing the default
        """
