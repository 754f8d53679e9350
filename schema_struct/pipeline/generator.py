"""
Pipeline generator: runs every stage in order on one schema document.

Each stage consumes the complete output of the previous one. Any error
aborts generation before anything is emitted.
"""

from __future__ import annotations

import logging
from typing import Any

import click

from .. import __version__
from ..cli_utils import reconstruct_command_line
from .analyzer import DefaultResolver, NameResolver, TypeModel, TypeResolver
from .backends import PythonBackend
from .config import CodeGeneratorConfig
from .formatters import RuffFormatter
from .schema_ast import SchemaParser

logger = logging.getLogger(__name__)


class PipelineGenerator:
    """Generates a Python module from a JSON Schema document."""

    def __init__(self, schema: dict[str, Any], config: CodeGeneratorConfig | None = None):
        """
        Initialize the generator.

        Args:
            schema: The parsed JSON Schema document
            config: Code generation configuration
        """
        self.schema = schema
        self.config = config or CodeGeneratorConfig()
        self.parser = SchemaParser()
        self.backend = PythonBackend(self.config)
        self.formatter = RuffFormatter()

    def resolve(self) -> TypeModel:
        """Run the analysis stages: parse, resolve types, name them, resolve defaults."""
        ast = self.parser.parse(self.schema)
        model = TypeResolver().resolve(ast)
        NameResolver(self.config.ident).resolve(model)
        DefaultResolver().resolve(model)
        return model

    def generate(self) -> str:
        """
        Generate the Python module.

        Returns:
            Generated source code
        """
        model = self.resolve()
        code = self.backend.generate(model, self._generation_comment())

        if self.config.formatter.enabled:
            code = self.formatter.format(code, self.config.formatter)

        if self.config.debug:
            click.echo(code, err=True)

        logger.debug("Generated %d lines for %s", code.count("\n"), model.root.name)
        return code

    def _generation_comment(self) -> str:
        """Generate a simplified command line comment for the generated file"""
        if not self.config.add_generation_comment:
            return ""

        from ..schema_struct import schema_struct as click_command  # noqa

        command_line = reconstruct_command_line(click_command)
        return f"# Generated by schema_struct v{__version__} : {command_line}"


def generate_code(schema: dict[str, Any], config: CodeGeneratorConfig | None = None, **overrides: Any) -> str:
    """
    Generate a Python module from a schema in one call.

    Args:
        schema: The parsed JSON Schema document
        config: Base configuration (defaults when omitted)
        **overrides: Config fields to override, e.g. ``ident="Product"`` or ``validate=True``

    Returns:
        Generated source code
    """
    config = config or CodeGeneratorConfig()
    if overrides:
        config = CodeGeneratorConfig.from_dict({**config.to_dict(), **overrides})
    return PipelineGenerator(schema, config).generate()
