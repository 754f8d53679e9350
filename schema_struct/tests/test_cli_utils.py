#!/usr/bin/env python3

import click
import pytest
from click.testing import CliRunner

from schema_struct.cli_utils import PROGRAM_NAME, reconstruct_command_line
from schema_struct.schema_struct import schema_struct


class TestCliUtils:
    """Test cases for CLI utilities"""

    def test_reconstruct_command_line_without_context(self):
        """Test command reconstruction without active Click context (fallback)"""
        assert reconstruct_command_line(schema_struct) == PROGRAM_NAME

    def test_reconstruct_command_line_with_context(self, tmp_path):
        """Options left at their default are skipped, set ones are kept"""
        schema_path = tmp_path / "schema.json"
        schema_path.write_text("{}", encoding="utf-8")

        @click.command()
        @click.option("--name", "-n", default=None)
        @click.option("--validate", is_flag=True, default=False)
        @click.option("--debug", is_flag=True, default=False)
        @click.argument("source")
        def command(name, validate, debug, source):
            click.echo(reconstruct_command_line(click.get_current_context().command))

        result = CliRunner().invoke(command, ["--validate", "-n", "Thing", str(schema_path)])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "schema_struct schema.json --name Thing --validate"

    def test_inline_schema_is_elided(self):
        @click.command()
        @click.argument("source")
        def command(source):
            click.echo(reconstruct_command_line(click.get_current_context().command))

        result = CliRunner().invoke(command, ['{"type": "object"}'])
        assert result.output.strip() == "schema_struct <inline schema>"


if __name__ == "__main__":
    pytest.main([__file__])
