"""
Tests for the schema_struct command line.
"""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from schema_struct.schema_struct import schema_struct

SCHEMAS_DIR = Path(__file__).parent / "test_data" / "schemas"
PERSON_SCHEMA = SCHEMAS_DIR / "person.json"


@pytest.fixture
def runner():
    return CliRunner()


class TestCli:
    def test_stdout_output(self, runner):
        result = runner.invoke(schema_struct, [str(PERSON_SCHEMA), "-"])
        assert result.exit_code == 0, result.output
        assert "class Person(DataClassJsonMixin):" in result.output
        assert "# Generated by schema_struct v" in result.output
        assert "schema_struct person.json -" in result.output

    def test_inline_schema(self, runner):
        inline = json.dumps({"type": "object", "properties": {"x": {"type": "integer"}}})
        result = runner.invoke(schema_struct, ["--name", "Point", inline, "-"])
        assert result.exit_code == 0, result.output
        assert "class Point(DataClassJsonMixin):" in result.output
        assert "schema_struct <inline schema> - --name Point" in result.output

    def test_file_output(self, runner, tmp_path):
        output = tmp_path / "person.py"
        result = runner.invoke(schema_struct, ["--validate", str(PERSON_SCHEMA), str(output)])
        assert result.exit_code == 0, result.output
        code = output.read_text(encoding="utf-8")
        assert "class Person(DataClassJsonMixin):" in code
        assert "runtime.ValidationError" in code
        compile(code, str(output), "exec")

    def test_existing_output_is_kept(self, runner, tmp_path):
        output = tmp_path / "person.py"
        output.write_text("# keep me\n", encoding="utf-8")
        result = runner.invoke(schema_struct, [str(PERSON_SCHEMA), str(output)])
        assert result.exit_code == 1
        assert "already exists" in result.output
        assert output.read_text(encoding="utf-8") == "# keep me\n"

    def test_force_overwrites(self, runner, tmp_path):
        output = tmp_path / "person.py"
        output.write_text("# old\n", encoding="utf-8")
        result = runner.invoke(schema_struct, ["--force", str(PERSON_SCHEMA), str(output)])
        assert result.exit_code == 0, result.output
        assert "class Person(DataClassJsonMixin):" in output.read_text(encoding="utf-8")

    def test_missing_identifier(self, runner, tmp_path):
        output = tmp_path / "out.py"
        result = runner.invoke(schema_struct, ['{"type": "object", "properties": {}}', str(output)])
        assert result.exit_code == 1
        assert "no type identifier" in result.output
        assert not output.exists()

    def test_schema_error_reports_location(self, runner):
        result = runner.invoke(schema_struct, ['{"title": "A", "properties": {"b": {"type": "date"}}}', "-"])
        assert result.exit_code == 1
        assert "#/properties/b" in result.output

    def test_missing_source_file(self, runner, tmp_path):
        result = runner.invoke(schema_struct, [str(tmp_path / "missing.json"), "-"])
        assert result.exit_code == 1
        assert "cannot read schema file" in result.output

    def test_config_file(self, runner, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"ident": "Human", "def": False, "vis": "private"}), encoding="utf-8")
        result = runner.invoke(schema_struct, ["--config", str(config_path), str(PERSON_SCHEMA), "-"])
        assert result.exit_code == 0, result.output
        assert "class Human(DataClassJsonMixin):" in result.output
        assert "Full definition::" not in result.output
        assert "__all__: list[str] = []" in result.output

    def test_flags_override_config_file(self, runner, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"ident": "Human", "vis": "private"}), encoding="utf-8")
        result = runner.invoke(
            schema_struct, ["-c", str(config_path), "-n", "Being", "--vis", "root", str(PERSON_SCHEMA), "-"]
        )
        assert result.exit_code == 0, result.output
        assert "class Being(DataClassJsonMixin):" in result.output
        assert '__all__ = [\n    "Being",\n]' in result.output

    def test_no_def(self, runner):
        result = runner.invoke(schema_struct, ["--no-def", str(PERSON_SCHEMA), "-"])
        assert result.exit_code == 0, result.output
        assert "Full definition::" not in result.output

    def test_config_file_with_invalid_json(self, runner, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text("{not json", encoding="utf-8")
        result = runner.invoke(schema_struct, ["-c", str(config_path), str(PERSON_SCHEMA), "-"])
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "Traceback" not in result.output

    def test_config_file_must_be_object(self, runner, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text("[]", encoding="utf-8")
        result = runner.invoke(schema_struct, ["-c", str(config_path), str(PERSON_SCHEMA), "-"])
        assert result.exit_code == 1
        assert "must hold a JSON object" in result.output

    def test_config_file_with_unknown_visibility(self, runner, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"vis": "everyone"}), encoding="utf-8")
        result = runner.invoke(schema_struct, ["-c", str(config_path), str(PERSON_SCHEMA), "-"])
        assert result.exit_code == 1
        assert "everyone" in result.output

    def test_config_file_with_unknown_formatter_key(self, runner, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"formatter": {"indent": 2}}), encoding="utf-8")
        result = runner.invoke(schema_struct, ["-c", str(config_path), str(PERSON_SCHEMA), "-"])
        assert result.exit_code == 1
        assert "indent" in result.output

    def test_unwritable_output(self, runner, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        result = runner.invoke(schema_struct, ["--force", str(PERSON_SCHEMA), str(blocker / "person.py")])
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert not isinstance(result.exception, OSError)

    @pytest.mark.parametrize("ident", ["runtime", "dataclass", "field"])
    def test_root_name_shadowing_an_import(self, runner, ident):
        result = runner.invoke(schema_struct, ["--validate", "-n", ident, str(PERSON_SCHEMA), "-"])
        assert result.exit_code == 0, result.output
        assert f"class {ident}Type(DataClassJsonMixin):" in result.output
        compile(result.output, "<generated>", "exec")
