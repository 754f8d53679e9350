"""
Functional tests for the generation pipeline.

Each case in test_data/functional/*_tests.json gives a schema (inline or
from a file), optional config values and the fragments the generated
module must or must not contain.
"""

from __future__ import annotations

import ast
import json
from pathlib import Path

import pytest

from schema_struct.pipeline import CodeGeneratorConfig, PipelineGenerator

TEST_DATA_DIR = Path(__file__).parent / "test_data"


def load_all_test_cases():
    """Load all test cases from all JSON files in test_data/functional directory."""
    functional_dir = TEST_DATA_DIR / "functional"
    test_cases = []

    for json_file in sorted(functional_dir.glob("*_tests.json")):
        with open(json_file) as f:
            data = json.load(f)

        for test_case in data:
            test_case["_source_file"] = json_file.name
            test_cases.append(test_case)

    return test_cases


def _generate_code(schema, config_dict):
    """Helper to generate code with given schema and config."""
    config = CodeGeneratorConfig.from_dict({"add_generation_comment": False, **(config_dict or {})})
    return PipelineGenerator(schema, config).generate()


def _load_schema(test_case):
    """Load schema from test case (either inline or from file)."""
    if "schema" in test_case:
        return test_case["schema"]
    elif "schema_file" in test_case:
        with open(TEST_DATA_DIR / test_case["schema_file"]) as f:
            return json.load(f)
    else:
        raise ValueError("Test case must have either 'schema' or 'schema_file'")


@pytest.mark.parametrize("test_case", load_all_test_cases(), ids=lambda tc: tc["name"])
def test_functional_generation(test_case):
    """Unified test for all JSON test cases using a single pattern."""
    name = test_case["name"]
    description = test_case["description"]
    source_file = test_case.get("_source_file", "unknown")

    print(f"\nTesting: {name} (from {source_file})")
    print(f"Description: {description}")

    generated_code = _generate_code(_load_schema(test_case), test_case.get("config", {}))

    # Every generated module must at least parse
    ast.parse(generated_code)

    for expected in test_case.get("expected_python", []):
        assert expected in generated_code, f"Expected pattern '{expected}' not found in output:\n{generated_code}"

    for pattern in test_case.get("expected_not_contains", []):
        assert pattern not in generated_code, f"Unexpected pattern '{pattern}' found in output:\n{generated_code}"


def test_declarations_follow_dependencies():
    """Classes are declared after every class their fields use."""
    with open(TEST_DATA_DIR / "schemas" / "invoice.json") as f:
        schema = json.load(f)
    code = _generate_code(schema, {"def": False})

    classes = [node.name for node in ast.parse(code).body if isinstance(node, ast.ClassDef)]
    assert classes == ["InvoiceDefAddress", "InvoiceDefCustomer", "InvoiceLines", "Invoice"]


def test_generation_is_deterministic():
    with open(TEST_DATA_DIR / "schemas" / "invoice.json") as f:
        schema = json.load(f)
    assert _generate_code(schema, {}) == _generate_code(schema, {})


if __name__ == "__main__":
    pytest.main([__file__])
