import itertools
import sys
import types

import pytest

from schema_struct.pipeline import CodeGeneratorConfig, PipelineGenerator

_counter = itertools.count()


def generate(schema, **config_values) -> str:
    """Generate code for a schema without the generation comment."""
    config = CodeGeneratorConfig(add_generation_comment=False)
    for key, value in config_values.items():
        setattr(config, key, value)
    return PipelineGenerator(schema, config).generate()


@pytest.fixture
def load_generated(monkeypatch):
    """Execute generated code as a real module and return it."""

    def load(code: str) -> types.ModuleType:
        name = f"schema_struct_generated_{next(_counter)}"
        module = types.ModuleType(name)
        # dataclasses looks the module up while processing annotations
        monkeypatch.setitem(sys.modules, name, module)
        exec(compile(code, f"<{name}>", "exec"), module.__dict__)
        return module

    return load


@pytest.fixture
def build(load_generated):
    """Generate a schema and load the result in one step."""

    def _build(schema, **config_values) -> types.ModuleType:
        return load_generated(generate(schema, **config_values))

    return _build
