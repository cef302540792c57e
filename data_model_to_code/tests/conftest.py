import types
from pathlib import Path

import pytest

from data_model_to_code.codegen import GeneratorConfig, ModelGenerator
from data_model_to_code.loader import load_registry, registry_from_dict

TEST_DATA = Path(__file__).parent / "test_data"


def generate_module(registry, name="model", **config):
    """Generate the source of a registry and execute it as a module."""
    config.setdefault("add_generation_comment", False)
    source = ModelGenerator(registry, GeneratorConfig.from_dict(config)).get_source(name)
    module = types.ModuleType(name)
    exec(compile(source, f"<{name}>", "exec"), module.__dict__)
    return module


@pytest.fixture
def shapes_registry():
    return load_registry(TEST_DATA / "shapes.yaml")


@pytest.fixture
def shapes(shapes_registry):
    return generate_module(shapes_registry, "shapes")


@pytest.fixture
def make_module():
    def make(data, **config):
        return generate_module(registry_from_dict(data), **config)

    return make
