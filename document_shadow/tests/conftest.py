"""
Shared fixtures: test documents, the Python-side annotation config and a
loader that imports generated Python code.
"""

from __future__ import annotations

import importlib
import json
import sys
import uuid
from pathlib import Path

import pytest

from document_shadow.pipeline import CodeGeneratorConfig, PipelineGenerator

TEST_DATA_DIR = Path(__file__).with_name("test_data")


def load_document(name: str) -> dict:
    """Load a schema document from the test data directory."""
    with open(TEST_DATA_DIR / name) as f:
        return json.load(f)


def python_config(**overrides) -> CodeGeneratorConfig:
    """Config whose annotations point at the test document store."""
    with open(TEST_DATA_DIR / "python_config.json") as f:
        config = CodeGeneratorConfig.from_dict(json.load(f))
    for key, value in overrides.items():
        setattr(config, key, value)
    return config


def generate_python(document: dict, config: CodeGeneratorConfig | None = None, **kwargs) -> str:
    """Generate the Python shadow module of a document and return its code."""
    result = PipelineGenerator("shadows", document, config or python_config(), "python", **kwargs).generate()
    assert result.ok, result.errors
    return result.files["shadows.py"]


@pytest.fixture
def import_generated(tmp_path, monkeypatch):
    """Import generated code as a module, with the test data on sys.path."""
    monkeypatch.syspath_prepend(str(TEST_DATA_DIR))
    monkeypatch.syspath_prepend(str(tmp_path))
    imported = []

    def _import(code: str):
        module_name = f"shadows_{uuid.uuid4().hex}"
        (tmp_path / f"{module_name}.py").write_text(code, encoding="utf-8")
        importlib.invalidate_caches()
        imported.append(module_name)
        return importlib.import_module(module_name)

    yield _import

    for module_name in imported:
        sys.modules.pop(module_name, None)


@pytest.fixture
def value_models(import_generated):
    """The value classes the generated shadows wrap."""
    return importlib.import_module("value_models")


@pytest.fixture
def document_store(import_generated):
    return importlib.import_module("document_store")
