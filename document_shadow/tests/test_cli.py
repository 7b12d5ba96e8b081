"""
Tests for the document_shadow command.
"""

from __future__ import annotations

import ast
import json

import pytest
from click.testing import CliRunner
from conftest import TEST_DATA_DIR

from document_shadow.document_shadow import document_shadow

CONFIG = str(TEST_DATA_DIR / "python_config.json")


@pytest.fixture
def runner():
    return CliRunner()


def test_python_output(runner, tmp_path):
    output = tmp_path / "shadows.py"
    result = runner.invoke(document_shadow, ["--config", CONFIG, str(TEST_DATA_DIR / "values.json"), str(output)])

    assert result.exit_code == 0, result.output
    assert f"Wrote {output}" in result.output
    tree = ast.parse(output.read_text())
    assert [node.name for node in tree.body if isinstance(node, ast.ClassDef)] == [
        "AutoValue_Foo",
        "AutoValue_Point",
        "AutoValue_User",
        "AutoValue_Tag",
    ]


def test_java_output(runner, tmp_path):
    result = runner.invoke(document_shadow, ["-l", "java", str(TEST_DATA_DIR / "java" / "values.json"), str(tmp_path)])

    assert result.exit_code == 0, result.output
    written = sorted(p.relative_to(tmp_path).as_posix() for p in tmp_path.rglob("*.java"))
    assert written == ["com/example/model/AutoValue_Foo.java", "com/example/model/AutoValue_Tag.java"]
    assert (tmp_path / "com/example/model/AutoValue_Foo.java").read_text().startswith("// Generated by document_shadow v")


def test_existing_output_needs_force(runner, tmp_path):
    output = tmp_path / "shadows.py"
    output.write_text("# keep me\n")
    args = ["--config", CONFIG, str(TEST_DATA_DIR / "values.json"), str(output)]

    result = runner.invoke(document_shadow, args)
    assert result.exit_code == 1
    assert "already exists" in result.output
    assert output.read_text() == "# keep me\n"

    result = runner.invoke(document_shadow, ["--force", *args])
    assert result.exit_code == 0, result.output
    assert "class AutoValue_Foo" in output.read_text()


def test_invalid_schemas_are_reported_and_valid_ones_written(runner, tmp_path):
    output = tmp_path / "shadows.py"
    result = runner.invoke(document_shadow, ["--config", CONFIG, str(TEST_DATA_DIR / "invalid.json"), str(output)])

    assert result.exit_code == 1
    assert "Error in value_models.Broken" in result.output
    assert "non-primitive map key" in result.output
    assert "Error in value_models.Deep" in result.output
    assert "class AutoValue_Point" in output.read_text()


def test_only_option(runner, tmp_path):
    output = tmp_path / "shadows.py"
    args = ["--config", CONFIG, "--only", "Point", str(TEST_DATA_DIR / "values.json"), str(output)]
    result = runner.invoke(document_shadow, args)

    assert result.exit_code == 0, result.output
    assert "AutoValue_Foo" not in output.read_text()


def test_nothing_to_generate(runner, tmp_path):
    schema = tmp_path / "values.json"
    schema.write_text(json.dumps({"values": {"Point": {"properties": {"x": "double"}}}}))
    output = tmp_path / "shadows.py"

    result = runner.invoke(document_shadow, [str(schema), str(output)])

    assert result.exit_code == 0
    assert "nothing written" in result.output
    assert not output.exists()


@pytest.mark.parametrize(
    "content",
    [
        "not json",
        json.dumps({"values": []}),
        json.dumps({"values": {"Point": {"annotations": ["FirebaseValue"], "properties": [{"name": "x", "type": 5}]}}}),
    ],
)
def test_malformed_input(runner, tmp_path, content):
    schema = tmp_path / "values.json"
    schema.write_text(content)

    result = runner.invoke(document_shadow, [str(schema), str(tmp_path / "shadows.py")])

    assert result.exit_code == 1
    assert "Error:" in result.output
