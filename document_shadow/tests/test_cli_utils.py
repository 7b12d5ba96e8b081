"""
Tests for command line reconstruction.
"""

from __future__ import annotations

import click

from document_shadow.cli_utils import reconstruct_command_line
from document_shadow.document_shadow import document_shadow


def test_reconstruct_command_line_without_context():
    # No active Click context in tests
    assert reconstruct_command_line(document_shadow) == "document_shadow"


def test_reconstruct_command_line_with_context(tmp_path):
    schema = tmp_path / "values.json"
    schema.write_text("{}")

    ctx = click.Context(document_shadow)
    ctx.params = {
        "config": None,
        "language": "java",
        "only": ("Foo", "Bar"),
        "force": True,
        "verbose": False,
        "path": str(schema),
        "output": "/does/not/exist/out",
    }
    with ctx:
        command_line = reconstruct_command_line(document_shadow)

    assert command_line == "document_shadow values.json /does/not/exist/out --language java --only Foo --only Bar --force"
