"""
Tests for schema validation: every unsupported nesting shape is rejected
with its own reason, and nothing else is.
"""

from __future__ import annotations

import pytest

from document_shadow.pipeline.analyzer import SchemaValidator
from document_shadow.pipeline.errors import UnsupportedReason, UnsupportedTypeError
from document_shadow.pipeline.schema_ast import PropertyDef, ValueSchema, parse_type


def make_schema(*types: str) -> ValueSchema:
    return ValueSchema(
        name="Foo",
        properties=[PropertyDef(name=f"p{i}", type=parse_type(t)) for i, t in enumerate(types)],
    )


@pytest.mark.parametrize(
    "text, reason",
    [
        ("List<List<Integer>>", UnsupportedReason.NESTED_LIST_ELEMENT),
        ("List<Map<String, Tag>>", UnsupportedReason.NESTED_LIST_ELEMENT),
        ("List<Optional<Tag>>", UnsupportedReason.NESTED_LIST_ELEMENT),
        ("Map<Tag, String>", UnsupportedReason.NON_PRIMITIVE_MAP_KEY),
        ("Map<List<String>, String>", UnsupportedReason.NON_PRIMITIVE_MAP_KEY),
        ("Map<String, List<Tag>>", UnsupportedReason.NESTED_MAP_VALUE),
        ("Map<String, Map<String, Long>>", UnsupportedReason.NESTED_MAP_VALUE),
        ("Set<String>", UnsupportedReason.UNSUPPORTED_CONTAINER),
        ("Optional<Tag>", UnsupportedReason.UNSUPPORTED_CONTAINER),
    ],
)
def test_rejected_shapes(text, reason):
    assert SchemaValidator().check_type(parse_type(text)) == reason

    with pytest.raises(UnsupportedTypeError) as exc_info:
        SchemaValidator().validate(make_schema("String", text))

    error = exc_info.value
    assert error.reason == reason
    assert error.property_name == "p1"
    assert error.type_description == str(parse_type(text))
    assert reason.value in str(error)


def test_reasons_are_distinct():
    messages = [reason.value for reason in UnsupportedReason]
    assert len(set(messages)) == len(messages)


def test_map_key_is_checked_before_value():
    assert SchemaValidator().check_type(parse_type("Map<Tag, List<Tag>>")) == UnsupportedReason.NON_PRIMITIVE_MAP_KEY


@pytest.mark.parametrize(
    "text",
    ["String", "int", "User", "List<String>", "List<Tag>", "Map<String, Long>", "Map<Integer, Tag>", "Map<java.lang.String, Tag>"],
)
def test_supported_shapes(text):
    SchemaValidator().validate(make_schema(text))


def test_error_message_names_property_and_type():
    with pytest.raises(UnsupportedTypeError) as exc_info:
        SchemaValidator().validate(make_schema("Map<Tag, String>"))

    assert str(exc_info.value) == (
        "Type is not supported: Map<Tag, String> (property 'p0')\n"
        "non-primitive map key: only primitive-like types allowed as Map keys"
    )


def test_validate_stops_at_first_violation_and_collect_errors_reports_all():
    schema = make_schema("List<List<String>>", "String", "Map<Tag, String>")

    with pytest.raises(UnsupportedTypeError) as exc_info:
        SchemaValidator().validate(schema)
    assert exc_info.value.property_name == "p0"

    errors = SchemaValidator().collect_errors(schema)
    assert [(e.property_name, e.reason) for e in errors] == [
        ("p0", UnsupportedReason.NESTED_LIST_ELEMENT),
        ("p2", UnsupportedReason.NON_PRIMITIVE_MAP_KEY),
    ]
