"""
Tests for the schema document parser and the opt-in check.
"""

from __future__ import annotations

import pytest
from conftest import load_document

from document_shadow.pipeline.errors import SchemaParseError
from document_shadow.pipeline.schema_ast import Annotation, PrimitiveType, SchemaParser, ValueRefType, applicable


def test_parse_values_document():
    document = SchemaParser().parse(load_document("values.json"))

    assert [schema.name for schema in document.schemas] == ["Foo", "User", "Tag", "Point"]
    foo = document.get("Foo")
    assert foo.package == "value_models"
    assert foo.generated_name == "AutoValue_Foo"
    assert foo.extends == "Foo"
    assert foo.is_final
    assert [prop.name for prop in foo.properties] == [
        "id",
        "count",
        "owner",
        "tags",
        "tags_by_name",
        "scores",
        "labels",
        "secret",
    ]
    assert foo.properties[2].type == ValueRefType("User")


def test_object_form_keeps_insertion_order():
    user = SchemaParser().parse(load_document("values.json")).get("value_models.User")
    assert [(prop.name, prop.type) for prop in user.properties] == [
        ("name", PrimitiveType("String")),
        ("email", PrimitiveType("String")),
    ]


def test_annotations_with_members():
    foo = SchemaParser().parse(load_document("values.json")).get("Foo")
    assert foo.properties[0].annotations == [
        Annotation(name="PropertyName", package="document_store", members=(("value", '"ID"'),))
    ]
    assert foo.properties[-1].annotations == [Annotation("Exclude", "document_store"), Annotation("Nullable")]


def test_generated_prefix_is_configurable():
    document = SchemaParser(generated_prefix="Shadowed_").parse(load_document("values.json"))
    assert document.get("Tag").generated_name == "Shadowed_Tag"


def test_applicable():
    annotations = [Annotation("Immutable"), Annotation("FirebaseValue", "me.mattlogan.auto.value.firebase.annotation")]

    assert applicable(annotations, "FirebaseValue")
    assert applicable(annotations, "me.mattlogan.auto.value.firebase.annotation.FirebaseValue")
    assert not applicable(annotations, "other.FirebaseValue")
    assert not applicable([Annotation("Immutable")], "FirebaseValue")
    assert not applicable([], "FirebaseValue")


@pytest.mark.parametrize(
    "document",
    [
        [],
        {"package": "p"},
        {"values": {}},
        {"values": {"Foo": []}},
        {"values": {"Foo": {"properties": "id"}}},
        {"values": {"Foo": {"properties": [{"name": "id"}]}}},
        {"values": {"Foo": {"properties": [{"name": "id", "type": "String"}, {"name": "id", "type": "int"}]}}},
        {"values": {"Foo": {"properties": {"tags": "List<"}}}},
        {"values": {"Foo": {"annotations": "FirebaseValue"}}},
        {"values": {"Foo": {"annotations": [42]}}},
        {"values": {"Foo": {"annotations": [{"name": 42}]}}},
        {"values": {"Foo": {"properties": [{"name": "x", "type": 5}]}}},
        {"values": {"Foo": {"properties": {"x": {"type": ["List", "String"]}}}}},
        {"values": {"Foo": {"properties": [{"name": 7, "type": "String"}]}}},
    ],
)
def test_malformed_documents(document):
    with pytest.raises(SchemaParseError):
        SchemaParser().parse(document)
