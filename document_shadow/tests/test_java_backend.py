"""
Tests for the Java backend (jinja2 templates).
"""

from __future__ import annotations

import pytest
from conftest import load_document

from document_shadow.pipeline import CodeGeneratorConfig, PipelineGenerator
from document_shadow.pipeline.writer import AtomicWriter

FOO_PATH = "com/example/model/AutoValue_Foo.java"


def generate_java(document: dict, config: CodeGeneratorConfig | None = None) -> dict[str, str]:
    config = config or CodeGeneratorConfig()
    config.add_generation_comment = False
    result = PipelineGenerator("values", document, config, "java").generate()
    assert result.ok, result.errors
    return result.files


def lines(code: str) -> list[str]:
    return [line.strip() for line in code.splitlines()]


@pytest.fixture(scope="module")
def files():
    return generate_java(load_document("java/values.json"))


@pytest.fixture(scope="module")
def foo(files):
    return files[FOO_PATH]


def test_one_file_per_value(files):
    assert list(files) == [FOO_PATH, "com/example/model/AutoValue_Tag.java"]


def test_package_and_imports(foo):
    head = foo.split("final class")[0].strip().splitlines()
    assert head == [
        "package com.example.model;",
        "",
        "import com.example.user.AutoValue_User;",
        "import com.example.user.User;",
        "import com.google.firebase.database.Exclude;",
        "import com.google.firebase.database.IgnoreExtraProperties;",
        "import com.google.firebase.database.PropertyName;",
        "import java.util.ArrayList;",
        "import java.util.HashMap;",
        "import java.util.List;",
        "import java.util.Map;",
    ]


def test_wrapper(foo):
    code = lines(foo)
    assert "final class AutoValue_Foo extends $AutoValue_Foo {" in code
    assert "AutoValue_Foo(String id, int count, User owner, List<Tag> tags, Map<String, Tag> tagsByName, String secret) {" in code
    assert "super(id, count, owner, tags, tagsByName, secret);" in code


def test_shadow_class(foo):
    code = lines(foo)
    start = code.index("@IgnoreExtraProperties")
    assert code[start + 1] == "static final class FirebaseValue {"
    assert code[start + 3 : start + 9] == [
        "private String id;",
        "private int count;",
        "private AutoValue_User.FirebaseValue owner;",
        "private List<AutoValue_Tag.FirebaseValue> tags;",
        "private Map<String, AutoValue_Tag.FirebaseValue> tagsByName;",
        "private String secret;",
    ]


def test_empty_constructor_is_marked_unused(foo):
    code = lines(foo)
    index = code.index('@SuppressWarnings("unused")')
    assert code[index + 1 : index + 3] == ["FirebaseValue() {", "}"]


def test_forward_constructor(foo):
    code = lines(foo)
    start = code.index("FirebaseValue(Foo foo) {")
    assert code[start + 1 : start + 17] == [
        "this.id = foo.id();",
        "this.count = foo.count();",
        "this.owner = foo.owner() == null ? null : new AutoValue_User.FirebaseValue(foo.owner());",
        "if (foo.tags() != null) {",
        "this.tags = new ArrayList<AutoValue_Tag.FirebaseValue>();",
        "for (Tag element : foo.tags()) {",
        "this.tags.add(new AutoValue_Tag.FirebaseValue(element));",
        "}",
        "}",
        "if (foo.tagsByName() != null) {",
        "this.tagsByName = new HashMap<String, AutoValue_Tag.FirebaseValue>();",
        "for (Map.Entry<String, Tag> entry : foo.tagsByName().entrySet()) {",
        "this.tagsByName.put(entry.getKey(), new AutoValue_Tag.FirebaseValue(entry.getValue()));",
        "}",
        "}",
        "this.secret = foo.secret();",
    ]


def test_reverse_conversion(foo):
    code = lines(foo)
    start = code.index("AutoValue_Foo toAutoValue() {")
    assert not any(line.startswith("final AutoValue_Foo toAutoValue") for line in code)
    assert code[start - 1] == "@Exclude"
    assert code[start + 1 : start + 4] == [
        "String id = this.id;",
        "int count = this.count;",
        "User owner = this.owner == null ? null : this.owner.toAutoValue();",
    ]
    assert "tags.add(element.toAutoValue());" in code
    assert "tagsByName.put(entry.getKey(), entry.getValue().toAutoValue());" in code
    assert "return new AutoValue_Foo(id, count, owner, tags, tagsByName, secret);" in code


def test_getters(foo):
    code = lines(foo)
    getters = [line for line in code if line.startswith("public ")]
    assert getters == [
        "public String getId() {",
        "public int getCount() {",
        "public AutoValue_User.FirebaseValue getOwner() {",
        "public List<AutoValue_Tag.FirebaseValue> getTags() {",
        "public Map<String, AutoValue_Tag.FirebaseValue> getTagsByName() {",
        "public String getSecret() {",
    ]
    assert code[code.index("public String getId() {") - 1] == '@PropertyName("ID")'
    assert code[code.index("public String getSecret() {") - 1] == "@Exclude"
    assert code[code.index("public int getCount() {") - 1] == ""


def test_generated_code_passes_structural_validation(files):
    writer = AtomicWriter()
    for code in files.values():
        writer._default_validate_java(code)


def test_chained_generator_is_abstract_and_returns_the_final_class():
    document = {
        "package": "com.example.model",
        "values": {
            "Foo": {
                "annotations": ["FirebaseValue"],
                "generated_name": "$AutoValue_Foo",
                "extends": "$$AutoValue_Foo",
                "final": False,
                "properties": {"id": "String"},
            }
        },
    }
    config = CodeGeneratorConfig.from_dict({"annotations": {"marker": "FirebaseValue"}})
    code = lines(generate_java(document, config)["com/example/model/$AutoValue_Foo.java"])

    assert "abstract class $AutoValue_Foo extends $$AutoValue_Foo {" in code
    assert "$AutoValue_Foo(String id) {" in code
    assert "AutoValue_Foo toAutoValue() {" in code
    assert "return new AutoValue_Foo(id);" in code


def test_local_names_do_not_shadow_properties():
    document = {
        "package": "p",
        "values": {
            "Foo": {
                "annotations": ["FirebaseValue"],
                "properties": {"element": "String", "tags": "List<Tag>"},
            },
            "Tag": {"properties": {"label": "String"}},
        },
    }
    config = CodeGeneratorConfig.from_dict({"annotations": {"marker": "FirebaseValue"}})
    code = lines(generate_java(document, config)["p/AutoValue_Foo.java"])

    assert "for (Tag element_ : foo.tags()) {" in code


def test_generation_comment():
    result = PipelineGenerator("values", load_document("java/values.json"), CodeGeneratorConfig(), "java").generate()
    assert result.files[FOO_PATH].startswith("// Generated by document_shadow v")


def test_primitive_type_arguments_are_boxed():
    document = {
        "package": "p",
        "values": {
            "Foo": {
                "annotations": ["FirebaseValue"],
                "properties": {"counts": "list[int]", "flags": "dict[str, bool]", "byRank": "dict[int, Tag]", "n": "int"},
            },
            "Tag": {"properties": {"label": "str"}},
        },
    }
    config = CodeGeneratorConfig.from_dict({"annotations": {"marker": "FirebaseValue"}})
    code = lines(generate_java(document, config)["p/AutoValue_Foo.java"])

    assert "AutoValue_Foo(List<Integer> counts, Map<String, Boolean> flags, Map<Integer, Tag> byRank, int n) {" in code
    assert "private List<Integer> counts;" in code
    assert "private Map<String, Boolean> flags;" in code
    assert "public List<Integer> getCounts() {" in code
    assert "public int getN() {" in code
    assert "this.byRank = new HashMap<Integer, AutoValue_Tag.FirebaseValue>();" in code
    assert "for (Map.Entry<Integer, Tag> entry : foo.byRank().entrySet()) {" in code
    assert "byRank = new HashMap<Integer, Tag>();" in code
    assert "for (Map.Entry<Integer, AutoValue_Tag.FirebaseValue> entry : this.byRank.entrySet()) {" in code
    assert not any("<int" in line or "boolean>" in line for line in code)
