"""
Schema document parser.

Phase 1 of the pipeline: turn the JSON description of a set of value
objects into ValueSchema nodes. Types are parsed but not classified or
validated.
"""

from __future__ import annotations

from typing import Any

from ..errors import SchemaParseError
from .nodes import Annotation, PropertyDef, SchemaDocument, ValueSchema
from .type_parser import TypeExpressionParser


def applicable(annotations: list[Annotation], marker: str) -> bool:
    """Check whether a value class opted in to shadow generation.

    Args:
        annotations: Class-level annotations of the value class
        marker: Simple or qualified name of the opt-in annotation

    Returns:
        True if the marker annotation is attached
    """
    return any(annotation_matches(annotation, marker) for annotation in annotations)


def annotation_matches(annotation: Annotation, name: str) -> bool:
    """Match an annotation against a simple or qualified annotation name.

    Qualified names must match exactly when the annotation carries a package;
    unqualified annotations match on the simple name.
    """
    if annotation.package and "." in name:
        return annotation.qualified_name == name
    return annotation.name == name.rpartition(".")[2]


class SchemaParser:
    """Parses a schema document into a SchemaDocument."""

    def __init__(self, generated_prefix: str = "AutoValue_"):
        """
        Initialize the parser.

        Args:
            generated_prefix: Prefix used for default generated class names
        """
        self.generated_prefix = generated_prefix
        self.type_parser = TypeExpressionParser()

    def parse(self, document: dict[str, Any]) -> SchemaDocument:
        """
        Parse a schema document.

        Args:
            document: The decoded JSON document

        Returns:
            SchemaDocument with one ValueSchema per entry of "values"

        Raises:
            SchemaParseError: If the document is malformed
        """
        if not isinstance(document, dict):
            raise SchemaParseError("Schema document must be a JSON object")

        package = document.get("package", "")
        values = document.get("values")
        if not isinstance(values, dict) or not values:
            raise SchemaParseError("Schema document needs a non-empty 'values' object")

        result = SchemaDocument(package=package)
        for name, body in values.items():
            # Skip comment entries
            if isinstance(body, str) or name.startswith("_comment"):
                continue
            result.schemas.append(self._parse_value(name, body, package))

        return result

    def _parse_value(self, name: str, body: Any, package: str) -> ValueSchema:
        if not isinstance(body, dict):
            raise SchemaParseError(f"Value '{name}' must be described by a JSON object")

        schema = ValueSchema(
            name=name,
            package=body.get("package", package),
            annotations=self._parse_annotations(body.get("annotations", []), f"value '{name}'"),
            generated_name=body.get("generated_name", f"{self.generated_prefix}{name}"),
            extends=body.get("extends", name),
            is_final=bool(body.get("final", True)),
        )

        seen: set[str] = set()
        for prop in self._iter_properties(name, body.get("properties", [])):
            if prop.name in seen:
                raise SchemaParseError(f"Duplicate property '{prop.name}' in value '{name}'")
            seen.add(prop.name)
            schema.properties.append(prop)

        return schema

    def _iter_properties(self, value_name: str, properties: Any):
        """Yield PropertyDefs from either the list or the object form."""
        if isinstance(properties, dict):
            items = [{"name": k, **(v if isinstance(v, dict) else {"type": v})} for k, v in properties.items()]
        elif isinstance(properties, list):
            items = properties
        else:
            raise SchemaParseError(f"'properties' of value '{value_name}' must be a list or an object")

        for item in items:
            if not isinstance(item, dict) or "name" not in item or "type" not in item:
                raise SchemaParseError(f"Every property of value '{value_name}' needs a 'name' and a 'type'")
            if not isinstance(item["name"], str):
                raise SchemaParseError(f"Property names of value '{value_name}' must be strings, got {item['name']!r}")
            where = f"property '{item['name']}' of value '{value_name}'"
            if not isinstance(item["type"], str):
                raise SchemaParseError(f"The type of {where} must be a type expression string, got {item['type']!r}")
            try:
                type_descriptor = self.type_parser.parse(item["type"])
            except SchemaParseError as e:
                raise SchemaParseError(f"Invalid type for {where}: {e}") from e

            yield PropertyDef(
                name=item["name"],
                type=type_descriptor,
                annotations=self._parse_annotations(item.get("annotations", []), where),
            )

    def _parse_annotations(self, raw: Any, where: str) -> list[Annotation]:
        if not isinstance(raw, list):
            raise SchemaParseError(f"'annotations' of {where} must be a list")
        return [self._parse_annotation(item, where) for item in raw]

    def _parse_annotation(self, raw: Any, where: str) -> Annotation:
        if isinstance(raw, str):
            package, _, name = raw.lstrip("@").rpartition(".")
            return Annotation(name=name, package=package)

        if isinstance(raw, dict) and isinstance(raw.get("name"), str):
            package, _, name = raw["name"].lstrip("@").rpartition(".")
            members = raw.get("members", {})
            if not isinstance(members, dict):
                raise SchemaParseError(f"Annotation members on {where} must be an object")
            return Annotation(
                name=name,
                package=raw.get("package", package),
                members=tuple((str(k), str(v)) for k, v in members.items()),
            )

        raise SchemaParseError(f"Invalid annotation on {where}: {raw!r}")
