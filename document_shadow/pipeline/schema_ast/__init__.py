"""
Schema AST module.

Contains the value-schema node definitions and the document parser.
"""

from __future__ import annotations

from .nodes import (
    Annotation,
    CollectionKind,
    CollectionType,
    ParameterizedType,
    PrimitiveType,
    PropertyDef,
    SchemaDocument,
    TypeDescriptor,
    ValueRefType,
    ValueSchema,
)
from .parser import SchemaParser, annotation_matches, applicable
from .type_parser import TypeExpressionParser, is_primitive_name, parse_type

__all__ = [
    "Annotation",
    "CollectionKind",
    "CollectionType",
    "ParameterizedType",
    "PrimitiveType",
    "PropertyDef",
    "SchemaDocument",
    "TypeDescriptor",
    "ValueRefType",
    "ValueSchema",
    "SchemaParser",
    "TypeExpressionParser",
    "annotation_matches",
    "applicable",
    "is_primitive_name",
    "parse_type",
]
