"""
Analyzer module.

Contains type classification, schema validation, name resolution and the
shadow class builder.
"""

from __future__ import annotations

from .ir_nodes import (
    Category,
    ConstructorDef,
    Conversion,
    FieldAssignment,
    FieldDef,
    GenerationModel,
    GetterDef,
    ParamDef,
    QualifiedName,
    ReverseConversionDef,
    TypeKind,
    TypeRef,
    WrapperDef,
)
from .name_resolver import NameMapping, NameResolver
from .schema_validator import SchemaValidator
from .shadow_builder import ShadowClassBuilder
from .type_classifier import classify

__all__ = [
    "Category",
    "ConstructorDef",
    "Conversion",
    "FieldAssignment",
    "FieldDef",
    "GenerationModel",
    "GetterDef",
    "ParamDef",
    "QualifiedName",
    "ReverseConversionDef",
    "TypeKind",
    "TypeRef",
    "WrapperDef",
    "NameMapping",
    "NameResolver",
    "SchemaValidator",
    "ShadowClassBuilder",
    "classify",
]
