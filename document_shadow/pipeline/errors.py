"""
Error types raised by the shadow generation pipeline.

All of them are build-time, programmer-facing errors: they are fixed by
changing the source schema, never retried.
"""

from __future__ import annotations

from enum import Enum


class ShadowGenerationError(Exception):
    """Base class for every error raised while generating a shadow class."""


class SchemaParseError(ShadowGenerationError):
    """Raised when a schema document or a type expression is malformed."""


class UnsupportedReason(Enum):
    """Why a property type was rejected."""

    NESTED_LIST_ELEMENT = "parameterized types not allowed as List element type"
    NON_PRIMITIVE_MAP_KEY = "non-primitive map key: only primitive-like types allowed as Map keys"
    NESTED_MAP_VALUE = "parameterized types not allowed as Map value type"
    UNSUPPORTED_CONTAINER = "List and Map are the only supported container types"


class UnsupportedTypeError(ShadowGenerationError):
    """Raised when a property type cannot be mirrored by a shadow class.

    Attributes:
        property_name: Name of the offending property
        type_description: Full description of its type
        reason: Which structural rule the type breaks
    """

    def __init__(self, property_name: str, type_description: str, reason: UnsupportedReason):
        self.property_name = property_name
        self.type_description = type_description
        self.reason = reason
        super().__init__(f"Type is not supported: {type_description} (property '{property_name}')\n{reason.value}")


class AmbiguousNameError(ShadowGenerationError):
    """Raised when a generated class name cannot be determined uniquely."""

    def __init__(self, name: str, detail: str):
        self.name = name
        self.detail = detail
        super().__init__(f"Cannot resolve generated name for '{name}': {detail}")


class EmitError(ShadowGenerationError):
    """Raised when a backend cannot render a generation model."""


class OutputExistsError(ShadowGenerationError):
    """Raised when the output file exists and overwriting was not requested."""
