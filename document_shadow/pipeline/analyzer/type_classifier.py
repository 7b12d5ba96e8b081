"""
Type classifier.

Decides how each property type is mirrored in the shadow class.
"""

from __future__ import annotations

from typing import assert_never

from ..errors import UnsupportedReason, UnsupportedTypeError
from ..schema_ast.nodes import CollectionType, ParameterizedType, PrimitiveType, TypeDescriptor, ValueRefType
from .ir_nodes import Category


def is_primitive(type_descriptor: TypeDescriptor | None) -> bool:
    """Check whether a type passes through generation unchanged."""
    return isinstance(type_descriptor, PrimitiveType)


def is_collection(type_descriptor: TypeDescriptor | None) -> bool:
    """Check whether a type is parameterized (supported or not)."""
    return isinstance(type_descriptor, (CollectionType, ParameterizedType))


def classify(type_descriptor: TypeDescriptor, property_name: str = "") -> Category:
    """
    Classify a property type.

    List and Map are classified by their element (value) type only; Map keys
    are checked by the schema validator.

    Args:
        type_descriptor: The property type
        property_name: Property name, used in error messages

    Returns:
        The category driving generation for this property

    Raises:
        UnsupportedTypeError: For parameterized types other than List/Map
    """
    match type_descriptor:
        case PrimitiveType():
            return Category.PRIMITIVE
        case CollectionType(element=element):
            return Category.PRIMITIVE_COLLECTION if is_primitive(element) else Category.VALUE_COLLECTION
        case ValueRefType():
            return Category.VALUE_REFERENCE
        case ParameterizedType():
            raise UnsupportedTypeError(property_name, str(type_descriptor), UnsupportedReason.UNSUPPORTED_CONTAINER)
        case _:
            assert_never(type_descriptor)
