"""
Schema validator.

Rejects property types the shadow builder cannot mirror, before any
generation happens. Checks go one level deep only: referenced values are
validated by their own generation pass.
"""

from __future__ import annotations

from ..errors import UnsupportedReason, UnsupportedTypeError
from ..schema_ast.nodes import CollectionKind, CollectionType, ParameterizedType, PropertyDef, TypeDescriptor, ValueSchema
from .type_classifier import is_collection, is_primitive


class SchemaValidator:
    """Validates the structure of a value schema."""

    def validate(self, schema: ValueSchema) -> None:
        """
        Validate a schema.

        Args:
            schema: The value schema

        Raises:
            UnsupportedTypeError: For the first unsupported property, in
                property order
        """
        for prop in schema.properties:
            reason = self.check_type(prop.type)
            if reason is not None:
                raise self._error(prop, reason)

    def collect_errors(self, schema: ValueSchema) -> list[UnsupportedTypeError]:
        """Return one error per unsupported property instead of raising."""
        errors = []
        for prop in schema.properties:
            reason = self.check_type(prop.type)
            if reason is not None:
                errors.append(self._error(prop, reason))
        return errors

    def check_type(self, type_descriptor: TypeDescriptor | None) -> UnsupportedReason | None:
        """
        Check a single property type.

        Args:
            type_descriptor: The property type

        Returns:
            The violated rule, or None if the type is supported
        """
        if isinstance(type_descriptor, ParameterizedType):
            return UnsupportedReason.UNSUPPORTED_CONTAINER

        if not isinstance(type_descriptor, CollectionType):
            return None

        if type_descriptor.kind == CollectionKind.LIST:
            if is_collection(type_descriptor.element):
                return UnsupportedReason.NESTED_LIST_ELEMENT
        elif type_descriptor.kind == CollectionKind.MAP:
            if not is_primitive(type_descriptor.key):
                return UnsupportedReason.NON_PRIMITIVE_MAP_KEY
            if is_collection(type_descriptor.element):
                return UnsupportedReason.NESTED_MAP_VALUE

        return None

    def _error(self, prop: PropertyDef, reason: UnsupportedReason) -> UnsupportedTypeError:
        return UnsupportedTypeError(prop.name, str(prop.type), reason)
