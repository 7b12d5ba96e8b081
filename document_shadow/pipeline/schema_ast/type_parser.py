"""
Parser for property type expressions.

Accepts both Java spellings (``Map<String, List<Tag>>``) and Python
spellings (``dict[str, list[Tag]]``) and builds a TypeDescriptor tree.
"""

from __future__ import annotations

import re

from ..errors import SchemaParseError
from .nodes import CollectionKind, CollectionType, ParameterizedType, PrimitiveType, TypeDescriptor, ValueRefType

PRIMITIVE_TYPES = {
    # Java primitives
    "boolean",
    "byte",
    "short",
    "int",
    "long",
    "char",
    "float",
    "double",
    # Boxed primitives
    "Boolean",
    "Byte",
    "Short",
    "Integer",
    "Long",
    "Character",
    "Float",
    "Double",
    # Text
    "String",
    # Python builtins
    "bool",
    "str",
}

COLLECTION_TYPES = {
    "List": CollectionKind.LIST,
    "java.util.List": CollectionKind.LIST,
    "list": CollectionKind.LIST,
    "Map": CollectionKind.MAP,
    "java.util.Map": CollectionKind.MAP,
    "dict": CollectionKind.MAP,
}

_TOKEN_PATTERN = re.compile(r"\s*(?:([A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*)|([<>\[\],]))")

_CLOSING = {"<": ">", "[": "]"}


def is_primitive_name(name: str) -> bool:
    """Check whether a (possibly java.lang qualified) name is primitive-like."""
    return name.removeprefix("java.lang.") in PRIMITIVE_TYPES


class TypeExpressionParser:
    """Recursive-descent parser for a single type expression."""

    def parse(self, text: str) -> TypeDescriptor:
        """
        Parse a type expression.

        Args:
            text: The type expression (e.g. "List<Tag>")

        Returns:
            The parsed TypeDescriptor

        Raises:
            SchemaParseError: If the expression is malformed
        """
        self._text = text
        self._tokens = self._tokenize(text)
        self._pos = 0

        result = self._parse_type()
        if self._pos != len(self._tokens):
            raise SchemaParseError(f"Unexpected '{self._tokens[self._pos]}' in type expression '{text}'")
        return result

    def _tokenize(self, text: str) -> list[str]:
        tokens = []
        pos = 0
        stripped = text.rstrip()
        while pos < len(stripped):
            match = _TOKEN_PATTERN.match(stripped, pos)
            if not match:
                raise SchemaParseError(f"Invalid character at offset {pos} in type expression '{text}'")
            tokens.append(match.group(1) or match.group(2))
            pos = match.end()
        if not tokens:
            raise SchemaParseError("Empty type expression")
        return tokens

    def _peek(self) -> str | None:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else None

    def _next(self) -> str:
        token = self._peek()
        if token is None:
            raise SchemaParseError(f"Unexpected end of type expression '{self._text}'")
        self._pos += 1
        return token

    def _parse_type(self) -> TypeDescriptor:
        name = self._next()
        if name in _CLOSING or name in (">", "]", ","):
            raise SchemaParseError(f"Expected a type name, got '{name}' in '{self._text}'")

        args: list[TypeDescriptor] = []
        if self._peek() in _CLOSING:
            closing = _CLOSING[self._next()]
            args.append(self._parse_type())
            while self._peek() == ",":
                self._next()
                args.append(self._parse_type())
            if self._next() != closing:
                raise SchemaParseError(f"Expected '{closing}' in type expression '{self._text}'")

        return self._build(name, args)

    def _build(self, name: str, args: list[TypeDescriptor]) -> TypeDescriptor:
        if name in COLLECTION_TYPES:
            kind = COLLECTION_TYPES[name]
            expected = 1 if kind == CollectionKind.LIST else 2
            if len(args) != expected:
                raise SchemaParseError(f"{name} takes {expected} type argument(s), got {len(args)} in '{self._text}'")
            if kind == CollectionKind.MAP:
                return CollectionType(kind=kind, key=args[0], element=args[1])
            return CollectionType(kind=kind, element=args[0])

        if args:
            return ParameterizedType(raw=name, args=tuple(args))

        if is_primitive_name(name):
            return PrimitiveType(name.removeprefix("java.lang."))

        package, _, simple_name = name.rpartition(".")
        return ValueRefType(name=simple_name, package=package)


def parse_type(text: str) -> TypeDescriptor:
    """Convenience function to parse one type expression."""
    return TypeExpressionParser().parse(text)
