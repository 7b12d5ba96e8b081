"""
Schema node definitions for value-object schemas.

These nodes describe the shape of one immutable value object as the host
supplies it: an ordered list of typed properties plus attached annotations.
Nothing here is resolved or classified yet.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class CollectionKind(Enum):
    """The two supported container kinds."""

    LIST = "list"
    MAP = "map"


@dataclass(frozen=True)
class PrimitiveType:
    """A numeric, boolean, character or text type, boxed or not."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ValueRefType:
    """A reference to another value object handled by this generator."""

    name: str
    package: str = ""

    @property
    def qualified_name(self) -> str:
        return f"{self.package}.{self.name}" if self.package else self.name

    def __str__(self) -> str:
        return self.qualified_name


@dataclass(frozen=True)
class CollectionType:
    """A List or Map with exactly one level of type arguments."""

    kind: CollectionKind
    element: TypeDescriptor
    key: TypeDescriptor | None = None  # Map only

    def __str__(self) -> str:
        if self.kind == CollectionKind.MAP:
            return f"Map<{self.key}, {self.element}>"
        return f"List<{self.element}>"


@dataclass(frozen=True)
class ParameterizedType:
    """Any parameterized container other than List or Map."""

    raw: str
    args: tuple[TypeDescriptor, ...] = ()

    def __str__(self) -> str:
        return f"{self.raw}<{', '.join(str(a) for a in self.args)}>"


TypeDescriptor = PrimitiveType | ValueRefType | CollectionType | ParameterizedType


@dataclass(frozen=True)
class Annotation:
    """An annotation attached to a value class or one of its properties.

    ``members`` maps member names to raw source payloads. They are forwarded
    to the generated code exactly as given.
    """

    name: str
    package: str = ""
    members: tuple[tuple[str, str], ...] = ()

    @property
    def qualified_name(self) -> str:
        return f"{self.package}.{self.name}" if self.package else self.name

    def __str__(self) -> str:
        return f"@{self.qualified_name}"


@dataclass
class PropertyDef:
    """One property of a value object."""

    name: str = ""
    type: TypeDescriptor | None = None
    annotations: list[Annotation] = field(default_factory=list)


@dataclass
class ValueSchema:
    """The ordered property schema of one value object."""

    name: str = ""
    package: str = ""

    # Properties in declaration order
    properties: list[PropertyDef] = field(default_factory=list)

    # Class-level annotations
    annotations: list[Annotation] = field(default_factory=list)

    # Name of the class this pass generates (may carry chain markers)
    generated_name: str = ""

    # Class the generated wrapper extends
    extends: str = ""

    # Whether the generated wrapper is the last class in the chain
    is_final: bool = True

    @property
    def qualified_name(self) -> str:
        return f"{self.package}.{self.name}" if self.package else self.name


@dataclass
class SchemaDocument:
    """Root of a parsed schema document."""

    package: str = ""
    schemas: list[ValueSchema] = field(default_factory=list)

    def get(self, name: str) -> ValueSchema | None:
        """Look up a schema by simple or qualified name."""
        for schema in self.schemas:
            if name in (schema.name, schema.qualified_name):
                return schema
        return None
