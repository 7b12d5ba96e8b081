"""
Generation model node definitions.

These nodes are the output of the shadow builder for one value schema.
Every name is resolved and every property is classified, so a backend only
has to render them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..schema_ast.nodes import Annotation


class Category(Enum):
    """How a property type is mirrored in the shadow class."""

    PRIMITIVE = "primitive"  # passed through verbatim
    PRIMITIVE_COLLECTION = "primitive_collection"  # List/Map of primitives, verbatim
    VALUE_COLLECTION = "value_collection"  # List/Map of values, elements wrapped
    VALUE_REFERENCE = "value_reference"  # another value, wrapped


class TypeKind(Enum):
    """Kind of type in the model."""

    PRIMITIVE = "primitive"  # int, String, ...
    VALUE = "value"  # a user-authored value class
    SHADOW = "shadow"  # a generated shadow class
    LIST = "list"  # List<T>
    MAP = "map"  # Map<K, V>


class Conversion(Enum):
    """How a field is copied between the value object and its shadow."""

    COPY = "copy"
    VALUE = "value"
    VALUE_LIST = "value_list"
    VALUE_MAP = "value_map"


@dataclass(frozen=True)
class QualifiedName:
    """A class name, optionally with a package and an inner class."""

    package: str = ""
    name: str = ""
    inner: str = ""

    @property
    def outer(self) -> str:
        """Package-qualified name of the outer class."""
        return f"{self.package}.{self.name}" if self.package else self.name

    @property
    def simple(self) -> str:
        """Name relative to the package (Outer or Outer.Inner)."""
        return f"{self.name}.{self.inner}" if self.inner else self.name

    def __str__(self) -> str:
        return f"{self.outer}.{self.inner}" if self.inner else self.outer


@dataclass
class TypeRef:
    """A resolved type reference."""

    kind: TypeKind = TypeKind.PRIMITIVE
    name: str = ""  # Type name (e.g., "int", "Tag", "AutoValue_Tag")
    package: str = ""
    inner: str = ""  # For SHADOW types: the inner shadow class

    # For container types: [element] or [key, value]
    type_args: list[TypeRef] = field(default_factory=list)

    @property
    def qualified_name(self) -> QualifiedName:
        return QualifiedName(self.package, self.name, self.inner)


@dataclass
class FieldDef:
    """A field of the shadow class, one per property."""

    name: str = ""
    category: Category = Category.PRIMITIVE
    conversion: Conversion = Conversion.COPY

    # Type of the shadow field
    type_ref: TypeRef | None = None

    # Type of the property on the value class
    value_type_ref: TypeRef | None = None


@dataclass
class ParamDef:
    """A constructor or method parameter."""

    name: str = ""
    type_ref: TypeRef | None = None


@dataclass
class FieldAssignment:
    """Forward-constructor step: read ``source.<accessor>`` into a field."""

    field: FieldDef
    source: str = ""  # Name of the value-object parameter
    accessor: str = ""  # Property accessor on the value object


@dataclass
class ConstructorDef:
    """A constructor of a generated class."""

    params: list[ParamDef] = field(default_factory=list)
    assignments: list[FieldAssignment] = field(default_factory=list)

    # Forwarding constructor of the wrapper: arguments passed to super
    super_args: list[str] = field(default_factory=list)

    # Only called reflectively by the document store's deserializer
    is_unused: bool = False


@dataclass
class GetterDef:
    """An accessor of the shadow class."""

    property_name: str = ""
    field_name: str = ""
    return_type: TypeRef | None = None

    # Forwarded property annotations (exclude / rename)
    annotations: list[Annotation] = field(default_factory=list)


@dataclass
class ReverseConversionDef:
    """The operation turning a shadow instance back into a value object."""

    return_type: QualifiedName = field(default_factory=QualifiedName)

    # One unwrap step per field, in property order
    steps: list[FieldDef] = field(default_factory=list)

    # Constructor arguments, in property order
    arguments: list[str] = field(default_factory=list)

    annotations: list[Annotation] = field(default_factory=list)


@dataclass
class WrapperDef:
    """The generated class enclosing the shadow class."""

    name: QualifiedName = field(default_factory=QualifiedName)
    extends: str = ""
    is_final: bool = True
    constructor: ConstructorDef = field(default_factory=ConstructorDef)


@dataclass
class GenerationModel:
    """Everything a backend needs to render one shadow class."""

    # The user-authored value class
    value_name: QualifiedName = field(default_factory=QualifiedName)

    # The generated shadow class (wrapper name + inner shadow name)
    shadow_name: QualifiedName = field(default_factory=QualifiedName)

    wrapper: WrapperDef = field(default_factory=WrapperDef)

    # Forwarded class-level annotations (extra-property policy only)
    class_annotations: list[Annotation] = field(default_factory=list)

    fields: list[FieldDef] = field(default_factory=list)
    empty_constructor: ConstructorDef = field(default_factory=ConstructorDef)
    forward_constructor: ConstructorDef = field(default_factory=ConstructorDef)
    getters: list[GetterDef] = field(default_factory=list)
    reverse_conversion: ReverseConversionDef = field(default_factory=ReverseConversionDef)

    # Value classes referenced through nested values, in first-use order
    nested_values: list[QualifiedName] = field(default_factory=list)
