"""
Name resolver for generated classes.

Maps value classes to the names of their generated shadow classes and
recovers the final class of a generator chain from intermediate names.
The naming convention itself comes from NamingConvention only.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from ..config import NamingConvention
from ..errors import AmbiguousNameError
from ..schema_ast.nodes import CollectionType, ValueRefType, ValueSchema
from .ir_nodes import QualifiedName

_IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_$][\w$]*")


@dataclass
class NameMapping:
    """Result of name resolution for one schema."""

    # Referenced value class -> shadow class, in first-use order
    shadow_names: dict[QualifiedName, QualifiedName] = field(default_factory=dict)


class NameResolver:
    """Resolves generated class names."""

    def __init__(self, naming: NamingConvention | None = None, package: str = ""):
        """
        Initialize the resolver.

        Args:
            naming: Prefix/suffix/marker convention
            package: Package of the schema being generated, used for
                references that carry no package of their own
        """
        self.naming = naming or NamingConvention()
        self.package = package

    def value_name(self, ref: ValueRefType) -> QualifiedName:
        """Qualified name of a referenced value class."""
        self._check_identifier(ref.name, ref.qualified_name)
        return QualifiedName(package=ref.package or self.package, name=ref.name)

    def shadow_name(self, ref: ValueRefType) -> QualifiedName:
        """
        Name of the shadow class generated for a referenced value class.

        Args:
            ref: The value reference

        Returns:
            ``<package>.<prefix><Name>.<suffix>``

        Raises:
            AmbiguousNameError: If the reference name is malformed
        """
        value = self.value_name(ref)
        return QualifiedName(
            package=value.package,
            name=f"{self.naming.generated_prefix}{value.name}",
            inner=self.naming.shadow_suffix,
        )

    def canonicalize(self, name: QualifiedName) -> QualifiedName:
        """
        Strip leading chain markers from a generated class name.

        When several generators extend the same value class, intermediate
        classes are named with one more leading marker per generator
        (``$$AutoValue_Foo``, ``$AutoValue_Foo``, ``AutoValue_Foo``). The last
        class in the chain carries none.

        Args:
            name: A generated class name with zero or more leading markers

        Returns:
            The same name with exactly those leading markers removed

        Raises:
            AmbiguousNameError: If nothing is left after stripping
        """
        marker = self.naming.chain_marker
        simple_name = name.name
        count = 0
        while marker and simple_name.startswith(marker * (count + 1)):
            count += 1
        if count == 0:
            return name

        stripped = simple_name[count * len(marker) :]
        if not stripped:
            raise AmbiguousNameError(str(name), "name consists only of chain markers")
        return QualifiedName(package=name.package, name=stripped, inner=name.inner)

    def wrapper_name(self, schema: ValueSchema) -> QualifiedName:
        """Name of the class generated for a schema, as given by the host."""
        name = schema.generated_name or f"{self.naming.generated_prefix}{schema.name}"
        self._check_identifier(name, name)
        return QualifiedName(package=schema.package, name=name)

    def resolve_names(self, schema: ValueSchema) -> NameMapping:
        """
        Resolve the shadow names of every value referenced by a schema.

        Args:
            schema: The value schema

        Returns:
            NameMapping with one entry per distinct referenced value
        """
        mapping = NameMapping()
        for prop in schema.properties:
            ref = prop.type
            if isinstance(ref, CollectionType):
                ref = ref.element
            if not isinstance(ref, ValueRefType):
                continue

            value = self.value_name(ref)
            if value not in mapping.shadow_names:
                mapping.shadow_names[value] = self.shadow_name(ref)

        return mapping

    def _check_identifier(self, name: str, full_name: str) -> None:
        if not name:
            raise AmbiguousNameError(full_name, "empty class name")
        if not _IDENTIFIER_PATTERN.fullmatch(name):
            raise AmbiguousNameError(full_name, f"'{name}' is not a valid class name")
