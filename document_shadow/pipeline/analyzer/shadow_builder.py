"""
Shadow class builder that transforms a value schema into a generation model.

Phase 2 of the pipeline: classify each property, resolve nested value
references and build the fields, constructors, getters and reverse
conversion of the shadow class.
"""

from __future__ import annotations

from typing import assert_never

from ...utils import parameter_name
from ..config import CodeGeneratorConfig
from ..errors import UnsupportedReason, UnsupportedTypeError
from ..schema_ast.nodes import (
    Annotation,
    CollectionKind,
    CollectionType,
    PrimitiveType,
    PropertyDef,
    TypeDescriptor,
    ValueRefType,
    ValueSchema,
)
from ..schema_ast.parser import annotation_matches
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
from .name_resolver import NameResolver
from .type_classifier import classify


class ShadowClassBuilder:
    """Builds the generation model of one value schema.

    The schema must have been validated by SchemaValidator first; the
    builder does no validation of its own.
    """

    def __init__(self, config: CodeGeneratorConfig | None = None):
        """
        Initialize the builder.

        Args:
            config: Code generation configuration
        """
        self.config = config or CodeGeneratorConfig()

    def build(self, schema: ValueSchema, original_type: QualifiedName | None = None) -> GenerationModel:
        """
        Build the generation model.

        Args:
            schema: The validated value schema
            original_type: Name of the class this pass generates; defaults to
                the schema's generated name. May carry chain markers.

        Returns:
            GenerationModel ready for a backend
        """
        resolver = NameResolver(self.config.naming, schema.package)
        wrapper_name = original_type or resolver.wrapper_name(schema)
        value_name = QualifiedName(package=schema.package, name=schema.name)

        fields = [self._build_field(prop, resolver) for prop in schema.properties]
        value_type = TypeRef(kind=TypeKind.VALUE, name=value_name.name, package=value_name.package)

        model = GenerationModel(
            value_name=value_name,
            shadow_name=QualifiedName(
                package=wrapper_name.package,
                name=wrapper_name.name,
                inner=self.config.naming.shadow_suffix,
            ),
            wrapper=self._build_wrapper(schema, wrapper_name, fields),
            class_annotations=self._filter_annotations(schema.annotations, self.config.annotations.class_policies),
            fields=fields,
            empty_constructor=ConstructorDef(is_unused=True),
            forward_constructor=self._build_forward_constructor(schema, value_type, fields),
            getters=[self._build_getter(prop, field) for prop, field in zip(schema.properties, fields)],
            reverse_conversion=ReverseConversionDef(
                return_type=resolver.canonicalize(wrapper_name),
                steps=list(fields),
                arguments=[field.name for field in fields],
                annotations=[self._annotation_from_name(self.config.annotations.exclude)],
            ),
            nested_values=list(resolver.resolve_names(schema).shadow_names),
        )
        return model

    def _build_field(self, prop: PropertyDef, resolver: NameResolver) -> FieldDef:
        """Build the shadow field of one property."""
        category = classify(prop.type, prop.name)
        value_type_ref = self._value_type_ref(prop, prop.type, resolver)

        match category:
            case Category.PRIMITIVE | Category.PRIMITIVE_COLLECTION:
                return FieldDef(
                    name=prop.name,
                    category=category,
                    conversion=Conversion.COPY,
                    type_ref=value_type_ref,
                    value_type_ref=value_type_ref,
                )

            case Category.VALUE_REFERENCE:
                return FieldDef(
                    name=prop.name,
                    category=category,
                    conversion=Conversion.VALUE,
                    type_ref=self._shadow_type_ref(prop.type, resolver),
                    value_type_ref=value_type_ref,
                )

            case Category.VALUE_COLLECTION:
                collection = prop.type
                shadow_element = self._shadow_type_ref(collection.element, resolver)
                if collection.kind == CollectionKind.LIST:
                    return FieldDef(
                        name=prop.name,
                        category=category,
                        conversion=Conversion.VALUE_LIST,
                        type_ref=TypeRef(kind=TypeKind.LIST, type_args=[shadow_element]),
                        value_type_ref=value_type_ref,
                    )
                # Map keys stay unchanged, values are wrapped
                return FieldDef(
                    name=prop.name,
                    category=category,
                    conversion=Conversion.VALUE_MAP,
                    type_ref=TypeRef(kind=TypeKind.MAP, type_args=[value_type_ref.type_args[0], shadow_element]),
                    value_type_ref=value_type_ref,
                )

            case _:
                assert_never(category)

    def _value_type_ref(self, prop: PropertyDef, type_descriptor: TypeDescriptor, resolver: NameResolver) -> TypeRef:
        """Translate a property type as declared on the value class."""
        match type_descriptor:
            case PrimitiveType(name=name):
                return TypeRef(kind=TypeKind.PRIMITIVE, name=name)
            case ValueRefType():
                value = resolver.value_name(type_descriptor)
                return TypeRef(kind=TypeKind.VALUE, name=value.name, package=value.package)
            case CollectionType(kind=CollectionKind.LIST, element=element):
                return TypeRef(kind=TypeKind.LIST, type_args=[self._value_type_ref(prop, element, resolver)])
            case CollectionType(kind=CollectionKind.MAP, key=key, element=element):
                return TypeRef(
                    kind=TypeKind.MAP,
                    type_args=[self._value_type_ref(prop, key, resolver), self._value_type_ref(prop, element, resolver)],
                )
            case _:
                # ParameterizedType never passes validation
                raise UnsupportedTypeError(prop.name, str(prop.type), UnsupportedReason.UNSUPPORTED_CONTAINER)

    def _shadow_type_ref(self, ref: ValueRefType, resolver: NameResolver) -> TypeRef:
        shadow = resolver.shadow_name(ref)
        return TypeRef(kind=TypeKind.SHADOW, name=shadow.name, package=shadow.package, inner=shadow.inner)

    def _build_wrapper(self, schema: ValueSchema, wrapper_name: QualifiedName, fields: list[FieldDef]) -> WrapperDef:
        """Build the enclosing class with its standard forwarding constructor."""
        constructor = ConstructorDef(
            params=[ParamDef(name=field.name, type_ref=field.value_type_ref) for field in fields],
            super_args=[field.name for field in fields],
        )
        return WrapperDef(
            name=wrapper_name,
            extends=schema.extends or schema.name,
            is_final=schema.is_final,
            constructor=constructor,
        )

    def _build_forward_constructor(self, schema: ValueSchema, value_type: TypeRef, fields: list[FieldDef]) -> ConstructorDef:
        """Build the constructor copying a value object into the shadow."""
        source = parameter_name(schema.name)
        return ConstructorDef(
            params=[ParamDef(name=source, type_ref=value_type)],
            assignments=[FieldAssignment(field=field, source=source, accessor=field.name) for field in fields],
        )

    def _build_getter(self, prop: PropertyDef, field: FieldDef) -> GetterDef:
        allowed = [self.config.annotations.exclude, self.config.annotations.rename]
        return GetterDef(
            property_name=prop.name,
            field_name=field.name,
            return_type=field.type_ref,
            annotations=self._filter_annotations(prop.annotations, allowed),
        )

    def _filter_annotations(self, annotations: list[Annotation], allowed: list[str]) -> list[Annotation]:
        """Keep annotations on the allow-list, in their original order."""
        return [a for a in annotations if any(annotation_matches(a, name) for name in allowed)]

    def _annotation_from_name(self, name: str) -> Annotation:
        package, _, simple_name = name.rpartition(".")
        return Annotation(name=simple_name, package=package)
