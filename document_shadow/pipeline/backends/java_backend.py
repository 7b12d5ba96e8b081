"""
Java code generation backend.

Generates one Java source file per shadow class from generation models.
"""

from __future__ import annotations

from typing import Any

from ...utils import java_getter_name
from ..analyzer.ir_nodes import Conversion, FieldDef, GenerationModel, TypeKind, TypeRef
from ..config import CodeGeneratorConfig
from ..errors import EmitError
from ..schema_ast.nodes import Annotation
from .base import CodeBackend


class JavaBackend(CodeBackend):
    """Java code generation backend."""

    TEMPLATE_LANG = "java"
    FILE_EXTENSION = "java"

    TYPE_MAP = {
        "bool": "boolean",
        "str": "String",
    }

    # Generic type arguments cannot be primitives
    BOXED_TYPES = {
        "boolean": "Boolean",
        "byte": "Byte",
        "short": "Short",
        "int": "Integer",
        "long": "Long",
        "char": "Character",
        "float": "Float",
        "double": "Double",
    }

    REVERSE_METHOD = "toAutoValue"

    def __init__(self, config: CodeGeneratorConfig):
        super().__init__(config)
        self.required_imports: set[str] = set()
        self.package = ""

    def generate(self, models: list[GenerationModel], module_name: str, generation_comment: str = "") -> dict[str, str]:
        """Generate Java code, one file per wrapper class."""
        files = {}
        for model in models:
            # Reset import tracking
            self.required_imports = set()
            self.package = model.wrapper.name.package

            class_ctx = self._prepare_class_context(model)
            class_content = self.class_template.render(class_ctx)
            prefix = self.prefix_template.render(
                generation_comment=generation_comment,
                PACKAGE=self.package,
                imports=sorted(self.required_imports),
            )

            path = "/".join([*self.package.split("."), model.wrapper.name.name]) if self.package else model.wrapper.name.name
            files[f"{path}.{self.FILE_EXTENSION}"] = prefix + class_content
        return files

    def _prepare_class_context(self, model: GenerationModel) -> dict[str, Any]:
        """
        Prepare the template context for one wrapper class.

        Args:
            model: The generation model

        Returns:
            Dictionary of template variables
        """
        wrapper = model.wrapper
        self._import_class(wrapper.extends, model.value_name.package)

        source = model.forward_constructor.params[0]
        field_names = {field.name for field in model.fields}
        item = self._unique_local("element", field_names)
        entry = self._unique_local("entry", field_names)

        forward_lines = []
        reverse_lines = []
        for field in model.fields:
            forward_lines.extend(self._forward_lines(field, source.name, item, entry))
            reverse_lines.extend(self._reverse_lines(field, item, entry))

        reverse = model.reverse_conversion
        reverse_type = reverse.return_type.name
        self._import_class(reverse_type, reverse.return_type.package)

        return {
            "CLASS_MODIFIER": "final" if wrapper.is_final else "abstract",
            "CLASS_NAME": wrapper.name.name,
            "EXTENDS": wrapper.extends,
            "constructor_params": [f"{self.translate_type(p.type_ref)} {p.name}" for p in wrapper.constructor.params],
            "super_args": wrapper.constructor.super_args,
            "class_annotations": [self._format_annotation(a) for a in model.class_annotations],
            "SHADOW_NAME": model.shadow_name.inner,
            "fields": [{"type": self.translate_type(f.type_ref), "name": f.name} for f in model.fields],
            "source": {"type": self.translate_type(source.type_ref), "name": source.name},
            "forward_lines": forward_lines,
            "reverse": {
                "annotations": [self._format_annotation(a) for a in reverse.annotations],
                "type": reverse_type,
                "method": self.REVERSE_METHOD,
                "lines": reverse_lines,
                "arguments": reverse.arguments,
            },
            "getters": [
                {
                    "annotations": [self._format_annotation(a) for a in getter.annotations],
                    "type": self.translate_type(getter.return_type),
                    "name": java_getter_name(getter.property_name),
                    "field": getter.field_name,
                }
                for getter in model.getters
            ],
        }

    def _forward_lines(self, field: FieldDef, source: str, item: str, entry: str) -> list[str]:
        """Statements copying one property of the value object into the shadow."""
        read = f"{source}.{field.name}()"
        target = f"this.{field.name}"

        if field.conversion == Conversion.COPY:
            return [f"{target} = {read};"]

        if field.conversion == Conversion.VALUE:
            shadow = self.translate_type(field.type_ref)
            return [f"{target} = {read} == null ? null : new {shadow}({read});"]

        shadow = self.translate_type(field.type_ref.type_args[-1], boxed=True)
        value = self.translate_type(field.value_type_ref.type_args[-1], boxed=True)
        if field.conversion == Conversion.VALUE_LIST:
            self.required_imports.add("java.util.ArrayList")
            return [
                f"if ({read} != null) {{",
                f"  {target} = new ArrayList<{shadow}>();",
                f"  for ({value} {item} : {read}) {{",
                f"    {target}.add(new {shadow}({item}));",
                "  }",
                "}",
            ]

        key = self.translate_type(field.value_type_ref.type_args[0], boxed=True)
        self.required_imports.add("java.util.HashMap")
        return [
            f"if ({read} != null) {{",
            f"  {target} = new HashMap<{key}, {shadow}>();",
            f"  for (Map.Entry<{key}, {value}> {entry} : {read}.entrySet()) {{",
            f"    {target}.put({entry}.getKey(), new {shadow}({entry}.getValue()));",
            "  }",
            "}",
        ]

    def _reverse_lines(self, field: FieldDef, item: str, entry: str) -> list[str]:
        """Statements rebuilding one property of the value object into a local."""
        value_type = self.translate_type(field.value_type_ref)
        read = f"this.{field.name}"

        if field.conversion == Conversion.COPY:
            return [f"{value_type} {field.name} = {read};"]

        if field.conversion == Conversion.VALUE:
            return [f"{value_type} {field.name} = {read} == null ? null : {read}.{self.REVERSE_METHOD}();"]

        shadow = self.translate_type(field.type_ref.type_args[-1], boxed=True)
        if field.conversion == Conversion.VALUE_LIST:
            value = self.translate_type(field.value_type_ref.type_args[0], boxed=True)
            return [
                f"{value_type} {field.name} = null;",
                f"if ({read} != null) {{",
                f"  {field.name} = new ArrayList<{value}>();",
                f"  for ({shadow} {item} : {read}) {{",
                f"    {field.name}.add({item}.{self.REVERSE_METHOD}());",
                "  }",
                "}",
            ]

        key, value = (self.translate_type(t, boxed=True) for t in field.value_type_ref.type_args)
        return [
            f"{value_type} {field.name} = null;",
            f"if ({read} != null) {{",
            f"  {field.name} = new HashMap<{key}, {value}>();",
            f"  for (Map.Entry<{key}, {shadow}> {entry} : {read}.entrySet()) {{",
            f"    {field.name}.put({entry}.getKey(), {entry}.getValue().{self.REVERSE_METHOD}());",
            "  }",
            "}",
        ]

    def translate_type(self, type_ref: TypeRef, boxed: bool = False) -> str:
        """Translate a model type to a Java type string; boxed for generic arguments."""
        if type_ref.kind == TypeKind.PRIMITIVE:
            name = self.TYPE_MAP.get(type_ref.name, type_ref.name)
            return self.BOXED_TYPES.get(name, name) if boxed else name

        if type_ref.kind == TypeKind.VALUE:
            self._import_class(type_ref.name, type_ref.package)
            return type_ref.name

        if type_ref.kind == TypeKind.SHADOW:
            self._import_class(type_ref.name, type_ref.package)
            return f"{type_ref.name}.{type_ref.inner}"

        if type_ref.kind == TypeKind.LIST:
            self.required_imports.add("java.util.List")
            return f"List<{self.translate_type(type_ref.type_args[0], boxed=True)}>"

        if type_ref.kind == TypeKind.MAP:
            self.required_imports.add("java.util.Map")
            key_type, value_type = (self.translate_type(t, boxed=True) for t in type_ref.type_args)
            return f"Map<{key_type}, {value_type}>"

        raise EmitError(f"Cannot translate type kind {type_ref.kind}")

    def _import_class(self, name: str, package: str) -> None:
        """Import a class living outside the package being generated."""
        if package and package != self.package and "." not in name:
            self.required_imports.add(f"{package}.{name}")

    def _format_annotation(self, annotation: Annotation) -> str:
        """Render an annotation with its members; payloads are inserted verbatim."""
        self._import_class(annotation.name, annotation.package)

        if not annotation.members:
            return f"@{annotation.name}"
        if len(annotation.members) == 1 and annotation.members[0][0] == "value":
            return f"@{annotation.name}({annotation.members[0][1]})"
        members = ", ".join(f"{k} = {v}" for k, v in annotation.members)
        return f"@{annotation.name}({members})"

    @staticmethod
    def _unique_local(name: str, taken: set[str]) -> str:
        while name in taken:
            name += "_"
        return name
