"""
Python AST-based code generation backend.

Generates Python shadow classes from generation models using the built-in
ast module. All models of one document are rendered into a single module.
"""

from __future__ import annotations

import ast
import collections
import keyword

from ...utils import python_getter_name
from ..analyzer.ir_nodes import (
    ConstructorDef,
    Conversion,
    FieldAssignment,
    FieldDef,
    GenerationModel,
    GetterDef,
    TypeKind,
    TypeRef,
)
from ..config import CodeGeneratorConfig
from ..errors import EmitError
from ..schema_ast.nodes import Annotation
from .base import AstBackend

STDLIB_MODULES = {"abc", "collections", "dataclasses", "enum", "typing"}

# Parameter names of the forwarding constructor that would break it
RESERVED_NAMES = {"self", "super"}


class PythonAstBackend(AstBackend):
    """Python code generation backend using AST."""

    FILE_EXTENSION = "py"

    TYPE_MAP = {
        "boolean": "bool",
        "Boolean": "bool",
        "bool": "bool",
        "byte": "int",
        "Byte": "int",
        "short": "int",
        "Short": "int",
        "int": "int",
        "Integer": "int",
        "long": "int",
        "Long": "int",
        "float": "float",
        "Float": "float",
        "double": "float",
        "Double": "float",
        "char": "str",
        "Character": "str",
        "String": "str",
        "str": "str",
    }

    FORWARD_METHOD = "from_value"
    REVERSE_METHOD = "to_value"

    def __init__(self, config: CodeGeneratorConfig):
        super().__init__(config)
        self.python_imports: set[tuple[str, str]] = set()
        self.local_classes: set[str] = set()

    def generate(self, models: list[GenerationModel], module_name: str, generation_comment: str = "") -> dict[str, str]:
        """Generate one Python module holding every shadow class."""
        # Reset import tracking
        self.python_imports = set()
        self.local_classes = {model.wrapper.name.name for model in models}

        if self.config.use_future_annotations:
            self.python_imports.add(("__future__", "annotations"))

        class_nodes = [self._generate_wrapper(model) for model in models]

        body: list[ast.stmt] = []
        body.extend(self._generate_imports())
        body.extend(class_nodes)

        module = ast.Module(body=body, type_ignores=[])
        ast.fix_missing_locations(module)
        code = ast.unparse(module)

        return {f"{module_name}.{self.FILE_EXTENSION}": self._post_process_code(code, generation_comment)}

    def _generate_imports(self) -> list[ast.stmt]:
        """Generate import statements as AST nodes."""
        import_groups: dict[str, set[str]] = collections.defaultdict(set)
        for module, name in self.python_imports:
            import_groups[module].add(name)

        stdlib_modules = sorted(m for m in import_groups if m in STDLIB_MODULES)
        other_modules = sorted(m for m in import_groups if m not in STDLIB_MODULES and m != "__future__")

        # __future__ imports first
        ordered = (["__future__"] if "__future__" in import_groups else []) + stdlib_modules + other_modules

        return [
            ast.ImportFrom(
                module=module,
                names=[ast.alias(name=n, asname=None) for n in sorted(import_groups[module])],
                level=0,
            )
            for module in ordered
        ]

    def _import_class(self, name: str, package: str) -> None:
        """Register an import for a class not generated in this module."""
        if name in self.local_classes or "." in name:
            return
        module = package or self.config.python_value_module
        if module:
            self.python_imports.add((module, name))

    def _generate_wrapper(self, model: GenerationModel) -> ast.ClassDef:
        """Generate the wrapper class with its nested shadow class."""
        wrapper = model.wrapper
        self._check_names(model)

        self._import_class(wrapper.extends, model.value_name.package)

        decorators: list[ast.expr] = []
        if wrapper.is_final:
            self.python_imports.add(("typing", "final"))
            decorators.append(ast.Name(id="final", ctx=ast.Load()))

        body: list[ast.stmt] = [
            self._generate_wrapper_init(wrapper.constructor),
            self._generate_shadow_class(model),
        ]

        return ast.ClassDef(
            name=wrapper.name.name,
            bases=[self._parse_expr(wrapper.extends)],
            keywords=[],
            body=body,
            decorator_list=decorators,
            type_params=[],
        )

    def _check_names(self, model: GenerationModel) -> None:
        """Reject names that are not valid Python identifiers."""
        names = [model.wrapper.name.name, model.value_name.name, model.shadow_name.inner]
        names.extend(model.wrapper.extends.split("."))
        for name in names:
            if not name.isidentifier() or keyword.iskeyword(name):
                raise EmitError(
                    f"'{name}' is not a valid Python class name (generated for '{model.value_name}'); "
                    "check the naming convention's chain marker"
                )

        getter_names = set()
        for field in model.fields:
            if not field.name.isidentifier() or keyword.iskeyword(field.name) or field.name in RESERVED_NAMES:
                raise EmitError(f"Property '{field.name}' of '{model.value_name}' is not a valid Python attribute name")
            getter = python_getter_name(field.name)
            if getter in getter_names:
                raise EmitError(f"Two properties of '{model.value_name}' map to the getter '{getter}'")
            getter_names.add(getter)

    def _generate_wrapper_init(self, constructor: ConstructorDef) -> ast.FunctionDef:
        """Standard forwarding constructor of the wrapper."""
        params = [(param.name, self.translate_type(param.type_ref)) for param in constructor.params]
        super_call = f"super().__init__({', '.join(constructor.super_args)})"
        return self._function("__init__", params, [self._parse_stmt(super_call)], returns="None")

    def _generate_shadow_class(self, model: GenerationModel) -> ast.ClassDef:
        """Generate the nested shadow class."""
        body: list[ast.stmt] = [
            self._generate_empty_init(model.fields),
            self._generate_from_value(model),
            self._generate_to_value(model),
        ]
        body.extend(self._generate_getter(getter) for getter in model.getters)

        return ast.ClassDef(
            name=model.shadow_name.inner,
            bases=[],
            keywords=[],
            body=body,
            decorator_list=[self._annotation_expr(a) for a in model.class_annotations],
            type_params=[],
        )

    def _generate_empty_init(self, fields: list[FieldDef]) -> ast.FunctionDef:
        """No-argument constructor used by the document store's deserializer."""
        body = [self._parse_stmt(f"self.{field.name}: {self._nullable_type(field.type_ref)} = None") for field in fields]
        return self._function("__init__", [], body or [ast.Pass()], returns="None")

    def _generate_from_value(self, model: GenerationModel) -> ast.FunctionDef:
        """Forward constructor: build a shadow from a value object."""
        constructor = model.forward_constructor
        source = self._safe_name(constructor.params[0].name)
        instance = "shadow" if source != "shadow" else "shadow_"

        body = [self._parse_stmt(f"{instance} = cls()")]
        for assignment in constructor.assignments:
            body.append(self._parse_stmt(f"{instance}.{assignment.field.name} = {self._forward_expr(assignment, source)}"))
        body.append(self._parse_stmt(f"return {instance}"))

        func = self._function(
            self.FORWARD_METHOD,
            [(source, self.translate_type(constructor.params[0].type_ref))],
            body,
            returns=model.shadow_name.simple,
            first_arg="cls",
        )
        func.decorator_list.append(ast.Name(id="classmethod", ctx=ast.Load()))
        return func

    def _forward_expr(self, assignment: FieldAssignment, source: str) -> str:
        """Expression wrapping one property of the value object."""
        field = assignment.field
        read = f"{source}.{assignment.accessor}"

        if field.conversion == Conversion.COPY:
            return read

        shadow = self._shadow_class(field)
        if field.conversion == Conversion.VALUE:
            wrapped = f"{shadow}.{self.FORWARD_METHOD}({read})"
        elif field.conversion == Conversion.VALUE_LIST:
            wrapped = f"[{shadow}.{self.FORWARD_METHOD}(item) for item in {read}]"
        else:
            wrapped = f"{{key: {shadow}.{self.FORWARD_METHOD}(value) for key, value in {read}.items()}}"

        return f"None if {read} is None else {wrapped}"

    def _generate_to_value(self, model: GenerationModel) -> ast.FunctionDef:
        """Reverse conversion: rebuild the value object from the shadow.

        The value class itself is constructed rather than the wrapper, since
        dataclass equality only holds between instances of the same class.
        """
        reverse = model.reverse_conversion
        return_class = model.value_name.name
        self._import_class(return_class, model.value_name.package)

        arguments = ", ".join(self._reverse_expr(step) for step in reverse.steps)
        func = self._function(
            self.REVERSE_METHOD,
            [],
            [self._parse_stmt(f"return {return_class}({arguments})")],
            returns=return_class,
        )
        func.decorator_list.extend(self._annotation_expr(a) for a in reverse.annotations)
        return func

    def _reverse_expr(self, field: FieldDef) -> str:
        """Expression unwrapping one field of the shadow."""
        read = f"self.{field.name}"

        if field.conversion == Conversion.COPY:
            return read
        if field.conversion == Conversion.VALUE:
            unwrapped = f"{read}.{self.REVERSE_METHOD}()"
        elif field.conversion == Conversion.VALUE_LIST:
            unwrapped = f"[item.{self.REVERSE_METHOD}() for item in {read}]"
        else:
            unwrapped = f"{{key: value.{self.REVERSE_METHOD}() for key, value in {read}.items()}}"

        return f"None if {read} is None else {unwrapped}"

    def _generate_getter(self, getter: GetterDef) -> ast.FunctionDef:
        func = self._function(
            python_getter_name(getter.property_name),
            [],
            [self._parse_stmt(f"return self.{getter.field_name}")],
            returns=self._nullable_type(getter.return_type),
        )
        func.decorator_list.extend(self._annotation_expr(a) for a in getter.annotations)
        return func

    def _shadow_class(self, field: FieldDef) -> str:
        """Expression naming the nested shadow class of a value field."""
        type_ref = field.type_ref if field.conversion == Conversion.VALUE else field.type_ref.type_args[-1]
        return self.translate_type(type_ref)

    def _annotation_expr(self, annotation: Annotation) -> ast.expr:
        """Render a forwarded annotation as a decorator expression.

        A single ``value`` member becomes a positional argument, other members
        become keyword arguments. Payloads are inserted verbatim.
        """
        if annotation.package:
            self.python_imports.add((annotation.package, annotation.name))

        if not annotation.members:
            return ast.Name(id=annotation.name, ctx=ast.Load())

        if len(annotation.members) == 1 and annotation.members[0][0] == "value":
            arguments = annotation.members[0][1]
        else:
            arguments = ", ".join(f"{k}={v}" for k, v in annotation.members)

        try:
            return self._parse_expr(f"{annotation.name}({arguments})")
        except SyntaxError as e:
            raise EmitError(f"Annotation {annotation} has a payload that is not a Python expression: {e}") from e

    def translate_type(self, type_ref: TypeRef) -> str:
        """Translate a model type to a Python type string."""
        if type_ref.kind == TypeKind.PRIMITIVE:
            return self.TYPE_MAP.get(type_ref.name, type_ref.name)

        if type_ref.kind == TypeKind.VALUE:
            self._import_class(type_ref.name, type_ref.package)
            return type_ref.name

        if type_ref.kind == TypeKind.SHADOW:
            self._import_class(type_ref.name, type_ref.package)
            return f"{type_ref.name}.{type_ref.inner}"

        if type_ref.kind == TypeKind.LIST:
            return f"list[{self.translate_type(type_ref.type_args[0])}]"

        if type_ref.kind == TypeKind.MAP:
            key_type, value_type = (self.translate_type(t) for t in type_ref.type_args)
            return f"dict[{key_type}, {value_type}]"

        raise EmitError(f"Cannot translate type kind {type_ref.kind}")

    def _nullable_type(self, type_ref: TypeRef) -> str:
        return f"{self.translate_type(type_ref)} | None"

    def _safe_name(self, name: str) -> str:
        """Avoid Python keywords and the implicit first argument as local names."""
        return f"{name}_" if keyword.iskeyword(name) or name == "cls" else name

    def _function(
        self,
        name: str,
        params: list[tuple[str, str]],
        body: list[ast.stmt],
        returns: str | None = None,
        first_arg: str = "self",
    ) -> ast.FunctionDef:
        """Build a method definition."""
        args = [ast.arg(arg=first_arg, annotation=None)]
        args.extend(ast.arg(arg=param, annotation=self._annotation(type_str)) for param, type_str in params)

        return ast.FunctionDef(
            name=name,
            args=ast.arguments(
                posonlyargs=[],
                args=args,
                vararg=None,
                kwonlyargs=[],
                kw_defaults=[],
                kwarg=None,
                defaults=[],
            ),
            body=body,
            decorator_list=[],
            returns=self._annotation(returns) if returns else None,
            type_params=[],
        )

    def _annotation(self, type_str: str) -> ast.expr:
        """Type annotation expression, quoted when annotations are evaluated eagerly."""
        if not self.config.use_future_annotations and type_str != "None":
            return ast.Constant(value=type_str)
        return self._parse_expr(type_str)

    def _parse_expr(self, expr_str: str) -> ast.expr:
        """Parse an expression string into an AST expression."""
        return ast.parse(expr_str, mode="eval").body

    def _parse_stmt(self, stmt_str: str) -> ast.stmt:
        """Parse a single statement string into an AST statement."""
        return ast.parse(stmt_str, mode="exec").body[0]

    def _post_process_code(self, code: str, generation_comment: str) -> str:
        """Post-process the generated code for formatting."""
        lines = code.split("\n")
        result: list[str] = []

        # Add generation comment at the top
        if generation_comment:
            result.append(generation_comment)
            result.append("")

        for line in lines:
            # No blank line directly after a class header
            if line.strip() == "" and result and result[-1].rstrip().endswith(":"):
                continue

            # Two blank lines before top-level definitions
            if line.startswith(("class ", "@")) and len(result) > 1 and result[-1] == "" and result[-2] != "":
                result.append("")

            result.append(line)

        # Ensure file ends with newline
        if result and result[-1] != "":
            result.append("")

        return "\n".join(result)
