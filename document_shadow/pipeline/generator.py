"""
Pipeline generator that runs the shadow generation phases.

Phase 1 parses the schema document, phase 2 validates and builds one
generation model per eligible value class (plus the values reached through
nested references), phase 3 renders the models with a language backend and
phase 4 optionally formats the result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .. import __version__
from ..cli_utils import reconstruct_command_line
from .analyzer import GenerationModel, NameResolver, QualifiedName, SchemaValidator, ShadowClassBuilder
from .ast_backends import PythonAstBackend
from .backends import JavaBackend
from .config import CodeGeneratorConfig
from .errors import EmitError, ShadowGenerationError
from .formatters import formatter_for
from .schema_ast import SchemaDocument, SchemaParser, ValueSchema, applicable

logger = logging.getLogger(__name__)

LANGUAGES = ("python", "java")


@dataclass
class GenerationResult:
    """Outcome of one generator run.

    Attributes:
        files: Relative output path -> generated code
        models: The generation models that were rendered, in generation order
        errors: Qualified value class name -> the error that stopped its generation
    """

    files: dict[str, str] = field(default_factory=dict)
    models: list[GenerationModel] = field(default_factory=list)
    errors: dict[str, ShadowGenerationError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


class PipelineGenerator:
    """Generates shadow classes for every eligible value of a schema document."""

    def __init__(
        self,
        name: str,
        document: dict[str, Any],
        config: CodeGeneratorConfig | None = None,
        language: str = "python",
        only: list[str] | None = None,
    ):
        """
        Initialize the generator.

        Args:
            name: Base name of the output (Python module name)
            document: The decoded schema document
            config: Code generation configuration
            language: Target language ("python" or "java")
            only: Restrict generation to these value classes and what they reference
        """
        if language not in LANGUAGES:
            raise ValueError(f"Unsupported language: {language}. Expected one of {', '.join(LANGUAGES)}")

        self.name = name
        self.document = document
        self.config = config or CodeGeneratorConfig()
        self.language = language
        self.only = set(only) if only else None

        self.validator = SchemaValidator()
        self.builder = ShadowClassBuilder(self.config)
        if language == "python":
            self.backend = PythonAstBackend(self.config)
        else:
            self.backend = JavaBackend(self.config)

    def build_models(self) -> GenerationResult:
        """
        Run the parsing and analysis phases.

        Returns:
            GenerationResult with models and per-schema errors, no files

        Raises:
            SchemaParseError: If the document itself is malformed
        """
        parsed = SchemaParser(self.config.naming.generated_prefix).parse(self.document)
        result = GenerationResult()

        pending = [schema for schema in parsed.schemas if self._is_selected(schema)]
        logger.info("%d of %d value classes request a shadow class", len(pending), len(parsed.schemas))

        generated: set[QualifiedName] = set()
        while pending:
            schema = pending.pop(0)
            resolver = NameResolver(self.config.naming, schema.package)

            try:
                canonical = resolver.canonicalize(resolver.wrapper_name(schema))
                if canonical in generated:
                    logger.debug("Shadow class for %s already generated, skipping", schema.qualified_name)
                    continue

                self.validator.validate(schema)
                model = self.builder.build(schema)
            except ShadowGenerationError as e:
                logger.error("Cannot generate a shadow class for %s: %s", schema.qualified_name, e)
                result.errors[schema.qualified_name] = e
                continue

            generated.add(canonical)
            result.models.append(model)
            logger.debug("Built shadow model %s for %s", model.shadow_name, model.value_name)

            if self.config.generate_nested:
                pending.extend(self._nested_schemas(parsed, model))

        return result

    def generate(self) -> GenerationResult:
        """
        Run the whole pipeline.

        Returns:
            GenerationResult with the generated files

        Raises:
            SchemaParseError: If the document itself is malformed
        """
        result = self.build_models()
        generation_comment = self._generate_command_comment()

        # Render each model alone first so an emit failure only drops its own schema
        renderable = []
        for model in result.models:
            try:
                self.backend.generate([model], self.name)
            except EmitError as e:
                logger.error("Cannot render the shadow class of %s: %s", model.value_name, e)
                result.errors[model.value_name.outer] = e
            else:
                renderable.append(model)
        result.models = renderable

        if not renderable:
            return result

        files = self.backend.generate(renderable, self.name, generation_comment)

        formatter = formatter_for(self.language)
        if formatter is not None and self.config.formatter.enabled:
            files = formatter.format_files(files, self.config.formatter)

        result.files = files
        return result

    def _is_selected(self, schema: ValueSchema) -> bool:
        if self.only is not None and schema.name not in self.only:
            return False
        return applicable(schema.annotations, self.config.annotations.marker)

    def _nested_schemas(self, parsed: SchemaDocument, model: GenerationModel) -> list[ValueSchema]:
        """Schemas of the values a model references, when the document describes them."""
        nested = []
        for value in model.nested_values:
            schema = parsed.get(value.name)
            if schema is None or schema.package != value.package:
                logger.info("%s is not described in this document, assuming its shadow class is generated elsewhere", value)
                continue
            nested.append(schema)
        return nested

    def _generate_command_comment(self) -> str:
        """Generate a command line comment for the generated files."""
        if not self.config.add_generation_comment:
            return ""

        comment_prefix = self.backend._get_comment_prefix()
        try:
            from ..document_shadow import document_shadow as click_command  # noqa

            command_line = reconstruct_command_line(click_command)
        except (ImportError, AttributeError):
            command_line = "document_shadow"

        return f"{comment_prefix} Generated by document_shadow v{__version__} : {command_line}"
