"""
Pipeline - shadow class generator for schema-less document stores.

This module provides a multi-phase architecture for generating shadow
classes from immutable value-object schemas:

1. Phase 1 (Parser): Parse the schema document into a Schema AST
2. Phase 2 (Analyzer): Validate, classify properties and build generation models
3. Phase 3 (Backend): Render Python (ast) or Java (jinja2) source code
4. Phase 4 (Formatter): Optional post-processing with black for Python
5. Phase 5 (Writer): Atomic writes of the generated files
"""

from __future__ import annotations

from .config import (
    AnnotationConfig,
    CodeGeneratorConfig,
    FormatterConfig,
    NamingConvention,
    OutputConfig,
    OutputMode,
)
from .errors import (
    AmbiguousNameError,
    EmitError,
    OutputExistsError,
    SchemaParseError,
    ShadowGenerationError,
    UnsupportedReason,
    UnsupportedTypeError,
)
from .generator import GenerationResult, PipelineGenerator
from .writer import AtomicWriter

__all__ = [
    "PipelineGenerator",
    "GenerationResult",
    "AnnotationConfig",
    "CodeGeneratorConfig",
    "FormatterConfig",
    "NamingConvention",
    "OutputConfig",
    "OutputMode",
    "AmbiguousNameError",
    "EmitError",
    "OutputExistsError",
    "SchemaParseError",
    "ShadowGenerationError",
    "UnsupportedReason",
    "UnsupportedTypeError",
    "AtomicWriter",
]
