"""Document Shadow Generator

A Python package for generating document-store shadow classes from
immutable value-object schemas. Supports Python and Java output.
"""

__version__ = "1.0.0"

from .pipeline import (
    AtomicWriter,
    CodeGeneratorConfig,
    GenerationResult,
    OutputMode,
    PipelineGenerator,
    ShadowGenerationError,
)

__all__ = [
    "PipelineGenerator",
    "GenerationResult",
    "CodeGeneratorConfig",
    "OutputMode",
    "ShadowGenerationError",
    "AtomicWriter",
]
