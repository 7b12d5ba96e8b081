"""
Base class for AST-based code generation backends.

Defines the interface that all language-specific AST backends must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..analyzer.ir_nodes import GenerationModel, TypeRef
from ..config import CodeGeneratorConfig


class AstBackend(ABC):
    """Abstract base class for AST-based code generation backends."""

    # Type mapping from schema primitive names to language types
    TYPE_MAP: dict[str, str] = {}

    # File extension
    FILE_EXTENSION: str = ""

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the backend.

        Args:
            config: Code generation configuration
        """
        self.config = config

    @abstractmethod
    def generate(self, models: list[GenerationModel], module_name: str, generation_comment: str = "") -> dict[str, str]:
        """
        Generate code from generation models.

        Args:
            models: One model per value schema, in generation order
            module_name: Base name of the output
            generation_comment: Comment placed at the top of every file

        Returns:
            Mapping from relative output path to generated code
        """

    @abstractmethod
    def translate_type(self, type_ref: TypeRef) -> str:
        """
        Translate a model type to a language-specific type string.

        Args:
            type_ref: The type reference

        Returns:
            Language-specific type string
        """

    def _get_comment_prefix(self) -> str:
        """Get the comment prefix for the language."""
        return "#" if self.FILE_EXTENSION == "py" else "//"
