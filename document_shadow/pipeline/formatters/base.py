"""
Base class for formatters of generated shadow code.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..config import FormatterConfig


class Formatter(ABC):
    """A formatter for the output of one target language."""

    # Target language whose files this formatter rewrites
    LANGUAGE: str = ""

    # Extension of the files it applies to
    FILE_EXTENSION: str = ""

    @abstractmethod
    def format(self, code: str, config: FormatterConfig) -> str:
        """Format one generated source file."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check whether the formatting tool is installed."""

    def format_files(self, files: dict[str, str], config: FormatterConfig) -> dict[str, str]:
        """
        Format every generated file written in this formatter's language.

        Args:
            files: Relative output path -> generated code
            config: Formatter configuration

        Returns:
            A new mapping; files of other languages are passed through
        """
        if not self.is_available():
            return dict(files)
        suffix = f".{self.FILE_EXTENSION}"
        return {path: self.format(code, config) if path.endswith(suffix) else code for path, code in files.items()}
