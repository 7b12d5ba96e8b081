"""
Post-processing formatters for generated code.
"""

from __future__ import annotations

from .base import Formatter
from .black_formatter import BlackFormatter

FORMATTERS: dict[str, type[Formatter]] = {
    BlackFormatter.LANGUAGE: BlackFormatter,
}


def formatter_for(language: str) -> Formatter | None:
    """Return the formatter of a target language, if it has one."""
    formatter_class = FORMATTERS.get(language)
    return formatter_class() if formatter_class else None


__all__ = [
    "BlackFormatter",
    "FORMATTERS",
    "Formatter",
    "formatter_for",
]
