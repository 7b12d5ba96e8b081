"""
Atomic file writer for generated shadow classes.

Ensures that file writes are atomic so an interrupted run never leaves a
half-written source file behind.
"""

from __future__ import annotations

import ast
import logging
import tempfile
from collections.abc import Callable
from pathlib import Path

from ..config import OutputMode
from ..errors import EmitError, OutputExistsError

logger = logging.getLogger(__name__)


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file
    """

    def __init__(
        self,
        mode: OutputMode = OutputMode.ERROR_IF_EXISTS,
        validate_python: Callable[[str], None] | None = None,
        validate_java: Callable[[str], None] | None = None,
    ):
        """Initialize the atomic writer.

        Args:
            mode: How to handle existing output files
            validate_python: Optional validation function for Python code
            validate_java: Optional validation function for Java code
        """
        self.mode = mode
        self._validate_python = validate_python or self._default_validate_python
        self._validate_java = validate_java or self._default_validate_java

    def write(
        self,
        path: Path,
        content: str,
        language: str,
        validate: bool = True,
    ) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            language: Language for validation ("python" or "java")
            validate: Whether to validate before finalizing

        Raises:
            OutputExistsError: If the file exists and the mode forbids overwriting
            EmitError: If validation fails
            OSError: If file operations fail
        """
        if self.mode == OutputMode.ERROR_IF_EXISTS and path.exists():
            raise OutputExistsError(f"Output file already exists: {path}. Use --force to overwrite it.")

        # Same directory ensures atomic rename on the same filesystem
        path.parent.mkdir(parents=True, exist_ok=True)
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)

            if validate:
                self._validate_content(content, language)

            temp_path.replace(path)
            logger.debug("Wrote %s", path)
        finally:
            temp_path.unlink(missing_ok=True)

    def write_all(self, output_dir: Path, files: dict[str, str], language: str, validate: bool = True) -> list[Path]:
        """Write every generated file below an output directory.

        Existing files are checked up front so a refused run writes nothing.

        Returns:
            The written paths, in input order
        """
        paths = [output_dir / relative for relative in files]
        if self.mode == OutputMode.ERROR_IF_EXISTS:
            existing = [str(p) for p in paths if p.exists()]
            if existing:
                raise OutputExistsError(f"Output files already exist: {', '.join(existing)}. Use --force to overwrite them.")

        for path, content in zip(paths, files.values()):
            self.write(path, content, language, validate)
        return paths

    def _validate_content(self, content: str, language: str) -> None:
        """Validate content based on language."""
        if language == "python":
            self._validate_python(content)
        elif language == "java":
            self._validate_java(content)

    def _default_validate_python(self, content: str) -> None:
        """Default Python validation.

        Raises:
            EmitError: If the code does not parse
        """
        try:
            ast.parse(content)
        except SyntaxError as e:
            raise EmitError(f"Generated Python code is not valid: {e}") from e

    def _default_validate_java(self, content: str) -> None:
        """Default Java validation.

        Raises:
            EmitError: If a structural check fails
        """
        # Basic structural checks, no full parsing
        if "class " not in content:
            raise EmitError("Generated Java code has no class definition")

        open_braces = content.count("{")
        close_braces = content.count("}")
        if open_braces != close_braces:
            raise EmitError(f"Generated Java code has unbalanced braces: {open_braces} open, {close_braces} close")
