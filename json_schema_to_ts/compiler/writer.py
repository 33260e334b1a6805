"""
Atomic file writer for generated declarations.

Ensures that file writes are atomic so that an interrupted run never
leaves a half-written declarations file behind.
"""

from __future__ import annotations

import logging
import re
import tempfile
from collections.abc import Callable
from pathlib import Path

from .errors import CompilerError

logger = logging.getLogger(__name__)

_DECLARATION_PATTERN = re.compile(r"^(interface|type) \w+", re.MULTILINE)
_STRING_LITERAL_PATTERN = re.compile(r'"(?:[^"\\]|\\.)*"')


class OutputValidationError(CompilerError):
    """Raised when generated declarations fail the pre-write checks."""

    pass


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file
    """

    def __init__(self, validate_typescript: Callable[[str], None] | None = None):
        """Initialize the atomic writer.

        Args:
            validate_typescript: Optional validation function for declarations
        """
        self._validate_typescript = validate_typescript or self._default_validate_typescript

    def write(self, path: Path, content: str, validate: bool = True) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before finalizing

        Raises:
            OutputValidationError: If validation fails
            OSError: If file operations fail
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
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
                self._validate_typescript(content)

            temp_path.replace(path)
            logger.debug("Replaced %s", path)
        except Exception:
            temp_path.unlink(missing_ok=True)
            raise

    def write_if_not_exists(self, path: Path, content: str, validate: bool = True) -> bool:
        """Write content only if the file doesn't exist.

        Returns:
            True if file was written

        Raises:
            FileExistsError: If the file already exists
            OutputValidationError: If validation fails
        """
        if path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use force mode to overwrite.")

        self.write(path, content, validate)
        return True

    def _default_validate_typescript(self, content: str) -> None:
        """Default declarations validation.

        Raises:
            OutputValidationError: If validation fails
        """
        if not _DECLARATION_PATTERN.search(content):
            raise OutputValidationError("Generated code has no type declarations")

        # Balanced braces (simple heuristic); quoted property names may contain braces
        code = _STRING_LITERAL_PATTERN.sub("", content)
        open_braces = code.count("{")
        close_braces = code.count("}")
        if open_braces != close_braces:
            raise OutputValidationError(f"Generated code has unbalanced braces: {open_braces} open, {close_braces} close")
