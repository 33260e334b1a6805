"""
Configuration for the schema compiler and its output handling.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite the existing file


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to validate declarations before writing
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    validate_before_write: bool = True


@dataclass
class CompilerConfig:
    """Configuration options for compilation."""

    # Directory prefixed onto every $ref path before loading
    root_dir: str = ""

    # Indentation of fields inside an object type
    indent: str = "  "

    # Add generation comment at top of output
    add_generation_comment: bool = False

    @staticmethod
    def from_dict(d: dict) -> CompilerConfig:
        """Create a config from a dictionary."""
        config = CompilerConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "root_dir": self.root_dir,
            "indent": self.indent,
            "add_generation_comment": self.add_generation_comment,
        }
