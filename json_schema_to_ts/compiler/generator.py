"""
Entry points compiling schema documents to TypeScript declarations.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from typing import Any

from .config import CompilerConfig
from .loader import SchemaLoader
from .registry import Registry


def _make_registry(
    root_dir: str | None,
    config: CompilerConfig | None,
    loader: SchemaLoader | None,
    command_line: str,
) -> Registry:
    config = config or CompilerConfig()
    if root_dir is not None:
        config = replace(config, root_dir=str(root_dir))
    return Registry(config, loader, command_line)


def compile_schema(
    root_schema: dict[str, Any],
    root_dir: str | None = None,
    *,
    config: CompilerConfig | None = None,
    loader: SchemaLoader | None = None,
    command_line: str = "",
) -> str:
    """
    Compile a schema, and every schema it references, to declarations.

    Args:
        root_schema: The root schema document; must carry a title
        root_dir: Directory prefixed onto every $ref path (overrides config)
        config: Compiler configuration
        loader: Source for $ref targets (defaults to reading JSON files)
        command_line: Shown in the generation comment, if enabled

    Returns:
        The declarations, separated by blank lines

    Raises:
        CompilerError: On any unsupported, unnamed or unloadable schema
    """
    registry = _make_registry(root_dir, config, loader, command_line)
    registry.add_schema(root_schema)
    return registry.parse()


def compile_schemas(
    schemas: Iterable[dict[str, Any]],
    root_dir: str | None = None,
    *,
    config: CompilerConfig | None = None,
    loader: SchemaLoader | None = None,
    command_line: str = "",
) -> str:
    """Compile several root schemas into one combined declarations text."""
    registry = _make_registry(root_dir, config, loader, command_line)
    for schema in schemas:
        registry.add_schema(schema)
    return registry.parse()
