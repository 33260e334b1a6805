"""
Compiler - JSON Schema to TypeScript declarations.

Compilation happens in three phases driven by the Registry:

1. Construction: classify schema fragments into TypeNodes, loading $ref targets
2. Conversion: compute inline and block text for every node, cycle-safe
3. Render: concatenate unique declarations in traversal order
"""

from __future__ import annotations

from .config import CompilerConfig, OutputConfig, OutputMode
from .errors import CompilerError, SchemaMissingIdentifier, SchemaUnsupported, SourceUnavailable
from .generator import compile_schema, compile_schemas
from .loader import FileSchemaLoader, MappingSchemaLoader, SchemaLoader
from .registry import Registry
from .writer import AtomicWriter, OutputValidationError

__all__ = [
    "compile_schema",
    "compile_schemas",
    "Registry",
    "CompilerConfig",
    "OutputConfig",
    "OutputMode",
    "CompilerError",
    "SchemaUnsupported",
    "SchemaMissingIdentifier",
    "SourceUnavailable",
    "SchemaLoader",
    "FileSchemaLoader",
    "MappingSchemaLoader",
    "AtomicWriter",
    "OutputValidationError",
]
