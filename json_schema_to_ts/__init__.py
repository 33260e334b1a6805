"""JSON Schema to TypeScript Generator

A Python package for generating TypeScript interface and type alias
declarations from JSON Schema documents, following $ref links across
files and breaking reference cycles by name.
"""

__version__ = "1.0.0"

from .compiler import (
    AtomicWriter,
    CompilerConfig,
    CompilerError,
    FileSchemaLoader,
    MappingSchemaLoader,
    OutputValidationError,
    OutputConfig,
    OutputMode,
    Registry,
    SchemaLoader,
    SchemaMissingIdentifier,
    SchemaUnsupported,
    SourceUnavailable,
    compile_schema,
    compile_schemas,
)
from .utils import tsify_string

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
    "tsify_string",
]
