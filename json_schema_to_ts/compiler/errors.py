"""
Errors raised while compiling schemas.

Every failure aborts the whole compile: no partial declarations are ever
returned to the caller.
"""

from __future__ import annotations

import json
from typing import Any

# Longest schema excerpt quoted in an error message
_MAX_EXCERPT = 200


def _excerpt(schema: Any) -> str:
    try:
        text = json.dumps(schema, sort_keys=True, default=str)
    except (TypeError, ValueError):
        text = repr(schema)
    if len(text) > _MAX_EXCERPT:
        text = text[: _MAX_EXCERPT - 3] + "..."
    return text


class CompilerError(Exception):
    """Base class for all schema compilation errors."""

    pass


class SchemaUnsupported(CompilerError):
    """Raised when a schema fragment matches no classification rule.

    The fragment is never coerced to a permissive type: a schema with no
    type, properties, items, $ref or composite keyword is an authoring
    mistake and is reported as such.
    """

    def __init__(self, schema: Any, path: str = "#"):
        self.schema = schema
        self.path = path
        super().__init__(f"Unsupported schema at {path}: {_excerpt(schema)}")


class SchemaMissingIdentifier(CompilerError):
    """Raised when a schema that must be named has neither a name nor a title."""

    def __init__(self, schema: Any, path: str = "#"):
        self.schema = schema
        self.path = path
        super().__init__(f"Schema at {path} needs a title to be declared: {_excerpt(schema)}")


class SourceUnavailable(CompilerError):
    """Raised when a $ref target cannot be loaded or is not a schema document."""

    def __init__(self, ref: str, reason: str = ""):
        self.ref = ref
        self.reason = reason
        message = f"Cannot load schema {ref!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
