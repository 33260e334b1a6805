"""
Schema source loaders.

The compiler never touches the file system itself: every $ref target is
fetched through a SchemaLoader, which returns the parsed document.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .errors import SourceUnavailable

logger = logging.getLogger(__name__)


class SchemaLoader(ABC):
    """Abstract base class for schema sources."""

    @abstractmethod
    def load(self, ref: str) -> dict[str, Any]:
        """
        Load the schema document a reference points to.

        Args:
            ref: The reference, already joined with the root directory

        Returns:
            The parsed schema document

        Raises:
            SourceUnavailable: If the reference cannot be read or parsed
        """


class FileSchemaLoader(SchemaLoader):
    """Loads schema documents from JSON files."""

    def __init__(self):
        self._cache: dict[str, dict[str, Any]] = {}

    def load(self, ref: str) -> dict[str, Any]:
        path = Path(ref)
        cache_key = str(path.resolve())
        if cache_key in self._cache:
            return self._cache[cache_key]

        logger.debug("Loading schema file %s", path)
        try:
            with open(path, encoding="utf-8") as f:
                document = json.load(f)
        except OSError as e:
            raise SourceUnavailable(ref, e.strerror or str(e)) from e
        except json.JSONDecodeError as e:
            raise SourceUnavailable(ref, f"invalid JSON ({e})") from e
        except UnicodeDecodeError as e:
            raise SourceUnavailable(ref, f"not valid UTF-8 ({e})") from e

        if not isinstance(document, dict):
            raise SourceUnavailable(ref, "document is not a JSON object")

        self._cache[cache_key] = document
        return document


class MappingSchemaLoader(SchemaLoader):
    """Serves schema documents from an in-memory mapping of ref to document."""

    def __init__(self, documents: Mapping[str, dict[str, Any]]):
        self.documents = documents

    def load(self, ref: str) -> dict[str, Any]:
        try:
            document = self.documents[ref]
        except KeyError:
            raise SourceUnavailable(ref, "unknown reference") from None
        if not isinstance(document, dict):
            raise SourceUnavailable(ref, "document is not a JSON object")
        return document
