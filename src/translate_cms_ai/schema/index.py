"""
Read-only schema index.

Loads the CMS's generated schema artifact (``_schema.json``) once and answers
collection lookups from memory.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from translate_cms_ai.errors import CollectionNotFoundError, ConfigurationError
from translate_cms_ai.schema.models import CollectionSchema, SchemaField

logger = logging.getLogger(__name__)


class SchemaIndex:
    """Lookup from collection name to its field definitions."""

    def __init__(self, collections: Iterable[CollectionSchema]):
        self._collections: dict[str, CollectionSchema] = {c.name: c for c in collections}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SchemaIndex:
        """
        Build an index from a parsed schema artifact.

        Args:
            data: Mapping with a ``collections`` list, as generated by the CMS.

        Returns:
            SchemaIndex over every collection in the artifact.

        Raises:
            ConfigurationError: If the artifact is malformed.
        """
        raw_collections = data.get("collections")
        if not isinstance(raw_collections, list):
            raise ConfigurationError("Schema artifact has no 'collections' list")
        try:
            collections = [CollectionSchema.model_validate(c) for c in raw_collections]
        except ValidationError as e:
            raise ConfigurationError(f"Invalid schema artifact: {e}") from e
        return cls(collections)

    @classmethod
    def from_file(cls, path: Path | str) -> SchemaIndex:
        """Load an index from a schema JSON file."""
        path = Path(path)
        if not path.exists():
            raise ConfigurationError(f"Schema file not found: {path}")

        with open(path, encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Schema file is not valid JSON: {path}: {e}") from e

        index = cls.from_dict(data)
        logger.debug("Loaded schema for %d collections from %s", len(index), path)
        return index

    def __len__(self) -> int:
        return len(self._collections)

    def __contains__(self, name: object) -> bool:
        return name in self._collections

    @property
    def collection_names(self) -> list[str]:
        """Names of all indexed collections."""
        return list(self._collections)

    def collection(self, name: str) -> CollectionSchema:
        """Get a full collection definition."""
        try:
            return self._collections[name]
        except KeyError:
            raise CollectionNotFoundError(name, self.collection_names) from None

    def get_schema(self, name: str) -> tuple[SchemaField, ...]:
        """
        Get the top-level field definitions of a collection.

        Raises:
            CollectionNotFoundError: If the collection is not indexed.
        """
        return self.collection(name).fields
