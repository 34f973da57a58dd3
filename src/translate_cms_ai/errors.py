"""
Exception hierarchy for translate-cms-ai.

Errors are grouped by how callers are expected to react to them:
configuration problems fail fast, service problems fail a single locale,
conflicts fail a single file.
"""

from __future__ import annotations

from pathlib import Path


class TranslateCMSError(Exception):
    """Base class for all translate-cms-ai errors."""


class ConfigurationError(TranslateCMSError):
    """Missing or invalid configuration (schema, credentials, collections)."""


class CollectionNotFoundError(ConfigurationError):
    """The requested collection is not defined in the schema."""

    def __init__(self, collection: str, available: list[str] | None = None):
        self.collection = collection
        self.available = available or []
        message = f"Unknown collection: {collection}"
        if self.available:
            message += f". Available: {', '.join(self.available)}"
        super().__init__(message)


class TranslationServiceError(TranslateCMSError):
    """The translation service returned a non-success response."""


class ResponseContractError(TranslationServiceError):
    """The service response does not satisfy the requested structure."""


class PublishConflictError(TranslateCMSError):
    """A translated file already exists at the target path."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        super().__init__(f"File already exists: {self.path}")


class RemoteCommitError(TranslateCMSError):
    """A step of the multi-file remote commit failed."""
