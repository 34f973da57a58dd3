"""
translate-cms-ai: schema-aware multi-locale translation for CMS content.

This package provides tools for:
- Classifying CMS schema fields as translatable or not
- Collecting translatable text from nested documents and block lists
- Batch translation with a strictly validated response shape
- Concurrent translation into many locales with per-locale failure isolation
- Write-once publishing, locally and as a single GitHub commit
- Tracking which fields are still unreviewed machine output
"""

__version__ = "0.1.0"

from translate_cms_ai.config import Settings, load_config
from translate_cms_ai.errors import (
    CollectionNotFoundError,
    ConfigurationError,
    PublishConflictError,
    RemoteCommitError,
    ResponseContractError,
    TranslateCMSError,
    TranslationServiceError,
)
from translate_cms_ai.locales import Locale, LocaleTable
from translate_cms_ai.orchestrator import EditingContext, LocaleOrchestrator, LocaleResults
from translate_cms_ai.pipeline import TranslationPipeline
from translate_cms_ai.provenance import FieldChangedEvent, ProvenanceTracker
from translate_cms_ai.publish import ContentStore, GitHubCommitter, Publisher
from translate_cms_ai.schema import SchemaIndex, should_translate
from translate_cms_ai.translation import BatchTranslator
from translate_cms_ai.walker import apply, collect

__all__ = [
    # Config
    "Settings",
    "load_config",
    # Errors
    "TranslateCMSError",
    "ConfigurationError",
    "CollectionNotFoundError",
    "TranslationServiceError",
    "ResponseContractError",
    "PublishConflictError",
    "RemoteCommitError",
    # Locales
    "Locale",
    "LocaleTable",
    # Schema
    "SchemaIndex",
    "should_translate",
    # Walker
    "collect",
    "apply",
    # Translation
    "BatchTranslator",
    "LocaleOrchestrator",
    "LocaleResults",
    "EditingContext",
    "TranslationPipeline",
    # Provenance
    "FieldChangedEvent",
    "ProvenanceTracker",
    # Publishing
    "ContentStore",
    "GitHubCommitter",
    "Publisher",
]
