"""
Publishing of translated documents.

Provides:
- Write-once local content storage (front-matter Markdown or JSON)
- Optional single-commit publishing through the GitHub git-data API
"""

from translate_cms_ai.publish.github import GitHubCommitter
from translate_cms_ai.publish.publisher import (
    PublishConflict,
    PublishFailure,
    Publisher,
    PublishReport,
    commit_message,
)
from translate_cms_ai.publish.store import (
    ContentStore,
    PublishFile,
    TranslationCheck,
    TranslationInfo,
    parse_document,
    render_document,
    serialize_document,
)

__all__ = [
    "ContentStore",
    "GitHubCommitter",
    "PublishConflict",
    "PublishFailure",
    "PublishFile",
    "PublishReport",
    "Publisher",
    "TranslationCheck",
    "TranslationInfo",
    "commit_message",
    "parse_document",
    "render_document",
    "serialize_document",
]
