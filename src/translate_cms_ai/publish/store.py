"""
Local content storage.

Documents are stored one file per (collection, locale, document name) as
front-matter Markdown: a YAML header with the document fields followed by the
body. ``.json`` documents are stored as JSON objects. Files are created
exclusively; an existing translation is never overwritten.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from translate_cms_ai.document import BODY_KEY, COLLECTION_KEY, TEMPLATE_KEY
from translate_cms_ai.errors import ConfigurationError, PublishConflictError
from translate_cms_ai.locales import LocaleTable

logger = logging.getLogger(__name__)

FRONTMATTER_DELIMITER = "---"


@dataclass
class PublishFile:
    """A translated document to publish."""

    locale: str
    collection: str
    name: str  # document path without locale, e.g. "home.mdx"
    document: dict[str, Any]


@dataclass
class TranslationInfo:
    """An existing translation of a document."""

    locale: str
    path: str
    exists: bool = True


@dataclass
class TranslationCheck:
    """Existing translations of one document."""

    relative_path: str
    current_locale: str
    name: str
    translations: list[TranslationInfo]


def render_document(document: dict[str, Any]) -> str:
    """Serialize a document as front-matter Markdown."""
    frontmatter = {
        key: value
        for key, value in document.items()
        if key not in (BODY_KEY, COLLECTION_KEY, TEMPLATE_KEY)
    }
    body = document.get(BODY_KEY) or ""
    if not isinstance(body, str):
        body = json.dumps(body, ensure_ascii=False)

    header = yaml.safe_dump(frontmatter, allow_unicode=True, sort_keys=False) if frontmatter else ""
    return f"{FRONTMATTER_DELIMITER}\n{header}{FRONTMATTER_DELIMITER}\n{body}"


def parse_document(text: str) -> dict[str, Any]:
    """Parse front-matter Markdown into a document (the body goes under ``_body``)."""
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != FRONTMATTER_DELIMITER:
        return {BODY_KEY: text} if text else {}

    for end, line in enumerate(lines[1:], start=1):
        if line.rstrip() == FRONTMATTER_DELIMITER:
            break
    else:
        raise ValueError("Unterminated front matter")

    document = yaml.safe_load("".join(lines[1:end])) or {}
    if not isinstance(document, dict):
        raise ValueError("Front matter is not a mapping")

    body = "".join(lines[end + 1 :])
    if body:
        document[BODY_KEY] = body
    return document


def is_json_path(path: Path | str) -> bool:
    """Whether a document path holds a JSON document."""
    return Path(path).suffix.lower() == ".json"


def serialize_document(document: dict[str, Any], path: Path | str) -> str:
    """Serialize a document in the format its file name calls for."""
    if is_json_path(path):
        return json.dumps(document, ensure_ascii=False, indent=2) + "\n"
    return render_document(document)


class ContentStore:
    """Directory-per-collection document store on the local filesystem."""

    def __init__(
        self,
        content_dir: Path | str,
        collections: dict[str, str],
        locales: LocaleTable | None = None,
    ):
        """
        Initialize the store.

        Args:
            content_dir: Root content directory.
            collections: Collection name -> folder under ``content_dir``.
            locales: Configured locales.
        """
        self.content_dir = Path(content_dir)
        self.collections = dict(collections)
        self.locales = locales or LocaleTable()

    def folder(self, collection: str) -> Path:
        """Folder holding a collection's documents."""
        folder = self.collections.get(collection)
        if not folder:
            raise ConfigurationError(f"Unknown collection: {collection}")
        return self.content_dir / folder

    def relative_path(self, locale: str, name: str) -> str:
        """Locale-qualified path of a document inside its collection folder."""
        return self.locales.qualify(locale, name)

    def path_for(self, collection: str, locale: str, name: str) -> Path:
        """Absolute file path of a document."""
        return self.folder(collection) / self.relative_path(locale, name)

    def repo_path(self, file: PublishFile) -> str:
        """Repository-relative POSIX path of a file (``content/pages/de/home.mdx``)."""
        relative = self.path_for(file.collection, file.locale, file.name).relative_to(
            self.content_dir.parent
        )
        return relative.as_posix()

    def exists(self, collection: str, locale: str, name: str) -> bool:
        """Check whether a document exists."""
        return self.path_for(collection, locale, name).exists()

    def write(self, file: PublishFile) -> Path:
        """
        Write a document, creating parent directories as needed.

        Raises:
            PublishConflictError: If the file already exists.
        """
        path = self.path_for(file.collection, file.locale, file.name)
        if path.exists():
            raise PublishConflictError(path)

        path.parent.mkdir(parents=True, exist_ok=True)
        content = serialize_document(file.document, path)
        try:
            with open(path, "x", encoding="utf-8") as f:
                f.write(content)
        except FileExistsError:
            raise PublishConflictError(path) from None

        logger.info("Wrote %s (%d bytes)", path, len(content.encode("utf-8")))
        return path

    def read_document(self, path: Path | str) -> dict[str, Any]:
        """Read a document from a front-matter Markdown or JSON file."""
        path = Path(path)
        text = path.read_text(encoding="utf-8")
        if is_json_path(path):
            document = json.loads(text)
            if not isinstance(document, dict):
                raise ValueError(f"Document is not a JSON object: {path}")
            return document
        return parse_document(text)

    def existing_translations(self, collection: str, relative_path: str) -> TranslationCheck:
        """
        List the locales in which a document exists.

        Args:
            collection: Collection name.
            relative_path: Path of any locale's version of the document.

        Returns:
            TranslationCheck naming every locale with an existing file.
        """
        current_locale, name = self.locales.split_qualified(relative_path)
        if not name:
            raise ValueError(f"Invalid relative path: {relative_path!r}")

        translations = []
        for code in self.locales.codes:
            localized = self.relative_path(code, name)
            if (self.folder(collection) / localized).exists():
                translations.append(TranslationInfo(locale=code, path=localized))

        return TranslationCheck(
            relative_path=relative_path,
            current_locale=current_locale,
            name=name,
            translations=translations,
        )

    def check_many(self, items: list[tuple[str, str]]) -> list[TranslationCheck]:
        """Check many (collection, path) items, skipping invalid ones."""
        results = []
        for collection, relative_path in items:
            if not collection or not relative_path or collection not in self.collections:
                continue
            try:
                results.append(self.existing_translations(collection, relative_path))
            except ValueError:
                continue
        return results
