"""
Multi-locale translation orchestration.

A document is collected once; each target locale then gets its own
translate + apply step. Target locales run in fixed-size batches: every locale
in a batch runs concurrently, and the next batch starts when all of them have
settled. A failing locale is recorded and never cancels its siblings.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from translate_cms_ai.locales import LocaleTable
from translate_cms_ai.schema import SchemaIndex
from translate_cms_ai.translation import BatchTranslator
from translate_cms_ai.walker import (
    CollectedUnit,
    Node,
    apply_tree,
    build_tree,
    collect_tree,
    translation_map,
)

logger = logging.getLogger(__name__)

DEFAULT_LOCALE_BATCH_SIZE = 4


@dataclass(frozen=True)
class EditingContext:
    """
    The document currently open in the authoring surface.

    Attributes:
        document: Current field values of the document.
        collection: Collection the document belongs to.
        relative_path: Path of the document inside its collection folder,
            possibly locale-qualified (``ru/home.mdx``).
        source_locale: Locale of the document; derived from the path if None.
    """

    document: dict[str, Any]
    collection: str
    relative_path: str
    source_locale: str | None = None

    def resolve_source(self, locales: LocaleTable) -> str:
        """Locale of the document being edited."""
        if self.source_locale:
            return self.source_locale
        return locales.split_qualified(self.relative_path)[0]

    def document_name(self, locales: LocaleTable) -> str:
        """Path of the document without its locale qualifier."""
        return locales.split_qualified(self.relative_path)[1]


@dataclass
class LocaleTranslation:
    """A successfully translated document for one locale."""

    locale: str
    document: dict[str, Any]
    units_translated: int = 0


@dataclass
class LocaleResults:
    """Per-locale outcome of a multi-locale translation."""

    succeeded: list[LocaleTranslation] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)
    units: int = 0

    @property
    def succeeded_locales(self) -> list[str]:
        """Codes of the locales that were translated."""
        return [item.locale for item in self.succeeded]


@dataclass
class LocaleProgress:
    """Progress information for callbacks."""

    locale: str
    succeeded: bool
    completed: int
    total: int
    error: str | None = None


# Type alias for progress callback
ProgressCallback = Callable[[LocaleProgress], None] | None


class LocaleOrchestrator:
    """Fans a document translation out across target locales."""

    def __init__(
        self,
        schema: SchemaIndex,
        translator: BatchTranslator,
        locales: LocaleTable | None = None,
        *,
        batch_size: int = DEFAULT_LOCALE_BATCH_SIZE,
        progress_callback: ProgressCallback = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            schema: Schema index for resolving collection fields.
            translator: Batch translation client.
            locales: Configured locales.
            batch_size: Number of locales translated concurrently.
            progress_callback: Called after each locale settles.
        """
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.schema = schema
        self.translator = translator
        self.locales = locales or LocaleTable()
        self.batch_size = batch_size
        self._progress_callback = progress_callback

    async def translate_to_locales(
        self,
        document: dict[str, Any],
        source_locale: str,
        target_locales: list[str],
        collection: str,
    ) -> LocaleResults:
        """
        Translate a document into several locales.

        Args:
            document: Source document (not modified).
            source_locale: Locale of the source document.
            target_locales: Locales to translate into.
            collection: Collection the document belongs to.

        Returns:
            LocaleResults with successes in target order and failed locale codes.

        Raises:
            CollectionNotFoundError: If the collection is unknown. Per-locale
                failures are never raised.
        """
        fields = self.schema.get_schema(collection)
        tree = build_tree(document, fields)
        units = collect_tree(tree)

        targets = self._normalize_targets(source_locale, target_locales)
        results = LocaleResults(units=len(units))
        logger.info(
            "Translating %s document (%d units) from %s into %d locales",
            collection,
            len(units),
            source_locale,
            len(targets),
        )

        completed = 0
        for start in range(0, len(targets), self.batch_size):
            batch = targets[start : start + self.batch_size]
            outcomes = await asyncio.gather(
                *(self._translate_locale(tree, units, source_locale, locale) for locale in batch)
            )

            for locale, outcome in zip(batch, outcomes, strict=True):
                completed += 1
                if isinstance(outcome, LocaleTranslation):
                    results.succeeded.append(outcome)
                    self._report(locale, True, completed, len(targets))
                else:
                    results.failed.append(locale)
                    results.errors[locale] = outcome
                    self._report(locale, False, completed, len(targets), outcome)

        if results.failed:
            logger.warning("Translation failed for locales: %s", ", ".join(results.failed))
        return results

    async def translate_context(
        self,
        context: EditingContext,
        target_locales: list[str] | None = None,
    ) -> LocaleResults:
        """
        Translate the document of an editing context.

        When no targets are given, every configured locale other than the
        source is targeted.
        """
        source = context.resolve_source(self.locales)
        targets = target_locales if target_locales else self.locales.targets_for(source)
        return await self.translate_to_locales(
            context.document, source, targets, context.collection
        )

    async def _translate_locale(
        self,
        tree: Node,
        units: list[CollectedUnit],
        source_locale: str,
        locale: str,
    ) -> LocaleTranslation | str:
        """Translate and apply for one locale; failures come back as a message."""
        try:
            by_index = await self.translator.translate_batch(units, source_locale, locale)
            translated = apply_tree(tree, translation_map(units, by_index))
        except Exception as e:
            logger.error("Locale %s failed: %s: %s", locale, type(e).__name__, e)
            return f"{type(e).__name__}: {e}"

        return LocaleTranslation(locale=locale, document=translated, units_translated=len(units))

    def _normalize_targets(self, source_locale: str, target_locales: list[str]) -> list[str]:
        targets: list[str] = []
        for locale in target_locales:
            if locale == source_locale:
                logger.warning("Skipping target %s: same as source locale", locale)
            elif locale not in targets:
                targets.append(locale)
        return targets

    def _report(
        self,
        locale: str,
        succeeded: bool,
        completed: int,
        total: int,
        error: str | None = None,
    ) -> None:
        """Report progress via callback if set."""
        if self._progress_callback:
            self._progress_callback(
                LocaleProgress(
                    locale=locale,
                    succeeded=succeeded,
                    completed=completed,
                    total=total,
                    error=error,
                )
            )
