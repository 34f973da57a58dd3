"""
LangGraph-based translate-and-publish workflow.

Takes an editing context through two stages:
- translation: fan the document out to every target locale
- publish: persist the successful locales (skipped when nothing succeeded
  or publishing is disabled)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, TypedDict

from langgraph.graph import END, StateGraph

from translate_cms_ai.config import Settings
from translate_cms_ai.errors import TranslateCMSError
from translate_cms_ai.llm import create_llm_provider
from translate_cms_ai.orchestrator import (
    EditingContext,
    LocaleOrchestrator,
    LocaleResults,
    ProgressCallback,
)
from translate_cms_ai.publish import (
    ContentStore,
    GitHubCommitter,
    Publisher,
    PublishFile,
    PublishReport,
)
from translate_cms_ai.schema import SchemaIndex
from translate_cms_ai.translation import BatchTranslator


class PipelineStage(str, Enum):
    """Pipeline processing stages."""

    TRANSLATION = "translation"
    PUBLISH = "publish"
    COMPLETE = "complete"


class PipelineState(TypedDict):
    """State for the translate-and-publish pipeline."""

    context: EditingContext
    target_locales: list[str] | None
    publish: bool

    current_stage: PipelineStage
    results: LocaleResults | None
    report: PublishReport | None


@dataclass
class PipelineResult:
    """Final outcome of a pipeline run."""

    results: LocaleResults
    report: PublishReport | None = None


class TranslationPipeline:
    """Runs translation then publishing for one document."""

    def __init__(self, orchestrator: LocaleOrchestrator, publisher: Publisher | None = None):
        """
        Initialize the pipeline.

        Args:
            orchestrator: Multi-locale orchestrator.
            publisher: Publisher for successful locales; None disables publishing.
        """
        self.orchestrator = orchestrator
        self.publisher = publisher
        self._graph = self._build_graph().compile()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        progress_callback: ProgressCallback = None,
    ) -> TranslationPipeline:
        """
        Build a pipeline from settings.

        Raises:
            ConfigurationError: If the schema file or service credentials are missing.
        """
        locales = settings.locale_table()
        schema = SchemaIndex.from_file(settings.paths.schema_file)

        provider = create_llm_provider(
            settings.translation.provider,
            api_key=settings.translation.api_key,
            model=settings.translation.model,
            base_url=settings.translation.base_url,
            timeout=settings.translation.timeout,
            max_retries=settings.translation.max_retries,
        )
        translator = BatchTranslator(
            provider,
            locales,
            temperature=settings.translation.temperature,
            max_tokens=settings.translation.max_tokens,
        )
        orchestrator = LocaleOrchestrator(
            schema,
            translator,
            locales,
            batch_size=settings.translation.locale_batch_size,
            progress_callback=progress_callback,
        )

        store = ContentStore(settings.paths.content_dir, settings.collections, locales)
        committer = GitHubCommitter(settings.github) if settings.github.configured else None
        return cls(orchestrator, Publisher(store, committer))

    async def close(self) -> None:
        """Release the remote committer's HTTP client, if any."""
        if self.publisher is not None and self.publisher.committer is not None:
            await self.publisher.committer.close()

    def _build_graph(self) -> StateGraph:
        """Build the LangGraph workflow."""
        workflow = StateGraph(PipelineState)

        workflow.add_node("translation", self._node_translation)
        workflow.add_node("publish", self._node_publish)

        workflow.set_entry_point("translation")
        workflow.add_conditional_edges(
            "translation",
            self._route_after_translation,
            {
                "publish": "publish",
                "end": END,
            },
        )
        workflow.add_edge("publish", END)

        return workflow

    def _route_after_translation(self, state: PipelineState) -> str:
        """Publish only when enabled and at least one locale succeeded."""
        results = state["results"]
        if state["publish"] and self.publisher is not None and results and results.succeeded:
            return "publish"
        return "end"

    async def _node_translation(self, state: PipelineState) -> dict[str, Any]:
        """Translate the document into every target locale."""
        results = await self.orchestrator.translate_context(
            state["context"], state["target_locales"]
        )
        return {"results": results, "current_stage": PipelineStage.PUBLISH}

    async def _node_publish(self, state: PipelineState) -> dict[str, Any]:
        """Publish every successfully translated locale."""
        context = state["context"]
        results = state["results"]
        if self.publisher is None or results is None:
            return {"current_stage": PipelineStage.COMPLETE}

        name = context.document_name(self.orchestrator.locales)
        files = [
            PublishFile(
                locale=item.locale,
                collection=context.collection,
                name=name,
                document=item.document,
            )
            for item in results.succeeded
        ]
        report = await self.publisher.publish(files, source_path=context.relative_path)
        return {"report": report, "current_stage": PipelineStage.COMPLETE}

    async def run(
        self,
        context: EditingContext,
        target_locales: list[str] | None = None,
        *,
        publish: bool = True,
    ) -> PipelineResult:
        """
        Translate a document and publish the results.

        Args:
            context: The document being edited.
            target_locales: Locales to translate into; all others when None.
            publish: Whether to persist successful locales.

        Returns:
            PipelineResult with per-locale outcomes and the publish report.
        """
        initial_state: PipelineState = {
            "context": context,
            "target_locales": target_locales,
            "publish": publish,
            "current_stage": PipelineStage.TRANSLATION,
            "results": None,
            "report": None,
        }
        final_state = await self._graph.ainvoke(initial_state)

        results = final_state["results"]
        if results is None:
            raise TranslateCMSError("Pipeline finished without translation results")
        return PipelineResult(results=results, report=final_state.get("report"))
