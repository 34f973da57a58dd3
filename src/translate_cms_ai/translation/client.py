"""
Batch translation client.

Translates every collected unit of a document in a single request per target
locale. The reply is constrained by, and validated against, a response
contract, so a result is either complete or an error; it is never partial.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from translate_cms_ai.llm import LLMProvider
from translate_cms_ai.locales import LocaleTable
from translate_cms_ai.translation.contract import CONTRACT_NAME, ResponseContract
from translate_cms_ai.translation.prompts import build_system_prompt, build_user_prompt
from translate_cms_ai.walker import CollectedUnit

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    """Translations of one batch, keyed by unit index."""

    translations: dict[int, str]
    source_tokens: int = 0
    target_tokens: int = 0
    model_used: str = ""
    latency_ms: float = 0.0
    metadata: dict[str, Any] = field(default_factory=dict)


class BatchTranslator:
    """Translates unit lists through an LLM provider, one round trip per call."""

    def __init__(
        self,
        provider: LLMProvider,
        locales: LocaleTable | None = None,
        *,
        temperature: float = 0.3,
        max_tokens: int = 16384,
    ):
        """
        Initialize the translator.

        Args:
            provider: Translation service provider.
            locales: Locale table used to name languages in instructions.
            temperature: Sampling temperature.
            max_tokens: Maximum output tokens per request.
        """
        self._provider = provider
        self._locales = locales or LocaleTable()
        self._temperature = temperature
        self._max_tokens = max_tokens

    @property
    def provider_name(self) -> str:
        """Get provider name."""
        return self._provider.name

    async def translate_batch(
        self,
        units: list[CollectedUnit],
        source_locale: str,
        target_locale: str,
    ) -> dict[int, str]:
        """
        Translate units in one request.

        Args:
            units: Units from a single collect pass.
            source_locale: Source locale code.
            target_locale: Target locale code.

        Returns:
            Mapping with exactly the keys ``0..len(units)-1``.

        Raises:
            TranslationServiceError: On a non-success response.
            ResponseContractError: If the reply misses or adds keys.
        """
        result = await self.translate_batch_detailed(units, source_locale, target_locale)
        return result.translations

    async def translate_batch_detailed(
        self,
        units: list[CollectedUnit],
        source_locale: str,
        target_locale: str,
    ) -> BatchResult:
        """Translate units in one request, returning usage details as well."""
        if not units:
            return BatchResult(translations={}, model_used=self._provider.model)

        # The contract keys are 0..N-1, so units must be one complete collect pass
        indices = [unit.index for unit in units]
        if indices != list(range(len(units))):
            raise ValueError("Units must carry indices 0..N-1 in order")

        contract = ResponseContract(len(units))
        payload = {str(unit.index): unit.text for unit in units}
        rich_text_indices = [unit.index for unit in units if unit.is_rich_text]

        system_prompt = build_system_prompt(
            self._locales.language_name(source_locale),
            self._locales.language_name(target_locale),
            rich_text_indices,
        )

        logger.info(
            "Translating %d units %s -> %s via %s",
            len(units),
            source_locale,
            target_locale,
            self._provider.name,
        )
        response = await self._provider.complete_structured(
            system_prompt,
            build_user_prompt(payload),
            schema_name=CONTRACT_NAME,
            json_schema=contract.json_schema,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
        )

        translations = contract.parse(response.content)
        logger.info(
            "Received %d translations for %s in %.0fms (tokens in=%d out=%d)",
            len(translations),
            target_locale,
            response.latency_ms,
            response.input_tokens,
            response.output_tokens,
        )
        return BatchResult(
            translations=translations,
            source_tokens=response.input_tokens,
            target_tokens=response.output_tokens,
            model_used=response.model,
            latency_ms=response.latency_ms,
            metadata=response.metadata,
        )

    async def translate_text(self, text: str, source_locale: str, target_locale: str) -> str:
        """Translate one free-standing string through the batched path."""
        if not text.strip():
            return text
        unit = CollectedUnit(path="text", text=text, index=0)
        translations = await self.translate_batch([unit], source_locale, target_locale)
        return translations[0]
