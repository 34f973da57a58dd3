"""
OpenAI-compatible LLM provider.

Talks to the OpenAI chat completions API, or to any endpoint exposing the same
API (OpenRouter), with JSON-schema constrained output.
"""

from __future__ import annotations

import asyncio
import logging
import random
import time
from typing import Any

from openai import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AsyncOpenAI,
    InternalServerError,
    RateLimitError,
)

from translate_cms_ai.errors import TranslationServiceError
from translate_cms_ai.llm.base import LLMProvider, LLMResponse

logger = logging.getLogger(__name__)

# Transport failures worth another attempt; anything else fails immediately
RETRYABLE_ERRORS = (APIConnectionError, APITimeoutError, RateLimitError, InternalServerError)


class OpenAICompatibleProvider(LLMProvider):
    """
    Provider for the OpenAI chat completions API and compatible endpoints.

    Transport failures are retried a bounded number of times with
    exponential backoff and jitter. Responses that arrive are never retried.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        timeout: float = 120.0,
        max_retries: int = 3,
        provider_name: str = "openai",
    ):
        """
        Initialize the provider.

        Args:
            api_key: API key for the endpoint.
            model: Model name.
            base_url: API base URL; None uses the official OpenAI endpoint.
            timeout: Request timeout in seconds.
            max_retries: Maximum attempts on transport failure.
            provider_name: Name used in logs and metadata.
        """
        self._model_name = model
        self._max_retries = max_retries
        self._provider_name = provider_name

        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
        )

    @property
    def name(self) -> str:
        """Provider name."""
        return self._provider_name

    @property
    def model(self) -> str:
        """Current model name."""
        return self._model_name

    async def complete(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float = 0.3,
        max_tokens: int = 4096,
        response_format: dict[str, Any] | None = None,
    ) -> LLMResponse:
        """Generate a completion, retrying transport failures."""
        start_time = time.perf_counter()
        extra: dict[str, Any] = {}
        if response_format is not None:
            extra["response_format"] = response_format

        for attempt in range(self._max_retries):
            try:
                response = await self._client.chat.completions.create(
                    model=self._model_name,
                    messages=messages,  # type: ignore[arg-type]
                    temperature=temperature,
                    max_tokens=max_tokens,
                    **extra,
                )
            except RETRYABLE_ERRORS as e:
                if attempt == self._max_retries - 1:
                    raise TranslationServiceError(
                        f"{self._provider_name} request failed after {attempt + 1} attempts: {e}"
                    ) from e
                delay = 2**attempt + random.uniform(0, 1)
                logger.warning(
                    "%s request failed (%s), retrying in %.1fs",
                    self._provider_name,
                    type(e).__name__,
                    delay,
                )
                await asyncio.sleep(delay)
                continue
            except APIStatusError as e:
                raise TranslationServiceError(
                    f"{self._provider_name} returned HTTP {e.status_code}: {e.message}"
                ) from e

            if not response.choices:
                raise TranslationServiceError(f"{self._provider_name} returned no choices")

            choice = response.choices[0]
            if getattr(choice.message, "refusal", None):
                raise TranslationServiceError(
                    f"{self._provider_name} refused the request: {choice.message.refusal}"
                )

            latency_ms = (time.perf_counter() - start_time) * 1000
            usage = response.usage
            return LLMResponse(
                content=(choice.message.content or "").strip(),
                input_tokens=usage.prompt_tokens if usage else 0,
                output_tokens=usage.completion_tokens if usage else 0,
                model=self._model_name,
                latency_ms=latency_ms,
                metadata={
                    "provider": self._provider_name,
                    "finish_reason": choice.finish_reason,
                    "attempt": attempt + 1,
                },
            )

        raise TranslationServiceError(f"{self._provider_name} request was not attempted")
