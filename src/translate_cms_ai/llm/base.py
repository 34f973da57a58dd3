"""
Base classes for LLM providers.

Defines the abstract interface that all translation service providers must
implement. Providers must support a hard structural response contract: the
caller passes a JSON schema and the provider constrains its output to it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass
class LLMResponse:
    """Response from an LLM provider."""

    content: str
    input_tokens: int = 0
    output_tokens: int = 0
    model: str = ""
    latency_ms: float = 0.0
    metadata: dict[str, Any] = field(default_factory=dict)


class LLMProvider(ABC):
    """
    Abstract base class for LLM providers.

    All providers (OpenAI, OpenRouter, test fakes) implement ``complete``;
    ``complete_structured`` builds on it.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name for logging and identification."""
        ...

    @property
    @abstractmethod
    def model(self) -> str:
        """Current model name."""
        ...

    @abstractmethod
    async def complete(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float = 0.3,
        max_tokens: int = 4096,
        response_format: dict[str, Any] | None = None,
    ) -> LLMResponse:
        """
        Generate a completion from the LLM.

        Args:
            messages: List of message dicts with 'role' and 'content' keys.
            temperature: Sampling temperature (0.0 to 2.0).
            max_tokens: Maximum tokens to generate.
            response_format: Optional structured-output constraint.

        Returns:
            LLMResponse with the generated content and metadata.

        Raises:
            TranslationServiceError: If the service does not return a success response.
        """
        ...

    async def complete_structured(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        schema_name: str,
        json_schema: dict[str, Any],
        temperature: float = 0.3,
        max_tokens: int = 4096,
    ) -> LLMResponse:
        """
        System + user prompt whose reply must conform to ``json_schema``.

        Args:
            system_prompt: Instructions.
            user_prompt: Payload.
            schema_name: Name of the response contract.
            json_schema: JSON schema the reply must satisfy.
            temperature: Sampling temperature.
            max_tokens: Maximum tokens to generate.

        Returns:
            LLMResponse whose content is a JSON document.
        """
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        return await self.complete(
            messages,
            temperature=temperature,
            max_tokens=max_tokens,
            response_format={
                "type": "json_schema",
                "json_schema": {"name": schema_name, "strict": True, "schema": json_schema},
            },
        )
