"""
LLM provider factory.

Creates the appropriate LLM provider based on configuration.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from translate_cms_ai.errors import ConfigurationError
from translate_cms_ai.llm.base import LLMProvider


class LLMProviderType(str, Enum):
    """Available LLM provider types."""

    OPENAI = "openai"
    OPENROUTER = "openrouter"


DEFAULT_BASE_URLS = {
    LLMProviderType.OPENAI: None,
    LLMProviderType.OPENROUTER: "https://openrouter.ai/api/v1",
}


def create_llm_provider(
    provider_type: LLMProviderType | str,
    *,
    api_key: str | None = None,
    model: str = "gpt-4o-mini",
    base_url: str | None = None,
    **kwargs: Any,
) -> LLMProvider:
    """
    Create an LLM provider instance.

    Args:
        provider_type: Type of provider to create (openai or openrouter).
        api_key: API key for the provider.
        model: Model name.
        base_url: Endpoint override; defaults to the provider's public endpoint.
        **kwargs: Additional provider-specific options (timeout, max_retries).

    Returns:
        LLMProvider instance.

    Raises:
        ConfigurationError: If provider_type is invalid or the API key is missing.

    Examples:
        provider = create_llm_provider("openai", api_key="sk-...", model="gpt-4o-mini")

        provider = create_llm_provider(
            "openrouter",
            api_key="sk-or-...",
            model="openai/gpt-4o-mini",
        )
    """
    # Normalize provider type
    if isinstance(provider_type, str):
        normalized = provider_type.lower().replace("_", "-")
        try:
            provider_type = LLMProviderType(normalized)
        except ValueError:
            valid = [p.value for p in LLMProviderType]
            raise ConfigurationError(
                f"Invalid provider type: {normalized}. Valid options: {valid}"
            ) from None

    if not api_key:
        raise ConfigurationError(f"{provider_type.value} provider requires an API key")

    from translate_cms_ai.llm.openai_compat import OpenAICompatibleProvider

    return OpenAICompatibleProvider(
        api_key=api_key,
        model=model,
        base_url=base_url or DEFAULT_BASE_URLS[provider_type],
        provider_name=provider_type.value,
        **kwargs,
    )
