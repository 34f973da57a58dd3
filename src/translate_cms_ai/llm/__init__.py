"""
LLM provider abstraction layer.

Supports OpenAI-compatible backends:
- OpenAI (default): the official chat completions API
- OpenRouter: any model behind OpenRouter's OpenAI-compatible API
"""

from translate_cms_ai.llm.base import LLMProvider, LLMResponse
from translate_cms_ai.llm.factory import LLMProviderType, create_llm_provider

__all__ = [
    "LLMProvider",
    "LLMResponse",
    "LLMProviderType",
    "create_llm_provider",
]
