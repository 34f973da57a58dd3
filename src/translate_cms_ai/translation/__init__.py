"""
Batched translation for translate-cms-ai.

Provides:
- One structured request per (document, target locale)
- A per-request response contract (exact keys, string values)
- Instructions for flattening rich text into Markdown
"""

from translate_cms_ai.translation.client import BatchResult, BatchTranslator
from translate_cms_ai.translation.contract import ResponseContract

__all__ = ["BatchResult", "BatchTranslator", "ResponseContract"]
