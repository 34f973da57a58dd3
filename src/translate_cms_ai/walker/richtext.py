"""
Rich-text helpers.

Rich-text values arrive either as a structured node tree
(``{"type": "root", "children": [...]}``) or, once translated, as a flat
Markdown string. The walker treats a whole rich-text value as one opaque
unit; flattening it into markup is left to the translation service.
"""

from __future__ import annotations

import json
from typing import Any

# Node kinds produced by the CMS editor
BLOCK_NODE_TYPES = frozenset(
    {"root", "p", "h1", "h2", "h3", "h4", "h5", "h6", "blockquote", "ul", "ol", "li", "lic"}
)
INLINE_NODE_TYPES = frozenset({"text", "a", "img", "break", "hr", "code_block"})
NODE_TYPES = BLOCK_NODE_TYPES | INLINE_NODE_TYPES


def is_rich_text_node(value: Any) -> bool:
    """Return True if ``value`` looks like a structured rich-text node."""
    return isinstance(value, dict) and value.get("type") in NODE_TYPES


def has_text(value: Any) -> bool:
    """Return True if the value contains any non-blank human-readable text."""
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, list):
        return any(has_text(item) for item in value)
    if isinstance(value, dict):
        if value.get("type") == "text":
            text = value.get("text")
            return isinstance(text, str) and bool(text.strip())
        return has_text(value.get("children", []))
    return False


def serialize(value: Any) -> str:
    """Serialize a rich-text value into the opaque text sent for translation."""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
