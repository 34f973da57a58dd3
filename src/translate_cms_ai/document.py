"""
Document conventions shared by the walker and the provenance tracker.

Documents are plain JSON-like trees (dicts, lists, scalars). A handful of
reserved keys carry identity and CMS metadata; they are never translated.
Locations inside a document are addressed by paths such as
``blocks[0].actions[1].label``.
"""

from __future__ import annotations

import re
from typing import Any

ID_KEY = "id"
COLLECTION_KEY = "_collection"
TEMPLATE_KEY = "_template"
PROVENANCE_KEY = "_autoTranslatedFields"
BODY_KEY = "_body"

Document = dict[str, Any]
PathToken = str | int

_PATH_TOKEN = re.compile(r"([^.\[\]]+)|\[(\d+)\]")


def is_reserved(key: str) -> bool:
    """Return True for identity and metadata keys (``id`` and ``_``-prefixed)."""
    return key == ID_KEY or key.startswith("_")


def join_path(parent: str, key: str) -> str:
    """Address a named child of ``parent``."""
    return f"{parent}.{key}" if parent else key


def index_path(parent: str, index: int) -> str:
    """Address a list element of ``parent``."""
    return f"{parent}[{index}]"


def parse_path(path: str) -> list[PathToken]:
    """
    Split a path into keys and list indices.

    >>> parse_path("blocks[0].headline")
    ['blocks', 0, 'headline']
    """
    tokens: list[PathToken] = []
    position = 0
    for match in _PATH_TOKEN.finditer(path):
        between = path[position : match.start()]
        if between not in ("", "."):
            raise ValueError(f"Malformed path: {path!r}")
        key, index = match.groups()
        tokens.append(int(index) if index is not None else key)
        position = match.end()
    if position != len(path) or not tokens:
        raise ValueError(f"Malformed path: {path!r}")
    return tokens


def resolve_path(document: Any, tokens: list[PathToken]) -> Any:
    """Follow path tokens into a document, raising KeyError when absent."""
    node = document
    for token in tokens:
        if isinstance(token, int):
            if not isinstance(node, list) or not 0 <= token < len(node):
                raise KeyError(token)
            node = node[token]
        else:
            if not isinstance(node, dict) or token not in node:
                raise KeyError(token)
            node = node[token]
    return node
