"""
Schema-guided document traversal.

Provides:
- A tagged-variant tree resolved once against the collection schema
- ``collect``: document -> flat, path-addressed translatable units
- ``apply``: document + translations -> translated copy with provenance
"""

from translate_cms_ai.walker.nodes import (
    Block,
    ListNode,
    Node,
    ObjectNode,
    RichText,
    Scalar,
    build_tree,
)
from translate_cms_ai.walker.walker import (
    CollectedUnit,
    TranslationMap,
    apply,
    apply_tree,
    collect,
    collect_tree,
    translation_map,
)

__all__ = [
    "Block",
    "CollectedUnit",
    "ListNode",
    "Node",
    "ObjectNode",
    "RichText",
    "Scalar",
    "TranslationMap",
    "apply",
    "apply_tree",
    "build_tree",
    "collect",
    "collect_tree",
    "translation_map",
]
