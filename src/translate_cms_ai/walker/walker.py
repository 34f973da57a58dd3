"""
Paired collect/apply traversal.

``collect`` flattens a resolved tree into path-addressed text units;
``apply`` rebuilds the document from the same tree, substituting translated
text by path. Both walk depth-first with list indices ascending and build
paths the same way, so a unit's path always points back to where its text
came from.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from translate_cms_ai.document import index_path, join_path
from translate_cms_ai.provenance import attach_provenance
from translate_cms_ai.schema import SchemaField
from translate_cms_ai.walker import richtext
from translate_cms_ai.walker.nodes import (
    Block,
    ListNode,
    Node,
    ObjectNode,
    RichText,
    Scalar,
    build_tree,
    copy_value,
)

logger = logging.getLogger(__name__)

# path -> translated text
TranslationMap = dict[str, str]


@dataclass(frozen=True)
class CollectedUnit:
    """One piece of translatable text and the location it came from."""

    path: str
    text: str
    index: int
    is_rich_text: bool = False


def is_collectable(node: Node) -> bool:
    """Return True if the node contributes a unit to a collect pass."""
    if isinstance(node, Scalar):
        return node.eligible
    if isinstance(node, RichText):
        return richtext.has_text(node.value)
    return False


def collect_tree(node: Node, path: str = "") -> list[CollectedUnit]:
    """Collect the translatable units of a resolved tree, in walk order."""
    units: list[CollectedUnit] = []
    _collect(node, path, units)
    return units


def _collect(node: Node, path: str, units: list[CollectedUnit]) -> None:
    if isinstance(node, Scalar):
        if node.eligible:
            units.append(CollectedUnit(path=path, text=node.value, index=len(units)))

    elif isinstance(node, RichText):
        if richtext.has_text(node.value):
            units.append(
                CollectedUnit(
                    path=path,
                    text=richtext.serialize(node.value),
                    index=len(units),
                    is_rich_text=True,
                )
            )

    elif isinstance(node, ListNode):
        for i, item in enumerate(node.items):
            _collect(item, index_path(path, i), units)

    elif isinstance(node, (ObjectNode, Block)):
        for key, child in node.entries:
            _collect(child, join_path(path, key), units)


def apply_tree(node: Node, translations: TranslationMap, path: str = "") -> Any:
    """
    Rebuild a document from a resolved tree, substituting translations.

    Paths missing from ``translations`` keep their original value. Rich-text
    values that are substituted become the flat text returned by the service.
    Every resolved block gets a fresh provenance list naming its fields that
    received a translation.
    """
    if isinstance(node, (Scalar, RichText)):
        if is_collectable(node) and path in translations:
            return translations[path]
        return copy_value(node.value)

    if isinstance(node, ListNode):
        return [
            apply_tree(item, translations, index_path(path, i))
            for i, item in enumerate(node.items)
        ]

    if isinstance(node, ObjectNode):
        return {
            key: apply_tree(child, translations, join_path(path, key))
            for key, child in node.entries
        }

    if isinstance(node, Block):
        element: dict[str, Any] = {}
        translated_fields: list[str] = []
        for key, child in node.entries:
            child_path = join_path(path, key)
            element[key] = apply_tree(child, translations, child_path)
            if is_collectable(child) and child_path in translations:
                translated_fields.append(key)
        return attach_provenance(element, translated_fields)

    raise TypeError(f"Unknown node type: {type(node).__name__}")


def collect(
    document: dict[str, Any], fields: tuple[SchemaField, ...], path: str = ""
) -> list[CollectedUnit]:
    """
    Collect translatable units from a raw document.

    Args:
        document: Raw document.
        fields: Field definitions of the document's collection.
        path: Path prefix for every unit.

    Returns:
        Units in deterministic walk order; ``unit.index`` is its position.
    """
    units = collect_tree(build_tree(document, fields), path)
    logger.debug("Collected %d units", len(units))
    return units


def apply(
    document: dict[str, Any],
    translations: TranslationMap,
    fields: tuple[SchemaField, ...],
    path: str = "",
) -> dict[str, Any]:
    """Return a translated copy of ``document``; the input is not modified."""
    return apply_tree(build_tree(document, fields), translations, path)


def translation_map(units: list[CollectedUnit], by_index: dict[int, str]) -> TranslationMap:
    """Re-key translations from unit index to unit path."""
    return {unit.path: by_index[unit.index] for unit in units if unit.index in by_index}
