"""
Schema-resolved document tree.

A raw document is converted once, at the schema boundary, into a tree made of
five node variants. Every later pass (collect, apply) dispatches on these
variants only; no pass consults the schema or inspects raw value shapes.

- ``Scalar``: a leaf, or any value copied verbatim (reserved keys, unknown
  keys, unresolved blocks). ``eligible`` marks translatable strings.
- ``RichText``: a whole rich-text value, translated as one unit.
- ``ObjectNode``: a nested object with schema-resolved children.
- ``ListNode``: a list whose elements share one field definition.
- ``Block``: a block-list element whose template tag was resolved.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Union

from translate_cms_ai.document import PROVENANCE_KEY, TEMPLATE_KEY, is_reserved
from translate_cms_ai.schema import FieldKind, SchemaField, find_field, should_translate
from translate_cms_ai.walker import richtext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Scalar:
    """A leaf value."""

    value: Any
    eligible: bool = False


@dataclass(frozen=True)
class RichText:
    """A rich-text value (structured node tree or flat markup)."""

    value: Any


@dataclass(frozen=True)
class ObjectNode:
    """A nested object; entries keep the document's key order."""

    entries: tuple[tuple[str, Node], ...]


@dataclass(frozen=True)
class ListNode:
    """A list of nodes."""

    items: tuple[Node, ...]


@dataclass(frozen=True)
class Block:
    """A block-list element resolved against one of its field's templates."""

    template: str
    entries: tuple[tuple[str, Node], ...]


Node = Union[Scalar, RichText, ObjectNode, ListNode, Block]


def build_tree(document: dict[str, Any], fields: tuple[SchemaField, ...]) -> ObjectNode:
    """
    Resolve a document against its collection's top-level fields.

    Args:
        document: Raw document (not modified).
        fields: Field definitions of the document's collection.

    Returns:
        Root ObjectNode of the resolved tree.
    """
    return _build_object(document, fields)


def _build_object(value: dict[str, Any], fields: tuple[SchemaField, ...]) -> ObjectNode:
    entries = []
    for key, child in value.items():
        if is_reserved(key):
            entries.append((key, Scalar(child)))
        else:
            entries.append((key, _build(child, find_field(fields, key))))
    return ObjectNode(tuple(entries))


def _build(value: Any, field_def: SchemaField | None) -> Node:
    if isinstance(value, list) and not (
        field_def is not None and field_def.kind == FieldKind.RICH_TEXT
    ):
        return ListNode(tuple(_build(item, field_def) for item in value))

    # Unknown keys are walked with no definition: nothing below them is eligible
    if field_def is None or value is None:
        return Scalar(value)

    kind = field_def.kind
    if kind == FieldKind.SCALAR:
        eligible = should_translate(field_def) and isinstance(value, str) and bool(value.strip())
        return Scalar(value, eligible=eligible)

    if kind == FieldKind.RICH_TEXT:
        if isinstance(value, (str, list)) or richtext.is_rich_text_node(value):
            return RichText(value)
        return Scalar(value)

    if not isinstance(value, dict):
        return Scalar(value)

    if kind == FieldKind.BLOCK_LIST:
        return _build_block(value, field_def)

    return _build_object(value, field_def.fields)


def _build_block(value: dict[str, Any], field_def: SchemaField) -> Node:
    tag = value.get(TEMPLATE_KEY)
    template = field_def.template(tag) if isinstance(tag, str) else None
    if template is None:
        logger.debug("Unresolved template %r in field '%s', copying verbatim", tag, field_def.name)
        return Scalar(value)

    resolved = _build_object(
        {k: v for k, v in value.items() if k != PROVENANCE_KEY},
        template.fields,
    )
    return Block(template=template.name, entries=resolved.entries)


def copy_value(value: Any) -> Any:
    """Copy a verbatim value so output trees never alias the input document."""
    if isinstance(value, (dict, list)):
        return copy.deepcopy(value)
    return value
