"""
Machine-translation provenance for block elements.

Each translated block element carries a provenance list (``_autoTranslatedFields``)
naming its fields whose current value came from machine translation. A
translation pass replaces the list; a manual edit of a field removes that
field's name from it, so the editor can tell unreviewed machine output from
human-reviewed text.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any

from translate_cms_ai.document import (
    PROVENANCE_KEY,
    index_path,
    is_reserved,
    join_path,
    parse_path,
    resolve_path,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldChangedEvent:
    """A field value edited through the authoring surface."""

    path: str
    value: Any


def attach_provenance(element: dict[str, Any], fields: list[str]) -> dict[str, Any]:
    """Replace an element's provenance list with ``fields``."""
    element[PROVENANCE_KEY] = list(fields)
    return element


def provenance_of(element: Any) -> list[str]:
    """Return the provenance list of an element (empty if it has none)."""
    if not isinstance(element, dict):
        return []
    fields = element.get(PROVENANCE_KEY)
    if not isinstance(fields, list):
        return []
    return [f for f in fields if isinstance(f, str)]


class ProvenanceTracker:
    """Keeps provenance lists in step with manual edits."""

    def handle(self, document: dict[str, Any], event: FieldChangedEvent) -> dict[str, Any]:
        """
        Apply a manual edit to a document.

        Sets the new value at ``event.path`` and removes the edited field from
        its element's provenance list. Other fields and elements are left as
        they are.

        Args:
            document: Document being edited (not modified).
            event: The edit.

        Returns:
            A new document reflecting the edit.

        Raises:
            KeyError: If the path does not lead to an existing field.
            ValueError: If the path is malformed or names a reserved key.
        """
        tokens = parse_path(event.path)
        field_name = tokens[-1]
        if not isinstance(field_name, str) or is_reserved(field_name):
            raise ValueError(f"Not an editable field path: {event.path!r}")

        edited = copy.deepcopy(document)
        element = resolve_path(edited, tokens[:-1])
        if not isinstance(element, dict) or field_name not in element:
            raise KeyError(event.path)

        element[field_name] = event.value
        self.clear(element, field_name)
        return edited

    def clear(self, element: dict[str, Any], field_name: str) -> bool:
        """
        Remove one field from an element's provenance list in place.

        Returns:
            True if the field was listed and has been removed.
        """
        fields = provenance_of(element)
        if field_name not in fields:
            return False

        element[PROVENANCE_KEY] = [f for f in fields if f != field_name]
        logger.debug("Field '%s' marked as reviewed", field_name)
        return True

    def is_machine_translated(self, document: dict[str, Any], path: str) -> bool:
        """Return True if the field at ``path`` still holds unreviewed machine output."""
        tokens = parse_path(path)
        try:
            element = resolve_path(document, tokens[:-1])
        except KeyError:
            return False
        return tokens[-1] in provenance_of(element)

    def pending_review(self, document: Any, path: str = "") -> list[str]:
        """List the paths of every field still marked as machine translated."""
        pending: list[str] = []
        if isinstance(document, dict):
            for name in provenance_of(document):
                pending.append(join_path(path, name))
            for key, value in document.items():
                if not is_reserved(key):
                    pending.extend(self.pending_review(value, join_path(path, key)))
        elif isinstance(document, list):
            for i, item in enumerate(document):
                pending.extend(self.pending_review(item, index_path(path, i)))
        return pending
