"""
Translation eligibility of schema fields.

Opt-in policy: a value is translated only when its field is rich text or an
explicitly translatable string. Keys without a definition are never
translated, which keeps identifiers, URLs and style tokens out of requests.
"""

from __future__ import annotations

from translate_cms_ai.schema.models import FieldKind, SchemaField

# Raw CMS types that hold human-readable text
TEXT_TYPES = frozenset({"string"})


def should_translate(field_def: SchemaField | None) -> bool:
    """Return True if values of this field are eligible for translation."""
    if field_def is None:
        return False

    if field_def.kind == FieldKind.RICH_TEXT:
        return True

    if field_def.kind == FieldKind.SCALAR:
        return field_def.translatable and field_def.type in TEXT_TYPES

    return False
