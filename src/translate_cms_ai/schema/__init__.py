"""
Content schema access.

Provides:
- Field definitions normalized into structural kinds
- Collection lookup over the generated schema artifact
- The opt-in translation eligibility policy
"""

from translate_cms_ai.schema.classifier import should_translate
from translate_cms_ai.schema.index import SchemaIndex
from translate_cms_ai.schema.models import (
    BlockTemplate,
    CollectionSchema,
    FieldKind,
    SchemaField,
    find_field,
)

__all__ = [
    "BlockTemplate",
    "CollectionSchema",
    "FieldKind",
    "SchemaField",
    "SchemaIndex",
    "find_field",
    "should_translate",
]
