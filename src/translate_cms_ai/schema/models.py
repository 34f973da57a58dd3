"""
Schema models for content collections.

Field definitions are read from the CMS's generated schema artifact, where a
field is described by a raw ``type`` (string, rich-text, object, image, ...)
plus ``list``/``fields``/``templates`` attributes. Each definition is
normalized into one of five kinds so that traversal can dispatch on a closed
set instead of inspecting raw attributes.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FieldKind(str, Enum):
    """Structural kind of a schema field."""

    SCALAR = "scalar"
    RICH_TEXT = "rich-text"
    OBJECT = "object"
    OBJECT_LIST = "object-list"
    BLOCK_LIST = "block-list"


class SchemaField(BaseModel):
    """A single field definition."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: str
    type: str = Field(default="string")
    kind: FieldKind = Field(default=FieldKind.SCALAR)
    label: str | None = None
    list: bool = False
    translatable: bool = False
    fields: tuple[SchemaField, ...] = Field(default=())
    templates: tuple[BlockTemplate, ...] = Field(default=())

    @model_validator(mode="before")
    @classmethod
    def _derive_kind(cls, data: Any) -> Any:
        """Derive ``kind`` from the raw CMS attributes when it is not given."""
        if not isinstance(data, dict) or data.get("kind"):
            return data
        data = dict(data)
        raw_type = data.get("type", "string")
        if raw_type == "rich-text":
            data["kind"] = FieldKind.RICH_TEXT
        elif raw_type == "object" and data.get("templates"):
            data["kind"] = FieldKind.BLOCK_LIST
        elif raw_type == "object" and data.get("list"):
            data["kind"] = FieldKind.OBJECT_LIST
        elif raw_type == "object":
            data["kind"] = FieldKind.OBJECT
        else:
            data["kind"] = FieldKind.SCALAR
        return data

    @model_validator(mode="after")
    def _check_templates(self) -> SchemaField:
        if self.kind == FieldKind.BLOCK_LIST and not self.templates:
            raise ValueError(f"Block-list field '{self.name}' declares no templates")
        return self

    def field(self, name: str) -> SchemaField | None:
        """Find a nested field definition by name."""
        return find_field(self.fields, name)

    def template(self, name: str) -> BlockTemplate | None:
        """Find a block template by name."""
        for template in self.templates:
            if template.name == name:
                return template
        return None


class BlockTemplate(BaseModel):
    """A named shape that a block-list element can take."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    label: str | None = None
    fields: tuple[SchemaField, ...] = Field(default=())


class CollectionSchema(BaseModel):
    """Field definitions shared by every document of a collection."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    label: str | None = None
    path: str | None = None
    format: str | None = None
    fields: tuple[SchemaField, ...] = Field(default=())


def find_field(fields: tuple[SchemaField, ...], name: str) -> SchemaField | None:
    """Find a field definition by name in a field list."""
    for field in fields:
        if field.name == name:
            return field
    return None


SchemaField.model_rebuild()
