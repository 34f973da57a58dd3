# tests/conftest.py
"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from tests.helpers.fakes import CODE_LOCALES, SCHEMA, FakeProvider
from translate_cms_ai.locales import LocaleTable
from translate_cms_ai.schema import SchemaIndex


@pytest.fixture
def schema_data() -> dict[str, Any]:
    return SCHEMA


@pytest.fixture
def schema() -> SchemaIndex:
    return SchemaIndex.from_dict(SCHEMA)


@pytest.fixture
def page_fields(schema: SchemaIndex):
    return schema.get_schema("page")


@pytest.fixture
def locales() -> LocaleTable:
    return CODE_LOCALES


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def schema_file(tmp_path: Path) -> Path:
    path = tmp_path / "tina" / "__generated__" / "_schema.json"
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps(SCHEMA), encoding="utf-8")
    return path


@pytest.fixture
def page_document() -> dict[str, Any]:
    return {
        "id": "content/pages/home.mdx",
        "_collection": "page",
        "title": "Welcome",
        "slug": "home",
        "hero_image": "/img/hero.png",
        "seo": {"description": "Our home page", "canonical": "https://example.com/"},
        "tags": ["news", "  "],
        "blocks": [
            {
                "_template": "hero",
                "headline": "Hi",
                "tagline": "",
                "color": "blue",
                "actions": [
                    {"label": "Start", "link": "/start"},
                    {"label": "More", "link": "/more"},
                ],
            },
            {
                "_template": "content",
                "body": {
                    "type": "root",
                    "children": [
                        {"type": "p", "children": [{"type": "text", "text": "Hello world"}]}
                    ],
                },
            },
        ],
    }
