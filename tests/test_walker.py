# tests/test_walker.py
"""Tests for schema-guided collect/apply traversal."""

from __future__ import annotations

import copy
from typing import Any

import pytest

from translate_cms_ai.schema import SchemaIndex
from translate_cms_ai.walker import (
    Block,
    ListNode,
    ObjectNode,
    RichText,
    Scalar,
    apply,
    build_tree,
    collect,
    translation_map,
)
from translate_cms_ai.walker import richtext

LANDING_SCHEMA = {
    "collections": [
        {
            "name": "landing",
            "fields": [
                {"name": "title", "type": "string", "translatable": True},
                {"name": "url", "type": "string"},
                {
                    "name": "blocks",
                    "type": "object",
                    "list": True,
                    "templates": [
                        {
                            "name": "hero",
                            "fields": [
                                {"name": "headline", "type": "string", "translatable": True},
                                {"name": "link", "type": "string"},
                            ],
                        }
                    ],
                },
            ],
        }
    ]
}


@pytest.fixture
def landing_fields():
    return SchemaIndex.from_dict(LANDING_SCHEMA).get_schema("landing")


def identity_map(units) -> dict[str, str]:
    return {unit.path: unit.text for unit in units}


def test_hero_scenario(landing_fields) -> None:
    """Only translatable fields are collected, and translations land where they came from."""
    document = {
        "title": "Hello",
        "url": "/x",
        "blocks": [{"_template": "hero", "headline": "Hi", "link": "/y"}],
    }

    units = collect(document, landing_fields)
    assert [(u.index, u.path, u.text) for u in units] == [
        (0, "title", "Hello"),
        (1, "blocks[0].headline", "Hi"),
    ]

    translations = translation_map(units, {0: "Bonjour", 1: "Salut"})
    result = apply(document, translations, landing_fields)

    assert result == {
        "title": "Bonjour",
        "url": "/x",
        "blocks": [
            {
                "_template": "hero",
                "headline": "Salut",
                "link": "/y",
                "_autoTranslatedFields": ["headline"],
            }
        ],
    }


def test_collect_walk_order(page_document: dict[str, Any], page_fields) -> None:
    units = collect(page_document, page_fields)

    assert [unit.path for unit in units] == [
        "title",
        "seo.description",
        "tags[0]",
        "blocks[0].headline",
        "blocks[0].actions[0].label",
        "blocks[0].actions[1].label",
        "blocks[1].body",
    ]
    assert [unit.index for unit in units] == list(range(len(units)))
    assert [unit.is_rich_text for unit in units] == [False] * 6 + [True]


def test_collect_skips_blank_strings(page_document: dict[str, Any], page_fields) -> None:
    paths = {unit.path for unit in collect(page_document, page_fields)}

    # "tagline" is empty and tags[1] is whitespace only
    assert "blocks[0].tagline" not in paths
    assert "tags[1]" not in paths


def test_collect_ignores_unmarked_and_unknown_fields(page_fields) -> None:
    document = {
        "slug": "home",
        "hero_image": "/img/a.png",
        "seo": {"canonical": "https://example.com"},
        "unknown": "Some visible text",
        "nested_unknown": {"title": "Looks translatable"},
    }

    assert collect(document, page_fields) == []


def test_reserved_keys_never_collected(page_fields) -> None:
    document = {"id": "Welcome", "_template": "Welcome", "_collection": "page", "title": "Hi"}

    assert [unit.path for unit in collect(document, page_fields)] == ["title"]


def test_identity_translation_reproduces_document(page_document: dict[str, Any], page_fields):
    """An identity map returns the same document, apart from block provenance and flat rich text."""
    units = collect(page_document, page_fields)
    result = apply(page_document, identity_map(units), page_fields)

    expected = copy.deepcopy(page_document)
    expected["blocks"][0]["_autoTranslatedFields"] = ["headline"]
    expected["blocks"][1]["body"] = richtext.serialize(page_document["blocks"][1]["body"])
    expected["blocks"][1]["_autoTranslatedFields"] = ["body"]

    assert result == expected


def test_untranslatable_values_unchanged(page_document: dict[str, Any], page_fields) -> None:
    units = collect(page_document, page_fields)
    translations = {unit.path: "TRANSLATED" for unit in units}

    result = apply(page_document, translations, page_fields)

    assert result["id"] == page_document["id"]
    assert result["slug"] == "home"
    assert result["hero_image"] == "/img/hero.png"
    assert result["seo"]["canonical"] == "https://example.com/"
    assert result["tags"] == ["TRANSLATED", "  "]
    assert result["blocks"][0]["color"] == "blue"
    assert result["blocks"][0]["tagline"] == ""
    assert [a["link"] for a in result["blocks"][0]["actions"]] == ["/start", "/more"]
    assert [a["label"] for a in result["blocks"][0]["actions"]] == ["TRANSLATED", "TRANSLATED"]


def test_apply_does_not_mutate_input(page_document: dict[str, Any], page_fields) -> None:
    original = copy.deepcopy(page_document)
    units = collect(page_document, page_fields)

    result = apply(page_document, {unit.path: "x" for unit in units}, page_fields)
    result["seo"]["canonical"] = "changed"
    result["blocks"][0]["actions"][0]["link"] = "changed"

    assert page_document == original


def test_missing_translations_keep_original(page_document: dict[str, Any], page_fields) -> None:
    result = apply(page_document, {"title": "Bienvenue"}, page_fields)

    assert result["title"] == "Bienvenue"
    assert result["seo"]["description"] == "Our home page"
    assert result["blocks"][0]["headline"] == "Hi"
    assert result["blocks"][0]["_autoTranslatedFields"] == []


def test_unresolved_template_copied_verbatim(page_fields) -> None:
    document = {
        "blocks": [
            {"_template": "carousel", "headline": "Not collected"},
            {"headline": "No template"},
            {"_template": "hero", "headline": "Collected"},
        ]
    }

    units = collect(document, page_fields)
    assert [unit.path for unit in units] == ["blocks[2].headline"]

    result = apply(document, {"blocks[2].headline": "Traduit"}, page_fields)
    assert result["blocks"][0] == {"_template": "carousel", "headline": "Not collected"}
    assert result["blocks"][1] == {"headline": "No template"}
    assert result["blocks"][2]["headline"] == "Traduit"


def test_stale_provenance_is_replaced(page_fields) -> None:
    document = {
        "blocks": [
            {
                "_template": "hero",
                "headline": "Hi",
                "color": "red",
                "_autoTranslatedFields": ["color", "tagline"],
            }
        ]
    }

    result = apply(document, {"blocks[0].headline": "Salut"}, page_fields)

    assert result["blocks"][0]["_autoTranslatedFields"] == ["headline"]


def test_translation_for_ineligible_path_ignored(page_fields) -> None:
    document = {"slug": "home", "title": "Hi"}

    result = apply(document, {"slug": "maison", "title": "Salut"}, page_fields)

    assert result == {"slug": "home", "title": "Salut"}


def test_rich_text_collected_as_one_unit(page_fields) -> None:
    body = {
        "type": "root",
        "children": [
            {"type": "h1", "children": [{"type": "text", "text": "Title"}]},
            {"type": "p", "children": [{"type": "text", "text": "Body", "bold": True}]},
        ],
    }

    units = collect({"body": body}, page_fields)

    assert len(units) == 1
    assert units[0].path == "body"
    assert units[0].is_rich_text
    assert units[0].text == richtext.serialize(body)

    result = apply({"body": body}, {"body": "# Titre\n\n**Corps**"}, page_fields)
    assert result == {"body": "# Titre\n\n**Corps**"}


def test_rich_text_without_text_not_collected(page_fields) -> None:
    paragraph = {"type": "p", "children": [{"type": "text", "text": " "}]}
    body = {"type": "root", "children": [paragraph]}

    assert collect({"body": body}, page_fields) == []
    assert collect({"body": ""}, page_fields) == []


def test_flat_rich_text_collected_as_is(page_fields) -> None:
    units = collect({"body": "Already *flat* text"}, page_fields)

    assert [(u.path, u.text, u.is_rich_text) for u in units] == [
        ("body", "Already *flat* text", True)
    ]


def test_path_prefix(page_fields) -> None:
    units = collect({"title": "Hi"}, page_fields, path="draft")

    assert units[0].path == "draft.title"


def test_build_tree_variants(page_document: dict[str, Any], page_fields) -> None:
    tree = build_tree(page_document, page_fields)
    entries = dict(tree.entries)

    assert entries["id"] == Scalar("content/pages/home.mdx")
    assert entries["title"] == Scalar("Welcome", eligible=True)
    assert entries["slug"] == Scalar("home")
    assert isinstance(entries["seo"], ObjectNode)
    assert isinstance(entries["tags"], ListNode)

    blocks = entries["blocks"]
    assert isinstance(blocks, ListNode)
    hero, content = blocks.items
    assert isinstance(hero, Block) and hero.template == "hero"
    assert isinstance(content, Block) and content.template == "content"
    assert isinstance(dict(content.entries)["body"], RichText)


def test_translation_map_rekeys_by_path(page_document: dict[str, Any], page_fields) -> None:
    units = collect(page_document, page_fields)

    mapping = translation_map(units, {0: "A", 3: "B"})

    assert mapping == {"title": "A", "blocks[0].headline": "B"}
