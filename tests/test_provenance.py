# tests/test_provenance.py
"""Tests for machine-translation provenance tracking."""

from __future__ import annotations

import copy
from typing import Any

import pytest

from translate_cms_ai.document import parse_path
from translate_cms_ai.provenance import (
    FieldChangedEvent,
    ProvenanceTracker,
    attach_provenance,
    provenance_of,
)


@pytest.fixture
def tracker() -> ProvenanceTracker:
    return ProvenanceTracker()


@pytest.fixture
def translated() -> dict[str, Any]:
    return {
        "title": "Bonjour",
        "blocks": [
            {
                "_template": "hero",
                "headline": "Salut",
                "tagline": "Ça va",
                "_autoTranslatedFields": ["headline", "tagline"],
            },
            {
                "_template": "hero",
                "headline": "Encore",
                "_autoTranslatedFields": ["headline"],
            },
        ],
    }


def test_edit_removes_only_edited_field(tracker: ProvenanceTracker, translated) -> None:
    edited = tracker.handle(translated, FieldChangedEvent("blocks[0].headline", "Coucou"))

    assert edited["blocks"][0]["headline"] == "Coucou"
    assert edited["blocks"][0]["_autoTranslatedFields"] == ["tagline"]
    assert edited["blocks"][1]["_autoTranslatedFields"] == ["headline"]


def test_edit_does_not_mutate_input(tracker: ProvenanceTracker, translated) -> None:
    original = copy.deepcopy(translated)

    tracker.handle(translated, FieldChangedEvent("blocks[0].tagline", "Bien"))

    assert translated == original


def test_edit_of_untracked_field(tracker: ProvenanceTracker, translated) -> None:
    edited = tracker.handle(translated, FieldChangedEvent("title", "Salut à tous"))

    assert edited["title"] == "Salut à tous"
    assert edited["blocks"][0]["_autoTranslatedFields"] == ["headline", "tagline"]


def test_repeated_edit_is_harmless(tracker: ProvenanceTracker, translated) -> None:
    once = tracker.handle(translated, FieldChangedEvent("blocks[1].headline", "A"))
    twice = tracker.handle(once, FieldChangedEvent("blocks[1].headline", "B"))

    assert twice["blocks"][1]["headline"] == "B"
    assert twice["blocks"][1]["_autoTranslatedFields"] == []


@pytest.mark.parametrize("path", ["blocks[5].headline", "blocks[0].missing", "nothing"])
def test_missing_field(tracker: ProvenanceTracker, translated, path: str) -> None:
    with pytest.raises(KeyError):
        tracker.handle(translated, FieldChangedEvent(path, "x"))


@pytest.mark.parametrize(
    "path", ["blocks[0]._autoTranslatedFields", "blocks[0]._template", "blocks[0]", "a..b"]
)
def test_non_editable_path(tracker: ProvenanceTracker, translated, path: str) -> None:
    with pytest.raises(ValueError):
        tracker.handle(translated, FieldChangedEvent(path, "x"))


def test_is_machine_translated(tracker: ProvenanceTracker, translated) -> None:
    assert tracker.is_machine_translated(translated, "blocks[0].headline")
    assert not tracker.is_machine_translated(translated, "title")
    assert not tracker.is_machine_translated(translated, "blocks[9].headline")


def test_pending_review(tracker: ProvenanceTracker, translated) -> None:
    assert tracker.pending_review(translated) == [
        "blocks[0].headline",
        "blocks[0].tagline",
        "blocks[1].headline",
    ]


def test_attach_and_read() -> None:
    element = attach_provenance({"headline": "x"}, ["headline"])

    assert provenance_of(element) == ["headline"]
    assert provenance_of({"headline": "x"}) == []
    assert provenance_of({"_autoTranslatedFields": "headline"}) == []
    assert provenance_of("not an element") == []


def test_parse_path() -> None:
    assert parse_path("blocks[0].actions[12].label") == ["blocks", 0, "actions", 12, "label"]
    with pytest.raises(ValueError):
        parse_path("")
