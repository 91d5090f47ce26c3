"""Tests for environment configuration, seed loading and item models."""

import json

import pytest

from gmax_search.config import SearchConfig, get_search_config
from gmax_search.search import FuzzySearchEngine
from gmax_search.search.models import SearchableItem
from gmax_search.search.seed import load_seed_items


# ── Configuration ───────────────────────────────────────────────────


def test_defaults(monkeypatch):
    for name in ("GMAX_SEARCH_DEFAULT_LIMIT", "GMAX_SEARCH_FUZZY_THRESHOLD", "GMAX_SEARCH_SEED_PATH"):
        monkeypatch.delenv(name, raising=False)

    config = get_search_config()

    assert config.default_limit == 50
    assert config.max_suggestions == 8
    assert config.fuzzy_threshold == 0.7
    assert config.field_weights.title == 3.0
    assert config.seed_path is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("GMAX_SEARCH_DEFAULT_LIMIT", "7")
    monkeypatch.setenv("GMAX_SEARCH_FUZZY_THRESHOLD", "0.8")
    monkeypatch.setenv("GMAX_SEARCH_MAX_HISTORY", "-5")
    monkeypatch.setenv("GMAX_SEARCH_SEED_PATH", "/tmp/items.json")

    config = get_search_config()

    assert config.default_limit == 7
    assert config.fuzzy_threshold == 0.8
    assert config.max_history == 1
    assert config.seed_path == "/tmp/items.json"


def test_invalid_values_fall_back(monkeypatch):
    monkeypatch.setenv("GMAX_SEARCH_MAX_SUGGESTIONS", "lots")
    monkeypatch.setenv("GMAX_SEARCH_CORRECTION_MIN", "")

    config = get_search_config()

    assert config.max_suggestions == 8
    assert config.correction_min_similarity == 0.6


# ── Seed catalogue ──────────────────────────────────────────────────


def test_bundled_seed():
    items = load_seed_items()

    assert len(items) == 11
    assert items[0].id == "engel-garcia-gomez-bio"
    assert items[0].search_weight == 10


def test_seed_items_are_fresh_copies():
    first = load_seed_items()
    first[0].tags.append("mutated")
    first[0].metadata["featured"] = "mutated"

    second = load_seed_items()
    assert "mutated" not in second[0].tags
    assert second[0].metadata.get("featured") != "mutated"


def test_custom_seed_file(tmp_path):
    path = tmp_path / "items.json"
    path.write_text(
        json.dumps([{"id": "one", "title": "Kettlebell Basics", "searchWeight": 3}]),
        encoding="utf-8",
    )

    engine = FuzzySearchEngine(config=SearchConfig(seed_path=str(path)))

    assert engine.get_document_count() == 1
    assert engine.get_item("one").search_weight == 3


def test_seed_file_must_hold_a_list(tmp_path):
    path = tmp_path / "items.json"
    path.write_text(json.dumps({"id": "one"}), encoding="utf-8")

    with pytest.raises(ValueError, match="list of objects"):
        load_seed_items(str(path))


def test_missing_seed_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_seed_items(str(tmp_path / "absent.json"))


# ── SearchableItem ──────────────────────────────────────────────────


class TestSearchableItem:
    def test_from_dict_rejects_unknown_fields(self):
        with pytest.raises(ValueError, match="Unknown item fields: colour"):
            SearchableItem.from_dict({"id": "x", "title": "t", "colour": "red"})

    def test_from_dict_requires_id_and_title(self):
        with pytest.raises(ValueError, match="require"):
            SearchableItem.from_dict({"id": "x"})

    def test_effective_weight(self):
        assert SearchableItem(id="x", title="t").effective_weight == 1
        assert SearchableItem(id="x", title="t", search_weight=4).effective_weight == 4

    def test_to_dict_round_trips_through_from_dict(self):
        item = SearchableItem(id="x", title="t", tags=["a"], metadata={"featured": True}, search_weight=2)
        assert SearchableItem.from_dict(item.to_dict()) == item
