"""End-to-end tests for FuzzySearchEngine."""

from datetime import date

import pytest

from gmax_search.search import FuzzySearchEngine, SearchableItem, SearchQuery, SortMode
from gmax_search.search.models import SuggestionType

BIO_TITLE = "Engel Garcia Gomez - Expert G-Maxing"


@pytest.fixture
def bio_engine(config):
    return FuzzySearchEngine(
        items=[
            SearchableItem(
                id="bio",
                title=BIO_TITLE,
                tags=["engel garcia gomez", "coach"],
                search_weight=10,
            )
        ],
        config=config,
    )


def _ids(response):
    return [result.item.id for result in response.results]


# ── Core search scenarios ───────────────────────────────────────────


def test_exact_name_match_is_highlighted(bio_engine):
    response = bio_engine.search(SearchQuery(text="engel garcia gomez"))

    assert _ids(response) == ["bio"]
    result = response.results[0]
    assert result.score > 0
    assert "<mark>Engel</mark>" in result.highlighted_title
    assert "title" in [match.field for match in result.matches]


def test_typo_produces_correction_suggestion(bio_engine):
    response = bio_engine.search("engle garcia")

    corrections = [s for s in response.suggestions if s.type is SuggestionType.CORRECTION]
    assert any("engel" in s.text for s in corrections)
    assert all(s.original_query == "engle garcia" for s in response.suggestions)


def test_zero_results_tracks_query_and_offers_popular(bio_engine):
    response = bio_engine.search("xyzzyq")

    assert response.results == []
    assert response.stats.total == 0
    assert response.stats.total_matches == 0
    assert bio_engine.telemetry.no_results_count("xyzzyq") == 1
    assert "engel garcia gomez" in [s.text for s in response.suggestions]
    assert len(response.suggestions) <= 8


def test_punctuation_only_query_is_not_tracked(bio_engine):
    response = bio_engine.search("?!  ")

    assert response.results == []
    assert response.suggestions == []
    assert bio_engine.get_search_stats().total_queries == 0


def test_query_is_normalized_before_tracking(bio_engine):
    bio_engine.search("  Engel,   GARCIA!  ")
    assert bio_engine.telemetry.history == ["engel garcia"]


def test_seed_catalogue_ranks_bio_first(seed_engine):
    response = seed_engine.search("engel garcia gomez")

    assert _ids(response)[0] == "engel-garcia-gomez-bio"
    assert "client-testimonials" in _ids(response)


def test_results_have_positive_scores_in_descending_order(seed_engine):
    response = seed_engine.search("g-maxing nutrition")

    scores = [result.score for result in response.results]
    assert scores
    assert all(score > 0 for score in scores)
    assert scores == sorted(scores, reverse=True)


def test_search_is_deterministic(seed_engine):
    first = seed_engine.search("coaching")
    second = seed_engine.search("coaching")

    assert _ids(first) == _ids(second)
    assert [r.score for r in first.results] == [r.score for r in second.results]


# ── Pagination ──────────────────────────────────────────────────────


@pytest.mark.parametrize("limit", [0, 1, 3, 50])
@pytest.mark.parametrize("offset", [0, 2, 5, 100])
def test_page_size_law(seed_engine, limit, offset):
    total = seed_engine.search(SearchQuery(text="g-maxing", limit=100)).stats.total_matches
    page = seed_engine.search(SearchQuery(text="g-maxing", limit=limit, offset=offset))

    assert len(page.results) == min(limit, max(0, total - offset))
    assert page.stats.total == len(page.results)
    assert page.stats.total_matches == total


def test_pages_are_contiguous(seed_engine):
    everything = _ids(seed_engine.search(SearchQuery(text="g-maxing", limit=100)))
    first = _ids(seed_engine.search(SearchQuery(text="g-maxing", limit=4)))
    second = _ids(seed_engine.search(SearchQuery(text="g-maxing", limit=4, offset=4)))

    assert first + second == everything[:8]


def test_default_limit_from_config(config):
    items = [SearchableItem(id=str(n), title=f"gmax {n}") for n in range(60)]
    engine = FuzzySearchEngine(items=items, config=config)

    response = engine.search("gmax")
    assert response.stats.total == 50
    assert response.stats.total_matches == 60


def test_negative_offset_is_clamped(seed_engine):
    assert _ids(seed_engine.search(SearchQuery(text="coaching", offset=-3))) == _ids(
        seed_engine.search("coaching")
    )


def test_offset_past_end_still_counts_as_matched(seed_engine):
    response = seed_engine.search(SearchQuery(text="coaching", offset=1000))

    assert response.results == []
    assert response.stats.total_matches > 0
    assert seed_engine.telemetry.no_results_count("coaching") == 0


# ── Sorting ─────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "sort_by, expected",
    [
        (SortMode.RELEVANCE, ["b", "a", "c"]),
        ("popularity", ["b", "a", "c"]),
        ("date", ["c", "a", "b"]),
        ("alphabetical", ["b", "a", "c"]),
    ],
)
def test_sort_modes(sortable_engine, sort_by, expected):
    assert _ids(sortable_engine.search(SearchQuery(text="gm", sort_by=sort_by))) == expected


def test_relevance_scores_follow_item_weight(sortable_engine):
    scores = {r.item.id: r.score for r in sortable_engine.search("gm").results}
    # tags: word 5 + partial 3, x1.3 prefix, x2.5 field weight
    assert scores["c"] == pytest.approx(8 * 1.3 * 2.5)
    assert scores["a"] == pytest.approx(scores["c"] * 2)
    assert scores["b"] == pytest.approx(scores["c"] * 5)


def test_unknown_sort_mode_rejected():
    with pytest.raises(ValueError, match="Unknown sort mode"):
        SearchQuery(text="gm", sort_by="newest")


# ── Filters ─────────────────────────────────────────────────────────


def test_category_filter(seed_engine):
    response = seed_engine.search(SearchQuery(text="g-maxing", category="training", limit=50))

    assert response.results
    assert {r.item.category for r in response.results} == {"training"}


def test_tag_filter_is_case_insensitive_or(sortable_engine):
    assert len(sortable_engine.search(SearchQuery(text="gm", tags=["GM", "zzz"])).results) == 3
    assert sortable_engine.search(SearchQuery(text="gm", tags=["zzz"])).results == []


def test_date_range_filter(sortable_engine):
    since = sortable_engine.search(SearchQuery(text="gm", date_from="2024-06-01"))
    assert _ids(since) == ["c"]

    until = sortable_engine.search(SearchQuery(text="gm", date_to=date(2024, 1, 1)))
    assert _ids(until) == ["a"]


@pytest.mark.parametrize("upper", [date(2024, 3, 1), "2024-03-01"])
def test_bare_date_upper_bound_covers_whole_day(config, upper):
    engine = FuzzySearchEngine(
        items=[SearchableItem(id="a", title="gm noon", metadata={"date": "2024-03-01T12:00:00"})],
        config=config,
    )

    assert _ids(engine.search(SearchQuery(text="gm", date_to=upper))) == ["a"]
    assert _ids(engine.search(SearchQuery(text="gm", date_to="2024-03-01T11:00:00"))) == []


def test_invalid_date_bound_raises(sortable_engine):
    with pytest.raises(ValueError, match="Invalid date bound"):
        sortable_engine.search(SearchQuery(text="gm", date_from="not a date"))


# ── Index management ────────────────────────────────────────────────


def test_add_then_remove_restores_results(seed_engine):
    before = _ids(seed_engine.search("kettlebell"))

    duplicate = seed_engine.add_item(
        {"id": "kettlebell", "title": "Kettlebell G-Maxing", "category": "training", "searchWeight": 5}
    )
    assert duplicate is False
    assert "kettlebell" in _ids(seed_engine.search("kettlebell"))

    assert seed_engine.remove_item("kettlebell") is True
    assert _ids(seed_engine.search("kettlebell")) == before


def test_duplicate_ids_are_appended(bio_engine):
    assert bio_engine.add_item(SearchableItem(id="bio", title="Second bio")) is True
    assert bio_engine.get_document_count() == 2

    bio_engine.remove_item("bio")
    assert bio_engine.get_item("bio").title == "Second bio"


def test_remove_unknown_id_is_noop(bio_engine):
    assert bio_engine.remove_item("missing") is False
    assert bio_engine.get_document_count() == 1


def test_update_item_merges_fields(bio_engine):
    assert bio_engine.update_item("bio", category="about", search_weight=2) is True

    item = bio_engine.get_item("bio")
    assert item.category == "about"
    assert item.search_weight == 2
    assert item.title == BIO_TITLE


@pytest.mark.parametrize("field", ["title", "id"])
def test_update_cannot_blank_id_or_title(bio_engine, field):
    with pytest.raises(ValueError, match="cannot be empty"):
        bio_engine.update_item("bio", {field: None})

    assert bio_engine.get_item("bio").title == BIO_TITLE


def test_update_unknown_id_is_noop(bio_engine):
    assert bio_engine.update_item("missing", {"title": "x"}) is False


def test_update_unknown_field_raises(bio_engine):
    with pytest.raises(ValueError, match="Unknown item fields"):
        bio_engine.update_item("bio", colour="red")


def test_rebuild_restores_fixed_items(sortable_engine):
    sortable_engine.update_item("a", title="changed", tags=["other"])
    assert sortable_engine.get_item("a").title == "changed"

    sortable_engine.rebuild()

    assert sortable_engine.get_item("a").title == "Beta"
    assert sortable_engine.get_item("a").tags == ["gm"]


def test_rebuild_discards_changes(seed_engine):
    count = seed_engine.get_document_count()
    seed_engine.remove_item("personal-coaching")
    assert seed_engine.get_document_count() == count - 1

    seed_engine.rebuild()
    assert seed_engine.is_built()
    assert seed_engine.get_document_count() == count
    assert seed_engine.get_item("personal-coaching") is not None


# ── Autocomplete and analytics ──────────────────────────────────────


def test_autocomplete(seed_engine):
    suggestions = seed_engine.get_autocomplete_suggestions("g-max")

    assert 0 < len(suggestions) <= 5
    assert all("g-max" in s.lower() for s in suggestions)
    assert seed_engine.get_autocomplete_suggestions("g") == []


def test_autocomplete_includes_history(bio_engine):
    bio_engine.search("coach rapide")
    assert bio_engine.get_autocomplete_suggestions("rapide") == ["coach rapide"]


def test_stats_and_clear_history(seed_engine):
    seed_engine.search("coaching")
    seed_engine.search("coaching")
    seed_engine.search("xyzzyq")

    stats = seed_engine.get_search_stats()
    assert stats.total_queries == 3
    assert stats.popular_queries[0].query == "coaching"
    assert stats.popular_queries[0].count == 2
    assert [q.query for q in stats.no_results_queries] == ["xyzzyq"]
    assert stats.avg_response_time >= 0
    assert stats.category_distribution["training"] == 3

    seed_engine.clear_history()
    cleared = seed_engine.get_search_stats()
    assert cleared.total_queries == 0
    assert cleared.popular_queries == []
    assert cleared.no_results_queries == []
    assert cleared.avg_response_time == 0.0
    assert cleared.category_distribution == stats.category_distribution
