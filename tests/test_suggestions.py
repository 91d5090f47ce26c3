"""Tests for suggestion generation and query telemetry."""

import math

import pytest

from gmax_search.search.models import SuggestionType
from gmax_search.search.suggestions import SuggestionGenerator, word_overlap
from gmax_search.search.telemetry import QueryTelemetry


@pytest.fixture
def telemetry():
    return QueryTelemetry()


@pytest.fixture
def generator(telemetry):
    return SuggestionGenerator(telemetry)


def _by_text(suggestions):
    return {s.text: s for s in suggestions}


# ── SuggestionGenerator ─────────────────────────────────────────────


class TestSuggestions:
    def test_empty_query(self, generator):
        assert generator.suggest("", no_results=True) == []

    def test_token_correction(self, generator):
        suggestions = _by_text(generator.suggest("nutrtion", no_results=False))

        correction = suggestions["nutrition"]
        assert correction.type is SuggestionType.CORRECTION
        assert correction.score == pytest.approx(8 / 9 * 5)
        assert correction.original_query == "nutrtion"

    def test_correction_replaces_only_the_misspelled_token(self, generator):
        texts = [s.text for s in generator.suggest("programme nutrtion", no_results=False)]
        assert "programme nutrition" in texts

    def test_exact_terms_are_not_corrections(self, generator):
        suggestions = generator.suggest("coaching", no_results=False)
        assert not any(s.type is SuggestionType.CORRECTION and s.text == "coaching" for s in suggestions)

    def test_phrase_correction_proposes_full_term(self, generator):
        suggestions = _by_text(generator.suggest("engle garcia", no_results=False))

        assert suggestions["engel garcia gomez"].type is SuggestionType.CORRECTION
        assert suggestions["engel garcia gomez"].score == pytest.approx(10 / 12 * 5)

    def test_completion(self, generator):
        suggestions = _by_text(generator.suggest("coaching", no_results=False))

        assert suggestions["coaching personnel"].type is SuggestionType.COMPLETION
        assert suggestions["coaching personnel"].score == 3.0

    def test_similar_past_queries(self, generator, telemetry):
        telemetry.track("coaching groupe")

        suggestions = _by_text(generator.suggest("coaching", no_results=False))

        similar = suggestions["coaching groupe"]
        assert similar.type is SuggestionType.SIMILAR
        assert similar.score == pytest.approx(2 / 3 * math.log(2))

    def test_query_itself_is_not_suggested_as_similar(self, generator, telemetry):
        telemetry.track("musculation")
        texts = [s.text for s in generator.suggest("musculation", no_results=False)]
        assert "musculation" not in texts

    def test_popular_only_when_no_results(self, generator):
        with_results = generator.suggest("zzzz", no_results=False)
        without_results = generator.suggest("zzzz", no_results=True)

        assert with_results == []
        assert "transformation physique" in [s.text for s in without_results]
        assert all(s.type is SuggestionType.SIMILAR for s in without_results)
        assert all(s.score == 2.0 for s in without_results)

    def test_ranked_capped_and_deduplicated(self, generator, telemetry):
        for query in ("g-maxing nutrition", "g-maxing méthode", "g-maxing force", "g-maxing avis"):
            telemetry.track(query)

        suggestions = generator.suggest("g-maxing", no_results=True)
        texts = [s.text for s in suggestions]

        assert len(suggestions) == 8
        assert len(texts) == len(set(texts))
        scores = [s.score for s in suggestions]
        assert scores == sorted(scores, reverse=True)

    def test_duplicate_text_keeps_best_score(self, generator, telemetry):
        telemetry.track("coaching personnel")
        suggestions = [s for s in generator.suggest("coaching", no_results=False) if s.text == "coaching personnel"]

        assert len(suggestions) == 1
        assert suggestions[0].type is SuggestionType.COMPLETION

    def test_max_suggestions_configurable(self, telemetry):
        generator = SuggestionGenerator(telemetry, max_suggestions=2)
        assert len(generator.suggest("zzzz", no_results=True)) == 2


def test_word_overlap():
    assert word_overlap(["coaching"], ["coaching", "personnel"]) == pytest.approx(2 / 3)
    assert word_overlap(["coach"], ["coaching"]) == 1.0
    assert word_overlap([], ["coaching"]) == 0.0
    assert word_overlap(["force"], ["nutrition"]) == 0.0


# ── QueryTelemetry ──────────────────────────────────────────────────


class TestTelemetry:
    def test_history_is_capped_oldest_first(self):
        telemetry = QueryTelemetry(max_history=3)
        for query in ("a1", "a2", "a3", "a4"):
            telemetry.track(query)

        assert telemetry.history == ["a2", "a3", "a4"]
        assert telemetry.total_queries == 3
        # frequencies are not evicted with history
        assert telemetry.frequency("a1") == 1

    def test_response_time_window(self):
        telemetry = QueryTelemetry(max_samples=2)
        for elapsed in (100.0, 2.0, 4.0):
            telemetry.record_response_time(elapsed)

        assert telemetry.average_response_time == pytest.approx(3.0)

    def test_average_without_samples(self, telemetry):
        assert telemetry.average_response_time == 0.0

    def test_top_queries_ties_keep_first_seen_order(self, telemetry):
        for query in ("force", "nutrition", "force", "coaching", "nutrition"):
            telemetry.track(query)

        assert telemetry.top_queries() == [("force", 2), ("nutrition", 2), ("coaching", 1)]
        assert telemetry.top_queries(1) == [("force", 2)]

    def test_no_results_counts(self, telemetry):
        telemetry.track_no_results("xyz")
        telemetry.track_no_results("xyz")

        assert telemetry.no_results_count("xyz") == 2
        assert telemetry.top_no_results_queries() == [("xyz", 2)]

    def test_clear(self, telemetry):
        telemetry.track("force")
        telemetry.track_no_results("xyz")
        telemetry.record_response_time(1.0)

        telemetry.clear()

        assert telemetry.history == []
        assert telemetry.frequency("force") == 0
        assert telemetry.no_results_count("xyz") == 0
        assert telemetry.average_response_time == 0.0
