"""Fuzzy symbol index tests."""

import pytest

from code_search_mcp.core.fuzzy import (
    ALGORITHM_FAST,
    ALGORITHM_PRECISE,
    FuzzySymbolIndex,
    greedy_positions,
    word_boundaries,
)

NAMES = [
    "setFileContent",
    "gifCache",
    "getFileContent",
    "getConfig",
    "format_path",
    "FileReader",
]


@pytest.mark.unit
class TestMatchingHelpers:

    def test_greedy_positions(self):
        assert greedy_positions("gfc", "getfilecontent") == [0, 3, 7]
        assert greedy_positions("xyz", "getfilecontent") is None

    def test_word_boundaries(self):
        assert word_boundaries("getFileContent") == {0, 3, 7}
        assert word_boundaries("format_path") == {0, 7}
        assert word_boundaries("HTTPServer") == {0, 4}


@pytest.mark.unit
class TestFuzzySymbolIndex:

    def test_algorithm_selected_by_corpus_size(self):
        assert FuzzySymbolIndex(NAMES).algorithm == ALGORITHM_PRECISE
        assert FuzzySymbolIndex(NAMES, large_corpus_threshold=3).algorithm == ALGORITHM_FAST

    def test_names_are_deduplicated(self):
        index = FuzzySymbolIndex(["a", "b", "a"])
        assert index.names == ["a", "b"]
        assert len(index) == 2

    def test_camel_case_initials_rank_first(self):
        results = FuzzySymbolIndex(NAMES).find("gfc")

        assert results[0] == "getFileContent", f"Word-start alignment should win, got {results}"
        assert "getConfig" not in results, "Names without the subsequence must not match"

    def test_underscore_boundaries(self):
        assert FuzzySymbolIndex(NAMES).find("fp")[0] == "format_path"

    @pytest.mark.parametrize("threshold", [20000, 1])
    def test_exact_match_ranks_first(self, threshold):
        index = FuzzySymbolIndex(["fooBarBaz", "foobar", "fooBar", "barfoo"], large_corpus_threshold=threshold)

        assert index.find("fooBar")[0] == "fooBar"
        assert index.find("foobar")[0] == "foobar"

    def test_case_insensitive_exact_match_beats_longer_names(self):
        index = FuzzySymbolIndex(["configLoader", "Config"])
        assert index.find("config")[0] == "Config"

    def test_only_subsequences_match(self):
        assert FuzzySymbolIndex(NAMES).find("zzz") == []

    def test_empty_query_returns_nothing(self):
        index = FuzzySymbolIndex(NAMES)
        assert index.find("") == []
        assert index.find("   ") == []
