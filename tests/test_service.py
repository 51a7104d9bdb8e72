"""Code search service tests - symbol search, definitions, outlines and stats."""

from unittest.mock import Mock

import pytest

from code_search_mcp.core.errors import FileOutlineError
from code_search_mcp.core.models import ReferenceType, SymbolType
from code_search_mcp.core.service import CodeSearchService, manual_match_score


@pytest.fixture
def service(ts_project, search_config):
    return CodeSearchService(str(ts_project), config=search_config)


@pytest.mark.unit
class TestManualScoring:

    @pytest.mark.parametrize("name,query,score", [
        ("getFileContent", "getfilecontent", 100),
        ("getFileContent", "getFile", 80),
        ("getFileContent", "content", 60),
        ("getFileContent", "gfc", 40),
        ("getFileContent", "gtf", 60),
        ("getFileContent", "xyz", 0),
    ])
    def test_score_tiers(self, name, query, score):
        assert manual_match_score(name, query) == score


class TestEndToEnd:

    def test_end_to_end_scenario(self, service):
        result = service.search_symbols("gfc")
        top_names = [symbol.name for symbol in result.symbols[:3]]
        assert "getFileContent" in top_names, f"Expected camel-initial match in {top_names}"
        assert result.total_results == len(result.symbols)
        assert result.search_time >= 0

        definition = service.find_definition("getFileContent")
        assert definition is not None
        assert definition.type == SymbolType.FUNCTION

        matches = service.text_search("getFileContent", "*.ts")
        assert len(matches) == 1, f"node_modules must be excluded, got {matches}"
        match = matches[0]
        assert (match.file_path, match.line, match.column) == ("a.ts", 1, 10)
        assert match.content == "function getFileContent() {}"


@pytest.mark.unit
class TestSymbolSearch:

    def test_exact_name_ranks_first_with_fuzzy_index(self, service):
        service.build_index()
        assert service.state.fuzzy_index is not None

        for name in set(service.state.symbol_names()):
            top = service.search_symbols(name).symbols[0]
            assert top.name == name, f"Searching {name!r} returned {top.name!r} first"

    def test_exact_name_ranks_first_with_manual_scoring(self, service):
        service.build_index()
        service.state.fuzzy_index = None

        for name in set(service.state.symbol_names()):
            top = service.search_symbols(name).symbols[0]
            assert top.name == name, f"Searching {name!r} returned {top.name!r} first"

    def test_fuzzy_failure_falls_back_to_manual_scoring(self, service):
        service.build_index()
        service.state.fuzzy_index = Mock(find=Mock(side_effect=RuntimeError("index broken")))

        result = service.search_symbols("gfc")

        assert [s.name for s in result.symbols] == ["getFileContent"]

    def test_type_and_language_filters(self, service):
        interfaces = service.search_symbols("Config", symbol_type="interface").symbols
        assert [(s.name, s.type) for s in interfaces] == [("Config", SymbolType.INTERFACE)]

        python_only = service.search_symbols("path", language="python").symbols
        assert python_only
        assert all(s.language == "python" for s in python_only)

    def test_max_results(self, service):
        assert len(service.search_symbols("o", max_results=2).symbols) == 2

    def test_no_match(self, service):
        result = service.search_symbols("qqqq")
        assert result.symbols == []
        assert result.total_results == 0

    @pytest.mark.parametrize("query", ["", "   "])
    def test_blank_query_matches_nothing_on_both_paths(self, service, query):
        service.build_index()
        assert service.search_symbols(query).symbols == []

        service.state.fuzzy_index = None
        result = service.search_symbols(query)

        assert result.symbols == []
        assert result.total_results == 0


@pytest.mark.unit
class TestDefinitionsAndReferences:

    def test_only_functions_classes_and_variables_are_definitions(self, service):
        assert service.find_definition("Config") is None, "Interfaces are not definition targets"
        assert service.find_definition("ConfigLoader").type == SymbolType.CLASS
        assert service.find_definition("missingSymbol") is None

    def test_context_file_searched_first(self, service, ts_project):
        (ts_project / "c.ts").write_text("const getFileContent = 1;\n")

        assert service.find_definition("getFileContent").file_path == "a.ts"

        in_context = service.find_definition("getFileContent", context_file="c.ts")
        assert in_context.file_path == "c.ts"
        assert in_context.type == SymbolType.VARIABLE

    def test_find_references(self, service):
        references = service.find_references("loadConfig")

        by_line = {(r.file_path, r.line): r.reference_type for r in references}
        assert by_line[("b.ts", 9)] == ReferenceType.USAGE
        assert by_line[("b.ts", 13)] == ReferenceType.DEFINITION


@pytest.mark.unit
class TestFileOutline:

    def test_outline_of_indexed_file(self, service):
        names = [(s.name, s.type) for s in service.get_file_outline("b.ts")]

        assert ("Config", SymbolType.INTERFACE) in names
        assert ("ConfigLoader", SymbolType.CLASS) in names
        assert ("loadConfig", SymbolType.FUNCTION) in names

    def test_outline_works_for_excluded_file(self, service):
        symbols = service.get_file_outline("node_modules/lib/index.ts")

        assert [s.name for s in symbols] == ["getFileContent", "vendoredHelper"]
        assert symbols[0].file_path == "node_modules/lib/index.ts"

    def test_outline_failure_names_the_path(self, service):
        with pytest.raises(FileOutlineError, match="missing.ts"):
            service.get_file_outline("missing.ts")


@pytest.mark.unit
class TestSemanticSearch:

    def test_definition_filter(self, service):
        result = service.semantic_search("Config", "definition")

        assert result.symbols
        assert all(s.type in (SymbolType.FUNCTION, SymbolType.CLASS, SymbolType.INTERFACE) for s in result.symbols)
        assert result.references == []

    def test_usage_returns_references_only(self, service):
        result = service.semantic_search("loadConfig", "usage")

        assert result.symbols == []
        assert result.references
        assert result.total_results == len(result.references)

    def test_implementation_filter(self, service):
        result = service.semantic_search("Config", "implementation")

        assert all(s.type in (SymbolType.FUNCTION, SymbolType.METHOD, SymbolType.CLASS) for s in result.symbols)

    def test_all_combines_symbols_and_references(self, service):
        result = service.semantic_search("loadConfig")

        assert result.symbols
        assert result.references
        assert result.total_results == len(result.symbols) + len(result.references)

    def test_unknown_search_type_rejected(self, service):
        with pytest.raises(ValueError, match="Invalid search type"):
            service.semantic_search("Config", "everything")


@pytest.mark.unit
class TestStatsAndCache:

    def test_stats_before_indexing(self, service):
        stats = service.get_index_stats()

        assert stats.total_files == 0
        assert stats.total_symbols == 0
        assert stats.cache_age == 0

    def test_stats_after_indexing(self, service):
        service.build_index()
        stats = service.get_index_stats()

        assert stats.total_files == 3
        assert set(stats.language_breakdown) == {"typescript", "python"}
        assert sum(stats.language_breakdown.values()) == stats.total_symbols
        assert stats.cache_age >= 0

    def test_clear_cache(self, service):
        service.build_index()

        service.clear_cache()

        stats = service.get_index_stats()
        assert stats.total_files == 0
        assert stats.cache_age == 0
        assert service.state.fuzzy_index is None
        assert not service.state.mod_times

        assert service.search_symbols("gfc").symbols, "Next search re-indexes from scratch"
