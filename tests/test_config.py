"""Configuration loading tests."""

import pytest

from code_search_mcp.config import SearchConfig, get_search_config, reset_config


@pytest.mark.unit
class TestSearchConfig:
    """Environment driven configuration."""

    def test_defaults(self, monkeypatch):
        for key in (
            "CODE_SEARCH_INDEX_CACHE_SECONDS",
            "CODE_SEARCH_BATCH_SIZE",
            "CODE_SEARCH_LARGE_CORPUS_THRESHOLD",
            "CODE_SEARCH_RECENT_HOURS",
            "CODE_SEARCH_SUBPROCESS_TIMEOUT",
            "CODE_SEARCH_IGNORE_FILE",
            "CODE_SEARCH_LOG_LEVEL",
            "CODE_SEARCH_MAX_CACHED_FILES",
        ):
            monkeypatch.delenv(key, raising=False)

        config = SearchConfig()

        assert config.index_cache_seconds == 60
        assert config.batch_size == 10
        assert config.large_corpus_threshold == 20000
        assert config.recent_hours == 24
        assert config.subprocess_timeout == 30
        assert config.ignore_file == ".snowignore"
        assert config.log_level == "ERROR"
        assert 100 <= config.max_cached_files <= 5000, "Cache size should be clamped to 100-5000"

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CODE_SEARCH_BATCH_SIZE", "4")
        monkeypatch.setenv("CODE_SEARCH_RECENT_HOURS", "1.5")
        monkeypatch.setenv("CODE_SEARCH_IGNORE_FILE", ".myignore")
        monkeypatch.setenv("CODE_SEARCH_LOG_LEVEL", "debug")
        monkeypatch.setenv("CODE_SEARCH_ROOT", str(tmp_path))

        config = SearchConfig()

        assert config.batch_size == 4
        assert config.get_recent_window_seconds() == 1.5 * 3600
        assert config.ignore_file == ".myignore"
        assert config.log_level == "DEBUG"
        assert config.root == str(tmp_path)

    def test_malformed_values_fall_back_to_defaults(self, monkeypatch):
        monkeypatch.setenv("CODE_SEARCH_BATCH_SIZE", "many")
        monkeypatch.setenv("CODE_SEARCH_INDEX_CACHE_SECONDS", "soon")

        config = SearchConfig()

        assert config.batch_size == SearchConfig.DEFAULT_BATCH_SIZE
        assert config.index_cache_seconds == SearchConfig.DEFAULT_INDEX_CACHE_SECONDS

    def test_invalid_values_rejected(self, monkeypatch):
        monkeypatch.setenv("CODE_SEARCH_BATCH_SIZE", "0")

        with pytest.raises(ValueError, match="batch_size"):
            SearchConfig()

    def test_global_instance_and_reset(self, monkeypatch):
        first = get_search_config()
        assert get_search_config() is first

        monkeypatch.setenv("CODE_SEARCH_BATCH_SIZE", "3")
        reset_config()

        second = get_search_config()
        assert second is not first
        assert second.batch_size == 3
