"""File content cache tests."""

import os

import pytest

from code_search_mcp.core.cache import FileContentCache


@pytest.mark.unit
class TestFileContentCache:

    def test_unchanged_file_served_from_cache(self, tmp_path, set_age):
        target = tmp_path / "a.ts"
        target.write_text("one")
        set_age(target, 100)
        cache = FileContentCache(max_size=10)

        assert cache.read(str(target)) == "one"
        assert cache.read(str(target)) == "one"

        stats = cache.get_stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1

    def test_newer_modification_time_rereads(self, tmp_path, set_age):
        target = tmp_path / "a.ts"
        target.write_text("one")
        set_age(target, 100)
        cache = FileContentCache(max_size=10)
        cache.read(str(target))

        target.write_text("two")
        set_age(target, 10)

        assert cache.read(str(target)) == "two"
        assert cache.get(str(target)).content == "two"

    def test_least_recently_used_entry_evicted(self, tmp_path):
        paths = []
        for i in range(3):
            path = tmp_path / f"f{i}.py"
            path.write_text(str(i))
            paths.append(str(path))

        cache = FileContentCache(max_size=2)
        cache.read(paths[0])
        cache.read(paths[1])
        cache.read(paths[0])
        cache.read(paths[2])

        assert paths[0] in cache
        assert paths[1] not in cache, "Least recently used entry should be evicted"
        assert paths[2] in cache
        assert cache.get_stats()["evictions"] == 1

    def test_invalidate_and_clear(self, tmp_path):
        target = tmp_path / "a.ts"
        target.write_text("x")
        cache = FileContentCache(max_size=10)
        cache.read(str(target))

        cache.invalidate(str(target))
        assert len(cache) == 0

        cache.read(str(target))
        cache.clear()
        assert len(cache) == 0

    def test_missing_file_raises(self, tmp_path):
        cache = FileContentCache(max_size=10)

        with pytest.raises(OSError):
            cache.read(os.path.join(str(tmp_path), "missing.ts"))

    def test_default_capacity_from_config(self, monkeypatch):
        monkeypatch.setenv("CODE_SEARCH_MAX_CACHED_FILES", "123")

        assert FileContentCache().get_stats()["max_size"] == 123
