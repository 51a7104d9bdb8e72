"""Pytest configuration and shared fixtures.

Provides small throwaway project trees and engine configuration for tests.
"""

import os
import sys
import tempfile
import time
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from code_search_mcp.config import SearchConfig, reset_config  # noqa: E402
from code_search_mcp.core.service import reset_search_service  # noqa: E402


@pytest.fixture(autouse=True)
def reset_globals():
    """Fresh global config and service for every test."""
    reset_config()
    reset_search_service()
    yield
    reset_config()
    reset_search_service()


@pytest.fixture
def search_config(monkeypatch):
    """Configuration that re-walks the tree on every build_index call."""
    monkeypatch.setenv("CODE_SEARCH_INDEX_CACHE_SECONDS", "0")
    monkeypatch.setenv("CODE_SEARCH_MAX_CACHED_FILES", "100")
    return SearchConfig()


@pytest.fixture
def cached_config(monkeypatch):
    """Configuration with the default freshness window."""
    monkeypatch.setenv("CODE_SEARCH_MAX_CACHED_FILES", "100")
    return SearchConfig()


@pytest.fixture
def empty_project():
    """Create an empty temporary directory for testing."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture
def ts_project():
    """A small multi-language project with one excluded dependency directory."""
    with tempfile.TemporaryDirectory() as temp_dir:
        project_path = Path(temp_dir)

        (project_path / "a.ts").write_text("function getFileContent() {}\n")

        (project_path / "b.ts").write_text('''import { Settings } from './settings';

export interface Config {
  root: string;
}

export class ConfigLoader {
  load(path: string): Config {
    return loadConfig(path);
  }
}

const loadConfig = (path) => {
  return { root: path };
};
''')

        (project_path / "utils.py").write_text('''def format_path(path):
    return path


class PathFormatter:
    pass
''')

        (project_path / "README.md").write_text("# Fixture\n\nNot indexed, still searchable.\n")

        vendored = project_path / "node_modules" / "lib"
        vendored.mkdir(parents=True)
        (vendored / "index.ts").write_text("function getFileContent() {}\nfunction vendoredHelper() {}\n")

        yield project_path


@pytest.fixture
def set_age():
    """Set a file's access and modification time relative to now."""

    def _set_age(path, seconds_ago: float):
        stamp = time.time() - seconds_ago
        os.utime(path, (stamp, stamp))

    return _set_age


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow running"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their name."""
    for item in items:
        if "integration" in item.name or "end_to_end" in item.name:
            item.add_marker(pytest.mark.integration)
