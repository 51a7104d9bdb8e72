"""Server entry point tests."""

import os
from unittest.mock import patch

import pytest

from code_search_mcp import server
from code_search_mcp.core.service import get_search_service


@pytest.mark.unit
class TestServerMain:

    def test_help_lists_configuration_variables(self, capsys):
        with pytest.raises(SystemExit) as exc:
            server.main(["--help"])

        assert exc.value.code == 0
        out = capsys.readouterr().out
        assert "CODE_SEARCH_ROOT" in out
        assert "CODE_SEARCH_INDEX_CACHE_SECONDS" in out

    def test_root_argument_selects_served_project(self, tmp_path):
        with patch.object(server.mcp, "run") as run:
            server.main(["--root", str(tmp_path)])

        run.assert_called_once()
        assert get_search_service().base_path == os.path.abspath(str(tmp_path))

    def test_runs_without_arguments(self):
        with patch.object(server.mcp, "run") as run:
            server.main([])

        run.assert_called_once()
