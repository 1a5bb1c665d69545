"""Tests for the bpmn-manager command-line entry point."""

from unittest.mock import patch

import pytest

from bpmn_manager.config import DEFAULT_BASE_URL
from bpmn_manager.dashboard.__main__ import main, parse_args


@pytest.fixture(autouse=True)
def restore_locale(monkeypatch):
    for var in ("LANG", "LC_ALL", "LC_MESSAGES"):
        monkeypatch.setenv(var, "C.UTF-8")


class TestParseArgs:

    def test_no_args(self):
        assert parse_args([]).base_url is None

    def test_positional_url(self):
        assert parse_args(["http://x:1"]).base_url == "http://x:1"


@patch("bpmn_manager.dashboard.__main__.BPMNManagerApp")
class TestMain:

    def test_runs_app_with_cli_url(self, mock_app_cls, capsys):
        mock_app_cls.return_value.return_code = None

        assert main(["http://x:1"]) == 0

        mock_app_cls.return_value.run.assert_called_once_with()
        assert mock_app_cls.call_args[0][0] == "http://x:1"
        assert "Starting BPMN Manager with API: http://x:1" in capsys.readouterr().out

    def test_default_url(self, mock_app_cls, capsys):
        mock_app_cls.return_value.return_code = 0
        main([])
        assert mock_app_cls.call_args[0][0] == DEFAULT_BASE_URL

    def test_env_token_passed(self, mock_app_cls, monkeypatch):
        monkeypatch.setenv("BPMN_MANAGER_TOKEN", "abc")
        mock_app_cls.return_value.return_code = 0
        main([])
        assert mock_app_cls.call_args[1]["auth_token"] == "abc"

    def test_crash_exits_1(self, mock_app_cls, capsys):
        mock_app_cls.return_value.run.side_effect = RuntimeError("terminal gone")

        assert main([]) == 1
        assert "Error running application: terminal gone" in capsys.readouterr().err

    def test_bad_decisions_file_exits_1(self, mock_app_cls, monkeypatch, tmp_path, capsys):
        monkeypatch.setenv("BPMN_MANAGER_DECISIONS", str(tmp_path / "missing.yaml"))

        assert main([]) == 1
        mock_app_cls.assert_not_called()
        assert "Error running application" in capsys.readouterr().err
