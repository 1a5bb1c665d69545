"""Tests for bpmn_manager.dashboard.data.DataManager."""

from unittest.mock import MagicMock

from bpmn_sdk import BPMNClient, BPMNTransportError, UserTask
from bpmn_manager.dashboard.data import DataManager, count_or_zero
from bpmn_manager.dashboard.utils import SummaryCounts


def _factory():
    """Client factory recording every client it builds."""
    built = []

    def build(base_url, timeout):
        client = MagicMock(name=f"client({base_url})")
        client.base_url = base_url
        client.timeout = timeout
        built.append(client)
        return client

    return build, built


class TestConnection:

    def test_builds_client_with_token(self):
        factory, built = _factory()
        manager = DataManager("http://a:1", "tok", timeout=5, client_factory=factory)

        assert manager.client is built[0]
        assert built[0].base_url == "http://a:1"
        assert built[0].timeout == 5
        built[0].set_auth_token.assert_called_once_with("tok")

    def test_reconfigure_replaces_client(self):
        factory, built = _factory()
        manager = DataManager("http://a:1", "tok", client_factory=factory)
        old = manager.client

        new = manager.reconfigure("http://b:2", "")

        assert new is manager.client
        assert new is not old
        assert manager.base_url == "http://b:2"
        assert manager.auth_token is None
        new.set_auth_token.assert_called_once_with(None)
        old.close.assert_not_called()

    def test_empty_token_sends_no_authorization(self):
        manager = DataManager("http://a:1")
        manager.reconfigure("http://b:2", "")
        assert "Authorization" not in manager.client.session.headers
        assert isinstance(manager.client, BPMNClient)


class TestSummary:

    def test_counts(self):
        client = MagicMock()
        client.get_user_tasks.return_value = [UserTask(id="t1"), UserTask(id="t2")]
        client.get_completed_tasks.return_value = [UserTask(id="t0")]
        client.get_running_processes.return_value = []
        client.get_completed_processes.return_value = [object(), object(), object()]
        manager = DataManager("http://a:1", client_factory=lambda url, timeout: client)

        assert manager.fetch_summary_sync() == SummaryCounts(2, 1, 0, 3)

    def test_failed_count_is_zero(self):
        client = MagicMock()
        client.get_user_tasks.return_value = [UserTask(id="t1")]
        client.get_completed_tasks.side_effect = BPMNTransportError("down")
        client.get_running_processes.return_value = [object()]
        client.get_completed_processes.return_value = []
        manager = DataManager("http://a:1", client_factory=lambda url, timeout: client)

        counts = manager.fetch_summary_sync()
        assert counts.open_tasks == 1
        assert counts.completed_tasks == 0
        assert counts.running_processes == 1

    def test_explicit_client_wins(self):
        default = MagicMock()
        captured = MagicMock()
        for client in (default, captured):
            for name in (
                "get_user_tasks",
                "get_completed_tasks",
                "get_running_processes",
                "get_completed_processes",
            ):
                getattr(client, name).return_value = []
        manager = DataManager("http://a:1", client_factory=lambda url, timeout: default)

        manager.fetch_summary_sync(captured)

        captured.get_user_tasks.assert_called_once()
        default.get_user_tasks.assert_not_called()


def test_count_or_zero_logs(caplog):
    def boom():
        raise BPMNTransportError("refused")

    with caplog.at_level("WARNING"):
        assert count_or_zero("open tasks", boom) == 0
    assert "open tasks" in caplog.text
