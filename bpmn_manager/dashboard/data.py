"""Data layer for the BPMN Manager dashboard.

Owns the active API client. The app reads `DataManager.client` at the start
of every action and hands that client to its background worker, so a
settings change never affects calls already in flight.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from bpmn_sdk import BPMNClient, BPMNError

from ..config import REQUEST_TIMEOUT
from .utils import SummaryCounts

logger = logging.getLogger(__name__)


class DataManager:
    """Single owned cell holding the current base URL, token and client."""

    def __init__(
        self,
        base_url: str,
        auth_token: str | None = None,
        timeout: int = REQUEST_TIMEOUT,
        client_factory: Callable[..., BPMNClient] = BPMNClient,
    ) -> None:
        self._timeout = timeout
        self._client_factory = client_factory
        self._base_url = base_url
        self._auth_token = auth_token or None
        self._client = self._build_client()

    def _build_client(self) -> BPMNClient:
        client = self._client_factory(self._base_url, timeout=self._timeout)
        client.set_auth_token(self._auth_token)
        return client

    @property
    def client(self) -> BPMNClient:
        return self._client

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def auth_token(self) -> str | None:
        return self._auth_token

    def reconfigure(self, base_url: str, auth_token: str | None) -> BPMNClient:
        """Replace the client with one for base_url and auth_token.

        The previous client is left open: workers that captured it finish
        their request against the old URL.
        """
        self._base_url = base_url
        self._auth_token = auth_token or None
        self._client = self._build_client()
        return self._client

    def fetch_summary_sync(self, client: BPMNClient | None = None) -> SummaryCounts:
        """Fetch the four dashboard counts.

        Intended to be called from a background thread via Textual's @work.
        Each count is fetched on its own; a failing call leaves that count at
        zero and is logged.
        """
        client = client or self._client
        return SummaryCounts(
            open_tasks=count_or_zero("open tasks", client.get_user_tasks),
            completed_tasks=count_or_zero("completed tasks", client.get_completed_tasks),
            running_processes=count_or_zero("running processes", client.get_running_processes),
            completed_processes=count_or_zero(
                "completed processes", client.get_completed_processes
            ),
        )


def count_or_zero(label: str, fetch: Callable[[], Sequence[object]]) -> int:
    """Length of fetch()'s result, or 0 if the call fails."""
    try:
        return len(fetch())
    except BPMNError as exc:
        logger.warning("Could not count %s: %s", label, exc)
        return 0
