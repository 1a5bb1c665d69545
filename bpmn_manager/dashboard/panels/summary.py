"""Main dashboard page — live counts of tasks and processes."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.widgets import Static

from ..utils import SummaryCounts, format_summary
from .base import PanelBase

LOADING_TEXT = "🔄 Loading dashboard data..."


class SummaryPanel(PanelBase):
    """Welcome text with open/completed task and process counts."""

    def __init__(self, **kwargs: object) -> None:
        super().__init__(**kwargs)
        self.counts: SummaryCounts | None = None

    def compose(self) -> ComposeResult:
        yield Static(LOADING_TEXT, id="summary-text", classes="info-panel")

    def on_mount(self) -> None:
        self.border_title = "Dashboard"

    def update_data(self, counts: SummaryCounts | None) -> None:
        """Show counts, or the loading text when counts is None."""
        self.counts = counts
        text = LOADING_TEXT if counts is None else format_summary(counts)
        self.query_one("#summary-text", Static).update(text)
