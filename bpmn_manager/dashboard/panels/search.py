"""Process search page — look up one process instance by id."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message
from textual.widgets import Button, Input, Label, Static

from .base import PanelBase
from .processes import DetailPanelMixin, ProcessSelected


class SearchBack(Message):
    """Posted when the user leaves the search page with Back."""


class ProcessSearchPanel(DetailPanelMixin, PanelBase):
    """Single Process ID field; Load renders the details beside it."""

    detail_id = "search-detail"

    def compose(self) -> ComposeResult:
        with Horizontal(classes="split-layout"):
            with Vertical(classes="search-form"):
                yield Label(" Enter Process ID ", classes="section-header")
                yield Input(placeholder="Process ID", id="search-process-id")
                with Horizontal(classes="dialog-buttons"):
                    yield Button("Load", id="search-load", variant="primary")
                    yield Button("Back", id="search-back")
            with VerticalScroll(classes="side-panel"):
                yield Label(" Process Details ", classes="section-header")
                yield Static("", id=self.detail_id, classes="info-panel detail-text")

    def focus_main(self) -> None:
        self.query_one("#search-process-id", Input).focus()

    def reset(self) -> None:
        self.details = None
        self.query_one(f"#{self.detail_id}", Static).update("")

    def _load(self) -> None:
        process_id = self.query_one("#search-process-id", Input).value.strip()
        self.post_message(ProcessSelected(process_id, self))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._load()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "search-load":
            self._load()
        else:
            self.post_message(SearchBack())
