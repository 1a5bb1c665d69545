"""Base class for all dashboard page panels."""

from __future__ import annotations

from textual.binding import Binding
from textual.widget import Widget
from textual.widgets import DataTable


class PanelBase(Widget):
    DEFAULT_CSS = """
    PanelBase { height: 100%; }
    """

    BINDINGS = [
        Binding("j", "cursor_down", "Down", show=False),
        Binding("k", "cursor_up", "Up", show=False),
    ]

    def focus_main(self) -> None:
        """Move focus to the panel's primary table, if it has one."""
        tables = self.query(DataTable)
        if tables:
            tables.first().focus()

    def action_cursor_down(self) -> None:
        tables = self.query(DataTable)
        if tables:
            tables.first().action_cursor_down()

    def action_cursor_up(self) -> None:
        tables = self.query(DataTable)
        if tables:
            tables.first().action_cursor_up()
