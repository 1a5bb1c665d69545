"""Navigation menu shown on the left of every page."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.message import Message
from textual.widgets import Label, ListItem, ListView

# (action, title, description, shortcut)
NAV_ITEMS: list[tuple[str, str, str, str]] = [
    ("tasks", "👤 My Tasks", "View assigned tasks", "t"),
    ("processes", "🔄 Running Processes", "View active processes", "r"),
    ("completed_tasks", "📊 Completed Tasks", "View completed tasks", "c"),
    ("completed_processes", "📦 Completed Processes", "View completed processes", "p"),
    ("search", "🔎 Find Process", "Find process by id", "f"),
    ("start_process", "🚀 Start Process Instance", "Launch process instance", "l"),
    ("refresh", "🔄 Refresh Data", "Reload all data", "F5"),
    ("settings", "⚙️ Settings", "Configure connection", "s"),
    ("quit", "❌ Quit", "Exit application", "q"),
]


class NavigationChosen(Message):
    """Posted when the user picks a navigation entry."""

    def __init__(self, action: str) -> None:
        super().__init__()
        self.action = action


class _NavItem(ListItem):
    def __init__(self, action: str, title: str, description: str, key: str, **kwargs: object) -> None:
        super().__init__(**kwargs)
        self.nav_action = action
        self._title = title
        self._description = description
        self._key = key

    def compose(self) -> ComposeResult:
        label = Text()
        label.append(f"({self._key}) ", style="bold #616161")
        label.append(self._title, style="bold")
        label.append(f"\n    {self._description}", style="#9e9e9e")
        yield Label(label, classes="nav-label")


class NavigationMenu(ListView):
    """List of pages; letter keys jump straight to an entry."""

    BINDINGS = [
        Binding(key, f"choose('{action}')", title, show=False)
        for action, title, _, key in NAV_ITEMS
        if len(key) == 1
    ] + [
        Binding("j", "cursor_down", "Down", show=False),
        Binding("k", "cursor_up", "Up", show=False),
    ]

    def __init__(self, **kwargs: object) -> None:
        items = [_NavItem(*entry) for entry in NAV_ITEMS]
        super().__init__(*items, **kwargs)

    def action_choose(self, action: str) -> None:
        self.post_message(NavigationChosen(action))

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        if isinstance(event.item, _NavItem):
            event.stop()
            self.post_message(NavigationChosen(event.item.nav_action))
