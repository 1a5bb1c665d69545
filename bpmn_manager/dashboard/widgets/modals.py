"""Modal overlays: loading, error, message, quick-complete and settings."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label


class _NoticeModal(ModalScreen[bool]):
    """Single-button overlay. Dismisses with True when the user closes it."""

    BINDINGS = [Binding("escape", "close", "Close", show=True)]

    PREFIX = ""
    BUTTON = "OK"

    def __init__(self, text: str, **kwargs: object) -> None:
        super().__init__(**kwargs)
        self._text = text

    @property
    def text(self) -> str:
        return self._text

    def compose(self) -> ComposeResult:
        with Container(classes="notice-dialog"):
            yield Label(f"{self.PREFIX}{self._text}", classes="notice-text", markup=False)
            yield Button(self.BUTTON, id="notice-ok", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(True)

    def action_close(self) -> None:
        self.dismiss(True)


class LoadingModal(_NoticeModal):
    """Shown while a page's data is being fetched.

    The app pops it once data arrives; the user closing it dismisses
    with True.
    """

    BUTTON = "Cancel"


class ErrorModal(_NoticeModal):
    PREFIX = "❌ "


class MessageModal(_NoticeModal):
    PREFIX = "✅ "


class ConfirmCompleteModal(ModalScreen[bool]):
    """Quick-complete confirmation for a task row."""

    BINDINGS = [Binding("escape", "cancel", "Cancel", show=True)]

    def __init__(self, task_id: str, **kwargs: object) -> None:
        super().__init__(**kwargs)
        self.task_id = task_id

    def compose(self) -> ComposeResult:
        with Container(classes="notice-dialog"):
            yield Label(f"Complete Task: {self.task_id}", classes="notice-text", markup=False)
            with Horizontal(classes="dialog-buttons"):
                yield Button("Complete", id="confirm-complete", variant="success")
                yield Button("Cancel", id="confirm-cancel")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(event.button.id == "confirm-complete")

    def action_cancel(self) -> None:
        self.dismiss(False)


class SettingsModal(ModalScreen[tuple[str, str] | None]):
    """Edit the API base URL and auth token.

    Dismisses with (base_url, token) on Save, None on Cancel.
    """

    BINDINGS = [Binding("escape", "cancel", "Cancel", show=True)]

    def __init__(self, base_url: str, auth_token: str | None = None, **kwargs: object) -> None:
        super().__init__(**kwargs)
        self._base_url = base_url
        self._auth_token = auth_token or ""

    def compose(self) -> ComposeResult:
        with Container(id="settings-dialog", classes="form-dialog"):
            yield Label(" Settings ", classes="modal-title")
            yield Label("API Base URL", classes="field-label")
            yield Input(value=self._base_url, id="settings-url")
            yield Label("Auth Token", classes="field-label")
            yield Input(
                value=self._auth_token,
                placeholder="your-token-here",
                password=True,
                id="settings-token",
            )
            with Horizontal(classes="dialog-buttons"):
                yield Button("Save", id="settings-save", variant="success")
                yield Button("Cancel", id="settings-cancel")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "settings-save":
            url = self.query_one("#settings-url", Input).value.strip() or self._base_url
            token = self.query_one("#settings-token", Input).value.strip()
            self.dismiss((url, token))
        else:
            self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)
