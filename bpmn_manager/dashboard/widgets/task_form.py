"""Inline completion form for a single user task.

The decision toggles depend on the task's definition key; the mapping comes
from decisions.yaml (see bpmn_manager.config.load_decision_fields). Keys
without an entry get a form with only the read-only identifiers and the
comment/message fields.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, VerticalScroll
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Button, Checkbox, Input, Label, Static

from bpmn_sdk import FormData, UserTask

DEFAULT_MESSAGE = "Completed by BPMN-MANAGER"


def field_label(field: str) -> str:
    """'reDefineDecision' -> 'ReDefineDecision'"""
    return field[:1].upper() + field[1:]


class TaskCompletionForm(Widget):
    """Read-only task identifiers, decision toggles, notes and a submit button."""

    DEFAULT_CSS = """
    TaskCompletionForm {
        height: 100%;
    }
    """

    class Submitted(Message):
        """Posted when the user presses Complete Task."""

        def __init__(self, form: "TaskCompletionForm", task: UserTask, form_data: FormData) -> None:
            super().__init__()
            self.form = form
            self.task = task
            self.form_data = form_data

    class Cancelled(Message):
        """Posted when the user closes the form without submitting."""

    def __init__(
        self,
        task: UserTask,
        decision_fields: tuple[str, ...] = (),
        **kwargs: object,
    ) -> None:
        super().__init__(**kwargs)
        self.task_data = task
        self.decision_fields = decision_fields
        self.error_text = ""

    def compose(self) -> ComposeResult:
        task = self.task_data
        with VerticalScroll(classes="task-form"):
            yield Label(" User Task Form ", classes="section-header")
            yield Label(f"Task Id: {task.id}", classes="form-readonly", markup=False)
            yield Label(
                f"Task Definition Key: {task.task_definition_key}",
                classes="form-readonly",
                markup=False,
            )
            yield Label(f"Process Id: {task.process_id}", classes="form-readonly", markup=False)
            for field in self.decision_fields:
                yield Checkbox(f"{field_label(field)}: ", False, name=field, classes="decision")
            yield Label("Comment", classes="field-label")
            yield Input(placeholder="Comment", classes="form-comment")
            yield Label("Message", classes="field-label")
            yield Input(value=DEFAULT_MESSAGE, classes="form-message")
            with Horizontal(classes="dialog-buttons"):
                yield Button("Complete Task", classes="form-submit", variant="success")
                yield Button("Cancel", classes="form-cancel")
            yield Static("", classes="form-error", markup=False)

    def collect(self) -> FormData:
        """Build the completion payload from the current widget state."""
        decisions = {
            checkbox.name: checkbox.value
            for checkbox in self.query(Checkbox)
            if checkbox.name
        }
        return FormData.from_decisions(
            decisions,
            comment=self.query_one(".form-comment", Input).value,
            message=self.query_one(".form-message", Input).value,
        )

    def show_error(self, text: str) -> None:
        """Show a failed submission's error text under the buttons."""
        self.error_text = text
        self.query_one(".form-error", Static).update(text)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.has_class("form-submit"):
            self.show_error("")
            self.post_message(self.Submitted(self, self.task_data, self.collect()))
        else:
            self.post_message(self.Cancelled())
