"""Task list page — open user tasks, completion form and quick complete."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widgets import DataTable, Label, Static

from bpmn_sdk import UserTask

from ..utils import display_name, format_task_preview, format_task_summary
from ..widgets.task_form import TaskCompletionForm
from .base import PanelBase

TASK_COLUMNS = ("TaskID", "TaskName", "TaskDefinitionKey", "ProcessID", "Assignee")


class TaskSelected(Message):
    """Posted when the user presses Enter on a task row."""

    def __init__(self, task: UserTask) -> None:
        super().__init__()
        self.task = task


class QuickCompleteRequested(Message):
    """Posted when the user presses the quick-complete key on a task row."""

    def __init__(self, task: UserTask) -> None:
        super().__init__()
        self.task = task


class TaskListPanel(PanelBase):
    """Open tasks on the left; summary or completion form on the right."""

    BINDINGS = PanelBase.BINDINGS + [
        Binding("f2", "quick_complete", "Quick complete", show=True),
    ]

    def __init__(self, **kwargs: object) -> None:
        super().__init__(**kwargs)
        self._tasks: list[UserTask] = []
        self._completed_count = 0

    @property
    def tasks(self) -> list[UserTask]:
        return self._tasks

    def compose(self) -> ComposeResult:
        with Horizontal(classes="split-layout"):
            with Vertical(classes="table-panel"):
                yield Label(" Task List ", classes="section-header")
                yield DataTable(id="task-table", cursor_type="row", zebra_stripes=True)
            with Vertical(id="task-side", classes="side-panel"):
                yield Static("", id="task-info", classes="info-panel")
                yield Static("", id="task-preview", classes="info-panel", markup=False)

    def on_mount(self) -> None:
        table = self.query_one("#task-table", DataTable)
        table.add_columns(*TASK_COLUMNS)

    def update_data(self, tasks: list[UserTask], completed_count: int) -> None:
        """Replace the task rows and reset the side panel to the summary."""
        self._tasks = list(tasks)
        self._completed_count = completed_count
        self.close_form()
        table = self.query_one("#task-table", DataTable)
        table.clear()
        for task in self._tasks:
            table.add_row(
                task.id,
                display_name(task.name),
                task.task_definition_key,
                task.process_id,
                Text(task.assignee, style="yellow"),
            )
        self.query_one("#task-info", Static).update(
            format_task_summary(len(self._tasks), completed_count)
        )
        self.query_one("#task-preview", Static).update(format_task_preview(self._tasks))

    def selected_task(self) -> UserTask | None:
        table = self.query_one("#task-table", DataTable)
        row = table.cursor_row
        if 0 <= row < len(self._tasks) and table.row_count:
            return self._tasks[row]
        return None

    def show_info(self, text: str) -> None:
        """Replace the side panel text (used for inline errors)."""
        self.close_form()
        self.query_one("#task-info", Static).update(Text(text))

    @property
    def form(self) -> TaskCompletionForm | None:
        forms = self.query(TaskCompletionForm)
        return forms.first() if forms else None

    def show_form(self, task: UserTask, decision_fields: tuple[str, ...]) -> TaskCompletionForm:
        """Swap the side summary for a completion form for task."""
        self.close_form()
        form = TaskCompletionForm(task, decision_fields)
        side = self.query_one("#task-side", Vertical)
        for static in self.query("#task-side > .info-panel"):
            static.display = False
        side.mount(form)
        return form

    def close_form(self) -> None:
        for form in self.query(TaskCompletionForm):
            form.remove()
        for static in self.query("#task-side > .info-panel"):
            static.display = True

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        event.stop()
        row_idx = event.cursor_row
        if 0 <= row_idx < len(self._tasks):
            self.post_message(TaskSelected(self._tasks[row_idx]))

    def action_quick_complete(self) -> None:
        task = self.selected_task()
        if task is not None:
            self.post_message(QuickCompleteRequested(task))
