"""Completed tasks and completed processes — read-only tables."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import DataTable, Label

from bpmn_sdk import ProcessDetails, UserTask

from ..utils import display_name, format_duration, format_end_time, ms_to_seconds
from .base import PanelBase

COMPLETED_TASK_COLUMNS = ("TaskID", "TaskName", "ProcessID", "Assignee")
COMPLETED_PROCESS_COLUMNS = ("ProcessID", "ProcessDefKey", "StartTime", "EndTime", "Duration")


class CompletedTasksPanel(PanelBase):
    """Completed user tasks. Rows have no actions."""

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label(" Completed Tasks List ", id="completed-tasks-header", classes="section-header")
            yield DataTable(id="completed-task-table", cursor_type="row", zebra_stripes=True)

    def on_mount(self) -> None:
        self.query_one(DataTable).add_columns(*COMPLETED_TASK_COLUMNS)

    def update_data(self, tasks: list[UserTask]) -> None:
        self.query_one("#completed-tasks-header", Label).update(
            f" Completed Tasks List ({len(tasks)}) "
        )
        table = self.query_one(DataTable)
        table.clear()
        for task in tasks:
            table.add_row(
                task.id,
                display_name(task.name),
                task.process_id,
                Text(task.assignee, style="yellow"),
            )


class CompletedProcessesPanel(PanelBase):
    """Completed process instances. Rows have no actions."""

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label(
                " Completed Processes ",
                id="completed-processes-header",
                classes="section-header",
            )
            yield DataTable(id="completed-process-table", cursor_type="row", zebra_stripes=True)

    def on_mount(self) -> None:
        self.query_one(DataTable).add_columns(*COMPLETED_PROCESS_COLUMNS)

    def update_data(self, processes: list[ProcessDetails]) -> None:
        self.query_one("#completed-processes-header", Label).update(
            f" Completed Processes ({len(processes)}) "
        )
        table = self.query_one(DataTable)
        table.clear()
        for process in processes:
            table.add_row(
                process.id,
                process.process_definition_key,
                process.start_time,
                format_end_time(process.end_time),
                format_duration(ms_to_seconds(process.duration)),
            )
