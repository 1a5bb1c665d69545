"""Running processes page — instance table with an adjacent detail panel."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message
from textual.widgets import DataTable, Label, Static

from bpmn_sdk import RunningProcess

from ..utils import format_process_summary, format_timestamp
from .base import PanelBase

PROCESS_COLUMNS = ("ProcessID", "ProcessStatus", "ProcessDefKey", "StartTime")


class ProcessSelected(Message):
    """Posted when the user asks for one process's details."""

    def __init__(self, process_id: str, origin: PanelBase) -> None:
        super().__init__()
        self.process_id = process_id
        self.origin = origin


class DetailPanelMixin:
    """A panel with a scrollable '#<prefix>-detail' Static for process details."""

    detail_id = "process-detail"
    details: Text | None = None

    def show_details(self, content: Text | str) -> None:
        """Render process details, or an error string, in the detail panel."""
        if isinstance(content, str):
            content = Text(content)
        self.details = content
        self.query_one(f"#{self.detail_id}", Static).update(content)  # type: ignore[attr-defined]


class ProcessListPanel(DetailPanelMixin, PanelBase):
    """Running process instances; Enter loads details into the side panel."""

    detail_id = "process-detail"

    def __init__(self, **kwargs: object) -> None:
        super().__init__(**kwargs)
        self._processes: list[RunningProcess] = []

    @property
    def processes(self) -> list[RunningProcess]:
        return self._processes

    def compose(self) -> ComposeResult:
        with Horizontal(classes="split-layout"):
            with Vertical(classes="table-panel"):
                yield Label(" Process List ", classes="section-header")
                yield DataTable(id="process-table", cursor_type="row", zebra_stripes=True)
                yield Label("", id="process-total", classes="total-line")
            with VerticalScroll(classes="side-panel"):
                yield Label(" Process Details ", classes="section-header")
                yield Static("", id=self.detail_id, classes="info-panel detail-text")

    def on_mount(self) -> None:
        self.query_one("#process-table", DataTable).add_columns(*PROCESS_COLUMNS)

    def update_data(self, processes: list[RunningProcess], completed_count: int) -> None:
        self._processes = list(processes)
        table = self.query_one("#process-table", DataTable)
        table.clear()
        for process in self._processes:
            table.add_row(
                process.process_id,
                process.status,
                process.process_definition_key,
                format_timestamp(process.start_time),
            )
        self.query_one("#process-total", Label).update(
            Text(f"Total Processes: {len(self._processes)}", style="bold orange1")
        )
        self.query_one(f"#{self.detail_id}", Static).update(
            format_process_summary(len(self._processes), completed_count)
        )

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        event.stop()
        row_idx = event.cursor_row
        if 0 <= row_idx < len(self._processes):
            self.post_message(ProcessSelected(self._processes[row_idx].process_id, self))
