"""BPMN Manager Dashboard — Textual TUI app.

Launch with: python -m bpmn_manager.dashboard [BASE_URL]
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.screen import ModalScreen, Screen
from textual.widgets import ContentSwitcher, Footer, Header

from bpmn_sdk import BPMNClient, BPMNError, FormData

from ..config import load_decision_fields
from .data import DataManager, count_or_zero
from .panels.completed import CompletedProcessesPanel, CompletedTasksPanel
from .panels.processes import ProcessListPanel, ProcessSelected
from .panels.search import ProcessSearchPanel, SearchBack
from .panels.summary import SummaryPanel
from .panels.tasks import QuickCompleteRequested, TaskListPanel, TaskSelected
from .utils import SummaryCounts, format_process_details
from .widgets.modals import (
    ConfirmCompleteModal,
    ErrorModal,
    LoadingModal,
    MessageModal,
    SettingsModal,
)
from .widgets.navigation import NavigationChosen, NavigationMenu
from .widgets.task_form import TaskCompletionForm

logger = logging.getLogger("bpmn_manager.dashboard")

PAGE_MAIN = "main"
PAGE_TASK_LIST = "task_list"
PAGE_TASK_FORM = "task_completion_form"
PAGE_PROCESS_LIST = "process_list"
PAGE_PROCESS_DETAIL = "process_detail"
PAGE_SEARCH = "process_search"
PAGE_SETTINGS = "settings"
PAGE_COMPLETED_TASKS = "completed_tasks"
PAGE_COMPLETED_PROCESSES = "completed_processes"
PAGE_LOADING = "loading"
PAGE_ERROR = "error"
PAGE_MESSAGE = "message"

# Comment sent by the quick-complete path
QUICK_COMPLETE_COMMENT = "comment"


def _fetch_tasks(client: BPMNClient) -> tuple:
    return client.get_user_tasks(), count_or_zero("completed tasks", client.get_completed_tasks)


def _fetch_processes(client: BPMNClient) -> tuple:
    return (
        client.get_running_processes(),
        count_or_zero("completed processes", client.get_completed_processes),
    )


def _fetch_completed_tasks(client: BPMNClient) -> tuple:
    return (client.get_completed_tasks(),)


def _fetch_completed_processes(client: BPMNClient) -> tuple:
    return (client.get_completed_processes(),)


class BPMNManagerApp(App):
    """Operator dashboard for a BPMN workflow engine.

    A navigation menu on the left switches the content area between the
    summary, task, process, completed and search pages. Data is fetched in
    worker threads. Every navigation bumps a generation counter; a worker's
    result is applied only if the generation it captured is still current,
    so a slow response never lands on a page the user already left.
    """

    CSS_PATH = Path(__file__).parent / "styles" / "dashboard.tcss"

    TITLE = "🏭 BPMN Activity Manager"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", show=True, priority=True),
        Binding("f5", "refresh", "Refresh", show=True),
        Binding("f3", "search", "Find process", show=True),
        Binding("f2", "leave_search", "Back", show=False),
        Binding("escape", "back", "Back", show=False),
    ]

    def __init__(
        self,
        base_url: str,
        auth_token: str | None = None,
        decision_fields: dict[str, tuple[str, ...]] | None = None,
        data_manager: DataManager | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self._data = data_manager or DataManager(base_url, auth_token)
        if decision_fields is None:
            decision_fields = load_decision_fields()
        self._decision_fields = decision_fields
        self._generation = 0
        self._loading: LoadingModal | None = None
        self.current_page = PAGE_MAIN

    @property
    def data_manager(self) -> DataManager:
        return self._data

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def dashboard(self) -> Screen:
        """The screen holding the panels; App.query_one only sees the top screen."""
        return self.screen_stack[0]

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-content"):
            yield NavigationMenu(id="nav")
            with ContentSwitcher(initial="summary", id="content"):
                yield SummaryPanel(id="summary")
                yield TaskListPanel(id="tasks")
                yield ProcessListPanel(id="processes")
                yield CompletedTasksPanel(id="completed-tasks")
                yield CompletedProcessesPanel(id="completed-processes")
                yield ProcessSearchPanel(id="search")
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = self._data.base_url
        self.show_main()

    # ------------------------------------------------------------------
    # Page bookkeeping
    # ------------------------------------------------------------------

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _begin(self, page: str, panel_id: str | None = None) -> int:
        """Enter a page: close overlays, invalidate pending results."""
        self._close_overlays()
        self.current_page = page
        if panel_id is not None:
            self.dashboard.query_one("#content", ContentSwitcher).current = panel_id
        return self._next_generation()

    def _close_overlays(self) -> None:
        while len(self.screen_stack) > 1 and isinstance(self.screen, ModalScreen):
            self.pop_screen()
        self._loading = None

    def _apply(self, token: int, callback: Callable[..., Any], *args: Any) -> None:
        """Run callback on the UI thread if token is still the current generation."""
        if token != self._generation:
            logger.debug(
                "Discarding stale result for %s (generation %d, now %d)",
                getattr(callback, "__name__", callback),
                token,
                self._generation,
            )
            return
        callback(*args)

    def _show_loading(self, text: str) -> None:
        self.current_page = PAGE_LOADING
        self._loading = LoadingModal(text)
        self.push_screen(self._loading, self._on_loading_closed)

    def _on_loading_closed(self, cancelled: bool | None) -> None:
        if cancelled:
            self.show_main()

    def _finish_loading(self) -> None:
        modal, self._loading = self._loading, None
        if modal is not None and modal is self.screen:
            self.pop_screen()

    def _return_to_main(self, _result: object = None) -> None:
        self.show_main()

    # ------------------------------------------------------------------
    # Overlays
    # ------------------------------------------------------------------

    def show_error(self, message: str) -> None:
        """Error overlay; dismissing it returns to the main page."""
        self.current_page = PAGE_ERROR
        self.push_screen(ErrorModal(message), self._return_to_main)

    def show_message(self, message: str) -> None:
        """Message overlay; dismissing it returns to the main page."""
        self.current_page = PAGE_MESSAGE
        self.push_screen(MessageModal(message), self._return_to_main)

    # ------------------------------------------------------------------
    # Main page
    # ------------------------------------------------------------------

    def show_main(self) -> None:
        token = self._begin(PAGE_MAIN, "summary")
        self.dashboard.query_one(SummaryPanel).update_data(None)
        self.dashboard.query_one(NavigationMenu).focus()
        self._load_summary(token, self._data.client)

    @work(thread=True, group="api")
    def _load_summary(self, token: int, client: BPMNClient) -> None:
        counts = self._data.fetch_summary_sync(client)
        self.call_from_thread(self._apply, token, self._render_summary, counts)

    def _render_summary(self, counts: SummaryCounts) -> None:
        self.dashboard.query_one(SummaryPanel).update_data(counts)

    # ------------------------------------------------------------------
    # Remote list pages
    # ------------------------------------------------------------------

    def _open_page(
        self,
        page: str,
        loading_text: str,
        fetch: Callable[[BPMNClient], tuple],
        render: Callable[..., None],
        error_prefix: str,
    ) -> None:
        token = self._begin(page)
        self._show_loading(loading_text)
        self._fetch_page(token, self._data.client, page, fetch, render, error_prefix)

    @work(thread=True, group="api")
    def _fetch_page(
        self,
        token: int,
        client: BPMNClient,
        page: str,
        fetch: Callable[[BPMNClient], tuple],
        render: Callable[..., None],
        error_prefix: str,
    ) -> None:
        try:
            result = fetch(client)
        except BPMNError as exc:
            logger.warning("%s: %s", error_prefix, exc)
            self.call_from_thread(
                self._apply, token, self._show_load_error, f"{error_prefix}: {exc}"
            )
            return
        self.call_from_thread(self._apply, token, self._render_page, page, render, result)

    def _render_page(self, page: str, render: Callable[..., None], result: tuple) -> None:
        self._finish_loading()
        self.current_page = page
        render(*result)

    def _show_load_error(self, message: str) -> None:
        self._finish_loading()
        self.show_error(message)

    def show_task_list(self) -> None:
        self._open_page(
            PAGE_TASK_LIST,
            "🔄 Loading dashboard data...",
            _fetch_tasks,
            self._render_task_list,
            "Failed to load user tasks",
        )

    def _render_task_list(self, tasks: list, completed_count: int) -> None:
        self.dashboard.query_one("#content", ContentSwitcher).current = "tasks"
        panel = self.dashboard.query_one(TaskListPanel)
        panel.update_data(tasks, completed_count)
        panel.focus_main()

    def show_process_list(self) -> None:
        self._open_page(
            PAGE_PROCESS_LIST,
            "🔄 Loading running processes...",
            _fetch_processes,
            self._render_process_list,
            "Failed to load running processes",
        )

    def _render_process_list(self, processes: list, completed_count: int) -> None:
        self.dashboard.query_one("#content", ContentSwitcher).current = "processes"
        panel = self.dashboard.query_one(ProcessListPanel)
        panel.update_data(processes, completed_count)
        panel.focus_main()

    def show_completed_tasks(self) -> None:
        self._open_page(
            PAGE_COMPLETED_TASKS,
            "🔄 Loading completed tasks...",
            _fetch_completed_tasks,
            self._render_completed_tasks,
            "Failed to load completed tasks",
        )

    def _render_completed_tasks(self, tasks: list) -> None:
        self.dashboard.query_one("#content", ContentSwitcher).current = "completed-tasks"
        panel = self.dashboard.query_one(CompletedTasksPanel)
        panel.update_data(tasks)
        panel.focus_main()

    def show_completed_processes(self) -> None:
        self._open_page(
            PAGE_COMPLETED_PROCESSES,
            "🔄 Loading completed processes...",
            _fetch_completed_processes,
            self._render_completed_processes,
            "Failed to load completed processes",
        )

    def _render_completed_processes(self, processes: list) -> None:
        self.dashboard.query_one("#content", ContentSwitcher).current = "completed-processes"
        panel = self.dashboard.query_one(CompletedProcessesPanel)
        panel.update_data(processes)
        panel.focus_main()

    # ------------------------------------------------------------------
    # Task completion
    # ------------------------------------------------------------------

    def on_task_selected(self, event: TaskSelected) -> None:
        """Open the completion form for the selected task."""
        self.current_page = PAGE_TASK_FORM
        fields = self._decision_fields.get(event.task.task_definition_key, ())
        form = self.dashboard.query_one(TaskListPanel).show_form(event.task, fields)
        self.call_after_refresh(self._focus_form, form)

    def _focus_form(self, form: TaskCompletionForm) -> None:
        for widget in form.query("Checkbox, Input"):
            widget.focus()
            return

    def on_task_completion_form_cancelled(self, event: TaskCompletionForm.Cancelled) -> None:
        self.current_page = PAGE_TASK_LIST
        panel = self.dashboard.query_one(TaskListPanel)
        panel.close_form()
        panel.focus_main()

    def on_task_completion_form_submitted(self, event: TaskCompletionForm.Submitted) -> None:
        self._complete_task(
            self._generation,
            self._data.client,
            event.task.id,
            event.form_data,
            event.form.show_error,
        )

    def on_quick_complete_requested(self, event: QuickCompleteRequested) -> None:
        task_id = event.task.id

        def on_confirm(confirmed: bool | None) -> None:
            if confirmed:
                self._complete_task(
                    self._generation,
                    self._data.client,
                    task_id,
                    FormData(comment=QUICK_COMPLETE_COMMENT),
                    self.dashboard.query_one(TaskListPanel).show_info,
                )

        self.push_screen(ConfirmCompleteModal(task_id), on_confirm)

    @work(thread=True, group="api")
    def _complete_task(
        self,
        token: int,
        client: BPMNClient,
        task_id: str,
        form_data: FormData,
        on_error: Callable[[str], None],
    ) -> None:
        try:
            client.complete_task(task_id, form_data)
        except BPMNError as exc:
            logger.warning("Failed to complete task %s: %s", task_id, exc)
            self.call_from_thread(self._apply, token, on_error, str(exc))
            return
        self.call_from_thread(self._apply, token, self._task_completed, task_id)

    def _task_completed(self, task_id: str) -> None:
        self.notify(f"Task successfully done. {task_id}", timeout=4)
        self.show_task_list()

    # ------------------------------------------------------------------
    # Process details and search
    # ------------------------------------------------------------------

    def on_process_selected(self, event: ProcessSelected) -> None:
        """Fetch one process's details into the panel that asked for them."""
        if self.current_page != PAGE_SEARCH:
            self.current_page = PAGE_PROCESS_DETAIL
        token = self._next_generation()
        origin = event.origin
        origin.show_details(f"🔄 Loading details for process: {event.process_id}")
        self._load_details(token, self._data.client, event.process_id, origin.show_details)

    @work(thread=True, group="api")
    def _load_details(
        self,
        token: int,
        client: BPMNClient,
        process_id: str,
        show: Callable[[Any], None],
    ) -> None:
        try:
            details = client.get_process_details(process_id)
        except BPMNError as exc:
            logger.warning("Failed to load process %s: %s", process_id, exc)
            self.call_from_thread(self._apply, token, show, str(exc))
            return
        self.call_from_thread(self._apply, token, show, format_process_details(details))

    def show_search(self) -> None:
        self._begin(PAGE_SEARCH, "search")
        panel = self.dashboard.query_one(ProcessSearchPanel)
        panel.reset()
        panel.focus_main()

    def on_search_back(self, event: SearchBack) -> None:
        self.show_main()

    # ------------------------------------------------------------------
    # Start process and settings
    # ------------------------------------------------------------------

    def start_process(self) -> None:
        self._start_process(self._generation, self._data.client)

    @work(thread=True, group="api")
    def _start_process(self, token: int, client: BPMNClient) -> None:
        try:
            client.start_process()
        except BPMNError as exc:
            logger.warning("Failed to start process: %s", exc)
            self.call_from_thread(
                self._apply, token, self.show_error, f"Failed to start process: {exc}"
            )
            return
        self.call_from_thread(
            self._apply, token, self.show_message, "New process instance started!"
        )

    def show_settings(self) -> None:
        self._begin(PAGE_SETTINGS)
        self.push_screen(
            SettingsModal(self._data.base_url, self._data.auth_token),
            self._on_settings_closed,
        )

    def _on_settings_closed(self, result: tuple[str, str] | None) -> None:
        if result is None:
            self.show_main()
            return
        base_url, token = result
        self.apply_settings(base_url, token)
        self.show_message("Settings saved successfully!")

    def apply_settings(self, base_url: str, auth_token: str | None) -> None:
        """Point the dashboard at a new API; in-flight calls keep the old client."""
        self._data.reconfigure(base_url, auth_token)
        self.sub_title = base_url

    # ------------------------------------------------------------------
    # Navigation and global keys
    # ------------------------------------------------------------------

    def on_navigation_chosen(self, event: NavigationChosen) -> None:
        handlers: dict[str, Callable[[], Any]] = {
            "tasks": self.show_task_list,
            "processes": self.show_process_list,
            "completed_tasks": self.show_completed_tasks,
            "completed_processes": self.show_completed_processes,
            "search": self.show_search,
            "start_process": self.start_process,
            "refresh": self.show_main,
            "settings": self.show_settings,
            "quit": self.exit,
        }
        handler = handlers.get(event.action)
        if handler is None:
            logger.warning("Unknown navigation action %r", event.action)
            return
        handler()

    def action_refresh(self) -> None:
        self.show_main()

    def action_search(self) -> None:
        self.show_search()

    def action_leave_search(self) -> None:
        if self.current_page == PAGE_SEARCH:
            self.show_main()

    def action_back(self) -> None:
        if self.current_page == PAGE_SEARCH:
            return
        self.show_main()
