"""Shared formatting helpers for the dashboard package."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from rich.text import Text

from bpmn_sdk.models import ProcessDetails, UserTask

NOT_FINISHED = "Not Finished"
NO_DATA = "⚠️ No data available ..."
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# Number of tasks shown inline on the dashboard before truncating
PREVIEW_LIMIT = 4
# The "... and N more" line reports len(tasks) - 5 although only 4 tasks are shown
PREVIEW_OVERFLOW_OFFSET = 5

# Arabic / Persian code-point ranges
_RTL_RANGES = (
    (0x0600, 0x06FF),  # Arabic
    (0x0750, 0x077F),  # Arabic Supplement
    (0x08A0, 0x08FF),  # Arabic Extended-A
    (0xFB50, 0xFDFF),  # Arabic Presentation Forms-A
    (0xFE70, 0xFEFF),  # Arabic Presentation Forms-B
)


def ms_to_seconds(duration_ms: int) -> int:
    """Truncate a millisecond duration to whole seconds."""
    if duration_ms < 0:
        return -(-duration_ms // 1000)
    return duration_ms // 1000


def format_duration(seconds: int) -> str:
    """Format whole seconds as '<H>h <M>m <S>s'. Negative durations read as zero."""
    seconds = max(seconds, 0)
    hours = seconds // 3600
    minutes = (seconds // 60) % 60
    secs = seconds % 60
    return f"{hours}h {minutes}m {secs}s"


def format_timestamp(value: datetime | None) -> str:
    if value is None:
        return ""
    return value.strftime(TIMESTAMP_FORMAT)


def format_end_time(value: datetime | str | None) -> str:
    """Format an end time, using NOT_FINISHED when it is absent or zero."""
    if value is None or value == "":
        return NOT_FINISHED
    if isinstance(value, str):
        if value.startswith("0001-01-01"):
            return NOT_FINISHED
        return value
    if value.year == 1:
        return NOT_FINISHED
    return format_timestamp(value)


def reverse_text(text: str) -> str:
    """Reverse a display name code point by code point.

    Right-to-left names are stored in logical order; the terminal lays cells
    out left to right, so names are flipped before display.
    """
    return text[::-1]


def contains_rtl(text: str) -> bool:
    """Return True if text contains Arabic or Persian characters."""
    for ch in text:
        cp = ord(ch)
        for start, end in _RTL_RANGES:
            if start <= cp <= end:
                return True
    return False


def display_name(name: str) -> Text:
    """Reversed name as a table cell, right-aligned when it holds RTL script."""
    justify = "right" if contains_rtl(name) else "left"
    return Text(reverse_text(name), justify=justify)


def format_task_line(task: UserTask) -> str:
    return f"  {task.id} -  {reverse_text(task.name)}  -  {task.assignee} "


def format_task_preview(tasks: Sequence[UserTask]) -> str:
    """Render the inline task preview shown beside the task table.

    Shows at most PREVIEW_LIMIT tasks. When there are more, the last line
    reads '... and N more tasks' with N = len(tasks) - PREVIEW_OVERFLOW_OFFSET.
    """
    if not tasks:
        return NO_DATA
    lines: list[str] = []
    for i, task in enumerate(tasks):
        if i >= PREVIEW_LIMIT:
            lines.append(
                f"  ... and {len(tasks) - PREVIEW_OVERFLOW_OFFSET} more tasks"
            )
            break
        lines.append(format_task_line(task))
    return "\n".join(lines)


@dataclass
class SummaryCounts:
    """Counts shown on the main dashboard. Zero when a fetch failed."""

    open_tasks: int = 0
    completed_tasks: int = 0
    running_processes: int = 0
    completed_processes: int = 0


def format_summary(counts: SummaryCounts) -> str:
    """Main dashboard text (Rich markup)."""
    return (
        "\n"
        " 🎯 Welcome to BPMN Manager!\n"
        "  [yellow]---------------------------------\n"
        f"  📊  Total Running Tasks: {counts.open_tasks}\n"
        f"  📊  Total Completed Tasks: {counts.completed_tasks}\n"
        "  ---------------------------------\n"
        f"  📊  Total Running Processes: {counts.running_processes}\n"
        f"  📊  Total Completed Processes: {counts.completed_processes}\n"
        "  ---------------------------------[/yellow]\n"
        "\n"
        "  Use the navigation menu to:\n"
        "  • View your assigned tasks\n"
        "  • View completed tasks\n"
        "  • Monitor running processes\n"
        "  • Check process details\n"
        "\n"
        "  Press F5 to refresh data"
    )


def format_task_summary(open_count: int, completed_count: int) -> str:
    return (
        "Task Summary:\n"
        f"[yellow]  📊  Total Completed Tasks: {completed_count}\n"
        f"  📊  Total Available Tasks: {open_count}[/yellow]"
    )


def format_process_summary(running_count: int, completed_count: int) -> str:
    return (
        "Process Summary:\n"
        f"[yellow]  📊  Total Running Processes: {running_count}\n"
        f"  📊  Total Completed Processes: {completed_count}[/yellow]"
    )


def format_process_details(details: ProcessDetails) -> Text:
    """Render a process instance, its variables and its activity history."""
    text = Text()
    text.append("Process:\n", style="bold")
    text.append(f"  ID: {details.id}\n")
    text.append(
        f"  Total completed activities:  {len(details.activities)}\n",
        style="bold cyan",
    )
    text.append(f"  ProcessDefinitionId: {details.process_definition_id}\n")
    text.append(f"  ProcessDefinitionKey: {details.process_definition_key}\n")
    text.append(f"  StartTime: {details.start_time}\n")
    text.append(f"  EndTime: {format_end_time(details.end_time)}\n")
    text.append(
        f"  Duration: {format_duration(ms_to_seconds(details.duration))}\n"
    )

    text.append("CurrentVariables:\n", style="bold violet")
    for name, variable in details.variables.items():
        if variable.kind == "text":
            rendered = variable.value
        elif variable.kind == "bool":
            rendered = "true" if variable.value else "false"
        else:
            continue
        text.append(f"  {name}: {rendered}\n", style="violet")

    text.append("Activities:\n", style="bold orange1")
    for activity in details.activities:
        text.append(f"  TaskId: {activity.task_id}\n", style="orange1")
        text.append(f"  ActivityId: {activity.id}\n")
        text.append(f"  ActivityName: {reverse_text(activity.name)}\n")
        text.append(f"  ActivityType: {activity.type}\n", style="green")
        text.append(f"  Assignee: {activity.assignee}\n")
        text.append(f"  StartTime: {format_timestamp(activity.start_time)}\n")
        text.append(f"  EndTime: {format_end_time(activity.end_time)}\n")
        text.append(
            f"  Duration: {format_duration(ms_to_seconds(activity.duration))}\n"
        )
        text.append("  --------------------------------------\n", style="dim")
    return text
