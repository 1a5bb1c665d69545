"""Tests for bpmn_manager.dashboard.utils formatting helpers."""

import re
from datetime import datetime

import pytest

from bpmn_sdk import ProcessDetails, UserTask
from bpmn_manager.dashboard.utils import (
    NO_DATA,
    NOT_FINISHED,
    SummaryCounts,
    contains_rtl,
    display_name,
    format_duration,
    format_end_time,
    format_process_details,
    format_process_summary,
    format_summary,
    format_task_line,
    format_task_preview,
    format_task_summary,
    format_timestamp,
    ms_to_seconds,
    reverse_text,
)

from .conftest import process_details_json

_DURATION_RE = re.compile(r"^(\d+)h (\d+)m (\d+)s$")


def _tasks(n):
    return [UserTask(id=f"t{i}", name=f"task {i}", assignee="alice") for i in range(n)]


class TestDuration:

    @pytest.mark.parametrize("seconds,expected", [
        (0, "0h 0m 0s"),
        (59, "0h 0m 59s"),
        (61, "0h 1m 1s"),
        (3723, "1h 2m 3s"),
        (90000, "25h 0m 0s"),
    ])
    def test_examples(self, seconds, expected):
        assert format_duration(seconds) == expected

    def test_components_recombine(self):
        for seconds in range(0, 200_000, 997):
            match = _DURATION_RE.match(format_duration(seconds))
            assert match is not None
            h, m, s = (int(g) for g in match.groups())
            assert m < 60 and s < 60
            assert h * 3600 + m * 60 + s == seconds

    def test_ms_truncates(self):
        assert ms_to_seconds(1999) == 1
        assert ms_to_seconds(999) == 0
        assert ms_to_seconds(-1999) == -1

    def test_negative_clamped_to_zero(self):
        assert format_duration(-1) == "0h 0m 0s"
        assert format_duration(ms_to_seconds(-1999)) == "0h 0m 0s"


class TestEndTime:

    @pytest.mark.parametrize("value", [
        None,
        "",
        "0001-01-01T00:00:00Z",
        datetime(1, 1, 1),
    ])
    def test_absent_is_not_finished(self, value):
        assert format_end_time(value) == NOT_FINISHED

    def test_datetime_formatted(self):
        assert format_end_time(datetime(2024, 5, 1, 10, 1, 1)) == "2024-05-01 10:01:01"

    def test_string_passed_through(self):
        assert format_end_time("2024-05-01T10:01:01") == "2024-05-01T10:01:01"

    def test_timestamp_none(self):
        assert format_timestamp(None) == ""


class TestReverse:

    @pytest.mark.parametrize("text", ["", "a", "Review", "بررسی درخواست", "mixed متن 42"])
    def test_involution(self, text):
        assert reverse_text(reverse_text(text)) == text

    def test_reverses(self):
        assert reverse_text("abc") == "cba"

    def test_contains_rtl(self):
        assert contains_rtl("بررسی")
        assert not contains_rtl("Review")

    def test_display_name_alignment(self):
        assert display_name("بررسی").justify == "right"
        rendered = display_name("Review")
        assert rendered.justify == "left"
        assert rendered.plain == "weiveR"


class TestTaskPreview:

    def test_empty(self):
        assert format_task_preview([]) == NO_DATA

    def test_short_list_has_no_overflow_line(self):
        lines = format_task_preview(_tasks(4)).split("\n")
        assert len(lines) == 4
        assert "more tasks" not in lines[-1]

    def test_overflow_line(self):
        lines = format_task_preview(_tasks(7)).split("\n")
        assert len(lines) == 5
        assert lines[:4] == [format_task_line(t) for t in _tasks(4)]
        assert lines[-1] == "  ... and 2 more tasks"

    def test_five_tasks_reports_zero_more(self):
        lines = format_task_preview(_tasks(5)).split("\n")
        assert lines[-1] == "  ... and 0 more tasks"

    def test_task_line(self):
        task = UserTask(id="t1", name="abc", assignee="alice")
        assert format_task_line(task) == "  t1 -  cba  -  alice "


class TestSummaries:

    def test_zero_counts(self):
        text = format_summary(SummaryCounts())
        assert "Total Running Tasks: 0" in text
        assert "Total Completed Tasks: 0" in text
        assert "Total Running Processes: 0" in text
        assert "Total Completed Processes: 0" in text
        assert "Press F5 to refresh data" in text

    def test_counts(self):
        text = format_summary(SummaryCounts(3, 10, 2, 7))
        assert "Total Running Tasks: 3" in text
        assert "Total Completed Processes: 7" in text

    def test_task_summary(self):
        text = format_task_summary(open_count=4, completed_count=9)
        assert "Total Completed Tasks: 9" in text
        assert "Total Available Tasks: 4" in text

    def test_process_summary(self):
        text = format_process_summary(running_count=2, completed_count=5)
        assert "Total Running Processes: 2" in text
        assert "Total Completed Processes: 5" in text


class TestProcessDetailsRendering:

    @pytest.fixture
    def rendered(self):
        return format_process_details(ProcessDetails.from_dict(process_details_json())).plain

    def test_header(self, rendered):
        assert "ID: proc-1" in rendered
        assert "Total completed activities:  2" in rendered
        assert "ProcessDefinitionKey: deploy" in rendered
        assert "EndTime: Not Finished" in rendered
        assert "Duration: 1h 2m 3s" in rendered

    def test_variables(self, rendered):
        assert "requester: bob" in rendered
        assert "approved: true" in rendered
        assert "attempts" not in rendered

    def test_activities(self, rendered):
        assert "TaskId: task-1" in rendered
        assert "ActivityName: weiveR" in rendered
        assert "ActivityType: userTask" in rendered
        assert "StartTime: 2024-05-01 10:00:00" in rendered
        assert "EndTime: 2024-05-01 10:01:01" in rendered
        assert "Duration: 0h 1m 1s" in rendered
        # second activity has no end time
        assert rendered.count(f"EndTime: {NOT_FINISHED}") == 2

    def test_no_activities(self):
        details = ProcessDetails(id="proc-2")
        rendered = format_process_details(details).plain
        assert "Total completed activities:  0" in rendered
        assert "TaskId" not in rendered
