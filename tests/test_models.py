"""Tests for bpmn_sdk.models decoding and payload building."""

from datetime import datetime, timezone

import pytest

from bpmn_sdk import (
    DECISION_FIELDS,
    FormData,
    ProcessDetails,
    RunningProcess,
    UserTask,
    VariableValue,
)
from bpmn_sdk.models import decode_list, parse_timestamp

from .conftest import process_details_json, user_task_json


class TestParseTimestamp:

    def test_nanosecond_fraction_with_z(self):
        parsed = parse_timestamp("2024-05-01T10:00:00.123456789Z")
        assert parsed == datetime(2024, 5, 1, 10, 0, 0, 123456, tzinfo=timezone.utc)

    def test_naive(self):
        assert parse_timestamp("2024-05-01T10:00:00") == datetime(2024, 5, 1, 10, 0, 0)

    @pytest.mark.parametrize("value", [None, "", "yesterday", 42])
    def test_unreadable_is_none(self, value):
        assert parse_timestamp(value) is None


class TestUserTask:

    def test_wire_names(self):
        task = UserTask.from_dict(user_task_json("t1"))
        assert task.id == "t1"
        assert task.process_id == "proc-1"
        assert task.task_definition_key == "Activity_0ol9pgw"
        assert task.assignee == "alice"
        assert task.status == "ACTIVE"
        assert task.priority == "normal"

    def test_missing_fields_default_to_empty(self):
        task = UserTask.from_dict({"id": "t1"})
        assert task.name == ""
        assert task.assignee == ""
        assert task.due_date is None

    def test_null_assignee(self):
        assert UserTask.from_dict(user_task_json(assignee=None)).assignee == ""

    def test_non_object_rejected(self):
        with pytest.raises(TypeError):
            UserTask.from_dict(["t1"])


class TestRunningProcess:

    def test_wire_names(self):
        process = RunningProcess.from_dict({
            "id": "proc-1",
            "processDefinitionKey": "deploy",
            "processStatus": "ACTIVE",
            "startTime": "2024-05-01T10:00:00",
        })
        assert process.process_id == "proc-1"
        assert process.process_definition_key == "deploy"
        assert process.status == "ACTIVE"
        assert process.start_time == datetime(2024, 5, 1, 10, 0, 0)


class TestProcessDetails:

    def test_decodes_variables_and_activities(self):
        details = ProcessDetails.from_dict(process_details_json())
        assert details.duration == 3_723_000
        assert details.variables["requester"] == VariableValue("text", "bob")
        assert details.variables["approved"] == VariableValue("bool", True)
        assert details.variables["attempts"].kind == "unsupported"
        assert [a.id for a in details.activities] == ["Activity_0ol9pgw", "Activity_0bowttv"]
        assert details.activities[1].end_time is None

    def test_missing_collections(self):
        details = ProcessDetails.from_dict({"id": "proc-1"})
        assert details.variables == {}
        assert details.activities == ()

    def test_non_numeric_duration_rejected(self):
        with pytest.raises(ValueError):
            ProcessDetails.from_dict(process_details_json(duration="1h"))

    def test_infinite_duration_rejected(self):
        with pytest.raises(ValueError):
            ProcessDetails.from_dict(process_details_json(duration=float("inf")))

    def test_activities_must_be_list(self):
        with pytest.raises(TypeError):
            ProcessDetails.from_dict(process_details_json(activities={"a": 1}))


class TestVariableValue:

    def test_bool_is_not_unsupported(self):
        assert VariableValue.decode(False).kind == "bool"

    def test_numbers_and_objects_unsupported(self):
        assert VariableValue.decode(1.5).kind == "unsupported"
        assert VariableValue.decode({"a": 1}).kind == "unsupported"
        assert VariableValue.decode(None).kind == "unsupported"


class TestFormData:

    def test_payload_keys(self):
        payload = FormData().to_payload()
        assert set(payload) == set(DECISION_FIELDS) | {"comment", "message"}
        assert not any(payload[f] for f in DECISION_FIELDS)

    def test_from_decisions(self):
        form = FormData.from_decisions(
            {"reDefineDecision": True, "dbDecision": False},
            comment="c",
            message="m",
        )
        assert form.re_define_decision is True
        assert form.db_decision is False
        assert form.to_payload()["reDefineDecision"] is True
        assert form.comment == "c"
        assert form.message == "m"

    def test_unknown_decision_rejected(self):
        with pytest.raises(ValueError, match="launchMissiles"):
            FormData.from_decisions({"launchMissiles": True})


class TestDecodeList:

    def test_none_is_empty(self):
        assert decode_list(None, UserTask) == []

    def test_non_list_rejected(self):
        with pytest.raises(TypeError):
            decode_list({"id": "t1"}, UserTask)
