"""Shared test fixtures for BPMN Manager tests."""

import json
from unittest.mock import MagicMock

import pytest
import requests

from bpmn_sdk import BPMNClient


BASE_URL = "http://bpmn.test:8086"


def build_response(status_code=200, body=b"", reason="OK"):
    """Build a fully-read requests.Response without touching the network.

    Non-bytes bodies are JSON-encoded.
    """
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    if not isinstance(body, bytes):
        body = json.dumps(body).encode("utf-8")
    response._content = body
    response._content_consumed = True
    response.encoding = "utf-8"
    return response


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Keep developer environment variables out of the tests."""
    for var in (
        "BPMN_MANAGER_URL",
        "BPMN_MANAGER_TOKEN",
        "BPMN_MANAGER_DECISIONS",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("BPMN_MANAGER_LOG_DIR", str(tmp_path / "logs"))


@pytest.fixture
def make_response():
    return build_response


@pytest.fixture
def client():
    """BPMNClient whose session.request is a MagicMock."""
    bpmn = BPMNClient(BASE_URL)
    bpmn.session.request = MagicMock(return_value=build_response(body=[]))
    yield bpmn
    bpmn.close()


def user_task_json(task_id="task-1", **overrides):
    data = {
        "id": task_id,
        "name": "Review request",
        "processInstanceId": "proc-1",
        "taskDefinitionKey": "Activity_0ol9pgw",
        "assignee": "alice",
        "processStatus": "ACTIVE",
        "status": "normal",
    }
    data.update(overrides)
    return data


def process_details_json(process_id="proc-1", **overrides):
    data = {
        "id": process_id,
        "processDefinitionId": "deploy:3:abc",
        "processDefinitionKey": "deploy",
        "startTime": "2024-05-01T10:00:00",
        "endTime": "",
        "duration": 3_723_000,
        "currentVariables": {
            "requester": "bob",
            "approved": True,
            "attempts": 3,
        },
        "activities": [
            {
                "activityId": "Activity_0ol9pgw",
                "taskId": "task-1",
                "activityName": "Review",
                "activityType": "userTask",
                "assignee": "alice",
                "startTime": "2024-05-01T10:00:00.123456789Z",
                "endTime": "2024-05-01T10:01:01Z",
                "duration": 61_000,
            },
            {
                "activityId": "Activity_0bowttv",
                "taskId": "task-2",
                "activityName": "Approve",
                "activityType": "userTask",
                "assignee": "carol",
                "startTime": "2024-05-01T10:01:01Z",
                "endTime": None,
                "duration": 0,
            },
        ],
    }
    data.update(overrides)
    return data
