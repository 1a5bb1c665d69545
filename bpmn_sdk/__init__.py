"""
BPMN SDK for Python

Thin client for the workflow-engine HTTP gateway used by BPMN Manager.

Example:
    >>> from bpmn_sdk import BPMNClient, FormData
    >>>
    >>> client = BPMNClient('http://localhost:8086')
    >>> client.set_auth_token('your-token')
    >>>
    >>> # List open tasks
    >>> tasks = client.get_user_tasks()
    >>>
    >>> # Complete one
    >>> client.complete_task(tasks[0].id, FormData(business_approved=True))
"""

from .client import BPMNClient
from .exceptions import (
    BPMNError,
    BPMNAPIError,
    BPMNDecodeError,
    BPMNRequestError,
    BPMNTransportError,
)
from .models import (
    DECISION_FIELDS,
    Activity,
    FormData,
    Process,
    ProcessDetails,
    ProcessInstance,
    ProcessStep,
    RunningProcess,
    UserTask,
    VariableValue,
)

__version__ = "1.0.0"
__all__ = [
    "BPMNClient",
    "BPMNError",
    "BPMNAPIError",
    "BPMNDecodeError",
    "BPMNRequestError",
    "BPMNTransportError",
    "DECISION_FIELDS",
    "Activity",
    "FormData",
    "Process",
    "ProcessDetails",
    "ProcessInstance",
    "ProcessStep",
    "RunningProcess",
    "UserTask",
    "VariableValue",
]
