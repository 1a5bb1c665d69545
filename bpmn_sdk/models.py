"""
Domain records decoded from the workflow-engine API

Every record is an immutable snapshot built from one JSON object. Decoding is
permissive: missing fields fall back to empty values, timestamps that cannot
be parsed become None. A value of the wrong JSON type for a numeric field, or
a non-object where an object is expected, raises ValueError/TypeError so the
client can report a decode failure.
"""

import math
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional, Tuple

# Wire names of the boolean decision flags a completion payload can carry
DECISION_FIELDS: Tuple[str, ...] = (
    'reDefineDecision',
    'dbDecision',
    'businessApproved',
    'technicalApproved',
    'operationApproved',
)

_FRACTION_RE = re.compile(r'(\.\d{6})\d+')


def _expect_object(data: Any, what: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise TypeError(f'expected JSON object for {what}, got {type(data).__name__}')
    return data


def _str_field(data: Dict[str, Any], name: str) -> str:
    """Read a text field; null becomes '' and scalars are stringified"""
    value = data.get(name)
    if value is None:
        return ''
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def _int_field(data: Dict[str, Any], name: str) -> int:
    value = data.get(name)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f'field {name!r} must be a number, got {value!r}')
    if not math.isfinite(value):
        raise ValueError(f'field {name!r} must be finite, got {value!r}')
    return int(value)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp, returning None when absent or unreadable."""
    if not value or not isinstance(value, str):
        return None
    cleaned = _FRACTION_RE.sub(r'\1', value.strip().replace('Z', '+00:00'))
    try:
        return datetime.fromisoformat(cleaned)
    except ValueError:
        return None


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class UserTask:
    """A human task waiting inside a process instance"""

    id: str
    name: str = ''
    process_id: str = ''
    process_name: str = ''
    activity_name: str = ''
    task_definition_key: str = ''
    assignee: str = ''
    status: str = ''
    priority: str = ''
    due_date: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Any) -> 'UserTask':
        data = _expect_object(data, 'user task')
        return cls(
            id=_str_field(data, 'id'),
            name=_str_field(data, 'name'),
            process_id=_str_field(data, 'processInstanceId'),
            process_name=_str_field(data, 'process_name'),
            activity_name=_str_field(data, 'activity_name'),
            task_definition_key=_str_field(data, 'taskDefinitionKey'),
            assignee=_str_field(data, 'assignee'),
            status=_str_field(data, 'processStatus'),
            priority=_str_field(data, 'status'),
            due_date=parse_timestamp(data.get('due_date')),
            created_at=parse_timestamp(data.get('created_at')),
        )


@dataclass(frozen=True)
class RunningProcess:
    """One process instance as listed by /api/all-instances"""

    process_id: str
    instance_id: str = ''
    process_definition_id: str = ''
    process_definition_key: str = ''
    process_name: str = ''
    current_activity: str = ''
    status: str = ''
    start_time: Optional[datetime] = None
    duration: str = ''

    @classmethod
    def from_dict(cls, data: Any) -> 'RunningProcess':
        data = _expect_object(data, 'running process')
        return cls(
            process_id=_str_field(data, 'id'),
            instance_id=_str_field(data, 'instance_id'),
            process_definition_id=_str_field(data, 'processDefinitionId'),
            process_definition_key=_str_field(data, 'processDefinitionKey'),
            process_name=_str_field(data, 'process_name'),
            current_activity=_str_field(data, 'current_activity'),
            status=_str_field(data, 'processStatus'),
            start_time=parse_timestamp(data.get('startTime')),
            duration=_str_field(data, 'duration'),
        )


VariableKind = Literal['text', 'bool', 'unsupported']


@dataclass(frozen=True)
class VariableValue:
    """A process variable; only text and bool values are rendered"""

    kind: VariableKind
    value: Any = None

    @classmethod
    def decode(cls, raw: Any) -> 'VariableValue':
        # bool first: it is also an int in Python
        if isinstance(raw, bool):
            return cls('bool', raw)
        if isinstance(raw, str):
            return cls('text', raw)
        return cls('unsupported', raw)


@dataclass(frozen=True)
class Activity:
    """One executed step in a process instance's history"""

    id: str
    task_id: str = ''
    name: str = ''
    type: str = ''
    assignee: str = ''
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    duration: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> 'Activity':
        data = _expect_object(data, 'activity')
        return cls(
            id=_str_field(data, 'activityId'),
            task_id=_str_field(data, 'taskId'),
            name=_str_field(data, 'activityName'),
            type=_str_field(data, 'activityType'),
            assignee=_str_field(data, 'assignee'),
            start_time=parse_timestamp(data.get('startTime')),
            end_time=parse_timestamp(data.get('endTime')),
            duration=_int_field(data, 'duration'),
        )


@dataclass(frozen=True)
class ProcessDetails:
    """Full detail of one process instance, including its activity history"""

    id: str
    process_definition_id: str = ''
    process_definition_key: str = ''
    start_time: str = ''
    end_time: str = ''
    duration: int = 0
    variables: Dict[str, VariableValue] = field(default_factory=dict)
    activities: Tuple[Activity, ...] = ()
    name: str = ''
    description: str = ''
    version: str = ''

    @classmethod
    def from_dict(cls, data: Any) -> 'ProcessDetails':
        data = _expect_object(data, 'process details')
        raw_variables = data.get('currentVariables') or {}
        raw_variables = _expect_object(raw_variables, 'currentVariables')
        raw_activities = data.get('activities') or []
        if not isinstance(raw_activities, list):
            raise TypeError('activities must be a JSON array')
        return cls(
            id=_str_field(data, 'id'),
            process_definition_id=_str_field(data, 'processDefinitionId'),
            process_definition_key=_str_field(data, 'processDefinitionKey'),
            start_time=_str_field(data, 'startTime'),
            end_time=_str_field(data, 'endTime'),
            duration=_int_field(data, 'duration'),
            variables={k: VariableValue.decode(v) for k, v in raw_variables.items()},
            activities=tuple(Activity.from_dict(a) for a in raw_activities),
            name=_str_field(data, 'name'),
            description=_str_field(data, 'description'),
            version=_str_field(data, 'version'),
        )


@dataclass(frozen=True)
class FormData:
    """Outbound payload for POST /api/complete-task/{id}"""

    re_define_decision: bool = False
    db_decision: bool = False
    business_approved: bool = False
    technical_approved: bool = False
    operation_approved: bool = False
    comment: str = ''
    message: str = ''

    @classmethod
    def from_decisions(
        cls,
        decisions: Dict[str, bool],
        comment: str = '',
        message: str = '',
    ) -> 'FormData':
        """Build a payload from wire-named flags, e.g. {'dbDecision': True}"""
        unknown = set(decisions) - set(DECISION_FIELDS)
        if unknown:
            raise ValueError(f'unknown decision fields: {sorted(unknown)}')
        return cls(
            re_define_decision=bool(decisions.get('reDefineDecision', False)),
            db_decision=bool(decisions.get('dbDecision', False)),
            business_approved=bool(decisions.get('businessApproved', False)),
            technical_approved=bool(decisions.get('technicalApproved', False)),
            operation_approved=bool(decisions.get('operationApproved', False)),
            comment=comment,
            message=message,
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            'reDefineDecision': self.re_define_decision,
            'dbDecision': self.db_decision,
            'businessApproved': self.business_approved,
            'technicalApproved': self.technical_approved,
            'operationApproved': self.operation_approved,
            'comment': self.comment,
            'message': self.message,
        }


# ---------------------------------------------------------------------------
# Snapshot records persisted by the local store
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProcessStep:
    """A step of a process definition snapshot"""

    id: str
    task_id: str = ''
    process_id: str = ''
    name: str = ''
    type: str = ''
    description: str = ''
    assignee: str = ''
    due_date: Optional[datetime] = None
    status: str = ''
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Any) -> 'ProcessStep':
        data = _expect_object(data, 'process step')
        return cls(
            id=_str_field(data, 'id'),
            task_id=_str_field(data, 'task_id'),
            process_id=_str_field(data, 'process_id'),
            name=_str_field(data, 'name'),
            type=_str_field(data, 'type'),
            description=_str_field(data, 'description'),
            assignee=_str_field(data, 'assignee'),
            due_date=parse_timestamp(data.get('due_date')),
            status=_str_field(data, 'status'),
            created_at=parse_timestamp(data.get('created_at')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'task_id': self.task_id,
            'process_id': self.process_id,
            'name': self.name,
            'type': self.type,
            'description': self.description,
            'assignee': self.assignee,
            'due_date': _isoformat(self.due_date),
            'status': self.status,
            'created_at': _isoformat(self.created_at),
        }


@dataclass(frozen=True)
class Process:
    """A process definition snapshot"""

    id: str
    name: str = ''
    version: str = ''
    description: str = ''
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    activities: Tuple[ProcessStep, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> 'Process':
        data = _expect_object(data, 'process')
        raw_steps = data.get('activities') or []
        if not isinstance(raw_steps, list):
            raise TypeError('activities must be a JSON array')
        return cls(
            id=_str_field(data, 'id'),
            name=_str_field(data, 'name'),
            version=_str_field(data, 'version'),
            description=_str_field(data, 'description'),
            created_at=parse_timestamp(data.get('created_at')),
            updated_at=parse_timestamp(data.get('updated_at')),
            activities=tuple(ProcessStep.from_dict(s) for s in raw_steps),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'version': self.version,
            'description': self.description,
            'created_at': _isoformat(self.created_at),
            'updated_at': _isoformat(self.updated_at),
            'activities': [s.to_dict() for s in self.activities],
        }


@dataclass(frozen=True)
class ProcessInstance:
    """A process instance snapshot"""

    id: str
    process_id: str = ''
    process_name: str = ''
    current_activity: str = ''
    status: str = ''
    started_at: Optional[datetime] = None
    variables: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> 'ProcessInstance':
        data = _expect_object(data, 'process instance')
        raw_variables = _expect_object(data.get('variables') or {}, 'variables')
        return cls(
            id=_str_field(data, 'id'),
            process_id=_str_field(data, 'process_id'),
            process_name=_str_field(data, 'process_name'),
            current_activity=_str_field(data, 'current_activity'),
            status=_str_field(data, 'processStatus'),
            started_at=parse_timestamp(data.get('started_at')),
            variables={k: _str_field(raw_variables, k) for k in raw_variables},
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'process_id': self.process_id,
            'process_name': self.process_name,
            'current_activity': self.current_activity,
            'processStatus': self.status,
            'started_at': _isoformat(self.started_at),
            'variables': dict(self.variables),
        }


def decode_list(data: Any, record: Any) -> List[Any]:
    """Decode a JSON array into a list of `record` instances"""
    if data is None:
        return []
    if not isinstance(data, list):
        raise TypeError(f'expected JSON array, got {type(data).__name__}')
    return [record.from_dict(item) for item in data]
