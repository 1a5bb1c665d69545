"""
BPMN SDK Client
API client for the workflow-engine HTTP gateway
"""

import json as jsonlib
from typing import Any, List, Optional

import requests

from .exceptions import (
    BPMNAPIError,
    BPMNDecodeError,
    BPMNRequestError,
    BPMNTransportError,
)
from .models import (
    FormData,
    ProcessDetails,
    RunningProcess,
    UserTask,
    decode_list,
)

USER_AGENT = 'BPMN-Manager-CLI/1.0'
DEFAULT_TIMEOUT = 30

# requests raises these before anything goes on the wire
_REQUEST_BUILD_ERRORS = (
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidSchema,
    requests.exceptions.InvalidURL,
    requests.exceptions.InvalidHeader,
)

_BODY_READ_ERRORS = (
    requests.exceptions.ChunkedEncodingError,
    requests.exceptions.ContentDecodingError,
    requests.exceptions.ConnectionError,
)


class BPMNClient:
    """
    Client for the workflow-engine API

    Usage:
        client = BPMNClient('http://localhost:8086')
        client.set_auth_token('secret')

        tasks = client.get_user_tasks()
        client.complete_task(tasks[0].id, FormData(db_decision=True))

    Every call is a single attempt bounded by `timeout`. Failures raise a
    BPMNError subclass whose `stage` names where the call broke.
    """

    def __init__(
        self,
        base_url: str,
        auth_token: Optional[str] = None,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers['Content-Type'] = 'application/json'
        self.session.headers['User-Agent'] = USER_AGENT
        self.auth_token: Optional[str] = None
        self.set_auth_token(auth_token)

    def set_auth_token(self, token: Optional[str]) -> None:
        """Set the bearer token; an empty token removes the header"""
        self.auth_token = token or None
        if self.auth_token:
            self.session.headers['Authorization'] = f'Bearer {self.auth_token}'
        else:
            self.session.headers.pop('Authorization', None)

    def _request(
        self,
        method: str,
        path: str,
        data: Optional[str] = None,
    ) -> requests.Response:
        """Send one request and read its body fully"""
        url = f'{self.base_url}{path}'

        try:
            response = self.session.request(
                method,
                url,
                data=data,
                timeout=self.timeout,
                stream=True,
            )
        except _REQUEST_BUILD_ERRORS as e:
            raise BPMNRequestError(f'failed to create request: {e}') from e
        except requests.Timeout as e:
            raise BPMNTransportError(
                f'request to {url} timed out after {self.timeout}s'
            ) from e
        except requests.RequestException as e:
            raise BPMNTransportError(f'request failed: {e}') from e

        try:
            response.content
        except _BODY_READ_ERRORS as e:
            raise BPMNTransportError(f'failed to read response: {e}', stage='read') from e
        finally:
            response.close()

        return response

    def _get(self, path: str) -> requests.Response:
        response = self._request('GET', path)
        if response.status_code != 200:
            raise BPMNAPIError(
                f'API returned status {response.status_code}: '
                f'{response.status_code} {response.reason or ""}'.rstrip(),
                status_code=response.status_code,
                reason=response.reason or '',
                body=response.text,
            )
        return response

    def _get_json(self, path: str, what: str) -> Any:
        response = self._get(path)
        try:
            return response.json()
        except ValueError as e:
            raise BPMNDecodeError(f'failed to parse {what}: {e}') from e

    def _decode(self, what: str, decoder, data: Any) -> Any:
        try:
            return decoder(data)
        except (TypeError, ValueError) as e:
            raise BPMNDecodeError(f'failed to parse {what}: {e}') from e

    def get_user_tasks(self) -> List[UserTask]:
        """List open user tasks"""
        data = self._get_json('/api/user/tasks', 'user tasks')
        return self._decode('user tasks', lambda d: decode_list(d, UserTask), data)

    def get_running_processes(self) -> List[RunningProcess]:
        """List running process instances"""
        data = self._get_json('/api/all-instances', 'running processes')
        return self._decode(
            'running processes', lambda d: decode_list(d, RunningProcess), data
        )

    def get_process_details(self, process_id: str) -> ProcessDetails:
        """Get one process instance with its variables and activities"""
        data = self._get_json(f'/api/{process_id}/details', 'process details')
        return self._decode('process details', ProcessDetails.from_dict, data)

    def get_completed_processes(self) -> List[ProcessDetails]:
        """List completed process instances"""
        data = self._get_json('/api/completed-processes', 'completed processes')
        return self._decode(
            'completed processes', lambda d: decode_list(d, ProcessDetails), data
        )

    def get_completed_tasks(self) -> List[UserTask]:
        """List completed user tasks"""
        data = self._get_json('/api/completed-tasks', 'completed tasks')
        return self._decode('completed tasks', lambda d: decode_list(d, UserTask), data)

    def complete_task(self, task_id: str, form_data: FormData) -> None:
        """Complete a task

        Args:
            task_id: Task ID
            form_data: Decision flags and notes for the task

        Raises:
            BPMNAPIError: on any status outside 200-299; the message carries
                the response body and the JSON payload that was sent
        """
        try:
            payload = jsonlib.dumps(form_data.to_payload())
        except (TypeError, ValueError) as e:
            raise BPMNRequestError(f'failed to marshal request payload: {e}') from e

        response = self._request('POST', f'/api/complete-task/{task_id}', data=payload)
        if not 200 <= response.status_code < 300:
            raise BPMNAPIError(
                f'failed to complete task, status code: {response.status_code} '
                f'{response.text} {payload}',
                status_code=response.status_code,
                reason=response.reason or '',
                body=response.text,
                payload=payload,
            )

    def start_process(self) -> None:
        """Trigger a new process instance; the response body is discarded"""
        self._get_json('/api/start', 'start process response')

    def close(self):
        """Close the session"""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
