"""
BPMN SDK exceptions
"""

from typing import Optional


class BPMNError(Exception):
    """Base exception for all BPMN SDK errors"""

    stage = 'unknown'

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        if stage is not None:
            self.stage = stage


class BPMNRequestError(BPMNError):
    """Raised when the request could not be built (bad URL, bad payload)"""

    stage = 'request'


class BPMNTransportError(BPMNError):
    """Raised on DNS, connect, timeout or body read failures"""

    stage = 'transport'


class BPMNAPIError(BPMNError):
    """Raised when the API answers with an unexpected status code"""

    stage = 'status'

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        reason: str = '',
        body: str = '',
        payload: str = '',
    ):
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
        self.body = body
        self.payload = payload


class BPMNDecodeError(BPMNError):
    """Raised when a response body is not the JSON shape we expect"""

    stage = 'decode'
