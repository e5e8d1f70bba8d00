"""Helpdesk submission error types.

Every failure of a submission run is one of four errors. Each carries a fixed
``kind`` string so hosts can tell configuration problems from bad data and
from remote failures without parsing messages.
"""
from typing import Optional


class HelpdeskError(Exception):
    """Base error for a submission run"""

    kind = "helpdesk_error"

    def __init__(self, message: str, kind: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if kind:
            self.kind = kind

    def __str__(self) -> str:
        return f"[{self.kind}] {self.message}"


class ConfigurationError(HelpdeskError):
    """Helpdesk URL or credentials missing. No request is sent."""

    kind = "api_not_configured"


class ValidationError(HelpdeskError):
    """Submission data unusable (bad email, empty message). No request is sent."""

    kind = "validation_error"


class TransportError(HelpdeskError):
    """Request attempted but no response received (DNS, TLS, timeout, reset)"""

    kind = "http_request_failed"

    def __init__(self, message: str, original: Optional[BaseException] = None):
        super().__init__(message)
        self.original = original


class ApiError(HelpdeskError):
    """Helpdesk answered with a non-2xx status"""

    kind = "api_error"

    def __init__(self, status_code: int, body: str):
        super().__init__(f"API returned error: {status_code}")
        self.status_code = status_code
        self.body = body
