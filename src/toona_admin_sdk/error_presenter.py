from __future__ import annotations

from dataclasses import dataclass

from .events import ErrorEvent
from .exceptions import ApiError

_CODE_MESSAGES = {
    "NETWORK_ERROR": ("Backend unreachable.", "Check the network or VPN and retry."),
    "TIMEOUT_ERROR": ("The server took too long to answer.", "Retry in a few seconds."),
    "SESSION_EXPIRED": ("Your session has ended.", "Sign in again."),
    "INVALID_JSON": ("The server sent an unreadable response.", "Report the incident if it persists."),
    "UNEXPECTED_SHAPE": ("The server sent an unexpected response.", "Report the incident if it persists."),
}

_STATUS_MESSAGES = {
    400: ("The request was rejected.", "Check the submitted fields."),
    404: ("The requested resource does not exist.", "Refresh the list."),
    409: ("The operation conflicts with the current state.", "Refresh and retry."),
    422: ("The request was rejected.", "Check the submitted fields."),
    429: ("Too many requests.", "Wait a moment before retrying."),
    500: ("Internal server error.", "Retry; report the incident if it persists."),
}


@dataclass(frozen=True)
class UserFacingError:
    message: str
    suggestion: str
    details: str | None = None

    def render(self) -> str:
        return f"{self.message} {self.suggestion}".strip()


def to_user_facing_error(error: Exception) -> UserFacingError:
    if not isinstance(error, ApiError):
        return UserFacingError(message="Unexpected error.", suggestion="Retry.", details=str(error))
    mapped = _CODE_MESSAGES.get(error.code)
    if mapped is None and error.status_code:
        mapped = _STATUS_MESSAGES.get(error.status_code)
        if mapped is None and error.status_code >= 500:
            mapped = _STATUS_MESSAGES[500]
    message, suggestion = mapped or (error.message.strip() or "Request failed.", "Contact support.")
    details = f"{error.code} (HTTP {error.status_code})" if error.status_code else error.code
    if error.path:
        details = f"{details} on {error.path}"
    return UserFacingError(message=message, suggestion=suggestion, details=details)


def event_to_text(event: ErrorEvent) -> str:
    status = f" (HTTP {event.status})" if event.status else ""
    return f"{event.message}{status}"
