from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: object | None = None
    status_code: int = 0
    body: object | None = None
    path: str | None = None
    notified: bool = False

    def __str__(self) -> str:
        where = f" path={self.path}" if self.path else ""
        return f"[{self.status_code}] {self.code}: {self.message}{where}"


class NetworkError(ApiError):
    """No HTTP response was received (connect failure, timeout, DNS)."""


class HttpError(ApiError):
    """The backend answered with a status >= 400."""


class SessionExpiredError(HttpError):
    """401/403/405: the session is terminated and never retried."""


class NotFoundError(HttpError):
    pass


class ValidationError(HttpError):
    pass


class ConflictError(HttpError):
    """409 or conflict-style errors."""


class RateLimitError(HttpError):
    """429 throttling error."""


class ServerError(HttpError):
    """5xx server-side failures."""


class ResponseParseError(ApiError):
    """2xx response whose body does not have the expected shape."""
