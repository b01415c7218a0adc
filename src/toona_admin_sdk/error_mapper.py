from __future__ import annotations

from typing import Mapping

from .exceptions import (
    ConflictError,
    HttpError,
    NotFoundError,
    RateLimitError,
    ServerError,
    SessionExpiredError,
    ValidationError,
)

SESSION_LETHAL_STATUSES = frozenset({401, 403, 405})


def is_session_lethal(status_code: int) -> bool:
    return status_code in SESSION_LETHAL_STATUSES


def map_error(status_code: int, payload: object, path: str | None = None) -> HttpError:
    fields: Mapping[str, object] = payload if isinstance(payload, Mapping) else {}
    code = str(fields.get("code") or "HTTP_ERROR")
    # the admin backend reports failures under "error"; newer routes use "message"
    message = str(fields.get("error") or fields.get("message") or f"Request failed with HTTP {status_code}")
    details = fields.get("details")
    mapped: type[HttpError]
    if is_session_lethal(status_code):
        mapped = SessionExpiredError
        code = code if code != "HTTP_ERROR" else "SESSION_EXPIRED"
    elif status_code == 404:
        mapped = NotFoundError
    elif status_code in {400, 422}:
        mapped = ValidationError
    elif status_code == 409:
        mapped = ConflictError
    elif status_code == 429:
        mapped = RateLimitError
    elif status_code >= 500:
        mapped = ServerError
    else:
        mapped = HttpError
    return mapped(
        code=code,
        message=message,
        details=details,
        status_code=status_code,
        body=payload,
        path=path,
    )
