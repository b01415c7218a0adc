from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

SENSITIVE_KEY_MARKERS = ("token", "password", "secret", "authorization")
REDACTED = "***"


def get_logger(name: str, level: str | int | None = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    if logger.handlers:
        return logger
    if level is None:
        logger.setLevel(logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


def redact(fields: dict[str, Any]) -> dict[str, Any]:
    sanitized: dict[str, Any] = {}
    for key, value in fields.items():
        if any(marker in key.lower() for marker in SENSITIVE_KEY_MARKERS):
            sanitized[key] = REDACTED
        elif isinstance(value, dict):
            sanitized[key] = redact(value)
        else:
            sanitized[key] = value
    return sanitized


def log_event(
    logger: logging.Logger,
    module: str,
    action: str,
    outcome: str,
    *,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    if not logger.isEnabledFor(level):
        return
    payload: dict[str, Any] = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "level": logging.getLevelName(level),
        "module": module,
        "action": action,
        "outcome": outcome,
    }
    payload.update(redact(fields))
    logger.log(level, json.dumps(payload, default=str, ensure_ascii=False))


def set_level(level: str | int, prefix: str = "toona_admin_sdk") -> None:
    for name, candidate in list(logging.Logger.manager.loggerDict.items()):
        if isinstance(candidate, logging.Logger) and (name == prefix or name.startswith(f"{prefix}.")):
            candidate.setLevel(level)
