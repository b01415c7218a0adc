from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from typing import Any

from .logging_setup import get_logger, log_event

logger = get_logger("toona_admin_sdk.events")


@dataclass(frozen=True)
class ErrorEvent:
    message: str
    status: int | None = None
    code: str | None = None
    path: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        return {key: value for key, value in payload.items() if value is not None}


ErrorListener = Callable[[ErrorEvent], None]


@dataclass
class ErrorChannel:
    """Process-wide failure broadcast. Fire and forget: publishers never see listener errors."""

    keep_history: int = 50
    _listeners: list[ErrorListener] = field(default_factory=list)
    history: list[ErrorEvent] = field(default_factory=list)

    def subscribe(self, listener: ErrorListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def publish(self, event: ErrorEvent) -> None:
        if self.keep_history > 0:
            self.history.append(event)
            del self.history[: -self.keep_history]
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as exc:  # noqa: BLE001
                log_event(
                    logger,
                    "events",
                    "listener.failed",
                    "error",
                    level=logging.WARNING,
                    listener=getattr(listener, "__qualname__", repr(listener)),
                    error=f"{type(exc).__name__}: {exc}",
                )

    def clear_history(self) -> None:
        self.history.clear()
