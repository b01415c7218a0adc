"""Per-screen listing state machine.

IDLE -> DEBOUNCING -> FETCHING -> SETTLED | FAILED, re-entrant on any user
input. Every issued request carries a sequence number; a completion whose
number is not the latest one issued is discarded, whatever order the network
completes in.
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .exceptions import ApiError, SessionExpiredError
from .fallback import FallbackProvider
from .http_client import HttpClient
from .logging_setup import get_logger, log_event
from .models import FallbackDataset, PaginatedQuery, PaginatedResult, RequestDescriptor
from .normalizers import normalize_listing

logger = get_logger("toona_admin_sdk.query")

Sleeper = Callable[[float], Awaitable[Any]]
ChangeListener = Callable[["QueryController"], None]

IGNORED_FILTER_VALUES = (None, "", "all")


class QueryState(str, Enum):
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    FETCHING = "fetching"
    SETTLED = "settled"
    FAILED = "failed"


@dataclass(frozen=True)
class ListingEndpoint:
    entity_kind: str
    list_path: str
    search_path: str | None = None
    search_param: str = "q"
    page_param: str = "page"
    limit_param: str = "limit"
    items_key: str | None = None
    unsupported_filters: tuple[str, ...] = ()

    def uses_search(self, query: PaginatedQuery, min_search_length: int) -> bool:
        return bool(self.search_path) and len(query.debounced_search_term.strip()) >= min_search_length

    def build_request(self, query: PaginatedQuery, min_search_length: int) -> RequestDescriptor:
        params: dict[str, Any] = {
            self.page_param: query.backend_page,
            self.limit_param: query.page_size,
        }
        for key, value in query.extra_filters.items():
            if key in self.unsupported_filters:
                continue
            params[key] = value
        if self.uses_search(query, min_search_length):
            params[self.search_param] = query.debounced_search_term.strip()
            return RequestDescriptor(method="GET", path=str(self.search_path), params=params)
        return RequestDescriptor(method="GET", path=self.list_path, params=params)


class QueryController:
    def __init__(
        self,
        http: HttpClient,
        endpoint: ListingEndpoint,
        *,
        fallback: FallbackProvider | None = None,
        debounce_seconds: float = 0.5,
        min_search_length: int = 2,
        page_size: int = 10,
        sleep: Sleeper | None = None,
        on_change: ChangeListener | None = None,
    ) -> None:
        self.http = http
        self.endpoint = endpoint
        self.fallback = fallback
        self.debounce_seconds = max(0.0, debounce_seconds)
        self.min_search_length = max(1, min_search_length)
        self.query = PaginatedQuery(page_size=max(1, page_size))
        self.state = QueryState.IDLE
        self.result: PaginatedResult[Any] | FallbackDataset[Any] | None = None
        self.last_error: ApiError | None = None
        self.discarded_responses = 0
        self._sleep = sleep or asyncio.sleep
        self._on_change = on_change
        self._sequence = 0
        self._debounce_task: asyncio.Task[None] | None = None
        self._inflight: set[asyncio.Task[None]] = set()

    @classmethod
    def from_config(cls, http: HttpClient, endpoint: ListingEndpoint, **kwargs: Any) -> "QueryController":
        kwargs.setdefault("debounce_seconds", http.config.debounce_seconds)
        kwargs.setdefault("min_search_length", http.config.min_search_length)
        if "fallback" not in kwargs:
            kwargs["fallback"] = FallbackProvider(min_search_length=http.config.min_search_length)
        return cls(http, endpoint, **kwargs)

    @property
    def sequence(self) -> int:
        return self._sequence

    @property
    def is_synthetic(self) -> bool:
        return isinstance(self.result, FallbackDataset)

    def on_search_text_changed(self, text: str) -> None:
        self.query.search_term = text
        self._cancel_debounce()
        self.state = QueryState.DEBOUNCING
        self._debounce_task = asyncio.get_running_loop().create_task(self._debounce(text))
        self._changed()

    def on_page_changed(self, page_index: int) -> asyncio.Task[None]:
        self.query.page_index = max(0, page_index)
        return self._issue()

    def on_page_size_changed(self, page_size: int) -> asyncio.Task[None]:
        self.query.page_size = max(1, page_size)
        self.query.page_index = 0
        return self._issue()

    def set_filters(self, **filters: Any) -> asyncio.Task[None] | None:
        cleaned = {key: value for key, value in filters.items() if value not in IGNORED_FILTER_VALUES}
        if cleaned == self.query.extra_filters:
            return None
        dropped = sorted(key for key in cleaned if key in self.endpoint.unsupported_filters)
        if dropped:
            log_event(
                logger,
                "query",
                f"{self.endpoint.entity_kind}.filters",
                "not_sent",
                level=logging.WARNING,
                unsupported=dropped,
            )
        self.query.extra_filters = cleaned
        self.query.page_index = 0
        return self._issue()

    def refresh(self) -> asyncio.Task[None]:
        return self._issue()

    async def wait_idle(self) -> None:
        while True:
            pending = [task for task in (self._debounce_task, *self._inflight) if task is not None and not task.done()]
            if not pending:
                return
            outcomes = await asyncio.gather(*pending, return_exceptions=True)
            for outcome in outcomes:
                if isinstance(outcome, Exception):
                    raise outcome

    def close(self) -> None:
        self._cancel_debounce()
        for task in list(self._inflight):
            task.cancel()
        self._inflight.clear()
        self.state = QueryState.IDLE

    async def _debounce(self, text: str) -> None:
        await self._sleep(self.debounce_seconds)
        self._debounce_task = None
        if text == self.query.debounced_search_term:
            self.state = QueryState.FETCHING if self._fetch_pending() else self._resting_state()
            self._changed()
            return
        self.query.debounced_search_term = text
        self.query.page_index = 0
        self._issue()

    def _issue(self) -> asyncio.Task[None]:
        self._sequence += 1
        sequence = self._sequence
        snapshot = self.query.snapshot()
        descriptor = self.endpoint.build_request(snapshot, self.min_search_length)
        self.state = QueryState.FETCHING
        log_event(
            logger,
            "query",
            f"{self.endpoint.entity_kind}.issue",
            "fetching",
            level=logging.DEBUG,
            sequence=sequence,
            path=descriptor.path,
            params=descriptor.params,
        )
        task = asyncio.get_running_loop().create_task(self._run(sequence, snapshot, descriptor))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        self._changed()
        return task

    async def _run(self, sequence: int, snapshot: PaginatedQuery, descriptor: RequestDescriptor) -> None:
        try:
            payload = await self.http.request(
                descriptor.method,
                descriptor.path,
                params=descriptor.params,
                notify=descriptor.notify,
            )
            result = normalize_listing(
                payload,
                page_index=snapshot.page_index,
                page_size=snapshot.page_size,
                items_key=self.endpoint.items_key,
                path=descriptor.path,
            )
        except SessionExpiredError as exc:
            if self._is_stale(sequence):
                return
            # the session guard already cleared credentials and redirected
            self.result = None
            self.last_error = exc
            self.state = QueryState.IDLE
            self._changed()
            return
        except ApiError as exc:
            if self._is_stale(sequence):
                return
            self._apply_failure(exc, snapshot)
            return

        if self._is_stale(sequence):
            return
        self.result = result
        self.last_error = None
        self.state = QueryState.DEBOUNCING if self._debounce_pending() else QueryState.SETTLED
        self._changed()

    def _apply_failure(self, error: ApiError, snapshot: PaginatedQuery) -> None:
        self.last_error = error
        # one notification per failure; transport already sent it unless the body was unusable
        self.http.publish_failure(error)
        if self.fallback is not None:
            self.result = self.fallback.build_fallback(self.endpoint.entity_kind, snapshot, reason=error.code)
        else:
            self.result = None
        self.state = QueryState.DEBOUNCING if self._debounce_pending() else QueryState.FAILED
        self._changed()

    def _is_stale(self, sequence: int) -> bool:
        if sequence == self._sequence:
            return False
        self.discarded_responses += 1
        log_event(
            logger,
            "query",
            f"{self.endpoint.entity_kind}.discard",
            "stale",
            sequence=sequence,
            latest=self._sequence,
        )
        return True

    def _resting_state(self) -> QueryState:
        if self.last_error is not None and not isinstance(self.last_error, SessionExpiredError):
            return QueryState.FAILED
        if self.result is not None:
            return QueryState.SETTLED
        return QueryState.IDLE

    def _debounce_pending(self) -> bool:
        return self._debounce_task is not None and not self._debounce_task.done()

    def _fetch_pending(self) -> bool:
        return any(not task.done() for task in self._inflight)

    def _cancel_debounce(self) -> None:
        if self._debounce_task is not None and not self._debounce_task.done():
            self._debounce_task.cancel()
        self._debounce_task = None

    def _changed(self) -> None:
        if self._on_change:
            self._on_change(self)
