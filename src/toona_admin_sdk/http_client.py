from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable

import httpx

from .config import ClientConfig
from .error_mapper import map_error
from .events import ErrorChannel, ErrorEvent
from .exceptions import ApiError, NetworkError, ResponseParseError, SessionExpiredError
from .logging_setup import get_logger, log_event
from .models import RequestDescriptor
from .session import SessionGuard

logger = get_logger("toona_admin_sdk.transport")

ResponseHook = Callable[[httpx.Response], None]
RequestHook = Callable[[str, str, dict[str, Any]], None]

DEFAULT_HEADERS = {"Accept": "application/json", "Content-Type": "application/json"}


@dataclass
class LastOperation:
    method: str
    path: str
    duration_ms: int
    result: str
    status_code: int | None


class TtlCache:
    """GET payloads keyed by path, params and credential; entries expire after a fixed TTL."""

    def __init__(self, ttl_seconds: float) -> None:
        self.ttl_seconds = ttl_seconds
        self._entries: dict[str, tuple[float, Any]] = {}

    def get(self, key: str) -> tuple[bool, Any]:
        entry = self._entries.get(key)
        if entry is None:
            return False, None
        if time.monotonic() > entry[0]:
            del self._entries[key]
            return False, None
        return True, entry[1]

    def put(self, key: str, payload: Any) -> None:
        self._entries[key] = (time.monotonic() + self.ttl_seconds, payload)

    def drop_matching(self, fragments: list[str]) -> None:
        for key in [key for key in self._entries if any(fragment in key for fragment in fragments)]:
            del self._entries[key]

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


@dataclass
class HttpClient:
    config: ClientConfig
    guard: SessionGuard
    errors: ErrorChannel
    transport: httpx.AsyncBaseTransport | None = None
    client: httpx.AsyncClient | None = None
    before_request: RequestHook | None = None
    after_response: ResponseHook | None = None
    cache_ttl_seconds: float = 3.0
    enable_get_cache: bool = False
    last_operation: LastOperation | None = None
    _cache: TtlCache = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.client is None:
            self.client = httpx.AsyncClient(
                base_url=self.config.api_root,
                headers=DEFAULT_HEADERS,
                timeout=httpx.Timeout(
                    self.config.read_timeout_seconds,
                    connect=self.config.connect_timeout_seconds,
                ),
                verify=self.config.verify_ssl,
                transport=self.transport,
            )
        self._cache = TtlCache(self.cache_ttl_seconds)

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, *_exc: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self.client is not None:
            await self.client.aclose()

    async def send(self, descriptor: RequestDescriptor) -> httpx.Response:
        if self.client is None:
            raise RuntimeError("HTTP client not initialized")
        method = descriptor.normalized_method
        path = descriptor.path if descriptor.path.startswith("/") else f"/{descriptor.path}"
        headers = dict(DEFAULT_HEADERS)
        # read per call so a logout is visible to the very next request
        headers.update(self.guard.authorization_header())
        params = _clean_params(descriptor.params)
        if self.before_request:
            self.before_request(method, path, {"headers": headers, "params": params, "json_body": descriptor.json_body})

        started = time.monotonic()
        try:
            response = await self.client.request(
                method,
                path,
                params=params,
                json=descriptor.json_body,
                headers=headers,
            )
        except httpx.TimeoutException as exc:
            error = NetworkError(
                code="TIMEOUT_ERROR",
                message="The request timed out",
                details={"type": type(exc).__name__},
                path=path,
            )
            self._record(method, path, started, "timeout", None)
            self._fail(error, descriptor)
            raise error from exc
        except httpx.RequestError as exc:
            error = NetworkError(
                code="NETWORK_ERROR",
                message=str(exc) or "Backend unreachable",
                details={"type": type(exc).__name__},
                path=path,
            )
            self._record(method, path, started, "network_error", None)
            self._fail(error, descriptor)
            raise error from exc

        if self.after_response:
            self.after_response(response)

        if response.status_code >= 400:
            http_error = map_error(response.status_code, _safe_json(response), path)
            self._record(method, path, started, "error", response.status_code)
            if isinstance(http_error, SessionExpiredError):
                self.clear_cache()
                self.guard.expire(f"http_{response.status_code}")
                raise http_error
            self._fail(http_error, descriptor)
            raise http_error

        self._record(method, path, started, "success", response.status_code)
        return response

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: Any = None,
        notify: bool = True,
        use_cache: bool = True,
        invalidate_paths: list[str] | None = None,
    ) -> Any:
        descriptor = RequestDescriptor(method=method, path=path, params=params, json_body=json_body, notify=notify)
        normalized = descriptor.normalized_method
        should_cache = self.enable_get_cache and use_cache and normalized == "GET"
        cache_key = self._cache_key(path, params) if should_cache else None
        if cache_key:
            hit, cached = self._cache.get(cache_key)
            if hit:
                self.last_operation = LastOperation(normalized, path, 0, "success(cache)", None)
                return cached

        response = await self.send(descriptor)
        if normalized != "GET":
            self._cache.drop_matching(invalidate_paths or [])
        if not response.content:
            return None
        try:
            parsed = response.json()
        except ValueError as exc:
            raise ResponseParseError(
                code="INVALID_JSON",
                message="Response body is not valid JSON",
                status_code=response.status_code,
                body=response.text,
                path=path,
            ) from exc
        if cache_key:
            self._cache.put(cache_key, parsed)
        return parsed

    def publish_failure(self, error: ApiError) -> None:
        if error.notified:
            return
        self.errors.publish(
            ErrorEvent(
                message=error.message,
                status=error.status_code or None,
                code=error.code,
                path=error.path,
            )
        )
        error.notified = True

    def clear_cache(self) -> None:
        self._cache.clear()

    def _fail(self, error: ApiError, descriptor: RequestDescriptor) -> None:
        log_event(
            logger,
            "transport",
            f"{descriptor.normalized_method} {error.path}",
            "error",
            level=logging.WARNING,
            status=error.status_code,
            code=error.code,
            notify=descriptor.notify,
        )
        if descriptor.notify:
            self.publish_failure(error)

    def _record(self, method: str, path: str, started: float, result: str, status_code: int | None) -> None:
        duration_ms = int((time.monotonic() - started) * 1000)
        self.last_operation = LastOperation(method, path, duration_ms, result, status_code)
        if result == "success":
            log_event(
                logger,
                "transport",
                f"{method} {path}",
                result,
                level=logging.DEBUG,
                status=status_code,
                duration_ms=duration_ms,
            )

    def _cache_key(self, path: str, params: dict[str, Any] | None) -> str:
        return json.dumps(
            {"path": path, "params": _clean_params(params) or {}, "auth": self.guard.token or ""},
            sort_keys=True,
            default=str,
        )


def _clean_params(params: dict[str, Any] | None) -> dict[str, Any] | None:
    if not params:
        return None
    cleaned = {key: value for key, value in params.items() if value is not None}
    return cleaned or None


def _safe_json(response: httpx.Response) -> object:
    try:
        return response.json()
    except ValueError:
        return {"message": response.text} if response.text else None
