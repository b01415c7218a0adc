"""Fetch one entity by id across the route shapes the backend has used over time.

Strategies run strictly in order and the first one that yields a parseable
entity wins. Failures of earlier strategies are never surfaced to the caller;
they only show up in the trace log, tagged with the strategy index.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol, Sequence

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ApiError, NetworkError, SessionExpiredError
from .http_client import HttpClient
from .logging_setup import get_logger, log_event
from .models import Group, NotFound, Resolved, ResolutionOutcome, TransportFailure
from .normalizers import extract_rows, unwrap_entity

logger = get_logger("toona_admin_sdk.resolver")

DEFAULT_SCAN_LIMIT = 100


class ResolveStrategy(Protocol):
    @property
    def description(self) -> str: ...

    async def fetch(self, http: HttpClient, entity_id: str) -> dict[str, Any] | None: ...


@dataclass(frozen=True)
class DirectFetch:
    path_template: str
    id_field: str = "id"

    @property
    def description(self) -> str:
        return f"GET {self.path_template}"

    async def fetch(self, http: HttpClient, entity_id: str) -> dict[str, Any] | None:
        payload = await http.request("GET", self.path_template.format(id=entity_id), notify=False, use_cache=False)
        entity = unwrap_entity(payload)
        if not entity or str(entity.get(self.id_field)) != entity_id:
            return None
        return entity


@dataclass(frozen=True)
class ListScan:
    path: str
    limit: int = DEFAULT_SCAN_LIMIT
    id_field: str = "id"
    items_key: str | None = None

    @property
    def description(self) -> str:
        return f"GET {self.path}?page=1&limit={self.limit} then scan {self.id_field}"

    async def fetch(self, http: HttpClient, entity_id: str) -> dict[str, Any] | None:
        payload = await http.request(
            "GET",
            self.path,
            params={"page": 1, "limit": self.limit},
            notify=False,
            use_cache=False,
        )
        for row in extract_rows(payload, self.items_key) or []:
            if isinstance(row, dict) and str(row.get(self.id_field)) == entity_id:
                return row
        return None


class EntityResolver:
    def __init__(
        self,
        http: HttpClient,
        strategies: Sequence[ResolveStrategy],
        *,
        model: type[BaseModel] | None = None,
        entity_kind: str = "entity",
    ) -> None:
        if not strategies:
            raise ValueError("EntityResolver needs at least one strategy")
        self.http = http
        self.strategies = tuple(strategies)
        self.model = model
        self.entity_kind = entity_kind

    async def resolve(self, entity_id: object) -> ResolutionOutcome:
        key = str(entity_id)
        skipped_because: str | None = None
        last_network_error: NetworkError | None = None
        backend_answered = False

        for index, strategy in enumerate(self.strategies):
            log_event(
                logger,
                "resolver",
                f"{self.entity_kind}.attempt",
                "running",
                entity_id=key,
                strategy=index,
                description=strategy.description,
                previous_skipped_because=skipped_because,
            )
            try:
                candidate = await strategy.fetch(self.http, key)
            except SessionExpiredError as exc:
                log_event(
                    logger,
                    "resolver",
                    f"{self.entity_kind}.abort",
                    "session_expired",
                    level=logging.WARNING,
                    entity_id=key,
                    strategy=index,
                )
                return TransportFailure(cause=exc)
            except NetworkError as exc:
                last_network_error = exc
                skipped_because = f"network {exc.code}"
                continue
            except ApiError as exc:
                backend_answered = True
                skipped_because = f"http {exc.status_code} {exc.code}"
                continue

            backend_answered = True
            if candidate is None:
                skipped_because = "no matching entity in response"
                continue
            try:
                value = self._parse(candidate)
            except (PydanticValidationError, TypeError) as exc:
                skipped_because = f"shape mismatch: {type(exc).__name__}"
                continue

            log_event(logger, "resolver", f"{self.entity_kind}.resolved", "success", entity_id=key, via=index)
            return Resolved(value=value, via=index)

        if not backend_answered and last_network_error is not None:
            log_event(
                logger,
                "resolver",
                f"{self.entity_kind}.unreachable",
                "transport_failure",
                level=logging.WARNING,
                entity_id=key,
            )
            return TransportFailure(cause=last_network_error)

        log_event(
            logger,
            "resolver",
            f"{self.entity_kind}.exhausted",
            "not_found",
            entity_id=key,
            last_skipped_because=skipped_because,
        )
        return NotFound(entity_id=key)

    def _parse(self, candidate: dict[str, Any]) -> Any:
        if self.model is None:
            if not isinstance(candidate, dict):
                raise TypeError("entity payload must be an object")
            return candidate
        return self.model.model_validate(candidate)


def group_resolver(http: HttpClient, *, model: type[BaseModel] | None = Group) -> EntityResolver:
    return EntityResolver(
        http,
        [
            DirectFetch("/admin/group/{id}"),
            DirectFetch("/admin/groups/{id}"),
            ListScan("/admin/groups", limit=DEFAULT_SCAN_LIMIT),
        ],
        model=model,
        entity_kind="group",
    )
