from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .logging_setup import get_logger, log_event
from .models import FallbackDataset, PaginatedQuery
from .seed_data import SEEDS

logger = get_logger("toona_admin_sdk.fallback")

IGNORED_FILTER_VALUES = (None, "", "all")


class FallbackProvider:
    """Synthetic, deterministic listings for screens whose live call failed.

    Pure computation over static seed rows; never talks to the backend. Every
    call returns fresh copies so a caller mutating its rows cannot change what
    the next failure shows.
    """

    def __init__(
        self,
        seeds: Mapping[str, Iterable[Mapping[str, Any]]] | None = None,
        *,
        min_search_length: int = 2,
    ) -> None:
        source = SEEDS if seeds is None else seeds
        self._seeds: dict[str, tuple[dict[str, Any], ...]] = {
            kind: tuple(dict(row) for row in rows) for kind, rows in source.items()
        }
        self.min_search_length = min_search_length

    @property
    def kinds(self) -> list[str]:
        return sorted(self._seeds)

    def register(self, entity_kind: str, rows: Iterable[Mapping[str, Any]]) -> None:
        self._seeds[entity_kind] = tuple(dict(row) for row in rows)

    def seed_size(self, entity_kind: str) -> int:
        return len(self._seeds.get(entity_kind, ()))

    def build_fallback(
        self,
        entity_kind: str,
        query: PaginatedQuery | None = None,
        *,
        reason: str | None = None,
    ) -> FallbackDataset[Any]:
        query = query or PaginatedQuery()
        page_size = max(1, query.page_size)
        try:
            rows = [copy.deepcopy(row) for row in self._seeds.get(entity_kind, ())]
            rows = self._apply_search(rows, query.debounced_search_term)
            rows = self._apply_filters(rows, query.extra_filters)
        except Exception as exc:  # noqa: BLE001
            log_event(
                logger,
                "fallback",
                f"{entity_kind}.build",
                "error",
                level=logging.ERROR,
                error=f"{type(exc).__name__}: {exc}",
            )
            rows = []

        page_index = max(0, query.page_index)
        if rows and page_index * page_size >= len(rows):
            page_index = (len(rows) - 1) // page_size
        start = page_index * page_size
        dataset = FallbackDataset[Any](
            items=rows[start : start + page_size],
            total_count=len(rows),
            page_index=page_index,
            page_size=page_size,
            entity_kind=entity_kind,
            reason=reason,
        )
        log_event(
            logger,
            "fallback",
            f"{entity_kind}.build",
            "synthetic",
            total_count=dataset.total_count,
            page_index=dataset.page_index,
            reason=reason,
        )
        return dataset

    def _apply_search(self, rows: list[dict[str, Any]], term: str) -> list[dict[str, Any]]:
        needle = (term or "").strip().lower()
        if len(needle) < self.min_search_length:
            return rows
        return [
            row
            for row in rows
            if any(isinstance(value, str) and needle in value.lower() for value in row.values())
        ]

    def _apply_filters(self, rows: list[dict[str, Any]], filters: Mapping[str, Any]) -> list[dict[str, Any]]:
        for key, wanted in (filters or {}).items():
            if wanted in IGNORED_FILTER_VALUES:
                continue
            rows = [row for row in rows if _row_matches(row, key, wanted)]
        return rows


def _row_matches(row: Mapping[str, Any], key: str, wanted: Any) -> bool:
    if key in row:
        return _normalize(row[key]) == _normalize(wanted)
    if key == "status" and "is_active" in row and str(wanted).lower() in {"active", "inactive"}:
        return bool(row["is_active"]) == (str(wanted).lower() == "active")
    # unknown filter on synthetic rows: best effort is to keep the row
    return True


def _normalize(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value).strip().lower()
