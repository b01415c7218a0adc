from __future__ import annotations

from typing import Any

from .exceptions import ResponseParseError
from .models import PaginatedResult

LIST_KEYS = ("data", "items", "rows", "results")


def extract_rows(payload: Any, items_key: str | None = None) -> list[Any] | None:
    if isinstance(payload, list):
        return payload
    if not isinstance(payload, dict):
        return None
    keys = (items_key,) + LIST_KEYS if items_key else LIST_KEYS
    for key in keys:
        rows = payload.get(key)
        if isinstance(rows, list):
            return rows
    return None


def unwrap_entity(payload: Any) -> dict[str, Any] | None:
    if not isinstance(payload, dict):
        return None
    if "data" not in payload:
        return payload
    inner = payload["data"]
    # an envelope whose data is null or a list carries no entity
    return inner if isinstance(inner, dict) else None


def normalize_listing(
    payload: Any,
    *,
    page_index: int,
    page_size: int,
    items_key: str | None = None,
    path: str | None = None,
) -> PaginatedResult[Any]:
    rows = extract_rows(payload, items_key)
    if rows is None:
        raise ResponseParseError(
            code="UNEXPECTED_SHAPE",
            message="Listing response has no list of rows",
            body=payload,
            path=path,
        )

    safe_page_size = max(1, int(page_size or 1))
    total: int | None = None
    if isinstance(payload, dict):
        total = _to_int(payload.get("total"))
        meta = payload.get("meta") or payload.get("pagination")
        if total is None and isinstance(meta, dict):
            total = _to_int(meta.get("total"))
    if total is None:
        # list-only endpoints: the page is all we know about
        total = page_index * safe_page_size + len(rows)

    return PaginatedResult[Any](
        items=list(rows[:safe_page_size]),
        total_count=max(total, 0),
        page_index=max(0, page_index),
        page_size=safe_page_size,
    )


def _to_int(value: Any) -> int | None:
    try:
        if value is None or value == "":
            return None
        return int(value)
    except (TypeError, ValueError):
        return None
