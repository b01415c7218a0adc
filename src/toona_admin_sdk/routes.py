from __future__ import annotations

import json
from pathlib import Path

from .models import EndpointDescriptor


def _route(method: str, path: str, name: str, category: str) -> EndpointDescriptor:
    return EndpointDescriptor(method=method, path=path, name=name, category=category)


DEFAULT_ROUTE_TABLE: tuple[EndpointDescriptor, ...] = (
    _route("GET", "/admin/stats", "Global statistics", "Admin"),
    _route("GET", "/admin/new-groups", "New groups", "Admin"),
    _route("GET", "/admin/groups/expiring-soon", "Expiring groups", "Admin"),
    _route("GET", "/admin/groups", "Group list", "Admin"),
    _route("GET", "/admin/group/1", "Group detail (singular)", "Admin"),
    _route("GET", "/admin/groups/1", "Group detail (plural)", "Admin"),
    _route("GET", "/admin/group/1/new-users", "Group new users", "Admin"),
    _route("GET", "/admin/group/1/payments", "Group payments", "Admin"),
    _route("POST", "/admin/group/1/active", "Activate group", "Admin"),
    _route("POST", "/admin/group/1/disable", "Disable group", "Admin"),
    _route("GET", "/admin/imf/stats", "IMF statistics", "IMF"),
    _route("GET", "/admin/imf/pending-groups", "Pending groups", "IMF"),
    _route("GET", "/admin/imf/approved-groups", "Approved groups", "IMF"),
    _route("GET", "/admin/stats/top-clients", "Top clients", "Stats"),
    _route("GET", "/admin/stats/top-products", "Top products", "Stats"),
)


def load_route_table(path: str | Path) -> tuple[EndpointDescriptor, ...]:
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ValueError(f"Route table {path} must be a JSON list")
    return tuple(EndpointDescriptor.model_validate(entry) for entry in raw)
