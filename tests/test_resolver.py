import httpx
import pytest

from toona_admin_sdk.models import Group, NotFound, Resolved, TransportFailure
from toona_admin_sdk.resolver import DirectFetch, EntityResolver, ListScan, group_resolver


def _router(routes: dict[str, tuple[int, object]], calls: list[str]):
    def handler(request: httpx.Request) -> httpx.Response:
        key = request.url.path
        calls.append(request.url.raw_path.decode())
        status_code, payload = routes.get(key, (404, {"error": "introuvable"}))
        return httpx.Response(status_code, json=payload)

    return handler


async def test_list_scan_resolves_after_two_misses(make_http, events) -> None:
    calls: list[str] = []
    http = make_http(
        _router(
            {"/api/admin/groups": (200, {"data": [{"id": 3, "name": "A"}, {"id": 7, "name": "Logistics Pro"}]})},
            calls,
        )
    )

    outcome = await group_resolver(http).resolve(7)

    assert outcome == Resolved(value=Group(id=7, name="Logistics Pro"), via=2)
    assert calls == ["/api/admin/group/7", "/api/admin/groups/7", "/api/admin/groups?page=1&limit=100"]
    assert events == []


async def test_stops_at_first_success(make_http) -> None:
    calls: list[str] = []
    http = make_http(
        _router({"/api/admin/groups/7": (200, {"data": {"id": 7, "name": "Blue Sky"}})}, calls)
    )

    outcome = await group_resolver(http, model=Group).resolve("7")

    assert isinstance(outcome, Resolved)
    assert outcome.via == 1
    assert outcome.value == Group(id=7, name="Blue Sky")
    assert len(calls) == 2


async def test_resolve_is_idempotent(make_http) -> None:
    calls: list[str] = []
    http = make_http(_router({"/api/admin/group/4": (200, {"id": 4, "name": "Blue"})}, calls))
    resolver = group_resolver(http)

    first = await resolver.resolve(4)
    second = await resolver.resolve(4)

    assert first == second == Resolved(value=Group(id=4, name="Blue"), via=0)


async def test_exhausted_chain_is_not_found(make_http, events) -> None:
    calls: list[str] = []
    http = make_http(
        _router(
            {
                "/api/admin/group/9": (500, {"error": "boom"}),
                "/api/admin/groups": (200, [{"id": 1}]),
            },
            calls,
        )
    )

    outcome = await group_resolver(http).resolve(9)

    assert outcome == NotFound(entity_id="9")
    assert len(calls) == 3
    assert events == []


async def test_shape_mismatch_advances(make_http) -> None:
    calls: list[str] = []
    http = make_http(
        _router(
            {
                "/api/admin/group/5": (200, {"id": 5}),
                "/api/admin/groups/5": (200, {"id": 5, "name": "Agro"}),
            },
            calls,
        )
    )

    outcome = await group_resolver(http, model=Group).resolve(5)

    assert outcome == Resolved(value=Group(id=5, name="Agro"), via=1)


async def test_error_envelope_with_null_data_is_a_miss(make_http) -> None:
    calls: list[str] = []
    http = make_http(
        _router(
            {
                "/api/admin/group/7": (200, {"data": None, "error": "Groupe introuvable"}),
                "/api/admin/groups/7": (200, {"data": {"id": 7, "nomEntreprise": "Logistics Pro", "region": "Littoral"}}),
            },
            calls,
        )
    )

    outcome = await group_resolver(http).resolve(7)

    assert isinstance(outcome, Resolved)
    assert outcome.via == 1
    assert outcome.value.name == "Logistics Pro"
    assert outcome.value.model_dump() == {"id": 7, "name": "Logistics Pro", "region": "Littoral"}


async def test_body_for_another_id_is_a_miss(make_http) -> None:
    calls: list[str] = []
    http = make_http(
        _router(
            {
                "/api/admin/group/7": (200, {"data": {"id": 3, "name": "Other"}}),
                "/api/admin/groups/7": (200, {"success": True}),
                "/api/admin/groups": (200, {"data": [{"id": 3, "name": "Other"}, {"id": 7, "name": "Logistics Pro"}]}),
            },
            calls,
        )
    )

    outcome = await group_resolver(http).resolve(7)

    assert outcome == Resolved(value=Group(id=7, name="Logistics Pro"), via=2)
    assert len(calls) == 3


async def test_direct_fetch_matches_on_id_field(make_http) -> None:
    calls: list[str] = []
    http = make_http(_router({"/api/admin/promo-codes/SUMMER50": (200, {"code": "SUMMER50", "id": 2})}, calls))
    resolver = EntityResolver(http, [DirectFetch("/admin/promo-codes/{id}", id_field="code")], entity_kind="promo_code")

    outcome = await resolver.resolve("SUMMER50")

    assert outcome == Resolved(value={"code": "SUMMER50", "id": 2}, via=0)


async def test_all_network_failures_is_transport_failure(make_http, events) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("down", request=request)

    http = make_http(handler)

    outcome = await group_resolver(http).resolve(1)

    assert isinstance(outcome, TransportFailure)
    assert outcome.cause.code == "NETWORK_ERROR"
    assert events == []


async def test_session_death_stops_the_chain(make_http, guard, navigations) -> None:
    calls: list[str] = []
    http = make_http(_router({"/api/admin/group/1": (401, {"error": "expired"})}, calls))

    outcome = await group_resolver(http).resolve(1)

    assert isinstance(outcome, TransportFailure)
    assert calls == ["/api/admin/group/1"]
    assert guard.is_authenticated() is False
    assert navigations == ["#/login"]


async def test_custom_strategies_and_items_key(make_http) -> None:
    calls: list[str] = []
    http = make_http(
        _router(
            {"/api/admin/promo-codes": (200, {"promoCodes": [{"code": "SUMMER50", "id": 2}]})},
            calls,
        )
    )
    resolver = EntityResolver(
        http,
        [DirectFetch("/admin/promo-codes/{id}"), ListScan("/admin/promo-codes", limit=50, id_field="code", items_key="promoCodes")],
        entity_kind="promo_code",
    )

    outcome = await resolver.resolve("SUMMER50")

    assert outcome == Resolved(value={"code": "SUMMER50", "id": 2}, via=1)
    assert calls[-1] == "/api/admin/promo-codes?page=1&limit=50"


def test_resolver_needs_a_strategy(make_http) -> None:
    with pytest.raises(ValueError):
        EntityResolver(make_http(lambda request: httpx.Response(200)), [])
