from toona_admin_sdk.fallback import FallbackProvider
from toona_admin_sdk.models import FallbackDataset, PaginatedQuery
from toona_admin_sdk.seed_data import CLIENTS, GROUPS


def test_fallback_is_deterministic_and_isolated() -> None:
    provider = FallbackProvider()

    first = provider.build_fallback("clients")
    first.items[0]["nom"] = "mutated"
    second = provider.build_fallback("clients")

    assert isinstance(second, FallbackDataset)
    assert second.synthetic is True
    assert second.items[0]["nom"] == CLIENTS[0]["nom"]
    assert [row["id"] for row in second.items] == [row["id"] for row in CLIENTS]


def test_fallback_respects_page_size_and_index() -> None:
    provider = FallbackProvider()

    page = provider.build_fallback("clients", PaginatedQuery(page_index=1, page_size=3))

    assert [row["id"] for row in page.items] == [4, 5, 6]
    assert page.total_count == len(CLIENTS)
    assert page.page_index == 1
    assert page.has_next is True


def test_fallback_clamps_page_beyond_data() -> None:
    page = FallbackProvider().build_fallback("clients", PaginatedQuery(page_index=9, page_size=3))

    assert page.page_index == 2
    assert [row["id"] for row in page.items] == [7, 8]


def test_fallback_search_and_filters() -> None:
    provider = FallbackProvider()

    searched = provider.build_fallback("groups", PaginatedQuery(debounced_search_term="blue"))
    active = provider.build_fallback("groups", PaginatedQuery(extra_filters={"status": "active"}))
    inactive_clients = provider.build_fallback("clients", PaginatedQuery(extra_filters={"status": "inactive"}))
    unknown = provider.build_fallback("groups", PaginatedQuery(extra_filters={"region": "Littoral"}))
    paid = provider.build_fallback("payments", PaginatedQuery(extra_filters={"status": "success"}))

    assert [row["name"] for row in searched.items] == ["Blue Sky Soft"]
    assert [row["id"] for row in active.items] == [1, 4]
    assert [row["id"] for row in inactive_clients.items] == [4, 7]
    assert unknown.total_count == len(GROUPS)
    assert [row["reference"] for row in paid.items] == ["PAY-2026-0001", "PAY-2026-0004"]


def test_short_search_term_is_ignored() -> None:
    page = FallbackProvider(min_search_length=2).build_fallback("groups", PaginatedQuery(debounced_search_term="b"))

    assert page.total_count == len(GROUPS)


def test_unknown_kind_is_explicitly_empty() -> None:
    page = FallbackProvider().build_fallback("stores", PaginatedQuery(page_index=4), reason="HTTP_ERROR")

    assert page.items == []
    assert page.total_count == 0
    assert page.page_index == 4
    assert page.entity_kind == "stores"
    assert page.reason == "HTTP_ERROR"


def test_registered_seed_and_no_match() -> None:
    provider = FallbackProvider(seeds={})
    provider.register("stores", [{"id": 1, "name": "Douala Centre"}])

    empty = provider.build_fallback("stores", PaginatedQuery(debounced_search_term="Yaounde", page_index=2))

    assert provider.kinds == ["stores"]
    assert provider.seed_size("stores") == 1
    assert empty.items == []
    assert empty.total_count == 0
    assert empty.page_index == 2
