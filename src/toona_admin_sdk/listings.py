from __future__ import annotations

from .query_controller import ListingEndpoint

CLIENTS = ListingEndpoint(entity_kind="clients", list_path="/admin/clients", search_path="/admin/clients/search")
GROUPS = ListingEndpoint(entity_kind="groups", list_path="/admin/groups", search_path="/admin/groups/search")
INVOICES = ListingEndpoint(entity_kind="invoices", list_path="/admin/invoices", search_path="/admin/invoices/search")
PRODUCTS = ListingEndpoint(entity_kind="products", list_path="/products", search_path="/products/search")
# the payments backend does not filter by status yet
PAYMENTS = ListingEndpoint(entity_kind="payments", list_path="/admin/payments", unsupported_filters=("status",))
PROMO_CODES = ListingEndpoint(entity_kind="promo_codes", list_path="/admin/promo-codes", items_key="promoCodes")

LISTINGS: dict[str, ListingEndpoint] = {
    endpoint.entity_kind: endpoint
    for endpoint in (CLIENTS, GROUPS, INVOICES, PRODUCTS, PAYMENTS, PROMO_CODES)
}
