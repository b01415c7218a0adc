from __future__ import annotations

from typing import Any

CLIENTS: tuple[dict[str, Any], ...] = (
    {"id": 1, "numero": "CLI001", "nom": "Nguema", "prenom": "Paul", "telephone": "+237699887766", "email": "paul.nguema@example.com", "group_name": "Tech Solutions Sarl", "total_achats": 4500000, "solde": 0, "last_activity": "2026-02-01 14:30:00", "is_active": True},
    {"id": 2, "numero": "CLI002", "nom": "Kamga", "prenom": "Marie", "telephone": "+237677554433", "email": "marie.kamga@example.com", "group_name": "Commerce Plus", "total_achats": 2300000, "solde": 150000, "last_activity": "2026-01-28 10:15:00", "is_active": True},
    {"id": 3, "numero": "CLI003", "nom": "Mbida", "prenom": "Jean", "telephone": "+237655443322", "email": "jean.mbida@example.com", "group_name": "Tech Solutions Sarl", "total_achats": 1800000, "solde": 0, "last_activity": "2026-01-15 16:45:00", "is_active": True},
    {"id": 4, "numero": "CLI004", "nom": "Fotso", "prenom": "Alice", "telephone": "+237644332211", "email": "alice.fotso@example.com", "group_name": "AgriPro Group", "total_achats": 3200000, "solde": 450000, "last_activity": "2025-12-20 09:00:00", "is_active": False},
    {"id": 5, "numero": "CLI005", "nom": "Tagne", "prenom": "Robert", "telephone": "+237633221100", "email": "robert.tagne@example.com", "group_name": "Commerce Plus", "total_achats": 890000, "solde": 0, "last_activity": "2026-01-30 11:20:00", "is_active": True},
    {"id": 6, "numero": "CLI006", "nom": "Nkongo", "prenom": "Sophie", "telephone": "+237622110099", "email": "sophie.nkongo@example.com", "group_name": "Tech Solutions Sarl", "total_achats": 5600000, "solde": 320000, "last_activity": "2026-02-01 08:45:00", "is_active": True},
    {"id": 7, "numero": "CLI007", "nom": "Essomba", "prenom": "Pierre", "telephone": "+237611009988", "email": "pierre.essomba@example.com", "group_name": "Digital Wave", "total_achats": 1200000, "solde": 0, "last_activity": "2025-11-15 15:30:00", "is_active": False},
    {"id": 8, "numero": "CLI008", "nom": "Atangana", "prenom": "Grace", "telephone": "+237600998877", "email": "grace.atangana@example.com", "group_name": "AgriPro Group", "total_achats": 4100000, "solde": 180000, "last_activity": "2026-01-25 13:00:00", "is_active": True},
)

GROUPS: tuple[dict[str, Any], ...] = (
    {"id": 1, "name": "Global Tech Sarl", "nrccm": "RC/DLA/2023/B/123", "user_count": 45, "status": "active", "expiry_date": "2024-12-31"},
    {"id": 2, "name": "Agro Invest Group", "nrccm": "RC/YDE/2022/B/556", "user_count": 12, "status": "trial", "expiry_date": "2023-11-15"},
    {"id": 3, "name": "Logistics Pro", "nrccm": "RC/LBE/2021/A/998", "user_count": 8, "status": "inactive", "expiry_date": "2023-05-20"},
    {"id": 4, "name": "Blue Sky Soft", "nrccm": "RC/DLA/2023/B/777", "user_count": 150, "status": "active", "expiry_date": "2025-06-30"},
)

INVOICES: tuple[dict[str, Any], ...] = (
    {"id": 1, "numero": "INV-2026-001", "group_name": "Tech Solutions Sarl", "client_name": "Paul Nguema", "amount": 450000, "paid_amount": 450000, "status": "paid", "issue_date": "2026-01-15 10:00:00", "due_date": "2026-02-15 23:59:59"},
    {"id": 2, "numero": "INV-2026-002", "group_name": "Commerce Plus", "client_name": "Marie Kamga", "amount": 320000, "paid_amount": 150000, "status": "partial", "issue_date": "2026-01-18 14:30:00", "due_date": "2026-02-18 23:59:59"},
    {"id": 3, "numero": "INV-2026-003", "group_name": "AgriPro Group", "client_name": "Jean Mbida", "amount": 580000, "paid_amount": 0, "status": "unpaid", "issue_date": "2026-01-20 09:15:00", "due_date": "2026-02-20 23:59:59"},
    {"id": 4, "numero": "INV-2026-004", "group_name": "Digital Wave", "client_name": "Alice Fotso", "amount": 190000, "paid_amount": 0, "status": "cancelled", "issue_date": "2026-01-10 11:00:00", "due_date": "2026-02-10 23:59:59"},
    {"id": 5, "numero": "INV-2026-005", "group_name": "Tech Solutions Sarl", "client_name": "Robert Tagne", "amount": 725000, "paid_amount": 725000, "status": "paid", "issue_date": "2026-01-22 16:45:00", "due_date": "2026-02-22 23:59:59"},
)

PRODUCTS: tuple[dict[str, Any], ...] = (
    {"id": 1, "name": "Ordinateur Portable HP", "sku": "HP-001", "price": 425000, "is_active": True, "is_service": False},
    {"id": 2, "name": "Clavier Sans Fil", "sku": "KEY-002", "price": 15000, "is_active": True, "is_service": False},
    {"id": 3, "name": "Souris Optique", "sku": "MOU-003", "price": 8500, "is_active": True, "is_service": False},
    {"id": 4, "name": "Écran LED 24\"", "sku": "MON-004", "price": 185000, "is_active": True, "is_service": False},
    {"id": 5, "name": "Service Installation", "sku": "SRV-001", "price": 50000, "is_active": True, "is_service": True},
)

PROMO_CODES: tuple[dict[str, Any], ...] = (
    {"id": 1, "code": "WELCOME2026", "description": "Offre de bienvenue pour nouveaux clients", "discount_type": "percentage", "discount_value": 20, "max_usage_count": 100, "usage_count": 45, "valid_from": "2026-01-01T00:00:00", "valid_until": "2026-06-30T23:59:59", "is_active": True},
    {"id": 2, "code": "SUMMER50", "description": "Réduction de 50000 XAF pour l'été", "discount_type": "fixed", "discount_value": 50000, "max_usage_count": 50, "usage_count": 12, "valid_from": "2026-06-01T00:00:00", "valid_until": "2026-08-31T23:59:59", "is_active": True},
    {"id": 3, "code": "EXPIRED2025", "description": "Code promo expiré", "discount_type": "percentage", "discount_value": 15, "max_usage_count": 200, "usage_count": 200, "valid_from": "2025-01-01T00:00:00", "valid_until": "2025-12-31T23:59:59", "is_active": False},
)

PAYMENTS: tuple[dict[str, Any], ...] = (
    {"id": 1, "status": "SUCCESS", "transaction_id": "TX-7781", "reference": "PAY-2026-0001", "amount": "25000", "provider": "MTN_MOMO", "plan": "standard", "months": 1, "currency": "XAF", "created_at": "2026-01-05T09:12:00", "group_name": "Global Tech Sarl"},
    {"id": 2, "status": "PENDING", "transaction_id": "TX-7790", "reference": "PAY-2026-0002", "amount": "75000", "provider": "ORANGE_MONEY", "plan": "premium", "months": 3, "currency": "XAF", "created_at": "2026-01-12T14:40:00", "group_name": "Blue Sky Soft"},
    {"id": 3, "status": "FAILED", "transaction_id": "TX-7802", "reference": "PAY-2026-0003", "amount": "25000", "provider": "MTN_MOMO", "plan": "standard", "months": 1, "currency": "XAF", "created_at": "2026-01-20T08:05:00", "group_name": "Agro Invest Group"},
    {"id": 4, "status": "SUCCESS", "transaction_id": "TX-7815", "reference": "PAY-2026-0004", "amount": "150000", "provider": "ORANGE_MONEY", "plan": "premium", "months": 6, "currency": "XAF", "created_at": "2026-01-28T17:22:00", "group_name": "Global Tech Sarl"},
)

SEEDS: dict[str, tuple[dict[str, Any], ...]] = {
    "clients": CLIENTS,
    "groups": GROUPS,
    "invoices": INVOICES,
    "payments": PAYMENTS,
    "products": PRODUCTS,
    "promo_codes": PROMO_CODES,
}
