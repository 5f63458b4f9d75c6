# Overview: Super-admin operations on global tables (leads, stores) and public lead capture.

"""
Admin Service

All calls go through the policy-checked row store, so a non-super-admin
session gets RowStorePermissionError from the storage layer itself.
"""

from __future__ import annotations

from flask import current_app

from ..constants import DEMO_TEMPLATE_STORE_ID
from ..validation import ValidationError, require_text

# Store-scoped tables, children first.
STORE_SCOPED_TABLES = [
    "product_images",
    "products",
    "transactions",
    "purchases",
    "customers",
    "suppliers",
    "cash_movements",
    "cash_shifts",
    "profiles",
]


def capture_lead(rows, payload: dict) -> dict:
    """Public landing-form capture. The phone number identifies the lead."""
    lead = {
        "name": require_text(payload, "name"),
        "business_name": (payload.get("businessName") or "").strip() or None,
        "phone": require_text(payload, "phone"),
    }
    rows.upsert("leads", [lead], on_conflict="phone")
    return {"name": lead["name"], "businessName": lead["business_name"], "phone": lead["phone"]}


def list_leads(rows) -> list[dict]:
    return [
        {
            "id": r["id"],
            "name": r["name"],
            "businessName": r.get("business_name"),
            "phone": r["phone"],
            "status": r["status"],
            "createdAt": r.get("created_at"),
        }
        for r in rows.select("leads", order_by="created_at", descending=True)
    ]


def delete_lead(rows, lead_id: str) -> bool:
    return rows.delete("leads", {"id": lead_id}) > 0


def list_stores(rows) -> list[dict]:
    return [
        {"id": r["id"], "name": r.get("name"), "createdAt": r.get("created_at")}
        for r in rows.select("stores", order_by="created_at", descending=True)
        if r["id"] != DEMO_TEMPLATE_STORE_ID
    ]


def delete_store(rows, store_id: str) -> bool:
    """Delete a store and every row it owns. The template scope is not deletable here."""
    if store_id == DEMO_TEMPLATE_STORE_ID:
        raise ValidationError("The demo template store cannot be deleted")
    for table in STORE_SCOPED_TABLES:
        rows.delete(table, {"store_id": store_id})
    deleted = rows.delete("stores", {"id": store_id}) > 0
    if deleted:
        current_app.logger.info("Deleted store %s", store_id)
    return deleted
