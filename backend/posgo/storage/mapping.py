# Overview: Pure field-name/type translation between entity dicts and remote rows.

from __future__ import annotations

import json
from typing import Any


# Internal (camelCase) -> remote (snake_case). Names not listed are identical on both sides.
FIELD_MAP = {
    "shiftId": "shift_id",
    "paymentMethod": "payment_method",
    "startTime": "start_time",
    "endTime": "end_time",
    "startAmount": "start_amount",
    "endAmount": "end_amount",
    "totalSalesCash": "total_sales_cash",
    "totalSalesDigital": "total_sales_digital",
    "supplierId": "supplier_id",
    "hasVariants": "has_variants",
    "isPack": "is_pack",
    "packItems": "pack_items",
}
REVERSE_FIELD_MAP = {remote: internal for internal, remote in FIELD_MAP.items()}

# Internal fields persisted per remote table (images travel separately).
TABLE_FIELDS = {
    "products": ["id", "name", "price", "stock", "category", "barcode", "hasVariants", "variants", "isPack", "packItems"],
    "transactions": ["id", "date", "items", "subtotal", "tax", "discount", "total", "profit", "paymentMethod", "payments", "shiftId"],
    "purchases": ["id", "date", "supplierId", "total", "items"],
    "customers": ["id", "name", "phone", "email"],
    "suppliers": ["id", "name", "contact", "phone"],
    "cash_shifts": ["id", "status", "startTime", "endTime", "startAmount", "endAmount", "totalSalesCash", "totalSalesDigital"],
    "cash_movements": ["id", "shiftId", "type", "amount", "description", "timestamp"],
}

JSON_FIELDS = {"items", "payments", "variants", "packItems"}
NUMERIC_FIELDS = {
    "price", "subtotal", "tax", "discount", "total", "profit", "amount",
    "startAmount", "endAmount", "totalSalesCash", "totalSalesDigital",
}

# Remote bookkeeping columns never surfaced to entities.
REMOTE_ONLY = {"store_id", "created_at", "updated_at"}


def decode_json_list(value: Any) -> list:
    """JSON column value (structured or encoded string) -> list; anything else -> []."""
    if value is None:
        return []
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            return []
    return value if isinstance(value, list) else []


def _coerce_number(value: Any) -> Any:
    if value is None or isinstance(value, bool):
        return value
    try:
        return float(value)
    except (TypeError, ValueError):
        return value


def to_remote(table: str, record: dict, store_id: str | None = None) -> dict:
    """Entity dict -> remote row for `table`, stamped with `store_id` when given."""
    row = {}
    for field in TABLE_FIELDS[table]:
        if field in record:
            row[FIELD_MAP.get(field, field)] = record[field]
    if store_id is not None:
        row["store_id"] = store_id
    return row


def from_remote(table: str, row: dict) -> dict:
    """Remote row -> entity dict (camelCase, JSON columns decoded, numbers coerced)."""
    known = TABLE_FIELDS.get(table)
    record = {}
    for column, value in row.items():
        if column in REMOTE_ONLY:
            continue
        field = REVERSE_FIELD_MAP.get(column, column)
        if known is not None and field not in known:
            continue
        if field in JSON_FIELDS:
            value = decode_json_list(value)
        elif field in NUMERIC_FIELDS:
            value = _coerce_number(value)
        record[field] = value
    return record
