# Overview: Demo-mode storage backend over the device-local key-value store.

from __future__ import annotations

import json
from typing import Any

from flask import current_app

from ..constants import LOCAL_KEYS
from ..entities import (
    CashMovement,
    CashShift,
    Customer,
    Product,
    Purchase,
    StoreSettings,
    Supplier,
    Transaction,
    UserProfile,
)
from .base import StorageBackend, newest_first
from .kv import KeyValueStore


class LocalStorage(StorageBackend):
    """
    Demo backend: one JSON document per entity type under a fixed key.

    Also owns the device-level bookkeeping shared by both modes: the
    session profile, the active-shift pointer and the demo template cache.
    """

    def __init__(self, kv: KeyValueStore):
        self.kv = kv

    # -------------------------------------------------------------------------
    # Raw documents
    # -------------------------------------------------------------------------

    def _read(self, name: str, default: Any) -> Any:
        raw = self.kv.get(LOCAL_KEYS[name])
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError:
            current_app.logger.warning("Corrupt local document %s; reading as empty", LOCAL_KEYS[name])
            return default

    def _write(self, name: str, value: Any) -> None:
        self.kv.set(LOCAL_KEYS[name], json.dumps(value, ensure_ascii=False))

    def _remove(self, name: str) -> None:
        self.kv.remove(LOCAL_KEYS[name])

    def _upsert(self, name: str, record: dict) -> bool:
        rows = self._read(name, [])
        for i, row in enumerate(rows):
            if row.get("id") == record["id"]:
                rows[i] = record
                break
        else:
            rows.insert(0, record)
        self._write(name, rows)
        return True

    def _rows(self, name: str) -> list[dict]:
        rows = self._read(name, [])
        return rows if isinstance(rows, list) else []

    # -------------------------------------------------------------------------
    # Session / pointer / template cache
    # -------------------------------------------------------------------------

    def get_session_profile(self) -> UserProfile | None:
        data = self._read("session", None)
        return UserProfile.from_dict(data) if isinstance(data, dict) else None

    def save_session_profile(self, profile: UserProfile) -> None:
        self._write("session", profile.to_dict())

    def clear_session_profile(self) -> None:
        self._remove("session")

    def get_active_shift_id(self) -> str | None:
        value = self.kv.get(LOCAL_KEYS["active_shift"])
        return value or None

    def set_active_shift_id(self, shift_id: str | None) -> None:
        if shift_id:
            self.kv.set(LOCAL_KEYS["active_shift"], shift_id)
        else:
            self._remove("active_shift")

    def get_cached_template(self) -> list[Product] | None:
        rows = self._read("demo_template", None)
        if not isinstance(rows, list):
            return None
        return [Product.from_dict(r) for r in rows]

    def save_cached_template(self, products: list[Product]) -> None:
        self._write("demo_template", [p.to_dict() for p in products])

    def has_products(self) -> bool:
        return self.kv.get(LOCAL_KEYS["products"]) is not None

    def replace_products(self, products: list[Product]) -> None:
        self._write("products", [p.to_dict() for p in products])

    def reset_collections(self, settings: StoreSettings) -> None:
        for name in ("transactions", "purchases", "customers", "suppliers", "shifts", "movements"):
            self._write(name, [])
        self._write("settings", settings.to_dict())
        self.set_active_shift_id(None)

    # -------------------------------------------------------------------------
    # StorageBackend
    # -------------------------------------------------------------------------

    def get_products(self) -> list[Product]:
        return [Product.from_dict(r) for r in self._rows("products")]

    def save_product(self, product: Product) -> bool:
        rows = self._rows("products")
        record = product.to_dict()
        for i, row in enumerate(rows):
            if row.get("id") == product.id:
                rows[i] = record
                break
        else:
            rows.append(record)  # catalog keeps insertion order
        self._write("products", rows)
        return True

    def save_products(self, products: list[Product]) -> bool:
        by_id = {p.id: p.to_dict() for p in products}
        rows = self._rows("products")
        merged = []
        for row in rows:
            merged.append(by_id.pop(row.get("id"), row))
        merged.extend(by_id.values())
        self._write("products", merged)
        return True

    def delete_product(self, product_id: str) -> bool:
        rows = self._rows("products")
        remaining = [r for r in rows if r.get("id") != product_id]
        self._write("products", remaining)
        return len(remaining) != len(rows)

    def get_transactions(self) -> list[Transaction]:
        return newest_first([Transaction.from_dict(r) for r in self._rows("transactions")], "date")

    def save_transaction(self, transaction: Transaction) -> bool:
        return self._upsert("transactions", transaction.to_dict())

    def get_purchases(self) -> list[Purchase]:
        return newest_first([Purchase.from_dict(r) for r in self._rows("purchases")], "date")

    def save_purchase(self, purchase: Purchase) -> bool:
        return self._upsert("purchases", purchase.to_dict())

    def get_customers(self) -> list[Customer]:
        return [Customer.from_dict(r) for r in self._rows("customers")]

    def save_customer(self, customer: Customer) -> bool:
        return self._upsert("customers", customer.to_dict())

    def get_suppliers(self) -> list[Supplier]:
        return [Supplier.from_dict(r) for r in self._rows("suppliers")]

    def save_supplier(self, supplier: Supplier) -> bool:
        return self._upsert("suppliers", supplier.to_dict())

    def get_settings(self) -> StoreSettings:
        data = self._read("settings", None)
        return StoreSettings.from_dict(data if isinstance(data, dict) else None)

    def save_settings(self, settings: StoreSettings) -> bool:
        self._write("settings", settings.to_dict())
        return True

    def get_shifts(self) -> list[CashShift]:
        return newest_first([CashShift.from_dict(r) for r in self._rows("shifts")], "start_time")

    def save_shift(self, shift: CashShift) -> bool:
        return self._upsert("shifts", shift.to_dict())

    def get_movements(self) -> list[CashMovement]:
        return newest_first([CashMovement.from_dict(r) for r in self._rows("movements")], "timestamp")

    def save_movement(self, movement: CashMovement) -> bool:
        return self._upsert("movements", movement.to_dict())
