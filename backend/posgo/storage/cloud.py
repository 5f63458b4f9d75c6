# Overview: Store-mode storage backend over the hosted row store, scoped by store_id.

"""
Cloud Storage

WHY: Real stores keep their data in the shared hosted database. Every row
is stamped with the store's id and every query filters on it.

FAILURE POLICY:
- Reads degrade to empty collections (settings degrade to defaults)
- Writes are logged and swallowed; callers get False
- Batches are independent per row; partial failures are not reconciled
"""

from __future__ import annotations

import json
from typing import Callable

from flask import current_app

from ..entities import (
    CashMovement,
    CashShift,
    Customer,
    Product,
    Purchase,
    StoreSettings,
    Supplier,
    Transaction,
)
from .base import StorageBackend
from .mapping import from_remote, to_remote
from .row_store import RowStore, RowStoreError


class CloudStorage(StorageBackend):
    def __init__(self, row_store: RowStore, store_id_resolver: Callable[[], str | None]):
        self.rows = row_store
        self.resolve_store_id = store_id_resolver

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _store_id(self) -> str | None:
        try:
            return self.resolve_store_id()
        except RowStoreError:
            current_app.logger.warning("Could not resolve store id for the current session", exc_info=True)
            return None

    def _select(self, table: str, order_by: str | None = None) -> list[dict]:
        store_id = self._store_id()
        if not store_id:
            return []
        try:
            rows = self.rows.select(table, {"store_id": store_id}, order_by=order_by, descending=True)
        except RowStoreError:
            current_app.logger.warning("Failed to read %s for store %s", table, store_id, exc_info=True)
            return []
        return [from_remote(table, r) for r in rows]

    def _upsert(self, table: str, records: list[dict]) -> bool:
        store_id = self._store_id()
        if not store_id:
            current_app.logger.warning("Dropped %s write: no store for the current session", table)
            return False
        try:
            self.rows.upsert(table, [to_remote(table, r, store_id) for r in records])
        except RowStoreError:
            current_app.logger.warning("Failed to write %s for store %s", table, store_id, exc_info=True)
            return False
        return True

    def replace_images(self, store_id: str, product: Product) -> None:
        self.rows.delete("product_images", {"store_id": store_id, "product_id": product.id})
        if product.images:
            self.rows.insert("product_images", [
                {"store_id": store_id, "product_id": product.id, "image_data": img}
                for img in product.images
            ])

    def _images_by_product(self, store_id: str) -> dict[str, list[str]]:
        try:
            rows = self.rows.select("product_images", {"store_id": store_id}, order_by="id")
        except RowStoreError:
            current_app.logger.warning("Failed to read product images for store %s", store_id, exc_info=True)
            return {}
        images: dict[str, list[str]] = {}
        for row in rows:
            images.setdefault(row["product_id"], []).append(row["image_data"])
        return images

    # -------------------------------------------------------------------------
    # Products
    # -------------------------------------------------------------------------

    def get_products(self) -> list[Product]:
        records = self._select("products", order_by="created_at")
        if not records:
            return []
        records.reverse()  # catalog reads oldest first
        images = self._images_by_product(self._store_id())
        products = []
        for record in records:
            product = Product.from_dict(record)
            product.images = images.get(product.id, [])
            products.append(product)
        return products

    def save_product(self, product: Product) -> bool:
        return self.save_products([product])

    def save_products(self, products: list[Product]) -> bool:
        if not products:
            return True
        if not self._upsert("products", [p.to_dict() for p in products]):
            return False
        store_id = self._store_id()
        ok = True
        for product in products:
            try:
                self.replace_images(store_id, product)
            except RowStoreError:
                current_app.logger.warning("Failed to store images for product %s", product.id, exc_info=True)
                ok = False
        return ok

    def delete_product(self, product_id: str) -> bool:
        store_id = self._store_id()
        if not store_id:
            return False
        try:
            self.rows.delete("product_images", {"store_id": store_id, "product_id": product_id})
            return self.rows.delete("products", {"store_id": store_id, "id": product_id}) > 0
        except RowStoreError:
            current_app.logger.warning("Failed to delete product %s", product_id, exc_info=True)
            return False

    # -------------------------------------------------------------------------
    # Sales / purchases / parties
    # -------------------------------------------------------------------------

    def get_transactions(self) -> list[Transaction]:
        return [Transaction.from_dict(r) for r in self._select("transactions", order_by="date")]

    def save_transaction(self, transaction: Transaction) -> bool:
        return self._upsert("transactions", [transaction.to_dict()])

    def get_purchases(self) -> list[Purchase]:
        return [Purchase.from_dict(r) for r in self._select("purchases", order_by="date")]

    def save_purchase(self, purchase: Purchase) -> bool:
        return self._upsert("purchases", [purchase.to_dict()])

    def get_customers(self) -> list[Customer]:
        return [Customer.from_dict(r) for r in self._select("customers")]

    def save_customer(self, customer: Customer) -> bool:
        return self._upsert("customers", [customer.to_dict()])

    def get_suppliers(self) -> list[Supplier]:
        return [Supplier.from_dict(r) for r in self._select("suppliers")]

    def save_supplier(self, supplier: Supplier) -> bool:
        return self._upsert("suppliers", [supplier.to_dict()])

    # -------------------------------------------------------------------------
    # Settings (JSON document on the store row)
    # -------------------------------------------------------------------------

    def get_settings(self) -> StoreSettings:
        store_id = self._store_id()
        if not store_id:
            return StoreSettings()
        try:
            rows = self.rows.select("stores", {"id": store_id})
        except RowStoreError:
            current_app.logger.warning("Failed to read settings for store %s", store_id, exc_info=True)
            return StoreSettings()
        settings = rows[0].get("settings") if rows else None
        if isinstance(settings, str):
            try:
                settings = json.loads(settings)
            except ValueError:
                settings = None
        return StoreSettings.from_dict(settings if isinstance(settings, dict) else None)

    def save_settings(self, settings: StoreSettings) -> bool:
        store_id = self._store_id()
        if not store_id:
            return False
        try:
            self.rows.update("stores", {"settings": settings.to_dict()}, {"id": store_id})
        except RowStoreError:
            current_app.logger.warning("Failed to save settings for store %s", store_id, exc_info=True)
            return False
        return True

    # -------------------------------------------------------------------------
    # Shifts / movements
    # -------------------------------------------------------------------------

    def get_shifts(self) -> list[CashShift]:
        return [CashShift.from_dict(r) for r in self._select("cash_shifts", order_by="start_time")]

    def save_shift(self, shift: CashShift) -> bool:
        return self._upsert("cash_shifts", [shift.to_dict()])

    def get_movements(self) -> list[CashMovement]:
        return [CashMovement.from_dict(r) for r in self._select("cash_movements", order_by="timestamp")]

    def save_movement(self, movement: CashMovement) -> bool:
        return self._upsert("cash_movements", [movement.to_dict()])
