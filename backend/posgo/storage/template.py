# Overview: Shared demo template catalog with remote/cache/seed fallback and tri-state writes.

"""
Demo Template Service

WHY: Every demo session starts from the same catalog. The catalog lives in
the cloud under the reserved template scope so a super admin can curate
it, with a device-local cache and a hardcoded seed as fallbacks.

READ: remote -> local cache -> SEED_PRODUCTS. Never raises.

WRITE (optimistic): validate, update the local cache, then try the remote.
- SYNCED: local and remote updated
- LOCAL_ONLY: local updated, remote failed (warning; permission_denied
  when the remote refused under its policy)
- REJECTED: validation failed, nothing written
"""

from __future__ import annotations

from dataclasses import dataclass

from flask import current_app

from ..constants import DEMO_TEMPLATE_STORE_ID, SEED_PRODUCTS
from ..entities import Product
from ..validation import ValidationError, enforce_rules_product
from .cloud import CloudStorage
from .local import LocalStorage
from .mapping import to_remote
from .row_store import RowStore, RowStoreError, RowStorePermissionError


SYNCED = "SYNCED"
LOCAL_ONLY = "LOCAL_ONLY"
REJECTED = "REJECTED"

TEMPLATE_STORE_NAME = "Demo Template"

PERMISSION_WARNING = (
    "Saved on this device only: your account cannot edit the shared demo template. "
    "Sign in with a super admin account to publish template changes."
)
OFFLINE_WARNING = "Saved on this device only: the cloud template could not be updated."
NO_SESSION_WARNING = "Saved on this device only: sign in to a store account to publish template changes."


@dataclass
class SyncResult:
    status: str
    warning: str | None = None
    permission_denied: bool = False

    @property
    def success(self) -> bool:
        return self.status in (SYNCED, LOCAL_ONLY)

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "success": self.success,
            "warning": self.warning,
            "permissionDenied": self.permission_denied,
        }


def seed_products() -> list[Product]:
    return [Product.from_dict(p) for p in SEED_PRODUCTS]


class DemoTemplateService:
    def __init__(self, rows: RowStore, local: LocalStorage, context):
        self.rows = rows
        self.local = local
        self.context = context
        self.remote = CloudStorage(rows, lambda: DEMO_TEMPLATE_STORE_ID)

    # -------------------------------------------------------------------------
    # Read
    # -------------------------------------------------------------------------

    def get_demo_template(self, force_cloud: bool = True) -> list[Product]:
        if force_cloud:
            products = self.remote.get_products()
            if products:
                self.local.save_cached_template(products)
                return products
            current_app.logger.warning("Demo template unavailable remotely; using local cache")

        cached = self.local.get_cached_template()
        if cached:
            return cached

        current_app.logger.warning("No cached demo template; using built-in seed catalog")
        return seed_products()

    def _current_cache(self) -> list[Product]:
        cached = self.local.get_cached_template()
        return cached if cached is not None else seed_products()

    # -------------------------------------------------------------------------
    # Write
    # -------------------------------------------------------------------------

    def _publish(self, operation) -> SyncResult:
        if self.context.is_demo:
            return SyncResult(LOCAL_ONLY, warning=NO_SESSION_WARNING)
        try:
            operation()
        except RowStorePermissionError:
            current_app.logger.warning("Demo template write refused for %s", self.context.profile.email)
            return SyncResult(LOCAL_ONLY, warning=PERMISSION_WARNING, permission_denied=True)
        except RowStoreError:
            current_app.logger.warning("Demo template write failed", exc_info=True)
            return SyncResult(LOCAL_ONLY, warning=OFFLINE_WARNING)
        return SyncResult(SYNCED)

    def save_product(self, product: Product) -> SyncResult:
        try:
            enforce_rules_product(product)
        except ValidationError as exc:
            return SyncResult(REJECTED, warning=str(exc))

        products = self._current_cache()
        for i, existing in enumerate(products):
            if existing.id == product.id:
                products[i] = product
                break
        else:
            products.append(product)
        self.local.save_cached_template(products)

        def _remote():
            self.rows.upsert("stores", [{"id": DEMO_TEMPLATE_STORE_ID, "name": TEMPLATE_STORE_NAME}])
            self.rows.upsert("products", [to_remote("products", product.to_dict(), DEMO_TEMPLATE_STORE_ID)])
            self.remote.replace_images(DEMO_TEMPLATE_STORE_ID, product)

        return self._publish(_remote)

    def delete_product(self, product_id: str) -> SyncResult:
        products = self._current_cache()
        remaining = [p for p in products if p.id != product_id]
        if len(remaining) == len(products):
            return SyncResult(REJECTED, warning="Template product not found")
        self.local.save_cached_template(remaining)

        def _remote():
            self.rows.delete("product_images", {"store_id": DEMO_TEMPLATE_STORE_ID, "product_id": product_id})
            self.rows.delete("products", {"store_id": DEMO_TEMPLATE_STORE_ID, "id": product_id})

        return self._publish(_remote)

    def restore_defaults(self) -> list[Product]:
        products = seed_products()
        self.local.save_cached_template(products)
        current_app.logger.info("Demo template cache restored to the built-in seed catalog")
        return products
