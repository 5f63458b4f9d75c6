# Overview: Session context and the persistence router that picks demo vs store storage per call.

"""
Persistence Router

WHY: Demo sessions must never touch real store data and real stores must
never land in device-local storage. The router resolves the mode from the
session identity on every call and delegates to the matching backend.

MODES:
- demo: no profile, the demo user id, or an email in the demo domain
  -> LocalStorage (device-local documents)
- store: any other identity -> CloudStorage scoped by the identity's store

DESIGN:
- SessionContext is explicit state, passed around rather than global
- The store id is resolved once (profiles.id -> store_id) and cached until
  the session changes
- The active-shift pointer is device state and lives in LocalStorage for
  both modes
"""

from __future__ import annotations

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
    UserProfile,
)
from .base import StorageBackend
from .cloud import CloudStorage
from .kv import KeyValueStore
from .local import LocalStorage
from .row_store import AccessPolicy, RowStore, SqlRowStore
from .template import DemoTemplateService


MODE_DEMO = "demo"
MODE_STORE = "store"


class SessionContext:
    """Current identity, its mode, and its cached store id."""

    def __init__(
        self,
        demo_user_id: str,
        demo_email_domain: str,
        store_lookup: Callable[[str], str | None] | None = None,
    ):
        self.demo_user_id = demo_user_id
        self.demo_email_domain = demo_email_domain.lower()
        self.store_lookup = store_lookup
        self.profile: UserProfile | None = None
        self._store_id: str | None = None

    def set_profile(self, profile: UserProfile | None) -> None:
        self.profile = profile
        self.invalidate()

    def invalidate(self) -> None:
        self._store_id = None

    @property
    def mode(self) -> str:
        profile = self.profile
        if profile is None:
            return MODE_DEMO
        if profile.id == self.demo_user_id:
            return MODE_DEMO
        if (profile.email or "").lower().endswith(self.demo_email_domain):
            return MODE_DEMO
        return MODE_STORE

    @property
    def is_demo(self) -> bool:
        return self.mode == MODE_DEMO

    @property
    def is_super_admin(self) -> bool:
        return bool(self.profile and self.profile.is_super_admin)

    def resolve_store_id(self) -> str | None:
        if self.is_demo:
            return None
        if self._store_id is None:
            store_id = self.store_lookup(self.profile.id) if self.store_lookup else None
            self._store_id = store_id or self.profile.store_id
        return self._store_id


class PersistenceRouter:
    """
    Entity-level persistence for the current session.

    Exposes the StorageBackend operations plus session bookkeeping; every
    call is routed by SessionContext.mode at call time.
    """

    def __init__(
        self,
        kv: KeyValueStore,
        row_store: RowStore | None = None,
        demo_user_id: str = "test-user-demo",
        demo_email_domain: str = "@demo.posgo",
    ):
        self.context = SessionContext(demo_user_id, demo_email_domain, self._lookup_store_id)
        self.rows = row_store or SqlRowStore(AccessPolicy(self.context))
        self.local = LocalStorage(kv)
        self.cloud = CloudStorage(self.rows, self.context.resolve_store_id)
        self.template = DemoTemplateService(self.rows, self.local, self.context)

    def _lookup_store_id(self, profile_id: str) -> str | None:
        rows = self.rows.select("profiles", {"id": profile_id})
        return rows[0].get("store_id") if rows else None

    @property
    def mode(self) -> str:
        return self.context.mode

    @property
    def backend(self) -> StorageBackend:
        return self.local if self.context.is_demo else self.cloud

    # -------------------------------------------------------------------------
    # Session
    # -------------------------------------------------------------------------

    def restore_session(self) -> UserProfile | None:
        """Load the persisted session profile into the context."""
        self.context.set_profile(self.local.get_session_profile())
        return self.context.profile

    def get_session(self) -> UserProfile | None:
        return self.context.profile

    def save_session(self, profile: UserProfile) -> None:
        self.local.save_session_profile(profile)
        self.context.set_profile(profile)

    def clear_session(self) -> None:
        self.local.clear_session_profile()
        self.context.set_profile(None)

    def get_active_shift_id(self) -> str | None:
        return self.local.get_active_shift_id()

    def set_active_shift_id(self, shift_id: str | None) -> None:
        self.local.set_active_shift_id(shift_id)

    # -------------------------------------------------------------------------
    # Demo lifecycle
    # -------------------------------------------------------------------------

    def reset_demo_data(self) -> None:
        products = self.template.get_demo_template(force_cloud=True)
        self.local.replace_products(products)
        self.local.reset_collections(StoreSettings())
        current_app.logger.info("Demo data reset (%d template products)", len(products))

    # -------------------------------------------------------------------------
    # StorageBackend delegation
    # -------------------------------------------------------------------------

    def get_products(self) -> list[Product]:
        if self.context.is_demo and not self.local.has_products():
            self.local.replace_products(self.template.get_demo_template(force_cloud=True))
        return self.backend.get_products()

    def save_product(self, product: Product) -> bool:
        return self.backend.save_product(product)

    def save_products(self, products: list[Product]) -> bool:
        return self.backend.save_products(products)

    def delete_product(self, product_id: str) -> bool:
        return self.backend.delete_product(product_id)

    def get_transactions(self) -> list[Transaction]:
        return self.backend.get_transactions()

    def save_transaction(self, transaction: Transaction) -> bool:
        return self.backend.save_transaction(transaction)

    def get_purchases(self) -> list[Purchase]:
        return self.backend.get_purchases()

    def save_purchase(self, purchase: Purchase) -> bool:
        return self.backend.save_purchase(purchase)

    def get_customers(self) -> list[Customer]:
        return self.backend.get_customers()

    def save_customer(self, customer: Customer) -> bool:
        return self.backend.save_customer(customer)

    def get_suppliers(self) -> list[Supplier]:
        return self.backend.get_suppliers()

    def save_supplier(self, supplier: Supplier) -> bool:
        return self.backend.save_supplier(supplier)

    def get_settings(self) -> StoreSettings:
        return self.backend.get_settings()

    def save_settings(self, settings: StoreSettings) -> bool:
        return self.backend.save_settings(settings)

    def get_shifts(self) -> list[CashShift]:
        return self.backend.get_shifts()

    def save_shift(self, shift: CashShift) -> bool:
        return self.backend.save_shift(shift)

    def get_movements(self) -> list[CashMovement]:
        return self.backend.get_movements()

    def save_movement(self, movement: CashMovement) -> bool:
        return self.backend.save_movement(movement)
