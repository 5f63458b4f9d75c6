# Overview: Storage port shared by the demo (local) and store (cloud) backends.

from __future__ import annotations

from abc import ABC, abstractmethod

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
from ..time_utils import timestamp_key


class StorageBackend(ABC):
    """
    Entity-level persistence port.

    CONTRACT:
    - get_* returns every row owned by the backend's scope, newest first
      where the entity has a date/timestamp
    - save_* upserts by id (insert if absent, replace if present)
    - Read failures degrade to empty collections; never raise to callers
    """

    @abstractmethod
    def get_products(self) -> list[Product]:
        ...

    @abstractmethod
    def save_product(self, product: Product) -> bool:
        ...

    @abstractmethod
    def save_products(self, products: list[Product]) -> bool:
        ...

    @abstractmethod
    def delete_product(self, product_id: str) -> bool:
        ...

    @abstractmethod
    def get_transactions(self) -> list[Transaction]:
        ...

    @abstractmethod
    def save_transaction(self, transaction: Transaction) -> bool:
        ...

    @abstractmethod
    def get_purchases(self) -> list[Purchase]:
        ...

    @abstractmethod
    def save_purchase(self, purchase: Purchase) -> bool:
        ...

    @abstractmethod
    def get_customers(self) -> list[Customer]:
        ...

    @abstractmethod
    def save_customer(self, customer: Customer) -> bool:
        ...

    @abstractmethod
    def get_suppliers(self) -> list[Supplier]:
        ...

    @abstractmethod
    def save_supplier(self, supplier: Supplier) -> bool:
        ...

    @abstractmethod
    def get_settings(self) -> StoreSettings:
        ...

    @abstractmethod
    def save_settings(self, settings: StoreSettings) -> bool:
        ...

    @abstractmethod
    def get_shifts(self) -> list[CashShift]:
        ...

    @abstractmethod
    def save_shift(self, shift: CashShift) -> bool:
        ...

    @abstractmethod
    def get_movements(self) -> list[CashMovement]:
        ...

    @abstractmethod
    def save_movement(self, movement: CashMovement) -> bool:
        ...


def newest_first(rows: list, attr: str) -> list:
    """Sort entities by an ISO timestamp attribute, most recent first."""
    return sorted(rows, key=lambda r: timestamp_key(getattr(r, attr)), reverse=True)
