# Overview: In-memory cart and checkout total derivation (tax-inclusive / tax-exclusive).

"""
Cart & Pricing

WHY: The cart is the only mutable sale state before checkout. Lines are
identified by (product id, selected variant id); adding the same pair
increments quantity instead of duplicating the line.

PRICING:
- subtotal = sum(price * qty)
- discount = sum(per-unit discount * qty)
- total    = max(0, subtotal - discount)
- Tax-inclusive: tax = total - total / (1 + rate); stored subtotal =
  total - tax; stored total = total
- Tax-exclusive: tax = total * rate; stored subtotal = total; stored
  total = total + tax
"""

from __future__ import annotations

from dataclasses import dataclass

from ..entities import CartItem, Product, StoreSettings
from ..validation import ValidationError
from .catalog_service import effective_price


@dataclass(frozen=True)
class CheckoutTotals:
    subtotal: float
    discount: float
    total: float
    tax: float
    stored_subtotal: float
    stored_total: float

    def to_dict(self) -> dict:
        return {
            "subtotal": self.subtotal,
            "discount": self.discount,
            "total": self.total,
            "tax": self.tax,
            "storedSubtotal": self.stored_subtotal,
            "storedTotal": self.stored_total,
        }


def compute_totals(items: list[CartItem], settings: StoreSettings) -> CheckoutTotals:
    subtotal = sum(i.price * i.quantity for i in items)
    discount = sum(i.discount * i.quantity for i in items)
    total = max(0.0, subtotal - discount)
    rate = settings.tax_rate

    if settings.prices_include_tax:
        tax = total - total / (1 + rate)
        stored_subtotal = total - tax
        stored_total = total
    else:
        tax = total * rate
        stored_subtotal = total
        stored_total = total + tax

    return CheckoutTotals(
        subtotal=subtotal,
        discount=discount,
        total=total,
        tax=tax,
        stored_subtotal=stored_subtotal,
        stored_total=stored_total,
    )


class Cart:
    def __init__(self):
        self.items: list[CartItem] = []

    def __len__(self) -> int:
        return len(self.items)

    def is_empty(self) -> bool:
        return not self.items

    def find(self, product_id: str, variant_id: str | None = None) -> CartItem | None:
        key = (product_id, variant_id or None)
        for item in self.items:
            if item.key == key:
                return item
        return None

    def add(self, product: Product, variant_id: str | None = None) -> CartItem:
        """
        Add one unit. Variant products must name one of their variants, since
        their stock only exists per variant.
        """
        variant = product.variant(variant_id)
        if product.has_variants and variant is None:
            raise ValidationError(f"{product.name} requires a valid variantId")
        selected_id = variant.id if variant else None

        existing = self.find(product.id, selected_id)
        if existing:
            existing.quantity += 1
            return existing

        snapshot = product.copy()
        snapshot.price = effective_price(product, selected_id)
        item = CartItem(
            product=snapshot,
            quantity=1,
            selected_variant_id=selected_id,
            selected_variant_name=variant.name if variant else None,
        )
        self.items.append(item)
        return item

    def update_quantity(self, product_id: str, delta: int, variant_id: str | None = None) -> CartItem | None:
        item = self.find(product_id, variant_id)
        if item:
            item.quantity = max(1, item.quantity + delta)
        return item

    def update_discount(self, product_id: str, discount: float, variant_id: str | None = None) -> CartItem | None:
        if discount < 0:
            raise ValidationError("discount cannot be negative")
        item = self.find(product_id, variant_id)
        if item:
            item.discount = discount
        return item

    def remove(self, product_id: str, variant_id: str | None = None) -> bool:
        item = self.find(product_id, variant_id)
        if item is None:
            return False
        self.items.remove(item)
        return True

    def clear(self) -> None:
        self.items = []

    def totals(self, settings: StoreSettings) -> CheckoutTotals:
        return compute_totals(self.items, settings)

    def to_dict(self, settings: StoreSettings) -> dict:
        return {
            "items": [i.to_dict() for i in self.items],
            "totals": self.totals(settings).to_dict(),
        }
