# Overview: Stock reconciliation for sales (direct, variant, pack components) and purchases.

"""
Stock Reconciliation

WHY: A sale must decrement every stock figure it consumes in one pass over
the catalog, so direct and pack-derived decrements accumulate on the same
product instead of overwriting each other.

RULES (per catalog product):
1. Direct non-pack line: decrement the selected variant when it exists,
   otherwise the product's own stock
2. Each sold pack containing the product: decrement product stock by
   component qty * packs sold
3. Variant products: stock = sum(variant stocks) afterwards
4. Stock may go negative; sales are never blocked on stock

A pack line does not decrement the pack's own stock.
"""

from __future__ import annotations

from ..entities import CartItem, Product, Purchase


def apply_sale_to_stock(products: list[Product], cart_items: list[CartItem]) -> list[Product]:
    """Return a new catalog with stock decremented for `cart_items`. Inputs are not mutated."""
    direct = [i for i in cart_items if not i.product.is_pack]
    packs = [i for i in cart_items if i.product.is_pack]

    updated = []
    for original in products:
        product = original.copy()

        for line in direct:
            if line.product_id != product.id:
                continue
            variant = product.variant(line.selected_variant_id)
            if variant:
                variant.stock -= line.quantity
            else:
                product.stock -= line.quantity

        for line in packs:
            for component in line.product.pack_items:
                if component.product_id == product.id:
                    product.stock -= component.quantity * line.quantity

        if product.has_variants:
            product.stock = product.variant_stock_total()
        updated.append(product)
    return updated


def changed_products(before: list[Product], after: list[Product]) -> list[Product]:
    """Products in `after` whose stock figures differ from `before` (matched by id)."""
    previous = {p.id: p for p in before}
    changed = []
    for product in after:
        old = previous.get(product.id)
        if old is None or old.stock != product.stock or [v.stock for v in old.variants] != [v.stock for v in product.variants]:
            changed.append(product)
    return changed


def apply_purchase_to_stock(products: list[Product], purchase: Purchase) -> list[Product]:
    """Return a new catalog with stock incremented for the received purchase items."""
    updated = []
    for original in products:
        product = original.copy()
        for item in purchase.items:
            if item.product_id != product.id:
                continue
            variant = product.variant(item.variant_id)
            if variant:
                variant.stock += item.quantity
            else:
                product.stock += item.quantity
        if product.has_variants:
            product.stock = product.variant_stock_total()
        updated.append(product)
    return updated
