# Overview: Supplier purchases (stock receipts) plus supplier/customer records.

from __future__ import annotations

from ..entities import Customer, Purchase, PurchaseItem, Supplier, new_id
from ..time_utils import utcnow_iso
from ..validation import ValidationError, coerce_amount, coerce_int, require_text
from .stock_service import apply_purchase_to_stock, changed_products


def record_purchase(router, payload: dict) -> Purchase:
    """
    Record received stock and add it to the catalog.

    Each item needs an existing product and a positive quantity; items for
    variant products must name the variant that was received.
    """
    raw_items = payload.get("items") or []
    if not raw_items:
        raise ValidationError("A purchase needs at least one item")

    catalog = router.get_products()
    by_id = {p.id: p for p in catalog}

    items = []
    for raw in raw_items:
        product = by_id.get(str(raw.get("productId") or ""))
        if product is None:
            raise ValidationError(f"Unknown product {raw.get('productId')!r}")
        if product.is_pack:
            raise ValidationError("Packs cannot be purchased; purchase their components")
        quantity = coerce_int(raw.get("quantity"), "quantity")
        if quantity < 1:
            raise ValidationError("quantity must be at least 1")
        variant_id = raw.get("variantId") or None
        if product.has_variants and product.variant(variant_id) is None:
            raise ValidationError(f"{product.name} requires a valid variantId")
        items.append(PurchaseItem(
            product_id=product.id,
            product_name=product.name,
            quantity=quantity,
            cost=coerce_amount(raw.get("cost", 0), "cost"),
            variant_id=variant_id if product.has_variants else None,
        ))

    supplier_id = payload.get("supplierId") or None
    if supplier_id and not any(s.id == supplier_id for s in router.get_suppliers()):
        raise ValidationError("Unknown supplier")

    purchase = Purchase(
        id=new_id(),
        date=utcnow_iso(),
        supplier_id=supplier_id,
        total=sum(i.cost * i.quantity for i in items),
        items=items,
    )
    router.save_purchase(purchase)

    updated = apply_purchase_to_stock(catalog, purchase)
    changed = changed_products(catalog, updated)
    if changed:
        router.save_products(changed)
    return purchase


def save_supplier(router, payload: dict) -> Supplier:
    supplier = Supplier(
        id=str(payload.get("id") or new_id()),
        name=require_text(payload, "name"),
        contact=payload.get("contact") or None,
        phone=payload.get("phone") or None,
    )
    router.save_supplier(supplier)
    return supplier


def save_customer(router, payload: dict) -> Customer:
    customer = Customer(
        id=str(payload.get("id") or new_id()),
        name=require_text(payload, "name"),
        phone=payload.get("phone") or None,
        email=payload.get("email") or None,
    )
    router.save_customer(customer)
    return customer
