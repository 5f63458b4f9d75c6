# Overview: Catalog rules for products, variants and packs; builds and saves products.

"""
Catalog Service

WHY: A product is in exactly one shape (plain, with variants, or pack) and
its derived fields must be consistent before it is persisted in either mode.

DESIGN:
- normalize_for_save clears the data of inactive shapes
- Variant products: stock is always the sum of variant stocks
- Pack products: stock counts sellable packs, independent of components
- Pack components must reference existing plain products (no packs, no
  variant products, whose stock only exists per variant)
"""

from __future__ import annotations

from ..constants import CATEGORIES
from ..entities import PackComponent, Product, Variant, new_id
from ..validation import ValidationError, coerce_amount, coerce_bool, coerce_int, enforce_rules_product

# New packs saved without stock start with this many sellable units.
DEFAULT_PACK_STOCK = 100


def effective_price(product: Product, variant_id: str | None = None) -> float:
    variant = product.variant(variant_id)
    return variant.price if variant else product.price


def recompute_variant_stock(product: Product) -> Product:
    if product.has_variants:
        product.stock = product.variant_stock_total()
    return product


def normalize_for_save(product: Product) -> Product:
    """Return a copy with exactly one shape active and derived stock recomputed."""
    p = product.copy()
    if p.is_pack:
        p.has_variants = False
        p.variants = []
        if p.stock <= 0:
            p.stock = DEFAULT_PACK_STOCK
    elif p.has_variants:
        p.pack_items = []
        recompute_variant_stock(p)
    else:
        p.variants = []
        p.pack_items = []
    return p


def pack_candidates(products: list[Product], exclude_id: str | None = None) -> list[Product]:
    """Products that may appear as pack components: plain products only."""
    return [p for p in products if not p.is_pack and not p.has_variants and p.id != exclude_id]


def resolve_pack_components(product: Product, catalog: list[Product]) -> None:
    """Check pack components against the catalog and refresh their name snapshots."""
    if not product.is_pack:
        return
    if not product.pack_items:
        raise ValidationError("A pack needs at least one component")
    by_id = {p.id: p for p in catalog}
    for item in product.pack_items:
        component = by_id.get(item.product_id)
        if component is None:
            raise ValidationError(f"Pack component {item.product_id} does not exist")
        if component.is_pack:
            raise ValidationError("A pack cannot contain another pack")
        if component.has_variants:
            raise ValidationError(f"{component.name} has variants and cannot be a pack component")
        item.product_name = component.name


def _category(value) -> str:
    category = value.strip() if isinstance(value, str) else value
    if not category:
        return "General"
    if category not in CATEGORIES:
        raise ValidationError(f"category must be one of: {', '.join(CATEGORIES)}")
    return category


def product_from_payload(payload: dict, product_id: str | None = None) -> Product:
    """Build a Product from an API payload (camelCase), coercing numbers strictly."""
    if not isinstance(payload, dict):
        raise ValidationError("Product payload must be an object")

    variants = []
    for raw in payload.get("variants") or []:
        variants.append(Variant(
            id=str(raw.get("id") or new_id()),
            name=(raw.get("name") or "").strip(),
            price=coerce_amount(raw.get("price", 0), "variant price"),
            stock=coerce_int(raw.get("stock", 0), "variant stock"),
        ))

    pack_items = []
    for raw in payload.get("packItems") or []:
        pack_items.append(PackComponent(
            product_id=str(raw.get("productId") or ""),
            product_name=raw.get("productName") or "",
            quantity=coerce_int(raw.get("quantity", 1), "pack component quantity"),
        ))

    images = payload.get("images") or []
    if not isinstance(images, list) or not all(isinstance(i, str) for i in images):
        raise ValidationError("images must be a list of encoded strings")

    return Product(
        id=str(product_id or payload.get("id") or new_id()),
        name=(payload.get("name") or "").strip(),
        price=coerce_amount(payload.get("price", 0), "price"),
        stock=coerce_int(payload.get("stock", 0), "stock"),
        category=_category(payload.get("category")),
        barcode=(payload.get("barcode") or None),
        has_variants=coerce_bool(payload.get("hasVariants", bool(variants)), "hasVariants"),
        variants=variants,
        is_pack=coerce_bool(payload.get("isPack", False), "isPack"),
        pack_items=pack_items,
        images=list(images),
    )


def prepare_product(product: Product, catalog: list[Product]) -> Product:
    """Normalize and validate a product against the current catalog."""
    prepared = normalize_for_save(product)
    enforce_rules_product(prepared)
    resolve_pack_components(prepared, [p for p in catalog if p.id != prepared.id])
    if prepared.has_variants:
        packs = [p.name for p in catalog if p.is_pack and any(i.product_id == prepared.id for i in p.pack_items)]
        if packs:
            raise ValidationError(f"{prepared.name} is a component of {', '.join(packs)}; it cannot have variants")
    return prepared


def save_product(router, payload: dict, product_id: str | None = None) -> Product:
    catalog = router.get_products()
    if product_id is not None and not any(p.id == product_id for p in catalog):
        raise LookupError(product_id)
    product = prepare_product(product_from_payload(payload, product_id), catalog)
    router.save_product(product)
    return product


def delete_product(router, product_id: str) -> bool:
    return router.delete_product(product_id)
