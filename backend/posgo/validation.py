from __future__ import annotations

import math
from typing import Any

from .constants import MAX_PRODUCT_IMAGES


# Maximum unit price accepted from clients (prevents nonsensical prices)
MAX_PRICE = 9_999_999.99


class ValidationError(ValueError):
    """400-level input problem."""


def require_text(payload: dict, key: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{key} is required")
    return value.strip()


def coerce_int(value: Any, key: str) -> int:
    """
    Strict integer coercion for client input.

    Accepts ints and plain digit strings (optional leading minus).
    Rejects bools, floats, decimals and scientific notation.
    """
    if isinstance(value, bool):
        raise ValidationError(f"{key} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            raise ValidationError(f"{key} must be an integer")
        if "e" in stripped.lower():
            raise ValidationError(f"{key} must be a plain integer (scientific notation not allowed)")
        if "." in stripped:
            raise ValidationError(f"{key} must be an integer (no decimals)")
        try:
            return int(stripped)
        except ValueError:
            raise ValidationError(f"{key} must be an integer")
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise ValidationError(f"{key} must be an integer, not a decimal")
    raise ValidationError(f"{key} must be an integer")


def coerce_amount(value: Any, key: str, *, positive: bool = False) -> float:
    """Money amount: finite, non-negative (strictly positive when `positive`)."""
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{key} must be a number")
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise ValidationError(f"{key} must be a number")
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{key} must be a number")
    if math.isnan(amount) or math.isinf(amount):
        raise ValidationError(f"{key} must be a finite number")
    if amount < 0:
        raise ValidationError(f"{key} cannot be negative")
    if positive and amount == 0:
        raise ValidationError(f"{key} must be greater than zero")
    return amount


def coerce_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        s = value.strip().lower()
        if s in {"true", "1", "yes", "on"}:
            return True
        if s in {"false", "0", "no", "off"}:
            return False
    raise ValidationError(f"{key}: expected boolean")


def enforce_rules_product(product) -> None:
    """Business rules every saved product must satisfy (posgo.entities.Product)."""
    if not product.name or not product.name.strip():
        raise ValidationError("name is required")

    if product.price < 0:
        raise ValidationError("price cannot be negative")
    if product.price > MAX_PRICE:
        raise ValidationError(f"price cannot exceed {MAX_PRICE:,.2f}")

    if len(product.images) > MAX_PRODUCT_IMAGES:
        raise ValidationError(f"A product can have at most {MAX_PRODUCT_IMAGES} images")

    if product.has_variants and not product.variants:
        raise ValidationError("A product with variants needs at least one variant")
    for variant in product.variants:
        if not variant.name or not variant.name.strip():
            raise ValidationError("variant name is required")
        if variant.price < 0:
            raise ValidationError("variant price cannot be negative")

    for item in product.pack_items:
        if not item.product_id:
            raise ValidationError("pack component productId is required")
        if item.product_id == product.id:
            raise ValidationError("A pack cannot contain itself")
        if item.quantity < 1:
            raise ValidationError("pack component quantity must be at least 1")
