# Overview: Flask API routes for the terminal cart and checkout.

# backend/posgo/routes/cart.py
"""
Cart API Routes

The cart is terminal state held in memory; only checkout persists
anything (the transaction and the reconciled stock).
"""

from flask import Blueprint, current_app, jsonify, request

from ..decorators import require_session
from ..services import checkout_service
from ..services.checkout_service import CheckoutError
from ..state import get_cart, get_router
from ..validation import ValidationError, coerce_amount, coerce_int


cart_bp = Blueprint("cart", __name__, url_prefix="/api/cart")


def _cart_body():
    return get_cart().to_dict(get_router().get_settings())


@cart_bp.get("")
@require_session
def get_cart_route():
    return jsonify(_cart_body())


@cart_bp.delete("")
@require_session
def clear_cart_route():
    get_cart().clear()
    return jsonify(_cart_body())


@cart_bp.post("/items")
@require_session
def add_item_route():
    """
    Add one unit of a product (or of one of its variants).

    Request body: {"productId": "...", "variantId": "..." (optional)}
    """
    data = request.get_json(silent=True) or {}
    product_id = str(data.get("productId") or "")
    product = next((p for p in get_router().get_products() if p.id == product_id), None)
    if product is None:
        return jsonify({"error": "Product not found"}), 404

    try:
        get_cart().add(product, data.get("variantId") or None)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify(_cart_body()), 201


@cart_bp.patch("/items/<product_id>")
@require_session
def update_quantity_route(product_id: str):
    data = request.get_json(silent=True) or {}
    try:
        delta = coerce_int(data.get("delta"), "delta")
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    if get_cart().update_quantity(product_id, delta, data.get("variantId") or None) is None:
        return jsonify({"error": "Cart item not found"}), 404
    return jsonify(_cart_body())


@cart_bp.patch("/items/<product_id>/discount")
@require_session
def update_discount_route(product_id: str):
    data = request.get_json(silent=True) or {}
    try:
        discount = coerce_amount(data.get("discount"), "discount")
        item = get_cart().update_discount(product_id, discount, data.get("variantId") or None)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    if item is None:
        return jsonify({"error": "Cart item not found"}), 404
    return jsonify(_cart_body())


@cart_bp.delete("/items/<product_id>")
@require_session
def remove_item_route(product_id: str):
    if not get_cart().remove(product_id, request.args.get("variantId") or None):
        return jsonify({"error": "Cart item not found"}), 404
    return jsonify(_cart_body())


@cart_bp.post("/checkout")
@require_session
def checkout_route():
    """
    Complete the sale.

    Request body:
    {
        "paymentMethod": "cash",
        "payments": [{"method": "cash", "amount": 10}, {"method": "yape", "amount": 8}]  (optional)
    }

    Returns 409 when no shift is open or the cart is empty.
    """
    data = request.get_json(silent=True) or {}
    try:
        transaction = checkout_service.checkout(
            get_router(),
            get_cart(),
            payment_method=data.get("paymentMethod") or "",
            payments=data.get("payments"),
        )
    except CheckoutError as e:
        return jsonify({"error": str(e)}), 409
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to complete checkout")
        return jsonify({"error": "Failed to complete checkout"}), 500

    return jsonify(transaction.to_dict()), 201
