# Overview: Flask API routes for supplier purchases and suppliers.

# backend/posgo/routes/purchases.py
"""
Purchases API Routes

Recording a purchase adds the received quantities to the catalog stock
(variant-aware).
"""

from flask import Blueprint, current_app, jsonify, request

from ..decorators import require_session
from ..services import purchase_service
from ..state import get_router
from ..validation import ValidationError


purchases_bp = Blueprint("purchases", __name__, url_prefix="/api/purchases")
suppliers_bp = Blueprint("suppliers", __name__, url_prefix="/api/suppliers")


@purchases_bp.get("")
@require_session
def list_purchases_route():
    return jsonify({"items": [p.to_dict() for p in get_router().get_purchases()]})


@purchases_bp.post("")
@require_session
def create_purchase_route():
    """
    Record received stock.

    Request body:
    {
        "supplierId": "..." (optional),
        "items": [{"productId": "...", "quantity": 12, "cost": 2.1, "variantId": "..." (variant products)}]
    }
    """
    data = request.get_json(silent=True) or {}
    try:
        purchase = purchase_service.record_purchase(get_router(), data)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to record purchase")
        return jsonify({"error": "Failed to record purchase"}), 500
    return jsonify(purchase.to_dict()), 201


@suppliers_bp.get("")
@require_session
def list_suppliers_route():
    return jsonify({"items": [s.to_dict() for s in get_router().get_suppliers()]})


@suppliers_bp.post("")
@require_session
def create_supplier_route():
    data = request.get_json(silent=True) or {}
    try:
        supplier = purchase_service.save_supplier(get_router(), data)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify(supplier.to_dict()), 201
