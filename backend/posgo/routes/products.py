# Overview: Flask API routes for the catalog; parses input and returns JSON responses.

# backend/posgo/routes/products.py
"""
Products API Routes

Products are routed to the demo or store backend by the session mode.
Shape rules (plain / variants / pack) are applied by catalog_service.
"""

from flask import Blueprint, current_app, jsonify, request

from ..decorators import require_session
from ..services import catalog_service
from ..state import get_router
from ..validation import ValidationError


products_bp = Blueprint("products", __name__, url_prefix="/api/products")


@products_bp.get("")
@require_session
def list_products_route():
    """
    List the catalog.

    Query params:
    - category: exact category filter
    - q: case-insensitive match on name or barcode
    """
    products = get_router().get_products()

    category = request.args.get("category")
    if category:
        products = [p for p in products if p.category == category]

    q = (request.args.get("q") or "").strip().lower()
    if q:
        products = [p for p in products if q in p.name.lower() or q == (p.barcode or "").lower()]

    return jsonify({"items": [p.to_dict() for p in products]})


@products_bp.get("/pack-candidates")
@require_session
def pack_candidates_route():
    exclude = request.args.get("exclude")
    candidates = catalog_service.pack_candidates(get_router().get_products(), exclude_id=exclude)
    return jsonify({"items": [p.to_dict() for p in candidates]})


@products_bp.post("")
@require_session
def create_product_route():
    data = request.get_json(silent=True) or {}
    try:
        product = catalog_service.save_product(get_router(), data)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to create product")
        return jsonify({"error": "Failed to create product"}), 500
    return jsonify(product.to_dict()), 201


@products_bp.put("/<product_id>")
@require_session
def update_product_route(product_id: str):
    data = request.get_json(silent=True) or {}
    try:
        product = catalog_service.save_product(get_router(), data, product_id=product_id)
    except LookupError:
        return jsonify({"error": "Product not found"}), 404
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to update product")
        return jsonify({"error": "Failed to update product"}), 500
    return jsonify(product.to_dict())


@products_bp.delete("/<product_id>")
@require_session
def delete_product_route(product_id: str):
    if not catalog_service.delete_product(get_router(), product_id):
        return jsonify({"error": "Product not found"}), 404
    return jsonify({"ok": True})
