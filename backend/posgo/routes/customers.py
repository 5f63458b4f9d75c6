# Overview: Flask API routes for customers.

from flask import Blueprint, jsonify, request

from ..decorators import require_session
from ..services import purchase_service
from ..state import get_router
from ..validation import ValidationError


customers_bp = Blueprint("customers", __name__, url_prefix="/api/customers")


@customers_bp.get("")
@require_session
def list_customers_route():
    return jsonify({"items": [c.to_dict() for c in get_router().get_customers()]})


@customers_bp.post("")
@require_session
def create_customer_route():
    data = request.get_json(silent=True) or {}
    try:
        customer = purchase_service.save_customer(get_router(), data)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify(customer.to_dict()), 201
