# Overview: Flask API routes for completed sales (read-only).

from flask import Blueprint, jsonify, request

from ..decorators import require_session
from ..state import get_router


sales_bp = Blueprint("sales", __name__, url_prefix="/api/transactions")


@sales_bp.get("")
@require_session
def list_transactions_route():
    """Transactions newest first; optional ?shiftId= filter."""
    transactions = get_router().get_transactions()
    shift_id = request.args.get("shiftId")
    if shift_id:
        transactions = [t for t in transactions if t.shift_id == shift_id]
    return jsonify({"items": [t.to_dict() for t in transactions]})
