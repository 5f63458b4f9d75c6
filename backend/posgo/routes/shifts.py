# Overview: Flask API routes for cash shifts; parses input and returns JSON responses.

# backend/posgo/routes/shifts.py
"""
Cash Shift API Routes

DESIGN:
- Shift lifecycle: open -> close (never reopened)
- Manual cash movements (IN / OUT) only while a shift is open
- Closing returns the shift report (movements, transactions, summary)
"""

from flask import Blueprint, current_app, jsonify, request

from ..decorators import require_session
from ..services import shift_service
from ..services.shift_service import ShiftError
from ..state import get_router
from ..validation import ValidationError, coerce_amount


shifts_bp = Blueprint("shifts", __name__, url_prefix="/api/shifts")


@shifts_bp.get("")
@require_session
def list_shifts_route():
    router = get_router()
    active = shift_service.get_active_shift(router)
    return jsonify({
        "active": active.to_dict() if active else None,
        "items": [s.to_dict() for s in router.get_shifts()],
    })


@shifts_bp.post("/open")
@require_session
def open_shift_route():
    """
    Open a shift.

    Request body: {"startAmount": 100.0, "description": "..." (optional)}
    """
    data = request.get_json(silent=True) or {}
    try:
        start_amount = coerce_amount(data.get("startAmount", 0), "startAmount")
        shift = shift_service.open_shift(
            get_router(), start_amount, data.get("description") or "Apertura de caja"
        )
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except ShiftError as e:
        return jsonify({"error": str(e)}), 409
    except Exception:
        current_app.logger.exception("Failed to open shift")
        return jsonify({"error": "Failed to open shift"}), 500

    return jsonify(shift.to_dict()), 201


@shifts_bp.get("/movements")
@require_session
def list_movements_route():
    """Movements newest first; defaults to the active shift, ?shiftId= selects another."""
    router = get_router()
    shift_id = request.args.get("shiftId")
    if not shift_id:
        active = shift_service.get_active_shift(router)
        shift_id = active.id if active else None
    movements = [m for m in router.get_movements() if shift_id and m.shift_id == shift_id]
    return jsonify({"items": [m.to_dict() for m in movements]})


@shifts_bp.post("/movements")
@require_session
def record_movement_route():
    """
    Record a cash movement on the open shift.

    Request body: {"type": "IN" | "OUT", "amount": 20.0, "description": "..."}
    """
    data = request.get_json(silent=True) or {}
    try:
        amount = coerce_amount(data.get("amount"), "amount", positive=True)
        movement = shift_service.record_movement(
            get_router(),
            str(data.get("type") or "").upper(),
            amount,
            data.get("description") or "",
        )
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except ShiftError as e:
        return jsonify({"error": str(e)}), 409
    except Exception:
        current_app.logger.exception("Failed to record cash movement")
        return jsonify({"error": "Failed to record cash movement"}), 500

    return jsonify(movement.to_dict()), 201


@shifts_bp.post("/close")
@require_session
def close_shift_route():
    """
    Close the open shift with the counted cash.

    Request body: {"endAmount": 250.0, "description": "..." (optional)}
    """
    data = request.get_json(silent=True) or {}
    try:
        end_amount = coerce_amount(data.get("endAmount"), "endAmount")
        report = shift_service.close_shift(
            get_router(), end_amount, data.get("description") or "Cierre de caja"
        )
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except ShiftError as e:
        return jsonify({"error": str(e)}), 409
    except Exception:
        current_app.logger.exception("Failed to close shift")
        return jsonify({"error": "Failed to close shift"}), 500

    return jsonify(report.to_dict())
