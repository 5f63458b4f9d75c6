# Overview: Flask API routes for store settings.

from flask import Blueprint, jsonify, request

from ..decorators import require_session
from ..entities import StoreSettings
from ..state import get_router
from ..validation import ValidationError, coerce_amount, coerce_bool


settings_bp = Blueprint("settings", __name__, url_prefix="/api/settings")

TEXT_FIELDS = ("name", "currency", "address", "phone")


@settings_bp.get("")
@require_session
def get_settings_route():
    return jsonify(get_router().get_settings().to_dict())


@settings_bp.put("")
@require_session
def update_settings_route():
    """Partial update; omitted fields keep their current value."""
    data = request.get_json(silent=True) or {}
    router = get_router()
    merged = router.get_settings().to_dict()

    try:
        for key in TEXT_FIELDS:
            if key in data:
                if not isinstance(data[key], str):
                    raise ValidationError(f"{key} must be a string")
                merged[key] = data[key].strip()
        if "taxRate" in data:
            rate = coerce_amount(data["taxRate"], "taxRate")
            if rate >= 1:
                raise ValidationError("taxRate must be a fraction below 1 (e.g. 0.18)")
            merged["taxRate"] = rate
        if "pricesIncludeTax" in data:
            merged["pricesIncludeTax"] = coerce_bool(data["pricesIncludeTax"], "pricesIncludeTax")
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    settings = StoreSettings.from_dict(merged)
    if not router.save_settings(settings):
        return jsonify({"error": "Settings could not be saved"}), 502
    return jsonify(settings.to_dict())
