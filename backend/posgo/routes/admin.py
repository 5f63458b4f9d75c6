# Overview: Flask API routes for the demo template catalog and super-admin tables.

# backend/posgo/routes/admin.py
"""
Admin API Routes

DESIGN:
- Template products: any signed-in user may edit the template; the edit
  always lands in the device cache and is published to the cloud only
  when the row store accepts it (super admin). The response carries the
  sync outcome (SYNCED / LOCAL_ONLY / REJECTED).
- Leads and stores: super admin only.
- POST /api/leads is the public landing-form capture.
"""

from flask import Blueprint, current_app, jsonify, request

from ..decorators import require_session, require_super_admin
from ..services import admin_service, catalog_service
from ..state import get_router
from ..storage import REJECTED, RowStoreError, RowStorePermissionError, SyncResult
from ..validation import ValidationError


admin_bp = Blueprint("admin", __name__, url_prefix="/api/admin")
leads_bp = Blueprint("leads", __name__, url_prefix="/api/leads")


# =============================================================================
# DEMO TEMPLATE
# =============================================================================

@admin_bp.get("/template/products")
@require_session
def list_template_products_route():
    products = get_router().template.get_demo_template(force_cloud=True)
    return jsonify({"items": [p.to_dict() for p in products]})


def _save_template_product(product_id: str | None):
    template = get_router().template
    data = request.get_json(silent=True) or {}
    try:
        product = catalog_service.prepare_product(
            catalog_service.product_from_payload(data, product_id),
            template.get_demo_template(force_cloud=False),
        )
    except ValidationError as e:
        return jsonify({"product": None, "sync": SyncResult(REJECTED, warning=str(e)).to_dict()}), 400

    result = template.save_product(product)
    status = 400 if result.status == REJECTED else 200
    return jsonify({"product": product.to_dict(), "sync": result.to_dict()}), status


@admin_bp.post("/template/products")
@require_session
def create_template_product_route():
    return _save_template_product(None)


@admin_bp.put("/template/products/<product_id>")
@require_session
def update_template_product_route(product_id: str):
    return _save_template_product(product_id)


@admin_bp.delete("/template/products/<product_id>")
@require_session
def delete_template_product_route(product_id: str):
    result = get_router().template.delete_product(product_id)
    if result.status == REJECTED:
        return jsonify({"error": result.warning, "sync": result.to_dict()}), 404
    return jsonify({"sync": result.to_dict()})


@admin_bp.post("/template/restore")
@require_session
def restore_template_route():
    products = get_router().template.restore_defaults()
    return jsonify({"items": [p.to_dict() for p in products]})


# =============================================================================
# LEADS & STORES (super admin)
# =============================================================================

def _global_call(fn, *args, failure: str):
    try:
        return fn(get_router().rows, *args), None
    except RowStorePermissionError as e:
        return None, (jsonify({"error": str(e)}), 403)
    except ValidationError as e:
        return None, (jsonify({"error": str(e)}), 400)
    except RowStoreError:
        current_app.logger.exception(failure)
        return None, (jsonify({"error": failure}), 502)


@admin_bp.get("/leads")
@require_super_admin
def list_leads_route():
    leads, error = _global_call(admin_service.list_leads, failure="Failed to list leads")
    return error or jsonify({"items": leads})


@admin_bp.delete("/leads/<lead_id>")
@require_super_admin
def delete_lead_route(lead_id: str):
    deleted, error = _global_call(admin_service.delete_lead, lead_id, failure="Failed to delete lead")
    if error:
        return error
    if not deleted:
        return jsonify({"error": "Lead not found"}), 404
    return jsonify({"ok": True})


@admin_bp.get("/stores")
@require_super_admin
def list_stores_route():
    stores, error = _global_call(admin_service.list_stores, failure="Failed to list stores")
    return error or jsonify({"items": stores})


@admin_bp.delete("/stores/<store_id>")
@require_super_admin
def delete_store_route(store_id: str):
    deleted, error = _global_call(admin_service.delete_store, store_id, failure="Failed to delete store")
    if error:
        return error
    if not deleted:
        return jsonify({"error": "Store not found"}), 404
    return jsonify({"ok": True})


@leads_bp.post("")
def capture_lead_route():
    data = request.get_json(silent=True) or {}
    lead, error = _global_call(admin_service.capture_lead, data, failure="Failed to save lead")
    return error or (jsonify(lead), 201)
