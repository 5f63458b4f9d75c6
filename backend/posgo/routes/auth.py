# Overview: Flask API routes for auth operations; parses input and returns JSON responses.

# backend/posgo/routes/auth.py
"""
Authentication API routes

The terminal holds one session. Signing in (or starting the demo) replaces
it; the persistence mode follows from the signed-in identity.
"""

from flask import Blueprint, current_app, jsonify, request

from ..services import auth_service
from ..services.auth_service import AuthError
from ..state import get_cart, get_router


auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


def _session_body():
    router = get_router()
    profile = router.get_session()
    return {"user": profile.to_dict() if profile else None, "mode": router.mode}


@auth_bp.post("/register")
def register_route():
    """
    Create a store with its admin profile and sign in.

    Request body:
    {
        "email": "owner@bodega.pe",
        "password": "secret123",
        "name": "Owner Name",
        "storeName": "Bodega Central"
    }
    """
    data = request.get_json(silent=True) or {}
    try:
        profile = auth_service.register_store(
            email=data.get("email"),
            password=data.get("password"),
            name=(data.get("name") or "").strip(),
            store_name=data.get("storeName"),
        )
    except AuthError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to register store")
        return jsonify({"error": "Failed to register store"}), 500

    get_router().save_session(profile)
    get_cart().clear()
    return jsonify(_session_body()), 201


@auth_bp.post("/login")
def login_route():
    data = request.get_json(silent=True) or {}
    email = data.get("email")
    password = data.get("password")
    if not email or not password:
        return jsonify({"error": "email and password are required"}), 400

    try:
        profile = auth_service.authenticate(email, password)
    except Exception:
        current_app.logger.exception("Login failed unexpectedly")
        return jsonify({"error": "Login failed"}), 500

    if profile is None:
        return jsonify({"error": "Invalid credentials"}), 401

    get_router().save_session(profile)
    get_cart().clear()
    return jsonify(_session_body())


@auth_bp.post("/demo")
def demo_route():
    """Start a demo session: fixed demo identity, demo data reset from the template."""
    router = get_router()
    try:
        router.save_session(auth_service.demo_profile())
        router.reset_demo_data()
    except Exception:
        current_app.logger.exception("Failed to start demo session")
        return jsonify({"error": "Failed to start demo"}), 500

    get_cart().clear()
    return jsonify(_session_body())


@auth_bp.post("/logout")
def logout_route():
    get_router().clear_session()
    get_cart().clear()
    return jsonify({"ok": True})


@auth_bp.get("/session")
def session_route():
    return jsonify(_session_body())
