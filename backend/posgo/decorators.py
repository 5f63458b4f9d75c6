# Overview: Request decorators for API routes (session and super-admin checks).

from functools import wraps

from flask import jsonify

from .state import get_router


def require_session(f):
    """
    Require a signed-in session (demo or store).

    Returns 401 when nobody is signed in on this terminal.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if get_router().get_session() is None:
            return jsonify({"error": "Not signed in"}), 401
        return f(*args, **kwargs)

    return decorated_function


def require_super_admin(f):
    """Require a signed-in super admin. Returns 401/403 otherwise."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        profile = get_router().get_session()
        if profile is None:
            return jsonify({"error": "Not signed in"}), 401
        if not profile.is_super_admin:
            return jsonify({"error": "Super admin access required"}), 403
        return f(*args, **kwargs)

    return decorated_function
