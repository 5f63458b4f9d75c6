# backend/posgo/routes/system.py
"""
System health endpoint.

Checks the cloud row store and the device-local store separately, so a
terminal can keep selling in demo mode while the cloud is unreachable.
"""

import time

from flask import Blueprint, current_app, jsonify
from sqlalchemy import text

from ..extensions import db
from ..state import get_router

system_bp = Blueprint("system", __name__)


def check_store_health(bind_key: str | None) -> dict:
    """Run a trivial query against one bind and time it."""
    start_time = time.time()
    try:
        engine = db.engines[bind_key]
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        elapsed_ms = (time.time() - start_time) * 1000
        return {"status": "healthy", "latency_ms": round(elapsed_ms, 2)}
    except Exception:
        elapsed_ms = (time.time() - start_time) * 1000
        current_app.logger.exception("Health check failed for bind %s", bind_key or "default")
        return {"status": "unhealthy", "latency_ms": round(elapsed_ms, 2), "error": "Database error"}


@system_bp.get("/api/health")
def health():
    cloud = check_store_health(None)
    local = check_store_health("local")

    if local["status"] != "healthy":
        overall = "unhealthy"
    elif cloud["status"] != "healthy":
        overall = "degraded"
    else:
        overall = "healthy"

    body = {
        "status": overall,
        "mode": get_router().mode if overall != "unhealthy" else None,
        "checks": {"cloud": cloud, "local": local},
    }
    return jsonify(body), (503 if overall == "unhealthy" else 200)
