# Overview: Per-app terminal state (persistence router and in-memory cart).

"""
The app drives one POS terminal: one session, one cart. Both live in
app.extensions and are shared by every request of the process.
"""

from __future__ import annotations

from flask import Flask, current_app

from .services.cart_service import Cart
from .storage import PersistenceRouter, SqlKeyValueStore

EXTENSION_KEY = "posgo"


def init_state(app: Flask) -> None:
    router = PersistenceRouter(
        SqlKeyValueStore(),
        demo_user_id=app.config["DEMO_USER_ID"],
        demo_email_domain=app.config["DEMO_EMAIL_DOMAIN"],
    )
    app.extensions[EXTENSION_KEY] = {"router": router, "cart": Cart(), "restored": False}


def get_router() -> PersistenceRouter:
    state = current_app.extensions[EXTENSION_KEY]
    if not state["restored"]:
        # First use in this process: pick up the session persisted on the device
        state["router"].restore_session()
        state["restored"] = True
    return state["router"]


def get_cart() -> Cart:
    return current_app.extensions[EXTENSION_KEY]["cart"]
