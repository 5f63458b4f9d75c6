# backend/posgo/config.py
from __future__ import annotations
import os


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # Hosted multi-tenant row store (real stores + shared demo template)
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL",
        "sqlite:///posgo_cloud.sqlite3",
    )
    # Device-local key-value store used by demo sessions
    SQLALCHEMY_BINDS = {
        "local": os.environ.get("LOCAL_DATABASE_URL", "sqlite:///posgo_local.sqlite3"),
    }
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Demo identity markers
    DEMO_USER_ID = os.environ.get("POSGO_DEMO_USER_ID", "test-user-demo")
    DEMO_EMAIL_DOMAIN = os.environ.get("POSGO_DEMO_EMAIL_DOMAIN", "@demo.posgo")

    LOG_LEVEL = os.environ.get("POSGO_LOG_LEVEL", "INFO")

    # Comma-separated browser origins allowed to call the API (terminal UI dev server)
    CORS_ORIGINS = [
        o.strip()
        for o in os.environ.get("POSGO_CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173").split(",")
        if o.strip()
    ]
