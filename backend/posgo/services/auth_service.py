# Overview: Service-layer operations for auth; store registration, login and the demo identity.

"""
Authentication Service

WHY: The session identity decides demo vs store mode and, in store mode,
which store's rows are visible. Profiles live in the cloud database with
bcrypt password hashes.

SECURITY NOTES:
- Passwords hashed with bcrypt (cost factor 12)
- Minimum 8 characters with at least one letter and one digit
- Demo-domain emails cannot register (they would route to demo mode)
"""

import re

import bcrypt
from flask import current_app

from ..constants import ROLE_ADMIN, ROLE_SUPER_ADMIN
from ..entities import StoreSettings, UserProfile
from ..extensions import db
from ..models import Profile, Store


class AuthError(Exception):
    """Raised for registration/login failures that map to 4xx responses."""
    pass


class PasswordValidationError(AuthError):
    """Raised when a password doesn't meet strength requirements."""
    pass


EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def validate_password_strength(password: str) -> None:
    if not password or len(password) < 8:
        raise PasswordValidationError("Password must be at least 8 characters long")
    if not re.search(r"[A-Za-z]", password):
        raise PasswordValidationError("Password must contain at least one letter")
    if not re.search(r"\d", password):
        raise PasswordValidationError("Password must contain at least one digit")


def hash_password(password: str) -> str:
    validate_password_strength(password)
    salt = bcrypt.gensalt(rounds=12)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Timing-safe check via bcrypt.checkpw; malformed hashes never match."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def to_user_profile(profile: Profile) -> UserProfile:
    return UserProfile(
        id=profile.id,
        email=profile.email,
        name=profile.name or "",
        role=profile.role,
        store_id=profile.store_id,
    )


def _normalize_email(email: str | None) -> str:
    email = (email or "").strip().lower()
    if not EMAIL_RE.match(email):
        raise AuthError("A valid email is required")
    return email


def _create_profile(email: str, password: str, name: str, role: str, store_id: str | None) -> Profile:
    email = _normalize_email(email)
    if email.endswith(current_app.config["DEMO_EMAIL_DOMAIN"].lower()):
        raise AuthError("Demo email addresses cannot be registered")
    if db.session.query(Profile).filter_by(email=email).first():
        raise AuthError("Email is already registered")
    profile = Profile(
        email=email,
        name=name,
        password_hash=hash_password(password),
        role=role,
        store_id=store_id,
    )
    db.session.add(profile)
    return profile


def register_store(email: str, password: str, name: str, store_name: str) -> UserProfile:
    """
    Create a store and its first (admin) profile.

    The store row starts with default settings renamed to `store_name`.
    """
    if not store_name or not store_name.strip():
        raise AuthError("storeName is required")

    settings = StoreSettings(name=store_name.strip())
    store = Store(name=store_name.strip(), settings=settings.to_dict())
    db.session.add(store)
    db.session.flush()

    try:
        profile = _create_profile(email, password, name, ROLE_ADMIN, store.id)
    except AuthError:
        db.session.rollback()
        raise
    db.session.commit()

    current_app.logger.info("Registered store %s for %s", store.id, profile.email)
    return to_user_profile(profile)


def create_superadmin(email: str, password: str, name: str = "Super Admin") -> UserProfile:
    profile = _create_profile(email, password, name, ROLE_SUPER_ADMIN, None)
    db.session.commit()
    return to_user_profile(profile)


def authenticate(email: str, password: str) -> UserProfile | None:
    """Return the matching profile, or None for unknown email / wrong password."""
    email = (email or "").strip().lower()
    profile = db.session.query(Profile).filter_by(email=email).first()
    if not profile or not verify_password(password or "", profile.password_hash):
        return None
    return to_user_profile(profile)


def demo_profile() -> UserProfile:
    """The fixed identity used for demo sessions."""
    return UserProfile(
        id=current_app.config["DEMO_USER_ID"],
        email="demo" + current_app.config["DEMO_EMAIL_DOMAIN"],
        name="Usuario Demo",
        role=ROLE_ADMIN,
        store_id=None,
    )
