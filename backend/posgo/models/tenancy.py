from __future__ import annotations

import uuid

from ..extensions import db


def _uuid() -> str:
    return str(uuid.uuid4())


class Store(db.Model):
    """
    Tenant boundary in the cloud store.

    WHY: Every product, sale, shift and movement row carries a store_id and
    every store-mode query filters on it.

    DESIGN:
    - Settings live on the store row as one JSON document (StoreSettings shape)
    - The all-zero id is reserved for the shared demo template catalog
    """
    __tablename__ = "stores"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    name = db.Column(db.String(120), nullable=True)
    settings = db.Column(db.JSON, nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    def __repr__(self) -> str:
        return f"<Store id={self.id} name={self.name!r}>"


class Profile(db.Model):
    """
    Authenticated identity and its store membership.

    Resolved once per session (identity -> store_id) and cached by the
    persistence router until logout.
    """
    __tablename__ = "profiles"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    email = db.Column(db.String(255), nullable=False, unique=True, index=True)
    name = db.Column(db.String(120), nullable=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(16), nullable=False, default="admin")
    store_id = db.Column(db.String(36), db.ForeignKey("stores.id"), nullable=True, index=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    store = db.relationship("Store", backref=db.backref("profiles", lazy=True))

    def __repr__(self) -> str:
        return f"<Profile id={self.id} email={self.email!r} role={self.role}>"


class Lead(db.Model):
    """Prospect captured from the public landing form. Global, super-admin only."""
    __tablename__ = "leads"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    name = db.Column(db.String(120), nullable=False)
    business_name = db.Column(db.String(120), nullable=True)
    phone = db.Column(db.String(32), nullable=False, unique=True)
    status = db.Column(db.String(16), nullable=False, default="NEW")

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now(), index=True)
