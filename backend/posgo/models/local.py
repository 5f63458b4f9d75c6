from __future__ import annotations

from ..extensions import db


class LocalEntry(db.Model):
    """
    One JSON document in the device-local key-value store.

    Lives on the "local" bind (a separate SQLite file on the terminal), so
    demo data never reaches the cloud database.
    """
    __tablename__ = "local_entries"
    __bind_key__ = "local"

    key = db.Column(db.String(64), primary_key=True)
    value = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now(), onupdate=db.func.now())
