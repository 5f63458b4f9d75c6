from __future__ import annotations

from ..extensions import db


class Transaction(db.Model):
    """
    Completed sale (receipt).

    IMMUTABLE: written once at checkout. `items` is the cart snapshot at sale
    time so reporting never depends on the mutable catalog.
    """
    __tablename__ = "transactions"
    __table_args__ = (
        db.Index("ix_transactions_store_date", "store_id", "date"),
    )

    id = db.Column(db.String(36), primary_key=True)
    store_id = db.Column(db.String(36), db.ForeignKey("stores.id"), nullable=False, index=True)
    date = db.Column(db.DateTime(timezone=True), nullable=False)

    items = db.Column(db.JSON, nullable=False)
    subtotal = db.Column(db.Float, nullable=False, default=0)
    tax = db.Column(db.Float, nullable=False, default=0)
    discount = db.Column(db.Float, nullable=False, default=0)
    total = db.Column(db.Float, nullable=False, default=0)
    profit = db.Column(db.Float, nullable=False, default=0)

    payment_method = db.Column(db.String(32), nullable=True)
    payments = db.Column(db.JSON, nullable=True)

    shift_id = db.Column(db.String(36), nullable=True, index=True)


class Purchase(db.Model):
    """Stock received from a supplier."""
    __tablename__ = "purchases"

    id = db.Column(db.String(36), primary_key=True)
    store_id = db.Column(db.String(36), db.ForeignKey("stores.id"), nullable=False, index=True)
    date = db.Column(db.DateTime(timezone=True), nullable=False)
    supplier_id = db.Column(db.String(36), nullable=True)
    total = db.Column(db.Float, nullable=False, default=0)
    items = db.Column(db.JSON, nullable=False)
