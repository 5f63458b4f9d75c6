from __future__ import annotations

from ..extensions import db


class CashShift(db.Model):
    """
    Cash register shift.

    LIFECYCLE:
    - OPEN: sales and cash movements are attributed to it
    - CLOSED: end amount recorded, never reopened

    DESIGN: one OPEN shift per store is enforced by the caller (shift
    service), not by a constraint here.
    """
    __tablename__ = "cash_shifts"

    id = db.Column(db.String(36), primary_key=True)
    store_id = db.Column(db.String(36), db.ForeignKey("stores.id"), nullable=False, index=True)

    status = db.Column(db.String(16), nullable=False, default="OPEN", index=True)  # OPEN, CLOSED
    start_time = db.Column(db.DateTime(timezone=True), nullable=False, index=True)
    end_time = db.Column(db.DateTime(timezone=True), nullable=True)
    start_amount = db.Column(db.Float, nullable=False, default=0)
    end_amount = db.Column(db.Float, nullable=True)

    total_sales_cash = db.Column(db.Float, nullable=False, default=0)
    total_sales_digital = db.Column(db.Float, nullable=False, default=0)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())


class CashMovement(db.Model):
    """
    Append-only cash log.

    EVENT TYPES:
    - OPEN: opening float
    - CLOSE: counted cash at shift end
    - IN: manual cash added to the drawer
    - OUT: manual cash removed from the drawer
    """
    __tablename__ = "cash_movements"
    __table_args__ = (
        db.Index("ix_cash_movements_store_timestamp", "store_id", "timestamp"),
    )

    id = db.Column(db.String(36), primary_key=True)
    store_id = db.Column(db.String(36), db.ForeignKey("stores.id"), nullable=False, index=True)
    shift_id = db.Column(db.String(36), nullable=False, index=True)

    type = db.Column(db.String(16), nullable=False)
    amount = db.Column(db.Float, nullable=False, default=0)
    description = db.Column(db.String(255), nullable=True)
    timestamp = db.Column(db.DateTime(timezone=True), nullable=False)
