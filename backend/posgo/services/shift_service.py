# Overview: Cash shift lifecycle (open, cash in/out, close) and shift reporting.

"""
Cash Shift Service

WHY: Every sale and every manual cash movement is attributed to the open
shift so the drawer can be reconciled when the shift closes.

LIFECYCLE:
- NO_SHIFT -> OPEN: open_shift (records an OPEN movement)
- OPEN -> OPEN: record_movement (IN / OUT)
- OPEN -> CLOSED: close_shift (records a CLOSE movement, fills sales totals)
- CLOSED shifts are never reopened; opening again creates a new shift

DESIGN:
- One open shift at a time is checked here, not by storage
- The active shift is found through the device-local pointer
- Shift aggregates are derived by scanning transactions, never incremented
"""

from __future__ import annotations

from dataclasses import dataclass, field

from flask import current_app

from ..entities import (
    MOVEMENT_CLOSE,
    MOVEMENT_IN,
    MOVEMENT_OPEN,
    MOVEMENT_OUT,
    PAYMENT_CASH,
    SHIFT_CLOSED,
    SHIFT_OPEN,
    CashMovement,
    CashShift,
    Transaction,
    new_id,
)
from ..time_utils import utcnow_iso
from ..validation import ValidationError


class ShiftError(Exception):
    """Raised for shift state violations (precondition failures)."""
    pass


@dataclass
class ShiftReport:
    shift: CashShift
    movements: list[CashMovement] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)

    def summary(self) -> dict:
        cash_sales, digital_sales = sales_totals(self.transactions)
        cash_in = sum(m.amount for m in self.movements if m.type == MOVEMENT_IN)
        cash_out = sum(m.amount for m in self.movements if m.type == MOVEMENT_OUT)
        expected = self.shift.start_amount + cash_sales + cash_in - cash_out
        difference = None
        if self.shift.end_amount is not None:
            difference = self.shift.end_amount - expected
        return {
            "startAmount": self.shift.start_amount,
            "cashSales": cash_sales,
            "digitalSales": digital_sales,
            "cashIn": cash_in,
            "cashOut": cash_out,
            "expectedCash": expected,
            "endAmount": self.shift.end_amount,
            "difference": difference,
            "transactionCount": len(self.transactions),
        }

    def to_dict(self) -> dict:
        return {
            "shift": self.shift.to_dict(),
            "movements": [m.to_dict() for m in self.movements],
            "transactions": [t.to_dict() for t in self.transactions],
            "summary": self.summary(),
        }


def sales_totals(transactions: list[Transaction]) -> tuple[float, float]:
    """(cash, digital) sales, split by payment method."""
    cash = 0.0
    digital = 0.0
    for txn in transactions:
        if txn.payments:
            for split in txn.payments:
                if split.method == PAYMENT_CASH:
                    cash += split.amount
                else:
                    digital += split.amount
        elif txn.payment_method == PAYMENT_CASH:
            cash += txn.total
        else:
            digital += txn.total
    return cash, digital


# =============================================================================
# QUERIES
# =============================================================================

def get_active_shift(router) -> CashShift | None:
    shift_id = router.get_active_shift_id()
    if not shift_id:
        return None
    for shift in router.get_shifts():
        if shift.id == shift_id:
            return shift if shift.is_open else None
    return None


def build_report(router, shift: CashShift) -> ShiftReport:
    return ShiftReport(
        shift=shift,
        movements=[m for m in router.get_movements() if m.shift_id == shift.id],
        transactions=[t for t in router.get_transactions() if t.shift_id == shift.id],
    )


# =============================================================================
# LIFECYCLE
# =============================================================================

def _record(router, shift: CashShift, type_: str, amount: float, description: str) -> CashMovement:
    movement = CashMovement(
        id=new_id(),
        shift_id=shift.id,
        type=type_,
        amount=amount,
        description=description,
        timestamp=utcnow_iso(),
    )
    router.save_movement(movement)
    return movement


def open_shift(router, start_amount: float, description: str = "Apertura de caja") -> CashShift:
    """
    Open a new shift with the counted opening float.

    Raises:
        ShiftError: a shift is already open on this device
    """
    if start_amount < 0:
        raise ValidationError("startAmount cannot be negative")
    if get_active_shift(router) is not None:
        raise ShiftError("A shift is already open")

    shift = CashShift(
        id=new_id(),
        start_time=utcnow_iso(),
        start_amount=start_amount,
        status=SHIFT_OPEN,
    )
    router.save_shift(shift)
    router.set_active_shift_id(shift.id)
    _record(router, shift, MOVEMENT_OPEN, start_amount, description)

    current_app.logger.info("Shift %s opened with %.2f", shift.id, start_amount)
    return shift


def record_movement(router, type_: str, amount: float, description: str = "") -> CashMovement:
    """Record manual cash added (IN) or removed (OUT) during the open shift."""
    if type_ not in (MOVEMENT_IN, MOVEMENT_OUT):
        raise ValidationError("type must be IN or OUT")
    if amount <= 0:
        raise ValidationError("amount must be greater than zero")
    shift = get_active_shift(router)
    if shift is None:
        raise ShiftError("No open shift")
    return _record(router, shift, type_, amount, description)


def close_shift(router, end_amount: float, description: str = "Cierre de caja") -> ShiftReport:
    """
    Close the open shift with the counted cash.

    Fills the shift's sales totals from its transactions, records a CLOSE
    movement, clears the active pointer and returns the shift report.
    """
    if end_amount < 0:
        raise ValidationError("endAmount cannot be negative")
    shift = get_active_shift(router)
    if shift is None:
        raise ShiftError("No open shift")

    transactions = [t for t in router.get_transactions() if t.shift_id == shift.id]
    cash, digital = sales_totals(transactions)

    shift.status = SHIFT_CLOSED
    shift.end_time = utcnow_iso()
    shift.end_amount = end_amount
    shift.total_sales_cash = cash
    shift.total_sales_digital = digital
    router.save_shift(shift)
    _record(router, shift, MOVEMENT_CLOSE, end_amount, description)
    router.set_active_shift_id(None)

    current_app.logger.info("Shift %s closed (cash %.2f, digital %.2f)", shift.id, cash, digital)
    return build_report(router, shift)
