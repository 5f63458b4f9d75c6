# Overview: Checkout: turns the cart into an immutable transaction and reconciles stock.

from __future__ import annotations

import copy

from flask import current_app

from ..entities import PaymentSplit, Transaction, new_id
from ..time_utils import utcnow_iso
from ..validation import ValidationError, coerce_amount
from .cart_service import Cart
from .shift_service import get_active_shift
from .stock_service import apply_sale_to_stock, changed_products


class CheckoutError(Exception):
    """Raised when checkout preconditions fail (no open shift, empty cart)."""
    pass


def _parse_payments(payments: list[dict] | None) -> list[PaymentSplit]:
    splits = []
    for raw in payments or []:
        if not isinstance(raw, dict) or not raw.get("method"):
            raise ValidationError("each payment needs a method and an amount")
        splits.append(PaymentSplit(method=str(raw["method"]), amount=coerce_amount(raw.get("amount"), "payment amount")))
    return splits


def checkout(router, cart: Cart, payment_method: str, payments: list[dict] | None = None) -> Transaction:
    """
    Complete the sale held in `cart`.

    WHY: The transaction is bound to the open shift, so shift reports can be
    derived by scanning transactions.

    Steps: build the transaction from the cart totals, persist it, decrement
    stock in one pass over the catalog, persist changed products, clear the
    cart. Nothing is written when a precondition fails.

    Raises:
        CheckoutError: no open shift, or the cart is empty
        ValidationError: malformed payment data
    """
    shift = get_active_shift(router)
    if shift is None:
        raise CheckoutError("Open a cash shift before checking out")
    if cart.is_empty():
        raise CheckoutError("Cart is empty")
    if not payment_method:
        raise ValidationError("paymentMethod is required")

    splits = _parse_payments(payments)
    totals = cart.totals(router.get_settings())
    if not splits:
        splits = [PaymentSplit(method=payment_method, amount=totals.stored_total)]

    transaction = Transaction(
        id=new_id(),
        date=utcnow_iso(),
        items=copy.deepcopy(cart.items),
        subtotal=totals.stored_subtotal,
        tax=totals.tax,
        discount=totals.discount,
        total=totals.stored_total,
        payment_method=payment_method,
        payments=splits,
        shift_id=shift.id,
        profit=0.0,
    )
    if not router.save_transaction(transaction):
        current_app.logger.warning("Transaction %s was not persisted remotely", transaction.id)

    before = router.get_products()
    after = apply_sale_to_stock(before, transaction.items)
    changed = changed_products(before, after)
    if changed:
        router.save_products(changed)

    cart.clear()
    return transaction
