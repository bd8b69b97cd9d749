# sales/services/checkout_service.py

"""
CHECKOUT SERVICE (APPLICATION SERVICE)

Purpose:
- Turn a list of (product_id, quantity) lines into ONE persisted Transaction
  with its TransactionDetails, decrementing stock for every line.

Hard rules:
- Quantities are positive integer units; money is integer currency units.
- Totals are computed server-side; the client never sends prices.
- All-or-nothing: every line succeeds or nothing is committed.

Concurrency:
- One transaction.atomic() unit per checkout.
- Each line re-reads its product with SELECT ... FOR UPDATE, so two
  checkouts touching the same product serialise on the row lock.
- The decrement itself is a guarded UPDATE (stock >= qty) backed by
  CHECK (stock >= 0): stock cannot go negative even on SQLite.
- On PostgreSQL the lock wait is bounded by lock_timeout
  (settings.CHECKOUT_LOCK_TIMEOUT_MS); a timeout, deadlock or
  serialization failure surfaces as CheckoutConflictError (retryable).
- Lines are processed in request order, so duplicate product ids compound
  against the stock already consumed by earlier lines.
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.db import DatabaseError, OperationalError, transaction

from products.models import MAX_AMOUNT, Product
from products.services import inventory
from sales.models import Transaction, TransactionDetail
from sales.services.exceptions import (
    AmountOverflowError,
    CheckoutConflictError,
    CheckoutError,
    CheckoutStorageError,
    EmptyCheckoutError,
    InsufficientStockError,
    InvalidItemError,
    InvalidQuantityError,
    ProductNotFoundError,
)

logger = logging.getLogger(__name__)

# lock_not_available, deadlock_detected, serialization_failure
_CONFLICT_SQLSTATES = {"55P03", "40P01", "40001"}
# SQLITE_BUSY, SQLITE_LOCKED (primary result codes)
_SQLITE_CONFLICT_CODES = {5, 6}
_SQLITE_CONFLICT_MESSAGES = ("database is locked", "database table is locked")


def _to_int(value, *, field: str, error_cls=InvalidItemError) -> int:
    if isinstance(value, bool):
        raise error_cls(f"{field} must be a whole integer")

    if isinstance(value, int):
        return value

    if isinstance(value, str):
        s = value.strip()
        if s.isascii() and s.isdigit():
            return int(s)

    raise error_cls(f"{field} must be a whole integer")


def _normalize_items(items) -> list[tuple[int, int]]:
    """
    Validate the request lines before any storage access.

    Accepts mappings ({"product_id": .., "quantity": ..}) or 2-tuples.
    """
    if not items:
        raise EmptyCheckoutError()

    lines = []
    for idx, item in enumerate(items):
        if isinstance(item, dict):
            raw_product_id = item.get("product_id")
            raw_quantity = item.get("quantity")
        else:
            try:
                raw_product_id, raw_quantity = item
            except (TypeError, ValueError):
                raise InvalidItemError(f"item {idx} must have product_id and quantity") from None

        product_id = _to_int(raw_product_id, field="product_id")
        quantity = _to_int(raw_quantity, field="quantity", error_cls=InvalidQuantityError)

        if product_id <= 0:
            raise InvalidItemError(f"product_id must be a positive integer (item {idx})")
        if product_id > MAX_AMOUNT:
            raise ProductNotFoundError(product_id)
        if quantity <= 0:
            raise InvalidQuantityError(f"quantity must be at least 1 (item {idx})")

        lines.append((product_id, quantity))

    return lines


def _apply_lock_timeout() -> None:
    """
    Bound row-lock waits for the current atomic unit (PostgreSQL only).
    SET LOCAL expires with the transaction.
    """
    connection = transaction.get_connection()
    if connection.vendor != "postgresql":
        return

    timeout_ms = int(getattr(settings, "CHECKOUT_LOCK_TIMEOUT_MS", 0) or 0)
    if timeout_ms <= 0:
        return

    with connection.cursor() as cursor:
        cursor.execute(f"SET LOCAL lock_timeout = {timeout_ms}")


def _is_retryable_conflict(exc: DatabaseError) -> bool:
    cause = exc.__cause__
    sqlstate = getattr(cause, "sqlstate", None) or getattr(cause, "pgcode", None)
    if sqlstate in _CONFLICT_SQLSTATES:
        return True

    # SQLite serialises writers with database (BUSY) and shared-cache
    # table (LOCKED) locks; extended codes keep the primary code in the low byte.
    sqlite_code = getattr(cause, "sqlite_errorcode", None)
    if sqlite_code is not None and (sqlite_code & 0xFF) in _SQLITE_CONFLICT_CODES:
        return True

    message = str(exc).lower()
    return isinstance(exc, OperationalError) and any(
        text in message for text in _SQLITE_CONFLICT_MESSAGES
    )


def _checkout_atomic(lines: list[tuple[int, int]]) -> Transaction:
    with transaction.atomic():
        _apply_lock_timeout()

        total = 0
        details = []

        for product_id, quantity in lines:
            try:
                product = inventory.lock_product(product_id)
            except Product.DoesNotExist:
                raise ProductNotFoundError(product_id) from None

            if product.stock < quantity:
                raise InsufficientStockError(
                    product_id=product.pk,
                    product_name=product.name,
                    requested=quantity,
                    available=int(product.stock),
                )

            unit_price = int(product.price)
            subtotal = unit_price * quantity
            if subtotal > MAX_AMOUNT or total + subtotal > MAX_AMOUNT:
                raise AmountOverflowError()

            try:
                inventory.decrement_stock_locked(product=product, quantity=quantity)
            except inventory.InsufficientStockError as exc:
                raise InsufficientStockError(
                    product_id=exc.product_id,
                    product_name=exc.product_name,
                    requested=exc.requested,
                    available=exc.available,
                ) from exc

            total += subtotal
            details.append(
                TransactionDetail(
                    product=product,
                    product_name=product.name,
                    unit_price=unit_price,
                    quantity=quantity,
                    subtotal=subtotal,
                )
            )

        header = Transaction.objects.create(total_amount=total)

        for detail in details:
            detail.transaction = header
        TransactionDetail.objects.bulk_create(details)

    return header


def checkout(*, items) -> Transaction:
    """
    Run one checkout and return the committed Transaction.

    Raises a CheckoutError subclass on every failure; by then the atomic
    unit has been rolled back, so stock and transaction tables are unchanged.
    """
    lines = _normalize_items(items)

    try:
        header = _checkout_atomic(lines)
    except CheckoutError as exc:
        logger.info(
            "Checkout rejected",
            extra={"code": exc.code, "reason": str(exc), "lines": len(lines)},
        )
        raise
    except DatabaseError as exc:
        if _is_retryable_conflict(exc):
            logger.warning(
                "Checkout conflict (lock timeout / deadlock / serialization)",
                extra={"lines": len(lines), "error": str(exc)},
            )
            raise CheckoutConflictError() from exc

        logger.exception("Checkout storage failure", extra={"lines": len(lines)})
        raise CheckoutStorageError() from exc

    logger.info(
        "Checkout completed",
        extra={
            "transaction_id": header.pk,
            "total_amount": header.total_amount,
            "lines": len(lines),
        },
    )
    return header
