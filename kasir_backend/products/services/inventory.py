# products/services/inventory.py

"""
======================================================
PATH: products/services/inventory.py
======================================================
INVENTORY LEDGER

Purpose:
- The ONLY code path that mutates Product.stock.
- Checkout decrement: guarded, row-locked, inside the caller's atomic unit.
- Restock increment: atomic F() update.

Rules:
- Quantities are integer units.
- Stock never goes negative: the decrement is a conditional UPDATE
  (stock >= qty) and the table carries CHECK (stock >= 0).
- Listing/retrieve endpoints read a point-in-time snapshot; checkout decisions
  always re-read the locked row here.
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from products.models import MAX_STOCK, Product

logger = logging.getLogger(__name__)


# ============================================================
# DOMAIN ERRORS
# ============================================================

class InventoryError(Exception):
    """Base inventory ledger failure."""


class InsufficientStockError(InventoryError):
    def __init__(self, *, product_id, product_name: str, requested: int, available: int):
        self.product_id = product_id
        self.product_name = product_name
        self.requested = requested
        self.available = available
        super().__init__(f"insufficient stock for product: {product_name}")


def _to_int_qty(value) -> int:
    """
    Quantity normalizer.
    HARD RULE: quantities are integer units in this system.
    """
    if isinstance(value, bool):
        raise ValueError("quantity must be a whole integer unit")

    if isinstance(value, int):
        return value

    if isinstance(value, str):
        s = value.strip()
        if s.isascii() and s.isdigit():
            return int(s)

    raise ValueError("quantity must be a whole integer unit")


def _require_atomic_block() -> None:
    if not transaction.get_connection().in_atomic_block:
        raise InventoryError(
            "Stock decrements must run inside an atomic unit of work."
        )


# ============================================================
# READS (LOCKING)
# ============================================================

def lock_product(product_id) -> Product:
    """
    Load the authoritative product row with a row lock (SELECT ... FOR UPDATE).

    Raises Product.DoesNotExist when the id is unknown.
    On backends without row locks (SQLite) the whole database is write-locked
    by the surrounding transaction instead.
    """
    _require_atomic_block()
    return Product.objects.select_for_update().get(pk=product_id)


# ============================================================
# WRITES
# ============================================================

def decrement_stock_locked(*, product: Product, quantity) -> int:
    """
    Decrement product stock by `quantity` inside the caller's atomic unit.

    Guarded UPDATE:
        UPDATE products_product SET stock = stock - q
        WHERE id = p AND stock >= q

    Zero rows updated means a concurrent writer (or an earlier line of the same
    checkout) already consumed the stock: we raise instead of going negative.

    Returns the new stock value and refreshes `product.stock` in place.
    """
    _require_atomic_block()

    qty = _to_int_qty(quantity)
    if qty <= 0:
        raise ValueError("quantity must be at least 1")

    updated = Product.objects.filter(pk=product.pk, stock__gte=qty).update(
        stock=F("stock") - qty,
        updated_at=timezone.now(),
    )

    if not updated:
        current = (
            Product.objects.filter(pk=product.pk).values_list("stock", flat=True).first()
        )
        raise InsufficientStockError(
            product_id=product.pk,
            product_name=product.name,
            requested=qty,
            available=int(current or 0),
        )

    product.refresh_from_db(fields=["stock", "updated_at"])
    return int(product.stock)


@transaction.atomic
def restock_product(*, product_id, quantity) -> Product:
    """
    Add `quantity` units to a product's stock.

    Atomic + row-locked so it serialises with in-flight checkouts.
    """
    qty = _to_int_qty(quantity)
    if qty <= 0:
        raise ValueError("quantity must be at least 1")

    product = lock_product(product_id)
    if int(product.stock) + qty > MAX_STOCK:
        raise InventoryError(
            f"restock would exceed the maximum stock of {MAX_STOCK} units"
        )

    Product.objects.filter(pk=product.pk).update(
        stock=F("stock") + qty,
        updated_at=timezone.now(),
    )
    product.refresh_from_db(fields=["stock", "updated_at"])

    logger.info(
        "Product restocked",
        extra={"product_id": product.pk, "quantity": qty, "stock": product.stock},
    )
    return product
