# products/tests/test_inventory.py

from django.db import transaction
from django.test import TestCase, TransactionTestCase

from products.models import MAX_STOCK, Product
from products.services.inventory import (
    InsufficientStockError,
    InventoryError,
    decrement_stock_locked,
    lock_product,
    restock_product,
)


class InventoryLedgerTests(TestCase):
    """
    Inventory ledger tests.

    GUARANTEES:
    - decrement is guarded: it never drives stock below zero
    - decrement refuses to run outside an atomic unit
    - restock increments atomically and validates quantity
    """

    def setUp(self):
        self.product = Product.objects.create(name="Kopi Tubruk", price=10, stock=5)

    def test_decrement_reduces_stock(self):
        with transaction.atomic():
            product = lock_product(self.product.pk)
            remaining = decrement_stock_locked(product=product, quantity=3)

        self.assertEqual(remaining, 2)
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock, 2)

    def test_decrement_exact_stock_reaches_zero(self):
        with transaction.atomic():
            remaining = decrement_stock_locked(product=self.product, quantity=5)

        self.assertEqual(remaining, 0)

    def test_guard_blocks_stale_snapshot(self):
        # The in-memory instance still believes stock=5; the row says 1.
        Product.objects.filter(pk=self.product.pk).update(stock=1)

        with self.assertRaises(InsufficientStockError) as ctx:
            with transaction.atomic():
                decrement_stock_locked(product=self.product, quantity=3)

        self.assertEqual(ctx.exception.available, 1)
        self.assertEqual(ctx.exception.requested, 3)
        self.assertEqual(
            str(ctx.exception), "insufficient stock for product: Kopi Tubruk"
        )
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock, 1)

    def test_decrement_rejects_non_positive_quantity(self):
        with transaction.atomic():
            for qty in (0, -1, True, 1.5):
                with self.assertRaises(ValueError):
                    decrement_stock_locked(product=self.product, quantity=qty)

    def test_lock_product_unknown_id(self):
        with self.assertRaises(Product.DoesNotExist):
            with transaction.atomic():
                lock_product(9999)

    def test_restock(self):
        product = restock_product(product_id=self.product.pk, quantity=7)
        self.assertEqual(product.stock, 12)

        with self.assertRaises(ValueError):
            restock_product(product_id=self.product.pk, quantity=0)

        self.product.refresh_from_db()
        self.assertEqual(self.product.stock, 12)

    def test_restock_refuses_to_pass_stock_limit(self):
        with self.assertRaises(InventoryError):
            restock_product(product_id=self.product.pk, quantity=MAX_STOCK)

        self.product.refresh_from_db()
        self.assertEqual(self.product.stock, 5)

    def test_non_ascii_digit_quantity_is_rejected(self):
        with self.assertRaises(ValueError):
            restock_product(product_id=self.product.pk, quantity="²")


class InventoryOutsideAtomicTests(TransactionTestCase):
    """
    GUARANTEES:
    - the ledger refuses to decrement outside an atomic unit of work
    """

    def test_decrement_requires_atomic_block(self):
        product = Product.objects.create(name="Kopi Tubruk", price=10, stock=5)

        with self.assertRaises(InventoryError):
            decrement_stock_locked(product=product, quantity=1)

        with self.assertRaises(InventoryError):
            lock_product(product.pk)

        product.refresh_from_db()
        self.assertEqual(product.stock, 5)
