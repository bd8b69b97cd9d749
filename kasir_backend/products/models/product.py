# products/models/product.py

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from .category import Category

# Largest values the price (bigint) and stock (integer) columns can hold.
MAX_AMOUNT = 2**63 - 1
MAX_STOCK = 2**31 - 1


class Product(models.Model):
    """
    Represents a sellable product.

    STOCK MODEL (IMPORTANT):
    - Product.stock is the authoritative count of sellable units
    - stock >= 0 is enforced by the database (check constraint), not only
      by serializers
    - stock is written at creation time; afterwards it changes ONLY through
      products.services.inventory (checkout decrement / restock increment)

    PRICING:
    - price is an integer amount of currency units (no floats anywhere)
    - the price in force at sale time is snapshotted on TransactionDetail
    """

    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
    )

    name = models.CharField(max_length=100, db_index=True)

    price = models.PositiveBigIntegerField(
        help_text="Unit selling price in whole currency units.",
    )

    stock = models.PositiveIntegerField(
        default=0,
        help_text="Units available for sale (inventory-ledger managed).",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=Q(stock__gte=0),
                name="chk_product_stock_gte_zero",
            ),
            models.CheckConstraint(
                condition=Q(price__gte=0),
                name="chk_product_price_gte_zero",
            ),
        ]

    def __str__(self):
        return f"{self.name} (#{self.pk})"

    def clean(self):
        if len((self.name or "").strip()) < 3:
            raise ValidationError({"name": "name must be at least 3 characters"})

        if self.price is None or int(self.price) < 0:
            raise ValidationError({"price": "price must be non-negative"})

        if self.stock is None or int(self.stock) < 0:
            raise ValidationError({"stock": "stock cannot be negative"})
