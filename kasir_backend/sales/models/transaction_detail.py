# sales/models/transaction_detail.py

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import F, Q

from products.models import Product

from .transaction import Transaction


class TransactionDetail(models.Model):
    """
    One line of a Transaction.

    Snapshots (deliberate denormalisation):
    - product_name: the product name at time of sale
    - unit_price:   the product price at time of sale

    The product FK is SET_NULL so history survives product deletion and the
    report keeps grouping by the snapshotted name.
    """

    transaction = models.ForeignKey(
        Transaction,
        on_delete=models.CASCADE,
        related_name="details",
    )

    product = models.ForeignKey(
        Product,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="transaction_details",
    )

    product_name = models.CharField(max_length=100, db_index=True)
    unit_price = models.PositiveBigIntegerField()
    quantity = models.PositiveIntegerField()
    subtotal = models.PositiveBigIntegerField()

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=Q(quantity__gt=0),
                name="chk_txdetail_quantity_gt_zero",
            ),
            models.CheckConstraint(
                condition=Q(subtotal=F("unit_price") * F("quantity")),
                name="chk_txdetail_subtotal_matches",
            ),
        ]

    def clean(self):
        if int(self.quantity or 0) <= 0:
            raise ValidationError({"quantity": "quantity must be at least 1"})

        if int(self.subtotal) != int(self.unit_price) * int(self.quantity):
            raise ValidationError({"subtotal": "subtotal must equal unit_price * quantity"})

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("TransactionDetail records are immutable")
        return super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.product_name} x {self.quantity}"
