# sales/models/transaction.py

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q
from django.utils import timezone


class Transaction(models.Model):
    """
    Represents one completed checkout.

    GUARANTEES:
    - Created exactly once per successful checkout, together with its details
    - total_amount == sum(details.subtotal), computed server-side
    - Append-only: never updated, never deleted
    """

    total_amount = models.PositiveBigIntegerField(
        default=0,
        help_text="Sum of detail subtotals in whole currency units.",
    )

    created_at = models.DateTimeField(default=timezone.now, db_index=True, editable=False)

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=Q(total_amount__gte=0),
                name="chk_transaction_total_gte_zero",
            ),
        ]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("Transaction records are immutable")
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Transaction records are immutable and cannot be deleted")

    def __str__(self):
        return f"Transaction #{self.pk} ({self.total_amount})"
