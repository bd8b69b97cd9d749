"""
======================================================
PATH: sales/migrations/0001_initial.py
======================================================
MIGRATION: INITIAL SALES SCHEMA

Creates:
- Transaction (append-only checkout header)
- TransactionDetail (line snapshots: product name + unit price)
"""

from __future__ import annotations

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("products", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Transaction",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "total_amount",
                    models.PositiveBigIntegerField(
                        default=0,
                        help_text="Sum of detail subtotals in whole currency units.",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        db_index=True,
                        default=django.utils.timezone.now,
                        editable=False,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("total_amount__gte", 0)),
                        name="chk_transaction_total_gte_zero",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="TransactionDetail",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("product_name", models.CharField(db_index=True, max_length=100)),
                ("unit_price", models.PositiveBigIntegerField()),
                ("quantity", models.PositiveIntegerField()),
                ("subtotal", models.PositiveBigIntegerField()),
                (
                    "product",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="transaction_details",
                        to="products.product",
                    ),
                ),
                (
                    "transaction",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="details",
                        to="sales.transaction",
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("quantity__gt", 0)),
                        name="chk_txdetail_quantity_gt_zero",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            (
                                "subtotal",
                                models.F("unit_price") * models.F("quantity"),
                            )
                        ),
                        name="chk_txdetail_subtotal_matches",
                    ),
                ],
            },
        ),
    ]
