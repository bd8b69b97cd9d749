# sales/apps.py

"""
SALES APP CONFIG

Sales module:
- Atomic checkout (cart -> Transaction + TransactionDetails, stock decrement)
- Transaction history (read-only)
- Revenue / best-seller report
"""

from django.apps import AppConfig


class SalesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "sales"
    verbose_name = "Sales & Checkout"
