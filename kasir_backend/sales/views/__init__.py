# sales/views/__init__.py

from .checkout import CheckoutView
from .reports import SalesReportView
from .transaction import TransactionViewSet

__all__ = [
    "CheckoutView",
    "SalesReportView",
    "TransactionViewSet",
]
