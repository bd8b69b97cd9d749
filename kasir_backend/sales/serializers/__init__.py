# sales/serializers/__init__.py

from .checkout import CheckoutInputSerializer, CheckoutItemSerializer
from .report import BestSellerSerializer, ReportSerializer
from .transaction import TransactionDetailSerializer, TransactionSerializer

__all__ = [
    "CheckoutItemSerializer",
    "CheckoutInputSerializer",
    "TransactionDetailSerializer",
    "TransactionSerializer",
    "BestSellerSerializer",
    "ReportSerializer",
]
