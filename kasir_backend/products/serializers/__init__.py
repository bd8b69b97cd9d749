# products/serializers/__init__.py

from .category import CategorySerializer, CategorySummarySerializer
from .product import ProductSerializer, RestockSerializer

__all__ = [
    "CategorySerializer",
    "CategorySummarySerializer",
    "ProductSerializer",
    "RestockSerializer",
]
