"""
PATH: products/models/__init__.py

Products models export surface.
"""

from .category import Category
from .product import MAX_AMOUNT, MAX_STOCK, Product

__all__ = [
    "Category",
    "Product",
    "MAX_AMOUNT",
    "MAX_STOCK",
]
