from .category_cache import category_exists, get_category_list, invalidate_categories
from .inventory import (
    InsufficientStockError,
    InventoryError,
    decrement_stock_locked,
    lock_product,
    restock_product,
)

__all__ = [
    "category_exists",
    "get_category_list",
    "invalidate_categories",
    "InventoryError",
    "InsufficientStockError",
    "lock_product",
    "decrement_stock_locked",
    "restock_product",
]
