# products/apps.py

"""
PRODUCTS APP CONFIG

Catalogue module:
- Category CRUD
- Product CRUD
- Inventory ledger (the only code path that mutates Product.stock)
"""

from django.apps import AppConfig


class ProductsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "products"
    verbose_name = "Products & Inventory"
