# products/urls.py

"""
PRODUCTS URLS

Purpose:
- Register catalogue routes under /api/
    /api/categories/
    /api/products/
    /api/products/{id}/restock/
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from products.views import CategoryViewSet, ProductViewSet

router = SimpleRouter()

router.register(r"categories", CategoryViewSet, basename="categories")
router.register(r"products", ProductViewSet, basename="products")

urlpatterns = [
    path("", include(router.urls)),
]
