# products/admin.py
"""
=====================================================
PATH: products/admin.py
=====================================================

Admin rules:

- Categories are freely editable; every write drops the category cache.
- Product stock is set once at creation. Afterwards it is read-only here:
  it only changes through checkout or the restock endpoint.
"""

from __future__ import annotations

from django.contrib import admin

from products.models import Category, Product
from products.services.category_cache import invalidate_categories


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "description", "created_at")
    search_fields = ("name",)
    ordering = ("name",)

    def save_model(self, request, obj, form, change):
        super().save_model(request, obj, form, change)
        invalidate_categories(obj.pk)

    def delete_model(self, request, obj):
        category_id = obj.pk
        super().delete_model(request, obj)
        invalidate_categories(category_id)

    def delete_queryset(self, request, queryset):
        ids = list(queryset.values_list("pk", flat=True))
        super().delete_queryset(request, queryset)
        for category_id in ids:
            invalidate_categories(category_id)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "price", "stock", "updated_at")
    list_filter = ("category",)
    search_fields = ("name",)
    list_select_related = ("category",)
    ordering = ("id",)

    def get_readonly_fields(self, request, obj=None):
        if obj is not None:
            return ("stock", "created_at", "updated_at")
        return ("created_at", "updated_at")
