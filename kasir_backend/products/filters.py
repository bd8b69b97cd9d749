# products/filters.py

"""
PRODUCT FILTERS (django-filter)

- ?name=<text>      case-insensitive substring match
- ?category=<id>    products in one category
"""

import django_filters

from products.models import Product


class ProductFilter(django_filters.FilterSet):
    name = django_filters.CharFilter(field_name="name", lookup_expr="icontains")
    category = django_filters.NumberFilter(field_name="category_id")

    class Meta:
        model = Product
        fields = ["name", "category"]
