# products/models/category.py

from django.db import models


class Category(models.Model):
    """
    Product grouping.

    Deleting a Category never orphans products: Product.category is
    SET_NULL, so dependents simply become uncategorised.
    """

    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(max_length=500, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "categories"

    def __str__(self):
        return self.name
