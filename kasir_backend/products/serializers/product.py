# products/serializers/product.py

"""
PRODUCT SERIALIZER

Purpose:
- Canonical Product serializer for catalogue CRUD.
- Category is written as `category_id` and read back nested as {id, name}.
- Stock is accepted at creation only. Afterwards it is owned by the
  inventory ledger (checkout decrement, restock) and ignored on update.
"""

from django.db import IntegrityError, transaction
from rest_framework import serializers

from products.models import MAX_AMOUNT, MAX_STOCK, Category, Product
from products.serializers.category import CategorySummarySerializer
from products.services.category_cache import category_exists, invalidate_categories


class ProductSerializer(serializers.ModelSerializer):
    """
    Canonical Product Serializer.

    GUARANTEES:
    - price and stock are non-negative integers that fit their columns
    - category_id must reference an existing category (or be null),
      checked against the database at write time
    - update never touches stock
    """

    name = serializers.CharField(
        required=True, allow_blank=False, min_length=3, max_length=100
    )
    price = serializers.IntegerField(min_value=0, max_value=MAX_AMOUNT)
    stock = serializers.IntegerField(
        min_value=0, max_value=MAX_STOCK, required=False, default=0
    )

    category = CategorySummarySerializer(read_only=True)
    category_id = serializers.IntegerField(
        write_only=True, required=False, allow_null=True
    )

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "price",
            "stock",
            "category",
            "category_id",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "category", "created_at", "updated_at"]

    def validate_name(self, value: str):
        v = (value or "").strip()
        if len(v) < 3:
            raise serializers.ValidationError("name must be at least 3 characters")
        return v

    def validate_category_id(self, value):
        if value is None:
            return None
        if not category_exists(value):
            raise serializers.ValidationError("Invalid category ID")
        return value

    # -----------------------------
    # CREATE / UPDATE
    # -----------------------------
    def _reject_category(self, category_id):
        invalidate_categories(category_id)
        raise serializers.ValidationError({"category_id": ["Invalid category ID"]})

    def _write(self, validated_data, write):
        # The cached existence answer may predate a delete made by another
        # process, so the category is re-read before the row is written.
        category_id = validated_data.get("category_id")
        if category_id is not None and not Category.objects.filter(pk=category_id).exists():
            self._reject_category(category_id)

        try:
            with transaction.atomic():
                return write()
        except IntegrityError:
            if category_id is None:
                raise
            self._reject_category(category_id)

    def create(self, validated_data):
        return self._write(
            validated_data, lambda: Product.objects.create(**validated_data)
        )

    def update(self, instance, validated_data):
        # Stock changes only through products.services.inventory.
        validated_data.pop("stock", None)
        return self._write(
            validated_data, lambda: super(ProductSerializer, self).update(instance, validated_data)
        )


class RestockSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_STOCK)
