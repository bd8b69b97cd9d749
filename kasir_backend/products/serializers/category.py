# products/serializers/category.py

from rest_framework import serializers

from products.models import Category


class CategorySerializer(serializers.ModelSerializer):
    """
    Category serializer.

    Rules:
    - name is 3..100 chars, trimmed, unique
    - description is optional (max 500 chars)
    - id + timestamps are read-only
    """

    # Declared explicitly so the model's unique validator (and its generic
    # message) is replaced by validate_name below.
    name = serializers.CharField(
        required=True, allow_blank=False, min_length=3, max_length=100
    )
    description = serializers.CharField(
        required=False, allow_blank=True, max_length=500, default=""
    )

    class Meta:
        model = Category
        fields = ["id", "name", "description", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_name(self, value: str):
        v = (value or "").strip()
        if len(v) < 3:
            raise serializers.ValidationError("name must be at least 3 characters")

        qs = Category.objects.filter(name=v)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("Category name already exists")
        return v


class CategorySummarySerializer(serializers.ModelSerializer):
    """Nested read shape used inside product payloads."""

    class Meta:
        model = Category
        fields = ["id", "name"]
        read_only_fields = fields
