# products/views/category.py

from rest_framework import viewsets
from rest_framework.response import Response

from products.models import Category
from products.serializers.category import CategorySerializer
from products.services.category_cache import get_category_list, invalidate_categories


class CategoryViewSet(viewsets.ModelViewSet):
    """
    Category API

    - list is served from the category cache (invalidated on every write)
    - deleting a category un-assigns its products (FK SET_NULL)
    """

    queryset = Category.objects.all().order_by("name")
    serializer_class = CategorySerializer

    def list(self, request, *args, **kwargs):
        data = get_category_list(
            lambda: list(self.get_serializer(self.get_queryset(), many=True).data)
        )
        return Response(data)

    def perform_create(self, serializer):
        instance = serializer.save()
        invalidate_categories(instance.pk)

    def perform_update(self, serializer):
        instance = serializer.save()
        invalidate_categories(instance.pk)

    def perform_destroy(self, instance):
        category_id = instance.pk
        instance.delete()
        invalidate_categories(category_id)
