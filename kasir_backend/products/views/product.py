# products/views/product.py

"""
PRODUCT VIEWSET

Purpose:
- Catalogue CRUD for products
- Restock action (the only API path that adds stock after creation)

Key rule alignment:
- Listing/retrieve return a point-in-time stock snapshot. Checkout never
  trusts it and re-reads the locked row instead.
"""

from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
    extend_schema_view,
)
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from products.filters import ProductFilter
from products.models import Product
from products.serializers.product import ProductSerializer, RestockSerializer
from products.services.inventory import InventoryError, restock_product


@extend_schema_view(
    list=extend_schema(
        parameters=[
            OpenApiParameter(
                name="name",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Case-insensitive substring match on product name.",
            ),
            OpenApiParameter(
                name="category",
                type=int,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Only products in this category.",
            ),
        ],
    ),
)
class ProductViewSet(viewsets.ModelViewSet):
    """
    Product endpoints.

    - CRUD (stock is read-only on update)
    - POST /api/products/{id}/restock/
    """

    serializer_class = ProductSerializer
    filterset_class = ProductFilter

    def get_queryset(self):
        return Product.objects.select_related("category").order_by("id")

    @extend_schema(
        request=RestockSerializer,
        responses={
            200: OpenApiResponse(response=ProductSerializer, description="Restocked product"),
            400: OpenApiResponse(description="quantity must be a positive integer within the stock limit"),
            404: OpenApiResponse(description="Product not found"),
        },
        description="Add units to a product's stock (atomic, row-locked).",
    )
    @action(detail=True, methods=["post"], url_path="restock")
    def restock(self, request, pk=None):
        product = self.get_object()

        serializer = RestockSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            product = restock_product(
                product_id=product.pk,
                quantity=serializer.validated_data["quantity"],
            )
        except Product.DoesNotExist:
            return Response(
                {"detail": "Product not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        except InventoryError as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_400_BAD_REQUEST,
            )

        return Response(self.get_serializer(product).data, status=status.HTTP_200_OK)
