# sales/views/transaction.py

from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiTypes,
    extend_schema,
    extend_schema_view,
)
from rest_framework import viewsets

from sales.filters import TransactionFilter
from sales.models import Transaction
from sales.serializers import TransactionSerializer


@extend_schema_view(
    list=extend_schema(
        parameters=[
            OpenApiParameter(
                name="start_date",
                type=OpenApiTypes.DATE,
                required=False,
                description="Only transactions on or after this local day (YYYY-MM-DD).",
            ),
            OpenApiParameter(
                name="end_date",
                type=OpenApiTypes.DATE,
                required=False,
                description="Only transactions on or before this local day (YYYY-MM-DD).",
            ),
        ],
    ),
)
class TransactionViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Transaction history (read-only, newest first).

    Transactions are created only by the checkout endpoint and are never
    updated or deleted.
    """

    serializer_class = TransactionSerializer
    filterset_class = TransactionFilter

    def get_queryset(self):
        return Transaction.objects.prefetch_related("details").order_by("-created_at", "-id")
