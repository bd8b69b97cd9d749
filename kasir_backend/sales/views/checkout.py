# sales/views/checkout.py

from drf_spectacular.utils import OpenApiResponse, OpenApiTypes, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from sales.models import Transaction
from sales.serializers import CheckoutInputSerializer, TransactionSerializer
from sales.services.checkout_service import checkout
from sales.services.exceptions import (
    AmountOverflowError,
    CheckoutConflictError,
    CheckoutError,
    CheckoutStorageError,
    EmptyCheckoutError,
    InsufficientStockError,
    InvalidItemError,
    ProductNotFoundError,
)


def _error(exc: CheckoutError, http_status: int, **extra) -> Response:
    body = {"detail": str(exc), "code": exc.code}
    body.update(extra)
    return Response(body, status=http_status)


class CheckoutView(APIView):
    """
    POS CHECKOUT ENDPOINT (AUTHORITATIVE)

    GUARANTEES:
    - Atomic checkout (all lines or nothing)
    - Stock never goes negative, even under concurrent checkouts
    - Immutable Transaction & TransactionDetails
    - Conflicts are reported as retryable 409s, never as silent hangs
    """

    throttle_scope = "checkout"

    @extend_schema(
        request=CheckoutInputSerializer,
        responses={
            201: TransactionSerializer,
            400: OpenApiResponse(
                response=OpenApiTypes.OBJECT,
                description="Empty/invalid items, unknown product, insufficient stock or an unstorable total",
            ),
            409: OpenApiResponse(
                response=OpenApiTypes.OBJECT,
                description="Concurrency conflict; safe to retry (see Retry-After)",
            ),
            500: OpenApiResponse(
                response=OpenApiTypes.OBJECT,
                description="Storage failure; nothing was committed",
            ),
        },
        description="Convert a list of items into a persisted transaction and decrement stock.",
    )
    def post(self, request):
        serializer = CheckoutInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            header = checkout(items=serializer.validated_data["items"])

        except (EmptyCheckoutError, InvalidItemError, AmountOverflowError) as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)

        except ProductNotFoundError as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST, product_id=exc.product_id)

        except InsufficientStockError as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST, product_id=exc.product_id)

        except CheckoutConflictError as exc:
            response = _error(exc, status.HTTP_409_CONFLICT, retryable=True)
            response["Retry-After"] = str(exc.retry_after)
            return response

        except CheckoutStorageError as exc:
            return _error(exc, status.HTTP_500_INTERNAL_SERVER_ERROR)

        header = Transaction.objects.prefetch_related("details").get(pk=header.pk)
        return Response(
            TransactionSerializer(header).data,
            status=status.HTTP_201_CREATED,
        )
