# sales/tests/test_checkout_api.py

from datetime import datetime, timedelta
from unittest import mock

from django.test import TestCase, override_settings
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from products.models import Product
from sales.models import Transaction, TransactionDetail
from sales.services.exceptions import CheckoutConflictError, CheckoutStorageError


class CheckoutAPITests(TestCase):
    """
    POST /api/checkout/

    GUARANTEES:
    - 201 returns the persisted transaction with ordered details
    - Business failures are 400 with {detail, code}
    - Concurrency conflicts are 409 + Retry-After, storage failures 500
    - Nothing is committed on any failure
    """

    def setUp(self):
        self.client = APIClient()
        self.url = reverse("checkout")
        self.product = Product.objects.create(name="Kopi", price=10, stock=5)

    def _post(self, items):
        return self.client.post(self.url, {"items": items}, format="json")

    def test_successful_checkout(self):
        response = self._post([{"product_id": self.product.pk, "quantity": 3}])

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["total_amount"], 30)
        self.assertIn("created_at", response.data)

        detail = response.data["details"][0]
        self.assertEqual(detail["transaction_id"], response.data["id"])
        self.assertEqual(detail["product_id"], self.product.pk)
        self.assertEqual(detail["product_name"], "Kopi")
        self.assertEqual(detail["unit_price"], 10)
        self.assertEqual(detail["quantity"], 3)
        self.assertEqual(detail["subtotal"], 30)

        self.product.refresh_from_db()
        self.assertEqual(self.product.stock, 2)

    def test_empty_items(self):
        response = self._post([])

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "empty_items")
        self.assertEqual(Transaction.objects.count(), 0)

    def test_malformed_payloads(self):
        payloads = [
            {},
            {"items": "nope"},
            {"items": [{"product_id": self.product.pk}]},
            {"items": [{"product_id": self.product.pk, "quantity": 0}]},
            {"items": [{"product_id": self.product.pk, "quantity": -2}]},
            {"items": [{"product_id": "abc", "quantity": 1}]},
        ]
        for payload in payloads:
            response = self.client.post(self.url, payload, format="json")
            self.assertEqual(
                response.status_code, status.HTTP_400_BAD_REQUEST, msg=str(payload)
            )

        self.product.refresh_from_db()
        self.assertEqual(self.product.stock, 5)
        self.assertEqual(Transaction.objects.count(), 0)

    def test_unknown_product(self):
        response = self._post([{"product_id": 9999, "quantity": 1}])

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "product_not_found")
        self.assertIn("9999", response.data["detail"])
        self.assertEqual(Transaction.objects.count(), 0)

    def test_insufficient_stock(self):
        response = self._post([{"product_id": self.product.pk, "quantity": 6}])

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "insufficient_stock")
        self.assertEqual(response.data["detail"], "insufficient stock for product: Kopi")

        self.product.refresh_from_db()
        self.assertEqual(self.product.stock, 5)

    def test_unstorable_total_is_400(self):
        big = Product.objects.create(name="Emas Batangan", price=2**62, stock=5)

        response = self._post([{"product_id": big.pk, "quantity": 4}])

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "amount_too_large")
        big.refresh_from_db()
        self.assertEqual(big.stock, 5)
        self.assertEqual(Transaction.objects.count(), 0)

    def test_conflict_is_retryable_409(self):
        with mock.patch(
            "sales.views.checkout.checkout",
            side_effect=CheckoutConflictError(retry_after=2),
        ):
            response = self._post([{"product_id": self.product.pk, "quantity": 1}])

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], "checkout_conflict")
        self.assertTrue(response.data["retryable"])
        self.assertEqual(response["Retry-After"], "2")

    def test_storage_failure_is_500(self):
        with mock.patch(
            "sales.views.checkout.checkout",
            side_effect=CheckoutStorageError(),
        ):
            response = self._post([{"product_id": self.product.pk, "quantity": 1}])

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data["code"], "storage_error")


class TransactionAPITests(TestCase):
    """
    /api/transactions/

    GUARANTEES:
    - list is newest first, with details
    - retrieve returns one transaction, 404 for unknown ids
    - start_date / end_date filter by local day
    - the resource is read-only
    """

    def setUp(self):
        self.client = APIClient()
        self.list_url = reverse("transactions-list")
        tz = timezone.get_current_timezone()

        self.old = Transaction.objects.create(
            total_amount=100,
            created_at=timezone.make_aware(datetime(2024, 1, 10, 9, 0), tz),
        )
        TransactionDetail.objects.create(
            transaction=self.old,
            product_name="Kopi",
            unit_price=50,
            quantity=2,
            subtotal=100,
        )
        self.new = Transaction.objects.create(
            total_amount=40,
            created_at=timezone.make_aware(datetime(2024, 1, 12, 18, 30), tz),
        )

    def test_list_newest_first(self):
        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([t["id"] for t in response.data], [self.new.pk, self.old.pk])
        self.assertEqual(len(response.data[1]["details"]), 1)

    def test_retrieve(self):
        response = self.client.get(reverse("transactions-detail", args=[self.old.pk]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["total_amount"], 100)
        self.assertEqual(response.data["details"][0]["product_name"], "Kopi")

        response = self.client.get(reverse("transactions-detail", args=[9999]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_date_filters(self):
        response = self.client.get(
            self.list_url, {"start_date": "2024-01-11", "end_date": "2024-01-12"}
        )
        self.assertEqual([t["id"] for t in response.data], [self.new.pk])

        response = self.client.get(self.list_url, {"end_date": "2024-01-10"})
        self.assertEqual([t["id"] for t in response.data], [self.old.pk])

        response = self.client.get(self.list_url, {"start_date": "not-a-date"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    @override_settings(TIME_ZONE="Asia/Jakarta")
    def test_out_of_range_date_filters_are_400(self):
        for params in ({"end_date": "9999-12-31"}, {"start_date": "0001-01-01"}):
            response = self.client.get(self.list_url, params)
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, msg=str(params))

    def test_read_only(self):
        response = self.client.post(self.list_url, {"total_amount": 1}, format="json")
        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)

        url = reverse("transactions-detail", args=[self.old.pk])
        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)
        self.assertTrue(Transaction.objects.filter(pk=self.old.pk).exists())

    def test_recent_checkout_is_listed(self):
        product = Product.objects.create(name="Teh", price=5, stock=3)
        self.client.post(
            reverse("checkout"),
            {"items": [{"product_id": product.pk, "quantity": 1}]},
            format="json",
        )

        today = timezone.localdate()
        response = self.client.get(
            self.list_url,
            {
                "start_date": (today - timedelta(days=1)).isoformat(),
                "end_date": today.isoformat(),
            },
        )
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["total_amount"], 5)
