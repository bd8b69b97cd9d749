# backend/tests/test_health.py

from unittest import mock

from django.db import OperationalError
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from products.models import Category, Product


class OperationalEndpointTests(TestCase):
    """
    GUARANTEES:
    - /api/ lists the public endpoints
    - /api/health/ answers without touching the database
    - /api/health/db/ reports catalogue counts, 503 when the DB is down
    - the OpenAPI schema renders
    """

    def setUp(self):
        self.client = APIClient()

    def test_api_root(self):
        response = self.client.get(reverse("api-root"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["endpoints"]["checkout"], "/api/checkout/")

    def test_health(self):
        with self.assertNumQueries(0):
            response = self.client.get(reverse("health-check"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "ok")
        self.assertIn("timestamp", response.data)

    def test_health_db(self):
        category = Category.objects.create(name="Minuman")
        Product.objects.create(name="Kopi", price=10, stock=1, category=category)

        response = self.client.get(reverse("health-check-db"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["db"], "ok")
        self.assertEqual(response.data["categories"], 1)
        self.assertEqual(response.data["products"], 1)

    def test_health_db_down(self):
        with mock.patch(
            "backend.urls.Category.objects.count",
            side_effect=OperationalError("connection refused"),
        ):
            response = self.client.get(reverse("health-check-db"))

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(response.data["db"], "down")

    def test_schema_renders(self):
        response = self.client.get(reverse("schema"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
