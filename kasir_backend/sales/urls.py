# sales/urls.py

"""
SALES URLS

Purpose:
- Register sales routes under /api/
    /api/checkout/
    /api/transactions/
    /api/report/
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from sales.views import CheckoutView, SalesReportView, TransactionViewSet

router = SimpleRouter()
router.register(r"transactions", TransactionViewSet, basename="transactions")

urlpatterns = [
    path("checkout/", CheckoutView.as_view(), name="checkout"),
    path("report/", SalesReportView.as_view(), name="report"),
    path("", include(router.urls)),
]
