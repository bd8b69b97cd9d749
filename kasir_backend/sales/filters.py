# sales/filters.py

"""
TRANSACTION FILTERS (django-filter)

- ?start_date=YYYY-MM-DD   transactions from that local day (inclusive)
- ?end_date=YYYY-MM-DD     transactions up to that local day (inclusive)
"""

import django_filters
from rest_framework.exceptions import ValidationError

from sales.models import Transaction
from sales.services.exceptions import ReportValidationError
from sales.services.report_service import day_bounds


def _bounds_or_400(name, value):
    try:
        return day_bounds(value)
    except ReportValidationError as exc:
        raise ValidationError({name: [str(exc)]}) from None


class TransactionFilter(django_filters.FilterSet):
    start_date = django_filters.DateFilter(method="filter_start_date")
    end_date = django_filters.DateFilter(method="filter_end_date")

    class Meta:
        model = Transaction
        fields = ["start_date", "end_date"]

    def filter_start_date(self, queryset, name, value):
        start, _ = _bounds_or_400(name, value)
        return queryset.filter(created_at__gte=start)

    def filter_end_date(self, queryset, name, value):
        _, end = _bounds_or_400(name, value)
        return queryset.filter(created_at__lt=end)
