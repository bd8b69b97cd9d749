# sales/services/report_service.py

"""
SALES REPORT (READ-ONLY AGGREGATOR)

- total_revenue:   sum of Transaction.total_amount in the window (0 if none)
- total_transaksi: number of transactions in the window
- produk_terlaris: {nama, qty_terjual} of the product name with the highest
                   summed quantity; ties go to the alphabetically first name;
                   None for an empty window

Window: whole local days in settings.TIME_ZONE, inclusive on both ends,
queried as [start 00:00, end+1 00:00).
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from datetime import timezone as dt_timezone

from django.db.models import Count, Sum
from django.utils import timezone

from sales.models import Transaction, TransactionDetail
from sales.services.exceptions import ReportValidationError


def parse_report_date(date_str: str | None, *, field: str) -> date:
    """
    Accepts YYYY-MM-DD.
    Defaults to today (server timezone).
    """
    if date_str is None or not str(date_str).strip():
        return timezone.localdate()

    try:
        return datetime.strptime(str(date_str).strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ReportValidationError(
            f"Invalid {field} format. Use YYYY-MM-DD."
        ) from None


def day_bounds(d: date):
    """
    Returns timezone-aware datetime bounds [start, end) for a local date.

    Raises ReportValidationError when either bound falls outside what a
    datetime can represent (e.g. 9999-12-31, or 0001-01-01 east of UTC).
    """
    tz = timezone.get_current_timezone()
    try:
        start = timezone.make_aware(datetime.combine(d, time.min), tz)
        end = timezone.make_aware(datetime.combine(d + timedelta(days=1), time.min), tz)
        # Stored datetimes are compared in UTC.
        start.astimezone(dt_timezone.utc)
        end.astimezone(dt_timezone.utc)
    except OverflowError:
        raise ReportValidationError(
            f"{d.isoformat()} is outside the supported date range"
        ) from None
    return start, end


def report_window(start_date: date, end_date: date):
    if start_date > end_date:
        raise ReportValidationError("start_date must not be after end_date")

    start, _ = day_bounds(start_date)
    _, end = day_bounds(end_date)
    return start, end


def get_report(*, start_date: date, end_date: date) -> dict:
    start, end = report_window(start_date, end_date)

    totals = Transaction.objects.filter(
        created_at__gte=start,
        created_at__lt=end,
    ).aggregate(
        total_revenue=Sum("total_amount"),
        total_transaksi=Count("id"),
    )

    best = (
        TransactionDetail.objects.filter(
            transaction__created_at__gte=start,
            transaction__created_at__lt=end,
        )
        .values("product_name")
        .annotate(qty_terjual=Sum("quantity"))
        .order_by("-qty_terjual", "product_name")
        .first()
    )

    produk_terlaris = None
    if best is not None:
        produk_terlaris = {
            "nama": best["product_name"],
            "qty_terjual": int(best["qty_terjual"] or 0),
        }

    return {
        "total_revenue": int(totals.get("total_revenue") or 0),
        "total_transaksi": int(totals.get("total_transaksi") or 0),
        "produk_terlaris": produk_terlaris,
        "start_date": start_date.isoformat(),
        "end_date": end_date.isoformat(),
    }
