# sales/views/reports.py

"""
PATH: sales/views/reports.py

SALES REPORT

GET /api/report/?start_date=YYYY-MM-DD&end_date=YYYY-MM-DD

- Both dates are optional and default to today (server timezone).
- Day boundaries follow TIME_ZONE.
- An empty window is a valid report (zeros + null best seller).
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, OpenApiTypes, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from sales.serializers import ReportSerializer
from sales.services.exceptions import ReportValidationError
from sales.services.report_service import get_report, parse_report_date


class SalesReportView(APIView):
    """
    Revenue, transaction count and best-selling product for a date range.
    """

    @extend_schema(
        parameters=[
            OpenApiParameter(
                name="start_date",
                type=OpenApiTypes.DATE,
                required=False,
                description="First day (YYYY-MM-DD, inclusive). Defaults to today.",
            ),
            OpenApiParameter(
                name="end_date",
                type=OpenApiTypes.DATE,
                required=False,
                description="Last day (YYYY-MM-DD, inclusive). Defaults to today.",
            ),
        ],
        responses={
            200: ReportSerializer,
            400: OpenApiResponse(description="Malformed date or start_date after end_date"),
        },
        description="Sales report over whole local days.",
    )
    def get(self, request):
        try:
            start_date = parse_report_date(
                request.query_params.get("start_date"), field="start_date"
            )
            end_date = parse_report_date(
                request.query_params.get("end_date"), field="end_date"
            )
            report = get_report(start_date=start_date, end_date=end_date)
        except ReportValidationError as exc:
            return Response(
                {"detail": str(exc), "code": exc.code},
                status=status.HTTP_400_BAD_REQUEST,
            )

        return Response(report)
