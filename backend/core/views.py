"""
Core app views: **Thin Views**.

Each view delegates all business logic to the corresponding service in
``core.services``.  Views are responsible only for:

1. Validating query parameters.
2. Calling the service with the active store.
3. Serialising the result and returning an HTTP ``Response``.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
)

from .domain.access import HasRole
from .serializers import (
    CaseReportSerializer,
    DashboardStatsSerializer,
    ReportQuerySerializer,
)
from .services import CaseReportService, DashboardAggregationService
from .storage import get_store


class DashboardStatsView(APIView):
    """
    **GET /api/dashboard**

    Return the office-wide dashboard snapshot: case counts by status,
    the five newest cases (expanded with services and notes) and the
    five latest staff notes.

    **Authentication**: Required (``IsAuthenticated``).

    **Response** (``200 OK``):
        Serialised by ``DashboardStatsSerializer``.

    **Error Responses**:
        - ``401 Unauthorized``: Missing bearer token.
        - ``403 Forbidden``: Invalid or expired bearer token.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Dashboard statistics",
        responses={200: OpenApiResponse(response=DashboardStatsSerializer, description="Dashboard stats.")},
        tags=["Dashboard"],
    )
    def get(self, request: Request) -> Response:
        service = DashboardAggregationService(get_store())
        serializer = DashboardStatsSerializer(service.get_stats())
        return Response(serializer.data, status=status.HTTP_200_OK)


class ReportView(APIView):
    """
    **GET /api/reports?type=<t>&timeframe=<tf>&barangay=<b>**

    Administrator case report: filtered case list, status counts, and a
    distribution over incident type, status, or barangay.

    **Authentication**: Required, role ``administrator``.

    **Error Responses**:
        - ``400 Bad Request``: Unknown ``type`` or ``timeframe``.
        - ``403 Forbidden``: Caller is not an administrator.
    """

    permission_classes = [IsAuthenticated, HasRole.of("administrator")]

    @extend_schema(
        summary="Case report (administrators)",
        parameters=[
            OpenApiParameter(
                name="type",
                type=str,
                enum=["incident", "status", "barangay"],
                required=False,
                description="Distribution dimension (default: incident).",
            ),
            OpenApiParameter(
                name="timeframe",
                type=str,
                enum=["all", "month", "quarter", "year"],
                required=False,
                description="Keep cases created within the last 1 / 3 / 12 months.",
            ),
            OpenApiParameter(
                name="barangay",
                type=str,
                required=False,
                description="Exact barangay to keep, or 'all'.",
            ),
        ],
        responses={
            200: OpenApiResponse(response=CaseReportSerializer, description="Report."),
            400: OpenApiResponse(description="Invalid query parameter."),
            403: OpenApiResponse(description="Administrator role required."),
        },
        tags=["Reports"],
    )
    def get(self, request: Request) -> Response:
        query = ReportQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        service = CaseReportService(get_store())
        report = service.build_report(
            report_type=params["type"],
            timeframe=params["timeframe"],
            barangay=params["barangay"],
        )
        return Response(CaseReportSerializer(report).data, status=status.HTTP_200_OK)
