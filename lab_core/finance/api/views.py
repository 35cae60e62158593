# lab_core/finance/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from lab_core.finance.api.filters import FinanceRecordFilter
from lab_core.finance.api.serializers import (
    FinanceRecordSerializer,
    FinanceSummaryQuerySerializer,
    FinanceSummarySerializer,
)
from lab_core.finance.models import FinanceRecord
from lab_core.finance.selectors import ledger_summary


class FinanceRecordViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Ledger is append-only; entries are posted by sample intake.
    Filters: ?category=&reference=&department=&type=&date_from=&date_to=
    """

    serializer_class = FinanceRecordSerializer
    queryset = FinanceRecord.objects.all().order_by("-date", "-created_at")
    filterset_class = FinanceRecordFilter
    search_fields = ["description", "reference"]
    ordering_fields = ["date", "amount"]

    @extend_schema(
        parameters=[FinanceSummaryQuerySerializer],
        responses={200: FinanceSummarySerializer},
        tags=["Finance"],
        operation_id="v1_finance_records_summary",
    )
    @action(detail=False, methods=["get"], url_path="summary")
    def summary(self, request):
        q = FinanceSummaryQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)

        data = ledger_summary(**q.validated_data)
        return Response(FinanceSummarySerializer(data).data, status=status.HTTP_200_OK)
