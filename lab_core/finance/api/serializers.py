# lab_core/finance/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from lab_core.finance.models import Department, FinanceRecord


class FinanceRecordSerializer(serializers.ModelSerializer):
    class Meta:
        model = FinanceRecord
        fields = [
            "id",
            "date",
            "amount",
            "category",
            "type",
            "department",
            "description",
            "reference",
            "patient_code",
            "recorded_by",
        ]
        read_only_fields = fields


class FinanceSummaryQuerySerializer(serializers.Serializer):
    department = serializers.ChoiceField(choices=Department.choices, required=False)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)


class FinanceSummarySerializer(serializers.Serializer):
    total_income = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_expense = serializers.DecimalField(max_digits=14, decimal_places=2)
    net_balance = serializers.DecimalField(max_digits=14, decimal_places=2)
    monthly_net = serializers.DecimalField(max_digits=14, decimal_places=2)
    sample_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
