# lab_core/finance/api/filters.py
import django_filters as df

from lab_core.finance.models import FinanceRecord


class FinanceRecordFilter(df.FilterSet):
    # Calendar-day bounds; date_to includes the whole day
    date_from = df.DateFilter(field_name="date", lookup_expr="date__gte")
    date_to = df.DateFilter(field_name="date", lookup_expr="date__lte")

    class Meta:
        model = FinanceRecord
        fields = ["category", "reference", "department", "type"]
