# lab_core/finance/selectors.py
from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.db.models import Case, DecimalField, F, Q, Sum, When
from django.db.models.functions import Coalesce
from django.utils import timezone

from lab_core.finance.models import FinanceRecord, FinanceType
from lab_core.samples.constants import PaymentStatus
from lab_core.samples.models import Sample

ZERO = Decimal("0.00")


def _totals_by_type(qs) -> tuple[Decimal, Decimal]:
    money = DecimalField(max_digits=14, decimal_places=2)
    agg = qs.aggregate(
        income=Coalesce(Sum("amount", filter=Q(type=FinanceType.INCOME)), ZERO, output_field=money),
        expense=Coalesce(Sum("amount", filter=Q(type=FinanceType.EXPENSE)), ZERO, output_field=money),
    )
    return agg["income"], agg["expense"]


def _sample_revenue(*, date_from: date | None, date_to: date | None) -> Decimal:
    """
    Paid samples count their paid amount, or the total when nothing was
    recorded as paid. Samples without a status are legacy paid ones.
    """
    qs = Sample.objects.filter(Q(payment_status=PaymentStatus.PAID) | Q(payment_status=""))
    if date_from:
        qs = qs.filter(created_at__date__gte=date_from)
    if date_to:
        qs = qs.filter(created_at__date__lte=date_to)

    money = DecimalField(max_digits=14, decimal_places=2)
    agg = qs.aggregate(
        total=Coalesce(
            Sum(
                Case(
                    When(paid_amount__gt=0, then=F("paid_amount")),
                    default=F("total_amount"),
                    output_field=money,
                )
            ),
            ZERO,
            output_field=money,
        )
    )
    return agg["total"]


def ledger_summary(
    *,
    department: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
) -> dict:
    records = FinanceRecord.objects.all()
    if department:
        records = records.filter(department=department)

    income, expense = _totals_by_type(records)

    month_start = timezone.localdate().replace(day=1)
    m_income, m_expense = _totals_by_type(records.filter(date__date__gte=month_start))

    return {
        "total_income": income,
        "total_expense": expense,
        "net_balance": income - expense,
        "monthly_net": m_income - m_expense,
        "sample_revenue": _sample_revenue(date_from=date_from, date_to=date_to),
    }
