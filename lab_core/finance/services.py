# lab_core/finance/services.py
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Sequence

from django.conf import settings
from django.db import DatabaseError, transaction
from django.utils import timezone

from lab_core.finance.derivation import is_paid, paid_total, split_intake_income
from lab_core.finance.models import FinanceCategory, FinanceRecord, FinanceType

logger = logging.getLogger(__name__)


class FinanceLedgerError(Exception):
    """
    Posting a ledger entry failed after the sample was already written.
    Callers log it; it is never shown to the user.
    """


class FinanceLedgerService:
    @staticmethod
    def post_intake_income(
        *,
        sample,
        consumables_profit: Decimal,
        sold_lines: Sequence = (),
        recorded_by: str = "",
    ) -> list[FinanceRecord]:
        """
        Posts the income of one intake:
        - "Consumables Profit" for the carved-out consumable margin
        - "Test Revenue" for the rest of the payment
        Nothing is posted for unpaid samples or non-positive amounts.
        """
        if not is_paid(sample.payment_status):
            return []

        split = split_intake_income(
            paid_total=paid_total(paid_amount=sample.paid_amount, total_amount=sample.total_amount),
            consumables_profit=consumables_profit,
        )

        recorded_by = recorded_by or getattr(settings, "LAB_DEFAULT_RECORDED_BY", "admin")
        department = getattr(settings, "LAB_FINANCE_DEPARTMENT", "Lab")
        now = timezone.now()

        entries: list[tuple[str, Decimal, str]] = []
        if split.consumables_profit > 0:
            sold_text = ", ".join(line.describe() for line in sold_lines)
            entries.append(
                (
                    FinanceCategory.CONSUMABLES_PROFIT,
                    split.consumables_profit,
                    f"Consumables profit for Sample {sample.sample_number} ({sample.patient_name}). {sold_text}".strip(),
                )
            )
        if split.test_revenue > 0:
            entries.append(
                (
                    FinanceCategory.TEST_REVENUE,
                    split.test_revenue,
                    f"Test revenue for Sample {sample.sample_number} ({sample.patient_name})",
                )
            )

        try:
            with transaction.atomic():
                records = [
                    FinanceRecord.objects.create(
                        date=now,
                        amount=amount,
                        category=category,
                        type=FinanceType.INCOME,
                        department=department,
                        description=description,
                        reference=sample.sample_number,
                        patient_code=sample.patient_code,
                        recorded_by=recorded_by,
                    )
                    for category, amount, description in entries
                ]
        except DatabaseError as exc:
            raise FinanceLedgerError(f"Failed to post income for sample {sample.sample_number}") from exc

        for r in records:
            logger.info("Posted %s %s for %s", r.category, r.amount, r.reference)
        return records
