# lab_core/finance/derivation.py
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


@dataclass(frozen=True)
class IncomeSplit:
    consumables_profit: Decimal
    test_revenue: Decimal

    @property
    def total(self) -> Decimal:
        return self.consumables_profit + self.test_revenue


def is_paid(payment_status: str | None) -> bool:
    """Blank status is a legacy record and counts as paid."""
    status = (payment_status or "").strip()
    return not status or status == "Paid"


def paid_total(*, paid_amount, total_amount) -> Decimal:
    paid = Decimal(str(paid_amount or 0))
    if paid > 0:
        return paid
    return Decimal(str(total_amount or 0))


def split_intake_income(*, paid_total: Decimal, consumables_profit: Decimal) -> IncomeSplit:
    """
    Consumables profit is carved out of the payment first; test revenue takes
    the remainder. The split never sums to more than what was paid.
    """
    paid = max(Decimal(str(paid_total)), ZERO).quantize(CENT)
    profit = max(Decimal(str(consumables_profit)), ZERO).quantize(CENT)
    profit = min(profit, paid)
    return IncomeSplit(
        consumables_profit=profit,
        test_revenue=max(paid - profit, ZERO),
    )
