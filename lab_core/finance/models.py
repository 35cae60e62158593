# lab_core/finance/models.py
from __future__ import annotations

from django.db import models
from django.db.models import Q
from django.utils import timezone

from lab_core.common.models import UUIDModel


class FinanceCategory(models.TextChoices):
    CONSUMABLES_PROFIT = "Consumables Profit", "Consumables Profit"
    TEST_REVENUE = "Test Revenue", "Test Revenue"


class FinanceType(models.TextChoices):
    INCOME = "Income", "Income"
    EXPENSE = "Expense", "Expense"


class Department(models.TextChoices):
    IPD = "IPD", "IPD"
    OPD = "OPD", "OPD"
    PHARMACY = "Pharmacy", "Pharmacy"
    LAB = "Lab", "Lab"


class FinanceRecord(UUIDModel):
    """
    Append-only ledger entry. Rows are written once and never edited or
    deleted; corrections are new entries.
    """
    date = models.DateTimeField(default=timezone.now, db_index=True)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    category = models.CharField(max_length=64, choices=FinanceCategory.choices, db_index=True)
    type = models.CharField(max_length=16, choices=FinanceType.choices, default=FinanceType.INCOME)
    department = models.CharField(max_length=16, choices=Department.choices, default=Department.LAB)

    description = models.TextField()
    reference = models.CharField(max_length=64, blank=True, db_index=True)  # sample number
    patient_code = models.CharField(max_length=32, blank=True)
    recorded_by = models.CharField(max_length=255, blank=True)

    class Meta:
        db_table = "finance_record"
        ordering = ["-date"]
        constraints = [
            models.CheckConstraint(condition=Q(amount__gt=0), name="ck_finance_amount_positive"),
        ]
        indexes = [
            models.Index(fields=["department", "type", "date"]),
        ]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("Finance records are append-only.")
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError("Finance records are append-only.")

    def __str__(self) -> str:
        return f"{self.category} {self.amount} ({self.reference})"
