# lab_core/catalog/models.py
from decimal import Decimal

from django.db import models
from lab_core.common.models import UUIDModel


class SampleType(models.TextChoices):
    BLOOD = "blood", "Blood"
    URINE = "urine", "Urine"
    OTHER = "other", "Other"


class LabTest(UUIDModel):
    """
    Orderable test. Name and price are snapshotted onto samples at intake,
    so edits here never rewrite historical samples.
    """
    name = models.CharField(max_length=255)
    category = models.CharField(max_length=128, blank=True)
    description = models.TextField(blank=True)
    price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    sample_type = models.CharField(max_length=16, choices=SampleType.choices, default=SampleType.BLOOD)
    fasting_required = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "catalog_lab_test"
        indexes = [models.Index(fields=["name"])]

    def __str__(self) -> str:
        return self.name
