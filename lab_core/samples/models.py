# lab_core/samples/models.py
from decimal import Decimal

from django.db import models

from lab_core.catalog.models import LabTest
from lab_core.common.models import UUIDModel
from lab_core.patients.models import Patient
from lab_core.samples.constants import PaymentStatus, SamplePriority, SampleStatus


class Sample(UUIDModel):
    """
    One intake event.

    Patient fields are a snapshot taken at intake, so later edits to the
    Patient never rewrite historical samples.
    """
    sample_number = models.CharField(max_length=32)  # LAB-<year>-<seq>
    barcode = models.CharField(max_length=64, blank=True)

    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name="samples")
    patient_code = models.CharField(max_length=32, blank=True)
    patient_name = models.CharField(max_length=255)
    phone = models.CharField(max_length=32)
    cnic = models.CharField(max_length=32, blank=True)
    age = models.CharField(max_length=16, blank=True)
    gender = models.CharField(max_length=32, blank=True)
    address = models.CharField(max_length=512, blank=True)
    guardian_relation = models.CharField(max_length=32, blank=True)
    guardian_name = models.CharField(max_length=255, blank=True)
    referring_doctor = models.CharField(max_length=255, blank=True)

    sample_collected_by = models.CharField(max_length=255, blank=True)
    collected_samples = models.JSONField(default=list, blank=True)

    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    paid_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    payment_method = models.CharField(max_length=64, blank=True)
    payment_status = models.CharField(max_length=16, choices=PaymentStatus.choices, default=PaymentStatus.PAID)

    priority = models.CharField(max_length=16, choices=SamplePriority.choices, default=SamplePriority.NORMAL)
    status = models.CharField(max_length=16, choices=SampleStatus.choices, default=SampleStatus.COLLECTED, db_index=True)

    # Filled in by the processing/results workflow
    processing_by = models.CharField(max_length=255, blank=True)
    expected_completion_at = models.DateTimeField(null=True, blank=True)
    results = models.JSONField(default=list, blank=True)
    interpretation = models.TextField(blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "samples_sample"
        constraints = [
            models.UniqueConstraint(fields=["sample_number"], name="uq_sample_number"),
        ]
        indexes = [
            models.Index(fields=["patient", "created_at"]),
            models.Index(fields=["status", "created_at"]),
        ]

    def __str__(self) -> str:
        return self.sample_number


class SampleTestLine(UUIDModel):
    """
    Ordered test with name and price snapshotted from the catalog.
    """
    sample = models.ForeignKey(Sample, on_delete=models.CASCADE, related_name="test_lines")
    test = models.ForeignKey(LabTest, on_delete=models.SET_NULL, null=True, blank=True, related_name="+")
    name = models.CharField(max_length=255)
    price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    position = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "samples_test_line"
        ordering = ["position"]


class SampleConsumableLine(UUIDModel):
    sample = models.ForeignKey(Sample, on_delete=models.CASCADE, related_name="consumable_lines")
    item_ref = models.CharField(max_length=64)
    quantity = models.PositiveIntegerField(default=1)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "samples_consumable_line"
        ordering = ["position"]
