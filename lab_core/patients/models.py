# lab_core/patients/models.py
from django.db import models
from django.db.models import Q
from lab_core.common.models import UUIDModel


class Patient(UUIDModel):
    """
    Deduplicated patient identity.
    Looked up by CNIC or phone at intake; created once per unseen key.
    """
    patient_id = models.CharField(max_length=32)  # human-facing, e.g. "LP01"
    name = models.CharField(max_length=255)
    cnic = models.CharField(max_length=32, blank=True)
    phone = models.CharField(max_length=32, blank=True)
    age = models.CharField(max_length=16, blank=True)
    gender = models.CharField(max_length=32, blank=True)
    address = models.CharField(max_length=512, blank=True)
    guardian_relation = models.CharField(max_length=32, blank=True)
    guardian_name = models.CharField(max_length=255, blank=True)

    class Meta:
        db_table = "patients_patient"
        constraints = [
            models.UniqueConstraint(fields=["patient_id"], name="uq_patient_patient_id"),
            models.UniqueConstraint(
                fields=["cnic"],
                condition=~Q(cnic=""),
                name="uq_patient_cnic_when_set",
            ),
        ]
        indexes = [
            models.Index(fields=["phone"]),
            models.Index(fields=["name"]),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.patient_id})"
