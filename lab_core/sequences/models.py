# lab_core/sequences/models.py
from django.db import models


class Counter(models.Model):
    """
    Named monotonic integer. `seq` is only ever changed by
    SequenceService.next(), which increments it in a single UPDATE.
    """
    key = models.CharField(max_length=64, primary_key=True)  # e.g. "patientId", "sampleNumber:2026"
    seq = models.PositiveBigIntegerField(default=0)

    class Meta:
        db_table = "sequences_counter"

    def __str__(self) -> str:
        return f"{self.key}={self.seq}"
