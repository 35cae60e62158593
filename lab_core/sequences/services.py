# lab_core/sequences/services.py
from __future__ import annotations

from django.conf import settings
from django.db import transaction
from django.db.models import F
from django.utils import timezone

from lab_core.sequences.models import Counter

PATIENT_ID_KEY = "patientId"


def sample_number_key(year: int) -> str:
    return f"sampleNumber:{year}"


def format_sample_number(year: int, seq: int) -> str:
    prefix = getattr(settings, "LAB_SAMPLE_NUMBER_PREFIX", "LAB")
    return f"{prefix}-{year}-{seq:03d}"


class SequenceService:
    """
    Atomic increment-and-fetch per key.

    The UPDATE takes the row lock, so concurrent callers on the same key
    queue behind each other and each reads back its own increment.
    """

    @staticmethod
    @transaction.atomic
    def next(key: str) -> int:
        Counter.objects.get_or_create(key=key)
        Counter.objects.filter(key=key).update(seq=F("seq") + 1)
        return Counter.objects.values_list("seq", flat=True).get(key=key)

    @staticmethod
    def current(key: str) -> int:
        return Counter.objects.filter(key=key).values_list("seq", flat=True).first() or 0

    @staticmethod
    def allocate_sample_number(*, year: int | None = None) -> str:
        year = year or timezone.localdate().year
        seq = SequenceService.next(sample_number_key(year))
        return format_sample_number(year, seq)
