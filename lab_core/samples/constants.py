# lab_core/samples/constants.py
from __future__ import annotations

from django.db import models


class SampleStatus(models.TextChoices):
    COLLECTED = "collected", "Collected"
    PROCESSING = "processing", "Processing"
    COMPLETED = "completed", "Completed"
    CANCELLED = "cancelled", "Cancelled"


class PaymentStatus(models.TextChoices):
    PAID = "Paid", "Paid"
    NOT_PAID = "Not paid", "Not paid"
    PENDING = "Pending", "Pending"


class SamplePriority(models.TextChoices):
    NORMAL = "normal", "Normal"
    URGENT = "urgent", "Urgent"


# Payment method (lowercased) -> status it implies.
# Methods not listed are unknown and imply nothing.
PAYMENT_METHOD_STATUS: dict[str, str] = {
    "cash": PaymentStatus.PAID,
    "card": PaymentStatus.PAID,
    "easypaisa": PaymentStatus.PAID,
    "jazzcash": PaymentStatus.PAID,
    "bank account": PaymentStatus.PAID,
    "bank transfer": PaymentStatus.PAID,
    "pay on home sampling": PaymentStatus.NOT_PAID,
    "credit": PaymentStatus.NOT_PAID,
}


def derive_payment_status(method: str | None) -> str | None:
    """
    Paid / Not paid for a recognized method, None when the method is unknown.
    """
    return PAYMENT_METHOD_STATUS.get((method or "").strip().lower())


def resolve_payment_status(*, explicit: str | None, method: str | None) -> str:
    """
    Explicit status wins, then the status implied by the method.
    Unknown methods keep the historical default of Paid.
    """
    if explicit:
        return explicit
    return derive_payment_status(method) or PaymentStatus.PAID


_STATUS_STEMS = (
    ("collect", SampleStatus.COLLECTED),
    ("process", SampleStatus.PROCESSING),
    ("complet", SampleStatus.COMPLETED),
    ("cancel", SampleStatus.CANCELLED),
)


def normalize_status(raw: str | None) -> str:
    """Free-text status ("In Process", "Completed!") -> SampleStatus; defaults to collected."""
    value = (raw or "").lower()
    for stem, status in _STATUS_STEMS:
        if stem in value:
            return status
    return SampleStatus.COLLECTED
