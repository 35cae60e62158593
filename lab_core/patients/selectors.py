# lab_core/patients/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import Q, QuerySet

from lab_core.patients.models import Patient


def get_patient(*, patient_id: UUID) -> Patient:
    return Patient.objects.get(id=patient_id)


def find_patient_by_identity(*, cnic: str = "", phone: str = "") -> Patient | None:
    """
    CNIC match is tried first, then phone. First hit wins.
    """
    cnic = (cnic or "").strip()
    phone = (phone or "").strip()

    if cnic:
        p = Patient.objects.filter(cnic=cnic).order_by("created_at").first()
        if p is not None:
            return p
    if phone:
        return Patient.objects.filter(phone=phone).order_by("created_at").first()
    return None


def search_patients(*, q: str | None = None) -> QuerySet[Patient]:
    qs = Patient.objects.all()

    qv = (q or "").strip()
    if qv:
        qs = qs.filter(
            Q(name__icontains=qv)
            | Q(patient_id__iexact=qv)
            | Q(cnic__icontains=qv)
            | Q(phone__icontains=qv)
        )

    return qs.order_by("-created_at")
