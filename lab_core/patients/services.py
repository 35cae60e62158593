# lab_core/patients/services.py
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from django.conf import settings
from django.db import DatabaseError, IntegrityError, transaction

from lab_core.patients.models import Patient
from lab_core.patients.selectors import find_patient_by_identity
from lab_core.sequences.services import PATIENT_ID_KEY, SequenceService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Demographics:
    name: str
    cnic: str = ""
    phone: str = ""
    age: str = ""
    gender: str = ""
    address: str = ""
    guardian_relation: str = ""
    guardian_name: str = ""


def format_patient_id(seq: int) -> str:
    prefix = getattr(settings, "LAB_PATIENT_ID_PREFIX", "LP")
    return f"{prefix}{seq:02d}"


class PatientResolver:
    """
    Find-or-create for the patient behind an intake.
    - existing patients are returned untouched
    - new patients get a sequential patient_id from the "patientId" counter
    """

    @staticmethod
    def _allocate_patient_id() -> str:
        try:
            return format_patient_id(SequenceService.next(PATIENT_ID_KEY))
        except DatabaseError:
            fallback = getattr(settings, "LAB_PATIENT_ID_FALLBACK", "")
            if not fallback:
                raise
            if Patient.objects.filter(patient_id=fallback).exists():
                # fallback already issued; keep it unique with a random suffix
                fallback = f"{fallback}-{uuid.uuid4().hex[:8].upper()}"
            logger.warning(
                "Patient id counter unavailable; falling back to %s",
                fallback,
                exc_info=True,
            )
            return fallback

    @staticmethod
    @transaction.atomic
    def resolve(*, demographics: Demographics) -> Patient:
        existing = find_patient_by_identity(cnic=demographics.cnic, phone=demographics.phone)
        if existing is not None:
            return existing

        patient_id = PatientResolver._allocate_patient_id()

        try:
            with transaction.atomic():
                patient = Patient.objects.create(
                    patient_id=patient_id,
                    name=demographics.name,
                    cnic=demographics.cnic or "",
                    phone=demographics.phone or "",
                    age=demographics.age or "",
                    gender=demographics.gender or "",
                    address=demographics.address or "",
                    guardian_relation=demographics.guardian_relation or "",
                    guardian_name=demographics.guardian_name or "",
                )
        except IntegrityError:
            # Lost a race on the CNIC constraint: the winner is the canonical patient.
            winner = find_patient_by_identity(cnic=demographics.cnic, phone=demographics.phone)
            if winner is None:
                raise
            return winner

        logger.info("Registered patient %s (%s)", patient.patient_id, patient.id)
        return patient
