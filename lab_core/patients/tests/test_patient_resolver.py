import pytest
from django.db import DatabaseError

from lab_core.patients.models import Patient
from lab_core.patients.services import Demographics, PatientResolver, format_patient_id
from lab_core.sequences.services import SequenceService

pytestmark = pytest.mark.django_db


def _demo(**kw):
    data = {"name": "Ali Raza", "cnic": "3520112223334", "phone": "03001234567", "age": "34", "gender": "Male"}
    data.update(kw)
    return Demographics(**data)


def _break_counter(monkeypatch):
    def boom(key):
        raise DatabaseError("counter unavailable")

    monkeypatch.setattr(SequenceService, "next", staticmethod(boom))


def test_first_intake_creates_patient_with_sequential_id():
    p = PatientResolver.resolve(demographics=_demo())
    assert p.patient_id == "LP01"
    assert p.name == "Ali Raza"
    assert Patient.objects.count() == 1


def test_same_cnic_reuses_patient_and_does_not_mutate_it():
    first = PatientResolver.resolve(demographics=_demo())
    again = PatientResolver.resolve(demographics=_demo(name="Ali R.", phone="03119999999", address="New address"))

    assert again.id == first.id
    again.refresh_from_db()
    assert again.name == "Ali Raza"
    assert again.address == ""
    assert Patient.objects.count() == 1


def test_phone_match_is_accepted_when_cnic_missing():
    first = PatientResolver.resolve(demographics=_demo())
    by_phone = PatientResolver.resolve(demographics=_demo(cnic=""))
    assert by_phone.id == first.id


def test_cnic_takes_priority_over_phone():
    a = PatientResolver.resolve(demographics=_demo(cnic="1111111111111", phone="0300000001"))
    b = PatientResolver.resolve(demographics=_demo(cnic="2222222222222", phone="0300000002"))

    hit = PatientResolver.resolve(demographics=_demo(cnic="2222222222222", phone="0300000001"))
    assert hit.id == b.id
    assert hit.id != a.id


def test_different_cnic_gets_distinct_patient_id():
    a = PatientResolver.resolve(demographics=_demo())
    b = PatientResolver.resolve(demographics=_demo(cnic="4210155556667", phone="03219876543", name="Sana"))

    assert a.patient_id == "LP01"
    assert b.patient_id == "LP02"
    assert Patient.objects.count() == 2


def test_no_identity_keys_always_creates_new_patient():
    a = PatientResolver.resolve(demographics=_demo(cnic="", phone=""))
    b = PatientResolver.resolve(demographics=_demo(cnic="", phone=""))
    assert a.id != b.id


def test_allocator_failure_falls_back_to_configured_id(monkeypatch, settings):
    settings.LAB_PATIENT_ID_FALLBACK = "LP01"
    _break_counter(monkeypatch)

    p = PatientResolver.resolve(demographics=_demo())
    assert p.patient_id == "LP01"


def test_fallback_id_stays_unique_once_taken(monkeypatch, settings):
    settings.LAB_PATIENT_ID_FALLBACK = "LP01"
    first = PatientResolver.resolve(demographics=_demo())
    assert first.patient_id == "LP01"

    _break_counter(monkeypatch)

    second = PatientResolver.resolve(demographics=_demo(cnic="4210155556667", phone="03219876543", name="Sana"))
    third = PatientResolver.resolve(demographics=_demo(cnic="4210177778889", phone="03335555555", name="Bilal"))

    assert second.patient_id.startswith("LP01-")
    assert third.patient_id.startswith("LP01-")
    assert len({first.patient_id, second.patient_id, third.patient_id}) == 3
    assert Patient.objects.count() == 3


def test_allocator_failure_is_hard_when_fallback_disabled(monkeypatch, settings):
    settings.LAB_PATIENT_ID_FALLBACK = ""
    _break_counter(monkeypatch)

    with pytest.raises(DatabaseError):
        PatientResolver.resolve(demographics=_demo())
    assert Patient.objects.count() == 0


def test_format_patient_id_pads_to_two_digits():
    assert format_patient_id(3) == "LP03"
    assert format_patient_id(120) == "LP120"
