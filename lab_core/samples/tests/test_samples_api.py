import pytest

from lab_core.finance.models import FinanceRecord
from lab_core.samples.models import Sample

pytestmark = pytest.mark.django_db


def _payload(**overrides):
    data = {
        "patient_name": "Ali Raza",
        "phone": "03001234567",
        "cnic": "3520112223334",
        "age": "34",
        "gender": "Male",
        "referring_doctor": "Dr. Imran",
        "collected_sample": "Blood, Urine",
        "total_amount": "500.00",
        "payment_method": "Cash",
    }
    data.update(overrides)
    return data


def test_create_list_retrieve_by_number(api_client, syringe, cbc_test):
    resp = api_client.post(
        "/api/v1/samples/",
        _payload(tests=[str(cbc_test.id)], consumables=[{"item": str(syringe.id), "quantity": 4}]),
        format="json",
    )
    assert resp.status_code == 201, resp.data
    number = resp.data["sample_number"]
    assert resp.data["patient_code"] == "LP01"
    assert resp.data["payment_status"] == "Paid"
    assert resp.data["collected_samples"] == ["Blood", "Urine"]
    assert resp.data["tests"][0]["name"] == "Complete Blood Count"
    assert resp.data["tests"][0]["price"] == "400.00"
    assert resp.data["consumables"] == [{"item": str(syringe.id), "quantity": 4}]

    syringe.refresh_from_db()
    assert syringe.current_stock == 6

    # ledger entries carry the authenticated user's name
    assert set(FinanceRecord.objects.values_list("recorded_by", flat=True)) == {"Ayesha Khan"}

    resp = api_client.get("/api/v1/samples/")
    assert resp.status_code == 200
    assert resp.data["count"] == 1

    resp = api_client.get(f"/api/v1/samples/{number}/")
    assert resp.status_code == 200
    assert resp.data["sample_number"] == number


def test_insufficient_stock_returns_error_envelope(api_client, syringe):
    resp = api_client.post(
        "/api/v1/samples/",
        _payload(consumables=[{"item": str(syringe.id), "quantity": 50}]),
        format="json",
    )

    assert resp.status_code == 400
    err = resp.data["error"]
    assert err["code"] == "insufficient_stock"
    assert err["message"] == "Insufficient stock for Syringe 5ml: requested 50, available 10."
    assert err["details"]["item_id"] == str(syringe.id)
    assert err["request_id"]

    assert Sample.objects.count() == 0
    assert FinanceRecord.objects.count() == 0


def test_malformed_consumable_returns_invalid_consumable(api_client):
    resp = api_client.post(
        "/api/v1/samples/",
        _payload(consumables=[{"item": "bogus", "quantity": 1}]),
        format="json",
    )

    assert resp.status_code == 400
    assert resp.data["error"]["code"] == "invalid_consumable"
    assert resp.data["error"]["details"]["items"] == ["bogus"]


def test_missing_patient_name_is_a_validation_error(api_client):
    payload = _payload()
    payload.pop("patient_name")

    resp = api_client.post("/api/v1/samples/", payload, format="json")

    assert resp.status_code == 400
    assert resp.data["error"]["code"] == "validation_error"
    assert "patient_name" in resp.data["error"]["details"]


def test_zero_quantity_is_rejected(api_client, syringe):
    resp = api_client.post(
        "/api/v1/samples/",
        _payload(consumables=[{"item": str(syringe.id), "quantity": 0}]),
        format="json",
    )
    assert resp.status_code == 400
    assert resp.data["error"]["code"] == "validation_error"


def test_idempotency_key_replays_first_intake(api_client, syringe):
    payload = _payload(consumables=[{"item": str(syringe.id), "quantity": 2}])

    r1 = api_client.post("/api/v1/samples/", payload, format="json", HTTP_IDEMPOTENCY_KEY="intake-1")
    r2 = api_client.post("/api/v1/samples/", payload, format="json", HTTP_IDEMPOTENCY_KEY="intake-1")

    assert r1.status_code == 201
    assert r2.status_code == 201
    assert r1.data["id"] == r2.data["id"]

    assert Sample.objects.count() == 1
    syringe.refresh_from_db()
    assert syringe.current_stock == 8


def test_patch_status_and_results(api_client):
    resp = api_client.post("/api/v1/samples/", _payload(), format="json")
    sample_id = resp.data["id"]

    resp = api_client.patch(
        f"/api/v1/samples/{sample_id}/",
        {"status": "In Process", "processing_by": "Tech 1"},
        format="json",
    )
    assert resp.status_code == 200
    assert resp.data["status"] == "processing"
    assert resp.data["completed_at"] is None

    resp = api_client.patch(
        f"/api/v1/samples/{sample_id}/",
        {"status": "Completed", "results": [{"name": "HB", "value": "13.2"}], "interpretation": "Normal"},
        format="json",
    )
    assert resp.status_code == 200
    assert resp.data["status"] == "completed"
    assert resp.data["completed_at"] is not None
    assert resp.data["results"] == [{"name": "HB", "value": "13.2"}]


def test_delete_sample(api_client):
    resp = api_client.post("/api/v1/samples/", _payload(), format="json")
    number = resp.data["sample_number"]

    resp = api_client.delete(f"/api/v1/samples/{number}/")
    assert resp.status_code == 204

    resp = api_client.get(f"/api/v1/samples/{number}/")
    assert resp.status_code == 404
    assert resp.data["error"]["code"] == "not_found"


def test_unauthenticated_requests_are_rejected():
    from rest_framework.test import APIClient

    resp = APIClient().get("/api/v1/samples/")
    assert resp.status_code == 401
    assert resp.data["error"]["code"] == "not_authenticated"


def test_idempotency_replay_from_durable_store(api_client, settings):
    from lab_core.common.models import IdempotencyRecord

    settings.COMMON_IDEMPOTENCY_USE_DB = True

    r1 = api_client.post("/api/v1/samples/", _payload(), format="json", HTTP_IDEMPOTENCY_KEY="intake-db")
    r2 = api_client.post("/api/v1/samples/", _payload(), format="json", HTTP_IDEMPOTENCY_KEY="intake-db")

    assert r1.status_code == r2.status_code == 201
    assert r2.data["sample_number"] == r1.data["sample_number"]
    assert IdempotencyRecord.objects.get(idempotency_key="intake-db").status_code == 201
    assert Sample.objects.count() == 1
