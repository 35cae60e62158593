from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from lab_core.finance.models import FinanceCategory, FinanceRecord, FinanceType
from lab_core.samples.services import SampleIntakeService

pytestmark = pytest.mark.django_db


def _record(*, amount, type=FinanceType.INCOME, department="Lab", days_ago=0, reference=""):
    return FinanceRecord.objects.create(
        date=timezone.now() - timedelta(days=days_ago),
        amount=Decimal(amount),
        category=FinanceCategory.TEST_REVENUE,
        type=type,
        department=department,
        description="manual entry",
        reference=reference,
    )


def test_records_filter_by_reference_and_category(api_client, syringe, make_order):
    first = SampleIntakeService.create_sample(
        order=make_order(consumables=[(syringe.id, 4)], total_amount=Decimal("500.00"))
    )
    SampleIntakeService.create_sample(
        order=make_order(cnic="", phone="03110000000", name="Sara Malik", total_amount=Decimal("200.00"))
    )

    resp = api_client.get("/api/v1/finance/records/")
    assert resp.status_code == 200
    assert resp.data["count"] == 3

    resp = api_client.get(f"/api/v1/finance/records/?reference={first.sample.sample_number}")
    assert resp.status_code == 200
    assert sorted(r["amount"] for r in resp.data["results"]) == ["12.00", "488.00"]

    resp = api_client.get("/api/v1/finance/records/", {"category": "Consumables Profit"})
    assert resp.status_code == 200
    assert [r["reference"] for r in resp.data["results"]] == [first.sample.sample_number]


def test_records_filter_by_date_range_includes_whole_end_day(api_client):
    _record(amount="10.00", days_ago=10, reference="old")
    _record(amount="20.00", days_ago=3, reference="mid")
    _record(amount="30.00", days_ago=0, reference="today")

    today = timezone.localdate()
    resp = api_client.get(
        "/api/v1/finance/records/",
        {"date_from": str(today - timedelta(days=5)), "date_to": str(today)},
    )
    assert resp.status_code == 200
    assert sorted(r["reference"] for r in resp.data["results"]) == ["mid", "today"]

    resp = api_client.get("/api/v1/finance/records/", {"date_to": str(today - timedelta(days=3))})
    assert sorted(r["reference"] for r in resp.data["results"]) == ["mid", "old"]


def test_summary_totals_and_department_filter(api_client):
    _record(amount="500.00")
    _record(amount="120.00", type=FinanceType.EXPENSE)
    _record(amount="1000.00", department="Pharmacy")

    resp = api_client.get("/api/v1/finance/records/summary/")
    assert resp.status_code == 200
    assert resp.data["total_income"] == "1500.00"
    assert resp.data["total_expense"] == "120.00"
    assert resp.data["net_balance"] == "1380.00"
    assert resp.data["monthly_net"] == "1380.00"

    resp = api_client.get("/api/v1/finance/records/summary/", {"department": "Lab"})
    assert resp.data["total_income"] == "500.00"
    assert resp.data["net_balance"] == "380.00"


def test_summary_reports_paid_sample_revenue(api_client, make_order):
    SampleIntakeService.create_sample(order=make_order(total_amount=Decimal("500.00"), paid_amount=Decimal("300.00")))
    SampleIntakeService.create_sample(
        order=make_order(cnic="", phone="03110000000", name="Sara Malik", total_amount=Decimal("200.00"))
    )
    SampleIntakeService.create_sample(
        order=make_order(
            cnic="",
            phone="03220000000",
            name="Bilal",
            total_amount=Decimal("900.00"),
            payment_method="Credit",
        )
    )

    resp = api_client.get("/api/v1/finance/records/summary/")
    assert resp.status_code == 200
    assert resp.data["sample_revenue"] == "500.00"


def test_summary_rejects_unknown_department(api_client):
    resp = api_client.get("/api/v1/finance/records/summary/", {"department": "Radiology"})
    assert resp.status_code == 400
    assert resp.data["error"]["code"] == "validation_error"


def test_records_cannot_be_written_through_the_api(api_client):
    resp = api_client.post("/api/v1/finance/records/", {"amount": "10.00"}, format="json")
    assert resp.status_code == 405
