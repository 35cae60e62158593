# lab_core/conftest.py
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from lab_core.catalog.models import LabTest
from lab_core.common.idempotency import clear_memory_store
from lab_core.inventory.models import InventoryItem
from lab_core.patients.services import Demographics
from lab_core.samples.services import ConsumableRequest, IntakeOrder


@pytest.fixture(autouse=True)
def _reset_idempotency_store():
    clear_memory_store()
    yield
    clear_memory_store()


@pytest.fixture
def user(db):
    User = get_user_model()
    return User.objects.create_user(
        username="labtech",
        password="testpass",
        first_name="Ayesha",
        last_name="Khan",
        is_active=True,
    )


@pytest.fixture
def api_client(user):
    c = APIClient()
    c.force_authenticate(user=user)
    return c


@pytest.fixture
def make_item(db):
    def _make(**overrides):
        data = {
            "name": "Syringe 5ml",
            "unit": "pcs",
            "current_stock": 10,
            "cost_per_unit": Decimal("2.00"),
            "sale_price_per_unit": Decimal("5.00"),
        }
        data.update(overrides)
        return InventoryItem.objects.create(**data)

    return _make


@pytest.fixture
def syringe(make_item):
    return make_item()


@pytest.fixture
def cbc_test(db):
    return LabTest.objects.create(name="Complete Blood Count", category="Hematology", price=Decimal("400.00"))


@pytest.fixture
def lft_test(db):
    return LabTest.objects.create(name="Liver Function Test", category="Chemistry", price=Decimal("900.00"))


@pytest.fixture
def make_order():
    def _make(*, cnic="3520112223334", phone="03001234567", name="Ali Raza", consumables=(), **kwargs):
        return IntakeOrder(
            demographics=Demographics(name=name, cnic=cnic, phone=phone, age="34", gender="Male"),
            consumables=[ConsumableRequest(item_ref=str(ref), quantity=qty) for ref, qty in consumables],
            **kwargs,
        )

    return _make
