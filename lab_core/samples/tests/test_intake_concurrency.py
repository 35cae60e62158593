import threading
from decimal import Decimal

import pytest
from django.db import connection, connections

from lab_core.common.api.exceptions import InsufficientStockError
from lab_core.finance.models import FinanceRecord
from lab_core.inventory.models import InventoryItem
from lab_core.samples.models import Sample
from lab_core.samples.services import SampleIntakeService


@pytest.mark.django_db(transaction=True)
@pytest.mark.skipif(connection.vendor == "sqlite", reason="needs row-level locking (PostgreSQL)")
def test_competing_intakes_for_one_item_commit_exactly_once(make_order):
    item = InventoryItem.objects.create(
        name="Syringe 5ml",
        unit="pcs",
        current_stock=10,
        cost_per_unit=Decimal("2.00"),
        sale_price_per_unit=Decimal("5.00"),
    )
    orders = [
        make_order(cnic="3520112223334", phone="03001234567", consumables=[(item.id, 6)], total_amount=Decimal("500.00")),
        make_order(
            cnic="4210133334445",
            phone="03111111111",
            name="Sara Malik",
            consumables=[(item.id, 6)],
            total_amount=Decimal("500.00"),
        ),
    ]

    outcomes = []
    barrier = threading.Barrier(len(orders))

    def worker(order):
        try:
            barrier.wait()
            SampleIntakeService.create_sample(order=order)
            outcomes.append("ok")
        except InsufficientStockError:
            outcomes.append("stock")
        finally:
            connections.close_all()

    threads = [threading.Thread(target=worker, args=(o,)) for o in orders]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    item.refresh_from_db()
    assert sorted(outcomes) == ["ok", "stock"]
    assert item.current_stock == 4
    assert Sample.objects.count() == 1
    # only the winning intake posted ledger entries
    (sample,) = Sample.objects.all()
    assert set(FinanceRecord.objects.values_list("reference", flat=True)) == {sample.sample_number}
    assert sum(FinanceRecord.objects.values_list("amount", flat=True)) == Decimal("500.00")
