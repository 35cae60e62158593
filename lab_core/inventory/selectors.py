# lab_core/inventory/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import F, Q, QuerySet

from lab_core.inventory.models import InventoryItem


def get_item(*, item_id: UUID) -> InventoryItem:
    return InventoryItem.objects.get(id=item_id)


def list_items(*, q: str | None = None, low_stock: bool = False) -> QuerySet[InventoryItem]:
    qs = InventoryItem.objects.all()

    qv = (q or "").strip()
    if qv:
        qs = qs.filter(Q(name__icontains=qv) | Q(supplier__icontains=qv))
    if low_stock:
        qs = qs.filter(current_stock__lte=F("min_threshold"))

    return qs.order_by("name")
