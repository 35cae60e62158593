# lab_core/inventory/services.py
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from django.db import transaction
from django.db.models import F
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from lab_core.common.api.exceptions import InsufficientStockError, InventoryItemNotFoundError
from lab_core.inventory.models import InventoryItem
from lab_core.inventory.pricing import line_profit, resolve_unit_price


@dataclass(frozen=True)
class SoldLine:
    item_id: UUID
    name: str
    quantity: int
    unit: str
    unit_price: Decimal
    unit_cost: Decimal
    profit: Decimal

    def describe(self) -> str:
        return f"{self.name} x{self.quantity}{f' {self.unit}' if self.unit else ''}"


class InventoryService:
    """
    Stock mutations.
    decrement() is the only path that lowers stock: one conditional UPDATE
    guarded by current_stock >= quantity, so concurrent callers can never
    jointly draw an item below zero.
    """

    @staticmethod
    @transaction.atomic
    def decrement(*, item_id: UUID, quantity: int) -> InventoryItem:
        if quantity <= 0:
            raise ValidationError({"quantity": "Quantity must be > 0."})

        updated = InventoryItem.objects.filter(id=item_id, current_stock__gte=quantity).update(
            current_stock=F("current_stock") - quantity,
            updated_at=timezone.now(),
        )

        if not updated:
            item = InventoryItem.objects.filter(id=item_id).first()
            if item is None:
                raise InventoryItemNotFoundError(item_id)
            raise InsufficientStockError(
                item_id=item_id,
                item_name=item.name,
                requested=quantity,
                available=item.current_stock,
            )

        return InventoryItem.objects.get(id=item_id)

    @staticmethod
    def sell(*, item_id: UUID, quantity: int) -> SoldLine:
        """
        Guarded decrement plus the profit of the line at the item's current prices.
        """
        item = InventoryService.decrement(item_id=item_id, quantity=quantity)

        unit_price = resolve_unit_price(item)
        unit_cost = item.cost_per_unit or Decimal("0.00")
        return SoldLine(
            item_id=item.id,
            name=item.name,
            quantity=quantity,
            unit=item.unit or "",
            unit_price=unit_price,
            unit_cost=unit_cost,
            profit=line_profit(unit_price=unit_price, unit_cost=unit_cost, quantity=quantity),
        )
