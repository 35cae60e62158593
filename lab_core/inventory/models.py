# lab_core/inventory/models.py
from decimal import Decimal

from django.db import models
from django.db.models import Q
from lab_core.common.models import UUIDModel


class InventoryItem(UUIDModel):
    """
    Consumable stock-keeping unit.

    Pricing: sale_price_per_unit wins when positive, otherwise the pack price
    is spread over items_per_pack (see inventory.pricing).
    current_stock is only lowered through InventoryService.decrement().
    """
    name = models.CharField(max_length=255)
    unit = models.CharField(max_length=32, default="unit", blank=True)

    current_stock = models.IntegerField(default=0)
    min_threshold = models.PositiveIntegerField(default=0)

    cost_per_unit = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    sale_price_per_unit = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    sale_price_per_pack = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    items_per_pack = models.PositiveIntegerField(default=0)

    supplier = models.CharField(max_length=255, blank=True)
    location = models.CharField(max_length=255, blank=True)
    expiry_date = models.DateField(null=True, blank=True)

    class Meta:
        db_table = "inventory_item"
        constraints = [
            models.CheckConstraint(condition=Q(current_stock__gte=0), name="ck_inventory_stock_non_negative"),
        ]
        indexes = [models.Index(fields=["name"])]

    def __str__(self) -> str:
        return f"{self.name} ({self.current_stock} {self.unit})"

    @property
    def is_low_stock(self) -> bool:
        return self.current_stock <= self.min_threshold
