# lab_core/inventory/api/serializers.py
from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from lab_core.inventory.models import InventoryItem
from lab_core.inventory.pricing import resolve_unit_price


class InventoryItemSerializer(serializers.ModelSerializer):
    unit_sale_price = serializers.SerializerMethodField()
    is_low_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = InventoryItem
        fields = [
            "id",
            "name",
            "unit",
            "current_stock",
            "min_threshold",
            "is_low_stock",
            "cost_per_unit",
            "sale_price_per_unit",
            "sale_price_per_pack",
            "items_per_pack",
            "unit_sale_price",
            "supplier",
            "location",
            "expiry_date",
            "updated_at",
        ]

    def get_unit_sale_price(self, obj) -> str:
        return str(resolve_unit_price(obj).quantize(Decimal("0.01")))
