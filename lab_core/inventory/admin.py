# lab_core/inventory/admin.py
from __future__ import annotations

from django.contrib import admin

from lab_core.inventory.models import InventoryItem


@admin.register(InventoryItem)
class InventoryItemAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "name",
        "current_stock",
        "unit",
        "cost_per_unit",
        "sale_price_per_unit",
        "sale_price_per_pack",
        "items_per_pack",
        "updated_at",
    )
    search_fields = ("name", "supplier")
    ordering = ("name",)
