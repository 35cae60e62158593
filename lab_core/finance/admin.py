# lab_core/finance/admin.py
from __future__ import annotations

from django.contrib import admin

from lab_core.finance.models import FinanceRecord


@admin.register(FinanceRecord)
class FinanceRecordAdmin(admin.ModelAdmin):
    list_display = ("id", "date", "category", "amount", "reference", "department", "recorded_by")
    list_filter = ("category", "department", "type")
    search_fields = ("reference", "description")
    ordering = ("-date",)

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
