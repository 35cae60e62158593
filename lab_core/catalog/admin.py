# lab_core/catalog/admin.py
from __future__ import annotations

from django.contrib import admin

from lab_core.catalog.models import LabTest


@admin.register(LabTest)
class LabTestAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "category", "price", "sample_type", "is_active")
    list_filter = ("category", "sample_type", "is_active")
    search_fields = ("name", "category")
    ordering = ("name",)
