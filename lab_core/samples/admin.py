# lab_core/samples/admin.py
from __future__ import annotations

from django.contrib import admin

from lab_core.samples.models import Sample, SampleConsumableLine, SampleTestLine


class SampleTestLineInline(admin.TabularInline):
    model = SampleTestLine
    extra = 0
    fields = ("position", "test", "name", "price")
    readonly_fields = fields


class SampleConsumableLineInline(admin.TabularInline):
    model = SampleConsumableLine
    extra = 0
    fields = ("position", "item_ref", "quantity")
    readonly_fields = fields


@admin.register(Sample)
class SampleAdmin(admin.ModelAdmin):
    list_display = (
        "sample_number",
        "patient_code",
        "patient_name",
        "status",
        "priority",
        "payment_status",
        "paid_amount",
        "created_at",
    )
    list_filter = ("status", "priority", "payment_status")
    search_fields = ("sample_number", "patient_name", "phone", "cnic")
    readonly_fields = ("sample_number",)
    inlines = [SampleTestLineInline, SampleConsumableLineInline]
    ordering = ("-created_at",)
