# lab_core/sequences/admin.py
from __future__ import annotations

from django.contrib import admin

from lab_core.sequences.models import Counter


@admin.register(Counter)
class CounterAdmin(admin.ModelAdmin):
    list_display = ("key", "seq")
    search_fields = ("key",)
    readonly_fields = ("seq",)
