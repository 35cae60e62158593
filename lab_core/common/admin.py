# lab_core/common/admin.py
from __future__ import annotations

from django.contrib import admin

from lab_core.common.models import IdempotencyRecord


@admin.register(IdempotencyRecord)
class IdempotencyRecordAdmin(admin.ModelAdmin):
    list_display = ("id", "user_id", "method", "path", "idempotency_key", "status_code", "created_at")
    search_fields = ("idempotency_key", "path")
    ordering = ("-created_at",)
