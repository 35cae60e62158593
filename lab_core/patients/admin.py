# lab_core/patients/admin.py
from __future__ import annotations

from django.contrib import admin

from lab_core.patients.models import Patient


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ("id", "patient_id", "name", "cnic", "phone", "gender", "created_at")
    search_fields = ("patient_id", "name", "cnic", "phone")
    ordering = ("-created_at",)
