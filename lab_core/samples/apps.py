# lab_core/samples/apps.py
from __future__ import annotations

from django.apps import AppConfig


class SamplesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "lab_core.samples"
