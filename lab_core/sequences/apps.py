# lab_core/sequences/apps.py
from __future__ import annotations

from django.apps import AppConfig


class SequencesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "lab_core.sequences"
