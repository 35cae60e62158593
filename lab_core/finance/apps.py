# lab_core/finance/apps.py
from __future__ import annotations

from django.apps import AppConfig


class FinanceConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "lab_core.finance"
