# lab_core/api/urls.py
from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from lab_core.finance.api.views import FinanceRecordViewSet
from lab_core.inventory.api.views import InventoryItemViewSet
from lab_core.patients.api.views import PatientViewSet
from lab_core.samples.api.views import SampleViewSet

router = DefaultRouter()

router.register(r"samples", SampleViewSet, basename="samples")
router.register(r"patients", PatientViewSet, basename="patients")
router.register(r"inventory/items", InventoryItemViewSet, basename="inventory-items")
router.register(r"finance/records", FinanceRecordViewSet, basename="finance-records")

urlpatterns = [
    # JWT auth
    path("auth/token/", TokenObtainPairView.as_view(), name="token-obtain"),
    path("auth/token/refresh/", TokenRefreshView.as_view(), name="token-refresh"),

    *router.urls,
]
