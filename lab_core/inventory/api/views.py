# lab_core/inventory/api/views.py
from __future__ import annotations

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import status, viewsets
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from lab_core.common.api.pagination import paginate
from lab_core.inventory.api.serializers import InventoryItemSerializer
from lab_core.inventory.models import InventoryItem
from lab_core.inventory.selectors import get_item, list_items


class InventoryItemViewSet(viewsets.ViewSet):
    """
    Read-only stock view. Stock is lowered by sample intake, not by this API.
    """

    serializer_class = InventoryItemSerializer
    queryset = InventoryItem.objects.none()

    def list(self, request):
        q = request.query_params.get("q", "").strip()
        low = request.query_params.get("low_stock", "").lower() in ("1", "true", "yes")
        qs = list_items(q=q, low_stock=low)
        return paginate(request, qs, InventoryItemSerializer)

    def retrieve(self, request, pk=None):
        try:
            item = get_item(item_id=pk)
        except (InventoryItem.DoesNotExist, DjangoValidationError, ValueError):
            raise NotFound("Inventory item not found.")
        return Response(InventoryItemSerializer(item).data, status=status.HTTP_200_OK)
