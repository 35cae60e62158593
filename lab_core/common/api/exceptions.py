# lab_core/common/api/exceptions.py
from __future__ import annotations

import logging
import uuid
from typing import Any

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, NotAuthenticated, PermissionDenied, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


def ensure_request_id(request) -> str:
    """
    Ensures request has a stable request_id attribute and returns it.
    Safe to call from middleware and DRF exception handler.
    """
    rid = getattr(request, "request_id", None) if request is not None else None
    if not rid:
        rid = uuid.uuid4().hex
        if request is not None:
            setattr(request, "request_id", rid)
    return rid


def build_error_envelope(*, request=None, code: str, message: str, details: Any = None) -> dict[str, Any]:
    """
    Canonical error envelope.
    Reusable from Django middleware (JsonResponse) and DRF (Response).
    """
    rid = ensure_request_id(request)
    return {
        "error": {
            "code": code,
            "message": message,
            "details": details,
            "request_id": rid,
        }
    }


class ConflictError(APIException):
    """
    409 Conflict that still flows through the global exception handler.
    """
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict."
    default_code = "conflict"

    def __init__(self, detail=None, code=None):
        super().__init__(detail=detail or self.default_detail, code=code or self.default_code)


# -------------------------------------------------------------------
# Sample intake error taxonomy
# -------------------------------------------------------------------

class IntakeError(APIException):
    """
    Base for errors that abort a sample intake and roll back its writes.
    Subclasses are told apart by ``default_code``, which is also the
    envelope ``code`` clients switch on.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Sample intake failed."
    default_code = "intake_error"


class InvalidConsumableError(IntakeError):
    default_detail = "Invalid consumable item id."
    default_code = "invalid_consumable"

    def __init__(self, item_refs: list[str]):
        self.item_refs = list(item_refs)
        super().__init__(detail={"detail": self.default_detail, "items": self.item_refs})


class InventoryItemNotFoundError(IntakeError):
    default_detail = "Inventory item not found."
    default_code = "inventory_item_not_found"

    def __init__(self, item_id):
        self.item_id = item_id
        super().__init__(detail={"detail": self.default_detail, "item_id": str(item_id)})


class InsufficientStockError(IntakeError):
    default_detail = "Insufficient stock."
    default_code = "insufficient_stock"

    def __init__(self, *, item_id, item_name: str = "", requested: int, available: int):
        self.item_id = item_id
        self.item_name = item_name
        self.requested = requested
        self.available = available
        message = (
            f"Insufficient stock for {item_name or item_id}: "
            f"requested {requested}, available {available}."
        )
        super().__init__(
            detail={
                "detail": message,
                "item_id": str(item_id),
                "requested": requested,
                "available": available,
            }
        )


class DuplicateSampleNumberError(ConflictError):
    default_detail = "A sample with this sample number already exists. Please retry."
    default_code = "duplicate_sample_number"

    def __init__(self, sample_number: str):
        self.sample_number = sample_number
        super().__init__(detail={"detail": self.default_detail, "sample_number": sample_number})


def _code_for(exc: Exception, http_status: int) -> str:
    if isinstance(exc, ValidationError):
        return "validation_error"
    if isinstance(exc, NotAuthenticated):
        return "not_authenticated"
    if isinstance(exc, PermissionDenied):
        return "permission_denied"
    if isinstance(exc, Http404):
        return "not_found"
    if isinstance(exc, APIException):
        return getattr(exc, "default_code", "api_error") or "api_error"
    if http_status >= 500:
        return "server_error"
    return "error"


def api_exception_handler(exc: Exception, context: dict[str, Any]):
    request = context.get("request")
    response = drf_exception_handler(exc, context)

    # Truly unhandled error
    if response is None:
        logger.exception(
            "Unhandled API error (request_id=%s)",
            ensure_request_id(request),
            exc_info=exc,
        )
        return Response(
            build_error_envelope(
                request=request,
                code="server_error",
                message="Unexpected server error.",
                details=None,
            ),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    http_status = response.status_code
    code = _code_for(exc, http_status)

    data = response.data

    # Message + details rules:
    # 1) If {"detail": "..."} only -> message=detail, details=None
    # 2) If {"detail": "...", ...} -> message=detail, details={...without detail}
    # 3) Otherwise -> message="Request failed.", details=data
    message = "Request failed."
    details = data

    if isinstance(data, dict) and "detail" in data:
        message = str(data.get("detail"))
        rest = {k: v for k, v in data.items() if k != "detail"}
        details = rest or None

    return Response(
        build_error_envelope(
            request=request,
            code=code,
            message=message,
            details=details,
        ),
        status=http_status,
        headers=response.headers,
    )
