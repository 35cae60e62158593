# lab_core/common/idempotency.py
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any

from django.conf import settings
from django.db import IntegrityError, transaction

from lab_core.common.models import IdempotencyRecord

HEADER = "HTTP_IDEMPOTENCY_KEY"

_LOCK = threading.Lock()
_MEMORY: dict[tuple, "StoredResponse"] = {}


@dataclass(frozen=True)
class StoredResponse:
    status_code: int
    data: Any


def _use_db() -> bool:
    """
    COMMON_IDEMPOTENCY_USE_DB = True keeps replies in IdempotencyRecord;
    otherwise they live in process memory (tests, local runs).
    """
    return bool(getattr(settings, "COMMON_IDEMPOTENCY_USE_DB", False))


def get_key(request) -> str | None:
    key = (request.META.get(HEADER) or "").strip()
    return key[:255] or None


def _scope(request) -> tuple[int, str, str]:
    user_id = getattr(request.user, "pk", None) or 0
    return int(user_id), request.method.upper(), request.path


def load_response(request, key: str | None) -> StoredResponse | None:
    if not key:
        return None

    user_id, method, path = _scope(request)
    if not _use_db():
        with _LOCK:
            return _MEMORY.get((user_id, method, path, key))

    rec = (
        IdempotencyRecord.objects.filter(user_id=user_id, method=method, path=path, idempotency_key=key)
        .only("status_code", "response_data")
        .first()
    )
    return None if rec is None else StoredResponse(rec.status_code, rec.response_data)


def save_response(request, key: str | None, data, *, status_code: int) -> None:
    if not key:
        return

    user_id, method, path = _scope(request)
    if not _use_db():
        with _LOCK:
            _MEMORY.setdefault((user_id, method, path, key), StoredResponse(status_code, data))
        return

    try:
        with transaction.atomic():
            IdempotencyRecord.objects.create(
                user_id=user_id,
                method=method,
                path=path,
                idempotency_key=key,
                status_code=status_code,
                response_data=data,
            )
    except IntegrityError:
        # first writer wins
        return


def clear_memory_store() -> None:
    with _LOCK:
        _MEMORY.clear()
