# lab_core/common/middleware.py
from __future__ import annotations

from django.utils.deprecation import MiddlewareMixin

from lab_core.common.api.exceptions import ensure_request_id


class RequestIdMiddleware(MiddlewareMixin):
    """
    Attaches a request id (honoring an incoming X-Request-Id) and echoes it back,
    so error envelopes and log lines can be correlated with client reports.
    """

    HEADER = "X-Request-Id"

    def process_request(self, request):
        incoming = request.META.get("HTTP_X_REQUEST_ID")
        if incoming:
            request.request_id = incoming[:64]
        ensure_request_id(request)
        return None

    def process_response(self, request, response):
        rid = getattr(request, "request_id", None)
        if rid:
            response[self.HEADER] = rid
        return response
