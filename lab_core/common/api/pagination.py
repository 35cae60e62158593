# lab_core/common/api/pagination.py
from __future__ import annotations

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class DefaultPagination(PageNumberPagination):
    """
    Page size comes from REST_FRAMEWORK["PAGE_SIZE"]; ?page_size= may raise it
    up to max_page_size. Responses carry count, next, previous and results.
    """

    page_size_query_param = "page_size"
    max_page_size = 200


def paginate(request, queryset, serializer_class) -> Response:
    """Paginated list response for plain ViewSets that do not use GenericAPIView."""
    paginator = DefaultPagination()
    context = {"request": request}

    page = paginator.paginate_queryset(queryset, request)
    if page is None:
        return Response(serializer_class(queryset, many=True, context=context).data)
    return paginator.get_paginated_response(serializer_class(page, many=True, context=context).data)
