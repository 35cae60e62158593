# lab_core/catalog/selectors.py
from __future__ import annotations

from uuid import UUID

from lab_core.catalog.models import LabTest


def lookup_tests(test_ids: list[UUID]) -> list[LabTest]:
    """
    Returns tests in the requested order. Unknown ids are dropped.
    """
    if not test_ids:
        return []
    by_id = {str(t.id): t for t in LabTest.objects.filter(id__in=test_ids)}
    return [by_id[str(i)] for i in test_ids if str(i) in by_id]
