# lab_core/samples/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import Q, QuerySet

from lab_core.samples.models import Sample


class SampleSelector:
    class NotFound(Exception):
        pass

    @staticmethod
    def _base() -> QuerySet[Sample]:
        return Sample.objects.select_related("patient").prefetch_related("test_lines", "consumable_lines")

    @staticmethod
    def get_sample(*, ref: str) -> Sample:
        """
        ref is either the storage id (UUID) or the human sample number.
        """
        try:
            lookup = {"id": UUID(str(ref))}
        except ValueError:
            lookup = {"sample_number": str(ref)}

        try:
            return SampleSelector._base().get(**lookup)
        except Sample.DoesNotExist:
            raise SampleSelector.NotFound()

    @staticmethod
    def list_samples(*, status: str | None = None, q: str | None = None) -> QuerySet[Sample]:
        qs = SampleSelector._base().order_by("-created_at")
        if status:
            qs = qs.filter(status=status)

        qv = (q or "").strip()
        if qv:
            qs = qs.filter(
                Q(sample_number__icontains=qv)
                | Q(patient_name__icontains=qv)
                | Q(phone__icontains=qv)
                | Q(cnic__icontains=qv)
            )
        return qs
