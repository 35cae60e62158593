# lab_core/samples/api/views.py
from __future__ import annotations

from django.conf import settings
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from lab_core.common.api.pagination import paginate
from lab_core.common.idempotency import get_key, load_response, save_response
from lab_core.patients.services import Demographics
from lab_core.samples.api.serializers import (
    SampleIntakeSerializer,
    SampleSerializer,
    SampleStatusUpdateSerializer,
)
from lab_core.samples.models import Sample
from lab_core.samples.selectors import SampleSelector
from lab_core.samples.services import ConsumableRequest, IntakeOrder, SampleIntakeService, SampleService


def _recorded_by(user) -> str:
    if user is None or not getattr(user, "is_authenticated", False):
        return getattr(settings, "LAB_DEFAULT_RECORDED_BY", "admin")
    full_name = user.get_full_name() if hasattr(user, "get_full_name") else ""
    return full_name or getattr(user, "email", "") or getattr(user, "username", "") or str(user.pk)


def _order_from(data: dict) -> IntakeOrder:
    return IntakeOrder(
        demographics=Demographics(
            name=data["patient_name"],
            cnic=data.get("cnic", ""),
            phone=data.get("phone", ""),
            age=data.get("age", ""),
            gender=data.get("gender", ""),
            address=data.get("address", ""),
            guardian_relation=data.get("guardian_relation", ""),
            guardian_name=data.get("guardian_name", ""),
        ),
        test_ids=list(data.get("tests") or []),
        consumables=[
            ConsumableRequest(item_ref=c["item"], quantity=c["quantity"])
            for c in data.get("consumables") or []
        ],
        total_amount=data.get("total_amount"),
        paid_amount=data.get("paid_amount"),
        payment_method=data.get("payment_method", ""),
        payment_status=data.get("payment_status"),
        priority=data.get("priority"),
        referring_doctor=data.get("referring_doctor", ""),
        sample_collected_by=data.get("sample_collected_by", ""),
        collected_samples=data.get("collected_samples") or [],
    )


class SampleViewSet(viewsets.ViewSet):
    """
    Thin API layer:
    - serializer validation
    - idempotency caching for intake
    - delegates writes to SampleIntakeService / SampleService, reads to SampleSelector
    Samples are addressed by id or by sample number.
    """

    serializer_class = SampleSerializer
    queryset = Sample.objects.none()
    lookup_value_regex = "[^/]+"

    def _get_or_404(self, ref) -> Sample:
        try:
            return SampleSelector.get_sample(ref=ref)
        except SampleSelector.NotFound:
            raise NotFound("Sample not found.")

    @extend_schema(
        request=SampleIntakeSerializer,
        responses={201: SampleSerializer},
        tags=["Samples"],
        parameters=[
            OpenApiParameter(name="Idempotency-Key", location=OpenApiParameter.HEADER, required=False, type=str),
        ],
        operation_id="v1_samples_create",
    )
    def create(self, request):
        idem = get_key(request)
        cached = load_response(request, idem)
        if cached is not None:
            return Response(cached.data, status=cached.status_code)

        ser = SampleIntakeSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        result = SampleIntakeService.create_sample(
            order=_order_from(ser.validated_data),
            recorded_by=_recorded_by(request.user),
        )

        out = SampleSerializer(self._get_or_404(result.sample.id)).data
        save_response(request, idem, out, status_code=status.HTTP_201_CREATED)

        return Response(out, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: SampleSerializer(many=True)}, tags=["Samples"], operation_id="v1_samples_list")
    def list(self, request):
        qs = SampleSelector.list_samples(
            status=request.query_params.get("status") or None,
            q=request.query_params.get("q", ""),
        )
        return paginate(request, qs, SampleSerializer)

    @extend_schema(responses={200: SampleSerializer}, tags=["Samples"], operation_id="v1_samples_retrieve")
    def retrieve(self, request, pk=None):
        return Response(SampleSerializer(self._get_or_404(pk)).data, status=status.HTTP_200_OK)

    @extend_schema(
        request=SampleStatusUpdateSerializer,
        responses={200: SampleSerializer},
        tags=["Samples"],
        operation_id="v1_samples_partial_update",
    )
    def partial_update(self, request, pk=None):
        self._get_or_404(pk)

        ser = SampleStatusUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        sample = SampleService.update_status(ref=pk, **ser.validated_data)
        return Response(SampleSerializer(self._get_or_404(sample.id)).data, status=status.HTTP_200_OK)

    @extend_schema(responses={204: None}, tags=["Samples"], operation_id="v1_samples_destroy")
    def destroy(self, request, pk=None):
        self._get_or_404(pk)
        SampleService.delete(ref=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
