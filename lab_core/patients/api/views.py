# lab_core/patients/api/views.py
from __future__ import annotations

from django.core.exceptions import ValidationError as DjangoValidationError
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.response import Response

from lab_core.common.api.pagination import paginate
from lab_core.patients.api.serializers import PatientSerializer
from lab_core.patients.models import Patient
from lab_core.patients.selectors import find_patient_by_identity, get_patient, search_patients


class PatientViewSet(viewsets.ViewSet):
    """
    Read side only. Patients are created by sample intake.
    """

    serializer_class = PatientSerializer
    queryset = Patient.objects.none()

    def list(self, request):
        q = request.query_params.get("q", "").strip()
        qs = search_patients(q=q)
        return paginate(request, qs, PatientSerializer)

    def retrieve(self, request, pk=None):
        try:
            patient = get_patient(patient_id=pk)
        except (Patient.DoesNotExist, DjangoValidationError, ValueError):
            raise NotFound("Patient not found.")
        return Response(PatientSerializer(patient).data, status=status.HTTP_200_OK)

    @extend_schema(
        parameters=[
            OpenApiParameter(name="cnic", location=OpenApiParameter.QUERY, required=False, type=str),
            OpenApiParameter(name="phone", location=OpenApiParameter.QUERY, required=False, type=str),
        ],
        tags=["Patients"],
        operation_id="v1_patients_lookup",
    )
    @action(detail=False, methods=["get"], url_path="lookup")
    def lookup(self, request):
        """
        Exact match for the intake form: CNIC first, then phone.
        Returns {"patient": null} when nobody matches.
        """
        cnic = request.query_params.get("cnic", "").strip()
        phone = request.query_params.get("phone", "").strip()
        if not cnic and not phone:
            raise ValidationError({"detail": "cnic or phone is required."})

        patient = find_patient_by_identity(cnic=cnic, phone=phone)
        data = PatientSerializer(patient).data if patient is not None else None
        return Response({"patient": data}, status=status.HTTP_200_OK)
