# lab_core/patients/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from lab_core.patients.models import Patient


class PatientSerializer(serializers.ModelSerializer):
    class Meta:
        model = Patient
        fields = [
            "id",
            "patient_id",
            "name",
            "cnic",
            "phone",
            "age",
            "gender",
            "address",
            "guardian_relation",
            "guardian_name",
            "created_at",
        ]
