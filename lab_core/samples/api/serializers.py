# lab_core/samples/api/serializers.py
from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from lab_core.samples.constants import PaymentStatus, SamplePriority
from lab_core.samples.models import Sample, SampleConsumableLine, SampleTestLine


class ConsumableLineInputSerializer(serializers.Serializer):
    # Kept as a string: malformed ids are reported by the intake service
    item = serializers.CharField(max_length=64)
    quantity = serializers.IntegerField(min_value=1, default=1)


class SampleIntakeSerializer(serializers.Serializer):
    patient_name = serializers.CharField(max_length=255)
    phone = serializers.CharField(max_length=32)
    cnic = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    age = serializers.CharField(max_length=16, required=False, allow_blank=True, default="")
    gender = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    address = serializers.CharField(max_length=512, required=False, allow_blank=True, default="")
    guardian_relation = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    guardian_name = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    referring_doctor = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    sample_collected_by = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")

    collected_samples = serializers.ListField(
        child=serializers.CharField(allow_blank=True), required=False, default=list
    )
    collected_sample = serializers.CharField(required=False, allow_blank=True, default="")

    tests = serializers.ListField(child=serializers.UUIDField(), required=False, default=list)
    consumables = ConsumableLineInputSerializer(many=True, required=False, default=list)

    total_amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0.00"), required=False, default=Decimal("0.00")
    )
    paid_amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0.00"), required=False, allow_null=True, default=None
    )
    payment_method = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")
    payment_status = serializers.ChoiceField(choices=PaymentStatus.choices, required=False, allow_null=True, default=None)
    priority = serializers.ChoiceField(choices=SamplePriority.choices, required=False, default=SamplePriority.NORMAL)

    def validate(self, attrs):
        # Either a list of specimen labels or one comma separated string
        labels = [str(v).strip() for v in attrs.get("collected_samples") or [] if str(v).strip()]
        if not labels:
            raw = (attrs.get("collected_sample") or "").strip()
            labels = [v.strip() for v in raw.split(",") if v.strip()]
        attrs["collected_samples"] = labels
        attrs.pop("collected_sample", None)
        return attrs


class SampleStatusUpdateSerializer(serializers.Serializer):
    status = serializers.CharField(max_length=32, required=False)
    barcode = serializers.CharField(max_length=64, required=False, allow_blank=True)
    processing_by = serializers.CharField(max_length=255, required=False, allow_blank=True)
    expected_completion_at = serializers.DateTimeField(required=False)
    results = serializers.ListField(child=serializers.DictField(), required=False)
    interpretation = serializers.CharField(required=False, allow_blank=True)


class SampleTestLineSerializer(serializers.ModelSerializer):
    test_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = SampleTestLine
        fields = ["test_id", "name", "price"]


class SampleConsumableLineSerializer(serializers.ModelSerializer):
    item = serializers.CharField(source="item_ref", read_only=True)

    class Meta:
        model = SampleConsumableLine
        fields = ["item", "quantity"]


class SampleSerializer(serializers.ModelSerializer):
    patient = serializers.UUIDField(source="patient.id", read_only=True)
    tests = SampleTestLineSerializer(source="test_lines", many=True, read_only=True)
    consumables = SampleConsumableLineSerializer(source="consumable_lines", many=True, read_only=True)

    class Meta:
        model = Sample
        fields = [
            "id",
            "sample_number",
            "barcode",
            "patient",
            "patient_code",
            "patient_name",
            "phone",
            "cnic",
            "age",
            "gender",
            "address",
            "guardian_relation",
            "guardian_name",
            "referring_doctor",
            "sample_collected_by",
            "collected_samples",
            "tests",
            "consumables",
            "total_amount",
            "paid_amount",
            "payment_method",
            "payment_status",
            "priority",
            "status",
            "processing_by",
            "expected_completion_at",
            "results",
            "interpretation",
            "completed_at",
            "created_at",
        ]
