# lab_core/samples/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from uuid import UUID

from django.db import IntegrityError, transaction
from django.utils import timezone

from lab_core.catalog.selectors import lookup_tests
from lab_core.common.api.exceptions import DuplicateSampleNumberError, IntakeError, InvalidConsumableError
from lab_core.finance.services import FinanceLedgerError, FinanceLedgerService
from lab_core.inventory.services import InventoryService, SoldLine
from lab_core.patients.services import Demographics, PatientResolver
from lab_core.samples.constants import SamplePriority, SampleStatus, normalize_status, resolve_payment_status
from lab_core.samples.models import Sample, SampleConsumableLine, SampleTestLine
from lab_core.samples.selectors import SampleSelector
from lab_core.sequences.services import SequenceService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConsumableRequest:
    item_ref: str
    quantity: int = 1


@dataclass(frozen=True)
class IntakeOrder:
    demographics: Demographics
    test_ids: list[UUID] = field(default_factory=list)
    consumables: list[ConsumableRequest] = field(default_factory=list)
    total_amount: Decimal = Decimal("0.00")
    paid_amount: Decimal | None = None
    payment_method: str = ""
    payment_status: str | None = None
    priority: str = SamplePriority.NORMAL
    referring_doctor: str = ""
    sample_collected_by: str = ""
    collected_samples: list[str] = field(default_factory=list)


@dataclass
class IntakeResult:
    sample: Sample
    sold_lines: list[SoldLine]
    consumables_profit: Decimal
    finance_records: list = field(default_factory=list)


def _parse_item_ref(ref) -> UUID | None:
    try:
        return UUID(str(ref))
    except (TypeError, ValueError):
        return None


class SampleIntakeService:
    """
    Sample intake as one all-or-nothing operation.

    Stages:
      1. reject malformed consumable ids (nothing written yet)
      2. allocate the sample number (own short transaction, gaps allowed)
      3. in one transaction: resolve patient, persist sample, sell each
         consumable line through the guarded decrement, post finance entries
         in a savepoint

    Any IntakeError (or unexpected failure) in stage 3 rolls back the sample,
    its lines, every decrement and any patient created for it. A failed
    finance posting only loses the ledger entries; the intake still commits.
    """

    @staticmethod
    def create_sample(*, order: IntakeOrder, recorded_by: str = "") -> IntakeResult:
        invalid = [c.item_ref for c in order.consumables if _parse_item_ref(c.item_ref) is None]
        if invalid:
            raise InvalidConsumableError(invalid)

        tests = lookup_tests(order.test_ids)
        sample_number = SequenceService.allocate_sample_number()

        try:
            with transaction.atomic():
                patient = PatientResolver.resolve(demographics=order.demographics)
                sample = SampleIntakeService._persist_sample(
                    order=order,
                    sample_number=sample_number,
                    patient=patient,
                    tests=tests,
                )

                sold_lines = [
                    InventoryService.sell(item_id=_parse_item_ref(c.item_ref), quantity=c.quantity)
                    for c in order.consumables
                ]
                profit = sum((line.profit for line in sold_lines), Decimal("0.00"))

                try:
                    records = FinanceLedgerService.post_intake_income(
                        sample=sample,
                        consumables_profit=profit,
                        sold_lines=sold_lines,
                        recorded_by=recorded_by,
                    )
                except FinanceLedgerError:
                    logger.exception("Finance entries for %s not posted; intake kept", sample_number)
                    records = []
        except IntakeError as exc:
            logger.warning("Intake %s rolled back: %s", sample_number, exc.default_code)
            raise
        except Exception:
            logger.exception("Intake %s rolled back after unexpected error", sample_number)
            raise

        logger.info(
            "Intake %s committed (patient=%s, consumables=%d, ledger_entries=%d)",
            sample_number,
            patient.patient_id,
            len(sold_lines),
            len(records),
        )
        return IntakeResult(
            sample=sample,
            sold_lines=sold_lines,
            consumables_profit=profit,
            finance_records=records,
        )

    @staticmethod
    def _persist_sample(*, order: IntakeOrder, sample_number: str, patient, tests) -> Sample:
        d = order.demographics
        total = Decimal(str(order.total_amount or 0))
        paid = total if order.paid_amount is None else Decimal(str(order.paid_amount))

        try:
            with transaction.atomic():
                sample = Sample.objects.create(
                    sample_number=sample_number,
                    patient=patient,
                    patient_code=patient.patient_id,
                    patient_name=d.name,
                    phone=d.phone or "",
                    cnic=d.cnic or "",
                    age=d.age or "",
                    gender=d.gender or "",
                    address=d.address or "",
                    guardian_relation=d.guardian_relation or "",
                    guardian_name=d.guardian_name or "",
                    referring_doctor=order.referring_doctor or "",
                    sample_collected_by=order.sample_collected_by or "",
                    collected_samples=list(order.collected_samples),
                    total_amount=total,
                    paid_amount=paid,
                    payment_method=order.payment_method or "",
                    payment_status=resolve_payment_status(
                        explicit=order.payment_status,
                        method=order.payment_method,
                    ),
                    priority=order.priority or SamplePriority.NORMAL,
                    status=SampleStatus.COLLECTED,
                )
        except IntegrityError:
            if Sample.objects.filter(sample_number=sample_number).exists():
                raise DuplicateSampleNumberError(sample_number)
            raise

        SampleTestLine.objects.bulk_create(
            [
                SampleTestLine(sample=sample, test=t, name=t.name, price=t.price, position=i)
                for i, t in enumerate(tests)
            ]
        )
        SampleConsumableLine.objects.bulk_create(
            [
                SampleConsumableLine(sample=sample, item_ref=str(_parse_item_ref(c.item_ref)), quantity=c.quantity, position=i)
                for i, c in enumerate(order.consumables)
            ]
        )
        return sample


class SampleService:
    @staticmethod
    @transaction.atomic
    def update_status(
        *,
        ref: str,
        status: str | None = None,
        barcode: str | None = None,
        processing_by: str | None = None,
        expected_completion_at=None,
        results: list | None = None,
        interpretation: str | None = None,
    ) -> Sample:
        sample = SampleSelector.get_sample(ref=ref)
        sample = Sample.objects.select_for_update().get(id=sample.id)

        fields = ["updated_at"]
        if status is not None:
            sample.status = normalize_status(status)
            fields.append("status")
            if sample.status == SampleStatus.COMPLETED:
                sample.completed_at = timezone.now()
                fields.append("completed_at")
        if barcode is not None:
            sample.barcode = barcode
            fields.append("barcode")
        if processing_by is not None:
            sample.processing_by = processing_by
            fields.append("processing_by")
        if expected_completion_at is not None:
            sample.expected_completion_at = expected_completion_at
            fields.append("expected_completion_at")
        if results is not None:
            sample.results = results
            fields.append("results")
        if interpretation is not None:
            sample.interpretation = interpretation
            fields.append("interpretation")

        sample.save(update_fields=fields)
        return sample

    @staticmethod
    @transaction.atomic
    def delete(*, ref: str) -> None:
        sample = SampleSelector.get_sample(ref=ref)
        logger.info("Deleting sample %s", sample.sample_number)
        sample.delete()
