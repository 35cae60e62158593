import pytest

from lab_core.samples.constants import (
    PaymentStatus,
    SampleStatus,
    derive_payment_status,
    normalize_status,
    resolve_payment_status,
)


@pytest.mark.parametrize(
    "method,expected",
    [
        ("Cash", PaymentStatus.PAID),
        ("card", PaymentStatus.PAID),
        ("EasyPaisa", PaymentStatus.PAID),
        ("JazzCash", PaymentStatus.PAID),
        ("Bank Account", PaymentStatus.PAID),
        (" bank transfer ", PaymentStatus.PAID),
        ("Pay on Home Sampling", PaymentStatus.NOT_PAID),
        ("Credit", PaymentStatus.NOT_PAID),
        ("cheque", None),
        ("", None),
        (None, None),
    ],
)
def test_derive_payment_status(method, expected):
    assert derive_payment_status(method) == expected


def test_resolve_payment_status_precedence():
    assert resolve_payment_status(explicit="Pending", method="Cash") == "Pending"
    assert resolve_payment_status(explicit=None, method="Credit") == PaymentStatus.NOT_PAID
    assert resolve_payment_status(explicit="", method="cheque") == PaymentStatus.PAID


def test_normalize_status():
    assert normalize_status("In Process") == SampleStatus.PROCESSING
    assert normalize_status("Completed") == SampleStatus.COMPLETED
    assert normalize_status("cancelled") == SampleStatus.CANCELLED
    assert normalize_status("") == SampleStatus.COLLECTED
    assert normalize_status("weird") == SampleStatus.COLLECTED
