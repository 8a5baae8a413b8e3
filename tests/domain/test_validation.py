"""Tests for command validation helpers."""

from decimal import Decimal

import pytest

from household_ledger.domain.errors import ValidationError
from household_ledger.domain.models import PaymentMethod
from household_ledger.domain.services.validation import (
    coerce_enum,
    optional_positive_amount,
    require_positive_amount,
    require_text,
)
from household_ledger.utils.decimal_utils import coerce_decimal


def test_require_positive_amount_normalizes_to_decimal():
    assert require_positive_amount("amount", "12.50") == Decimal("12.50")
    assert require_positive_amount("amount", 3) == Decimal("3")


@pytest.mark.parametrize("value", [None, "", "abc", 0, "-1", "NaN", "Infinity", True])
def test_require_positive_amount_rejects_bad_values(value):
    """Missing, non-numeric, non-finite and non-positive values are rejected."""
    with pytest.raises(ValidationError) as exc_info:
        require_positive_amount("amount", value)

    assert exc_info.value.field == "amount"


def test_optional_positive_amount_passes_none_through():
    assert optional_positive_amount("exchange_rate", None) is None
    assert optional_positive_amount("exchange_rate", "2") == Decimal("2")


def test_require_text_strips_and_rejects_blank():
    assert require_text("creditor", "  Bank ") == "Bank"
    with pytest.raises(ValidationError):
        require_text("creditor", "   ")


def test_coerce_enum_matches_values_case_insensitively():
    assert coerce_enum(PaymentMethod, "payment_method", "cash") is PaymentMethod.CASH
    with pytest.raises(ValidationError):
        coerce_enum(PaymentMethod, "payment_method", "CHEQUE")


def test_coerce_decimal_handles_none_and_floats():
    assert coerce_decimal(None) == Decimal("0")
    assert coerce_decimal(1.5) == Decimal("1.5")
    with pytest.raises(ValueError):
        coerce_decimal("not-a-number")
