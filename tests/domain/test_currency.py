"""Tests for the currency bucket model."""

from decimal import Decimal

import pytest

from household_ledger.domain.currency import (
    CUP_CONVERSION_TARGETS,
    Currency,
    CurrencyFamily,
    coerce_currency,
    currency_family,
    is_cup,
    is_usd,
)
from household_ledger.domain.errors import ValidationError
from household_ledger.domain.models import Account


def test_every_bucket_has_a_family():
    """The family mapping must be total over the enum."""
    assert {currency_family(c) for c in Currency} == set(CurrencyFamily)
    assert currency_family(Currency.USD_EFECTIVO) is CurrencyFamily.USD
    assert currency_family(Currency.CUP_TRANSFERENCIA) is CurrencyFamily.CUP


def test_each_bucket_addresses_exactly_one_balance():
    """balance_for should read one distinct slot per bucket."""
    account = Account(
        id="a",
        name="A",
        balance_usd_zelle=Decimal("1"),
        balance_usd_efectivo=Decimal("2"),
        balance_usdt=Decimal("3"),
        balance_cup_efectivo=Decimal("4"),
        balance_cup_transferencia=Decimal("5"),
    )

    balances = account.balances()

    assert sorted(balances.values()) == [Decimal(n) for n in "12345"]
    assert balances[Currency.USDT] == Decimal("3")


def test_coerce_currency_accepts_codes_case_insensitively():
    assert coerce_currency("usd_zelle") is Currency.USD_ZELLE
    assert coerce_currency(Currency.USDT) is Currency.USDT


@pytest.mark.parametrize("value", ["USD", "EUR", "", None])
def test_coerce_currency_rejects_unknown_codes(value):
    """Legacy or unknown codes must fail instead of defaulting to a bucket."""
    with pytest.raises(ValidationError) as exc_info:
        coerce_currency(value, "from_currency")

    assert exc_info.value.code == "validation_error"
    assert exc_info.value.field == "from_currency"


def test_usd_buckets_convert_into_matching_cup_buckets():
    assert CUP_CONVERSION_TARGETS == {
        Currency.USD_ZELLE: Currency.CUP_TRANSFERENCIA,
        Currency.USD_EFECTIVO: Currency.CUP_EFECTIVO,
    }
    assert is_usd(Currency.USD_ZELLE) and not is_usd(Currency.USDT)
    assert is_cup(Currency.CUP_EFECTIVO) and not is_cup(Currency.USD_EFECTIVO)
