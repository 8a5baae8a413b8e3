"""Currency buckets tracked on every account.

Each account carries one independent balance per :class:`Currency`. Moving
value between buckets always goes through an explicit conversion with an
exchange rate; nothing here converts implicitly.
"""

from enum import Enum

from household_ledger.domain.errors import ValidationError


class Currency(str, Enum):
    """The five balance buckets of an account."""

    USD_ZELLE = "USD_ZELLE"
    USD_EFECTIVO = "USD_EFECTIVO"
    USDT = "USDT"
    CUP_EFECTIVO = "CUP_EFECTIVO"
    CUP_TRANSFERENCIA = "CUP_TRANSFERENCIA"


class CurrencyFamily(str, Enum):
    """Currency a bucket is denominated in, regardless of how it is held."""

    USD = "USD"
    USDT = "USDT"
    CUP = "CUP"


CURRENCY_FAMILIES: dict[Currency, CurrencyFamily] = {
    Currency.USD_ZELLE: CurrencyFamily.USD,
    Currency.USD_EFECTIVO: CurrencyFamily.USD,
    Currency.USDT: CurrencyFamily.USDT,
    Currency.CUP_EFECTIVO: CurrencyFamily.CUP,
    Currency.CUP_TRANSFERENCIA: CurrencyFamily.CUP,
}

USD_BUCKETS = (Currency.USD_ZELLE, Currency.USD_EFECTIVO)
CUP_BUCKETS = (Currency.CUP_EFECTIVO, Currency.CUP_TRANSFERENCIA)

# Cash stays cash and bank money stays bank money when USD income is
# converted to CUP.
CUP_CONVERSION_TARGETS: dict[Currency, Currency] = {
    Currency.USD_ZELLE: Currency.CUP_TRANSFERENCIA,
    Currency.USD_EFECTIVO: Currency.CUP_EFECTIVO,
}


def coerce_currency(value, field: str = "currency") -> Currency:
    """Return the bucket addressed by a currency code.

    Args:
        value: Currency enum member or its string code.
        field: Name of the command field, reported on failure.

    Returns:
        Currency: The matching bucket.

    Raises:
        ValidationError: If the value is missing or not one of the five codes.
    """
    if isinstance(value, Currency):
        return value
    if value is None or value == "":
        raise ValidationError(f"{field} is required", field=field)
    try:
        return Currency(str(value).strip().upper())
    except ValueError as exc:
        raise ValidationError(
            f"Unknown currency code: {value!r}",
            field=field,
        ) from exc


def currency_family(currency: Currency) -> CurrencyFamily:
    """Return the family of a bucket."""
    return CURRENCY_FAMILIES[coerce_currency(currency)]


def is_usd(currency: Currency) -> bool:
    return currency in USD_BUCKETS


def is_cup(currency: Currency) -> bool:
    return currency in CUP_BUCKETS


__all__ = [
    "Currency",
    "CurrencyFamily",
    "CURRENCY_FAMILIES",
    "USD_BUCKETS",
    "CUP_BUCKETS",
    "CUP_CONVERSION_TARGETS",
    "coerce_currency",
    "currency_family",
    "is_usd",
    "is_cup",
]
