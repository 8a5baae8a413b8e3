"""Domain validation helpers for command fields."""

from decimal import Decimal
from enum import Enum
from typing import TypeVar

from household_ledger.domain.errors import ValidationError
from household_ledger.utils.decimal_utils import coerce_decimal


E = TypeVar("E", bound=Enum)


def require_text(field: str, value: str | None) -> str:
    """Return a stripped, non-empty string or raise.

    Args:
        field: Command field name.
        value: Raw value.

    Returns:
        str: The stripped value.

    Raises:
        ValidationError: If the value is missing or blank.
    """
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} is required", field=field)
    return str(value).strip()


def require_positive_amount(field: str, value) -> Decimal:
    """Return a strictly positive Decimal or raise.

    Args:
        field: Command field name.
        value: Raw numeric value.

    Returns:
        Decimal: Normalized amount.

    Raises:
        ValidationError: If the value is missing, not numeric or not > 0.
    """
    if value is None or value == "":
        raise ValidationError(f"{field} is required", field=field)
    try:
        amount = coerce_decimal(value)
    except ValueError as exc:
        raise ValidationError(f"{field} must be numeric", field=field) from exc
    if not amount.is_finite() or amount <= 0:
        raise ValidationError(f"{field} must be greater than zero", field=field)
    return amount


def optional_positive_amount(field: str, value) -> Decimal | None:
    if value is None:
        return None
    return require_positive_amount(field, value)


def coerce_enum(enum_cls: type[E], field: str, value) -> E:
    """Return the enum member named by a raw value or raise.

    Args:
        enum_cls: Target enum class.
        field: Command field name.
        value: Enum member or its string value.

    Returns:
        Enum: The matching member.

    Raises:
        ValidationError: If the value is missing or unknown.
    """
    if isinstance(value, enum_cls):
        return value
    if value is None or value == "":
        raise ValidationError(f"{field} is required", field=field)
    try:
        return enum_cls(str(value).strip().upper())
    except ValueError as exc:
        raise ValidationError(
            f"Invalid {field}: {value!r}",
            field=field,
        ) from exc


__all__ = [
    "require_text",
    "require_positive_amount",
    "optional_positive_amount",
    "coerce_enum",
]
