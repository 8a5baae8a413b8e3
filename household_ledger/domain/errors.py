"""Typed failures surfaced by ledger operations.

Every error carries a stable ``code``; translating it into a human message is
left to the calling layer.
"""

from decimal import Decimal


class LedgerError(Exception):
    """Base class for all ledger failures."""

    code = "ledger_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(LedgerError):
    """A required field is missing or malformed."""

    code = "validation_error"

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class NotFoundError(LedgerError):
    """A referenced entity is absent or not visible to the caller."""

    code = "not_found"

    def __init__(self, entity_type: str, entity_id: str | None) -> None:
        super().__init__(f"{entity_type} not found: {entity_id}")
        self.entity_type = entity_type
        self.entity_id = entity_id


class UnauthorizedError(LedgerError):
    """The caller lacks the role required for the operation."""

    code = "unauthorized"


class InsufficientFundsError(LedgerError):
    """The source bucket cannot cover the requested amount."""

    code = "insufficient_funds"

    def __init__(
        self,
        account_id: str,
        currency: str,
        available: Decimal,
        requested: Decimal,
    ) -> None:
        super().__init__(
            f"Insufficient {currency} balance on account {account_id}: "
            f"available={available}, requested={requested}"
        )
        self.account_id = account_id
        self.currency = currency
        self.available = available
        self.requested = requested


class StorageError(LedgerError):
    """The underlying store failed; the whole operation was rolled back."""

    code = "storage_error"


__all__ = [
    "LedgerError",
    "ValidationError",
    "NotFoundError",
    "UnauthorizedError",
    "InsufficientFundsError",
    "StorageError",
]
