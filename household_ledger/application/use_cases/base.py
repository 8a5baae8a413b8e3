"""Shared plumbing for the ledger use cases."""

from household_ledger.application.ports.ledger_repository import (
    LedgerRepositoryPort,
    LedgerUnitOfWorkPort,
)
from household_ledger.application.use_cases.ledger_engine import (
    LedgerMutationEngine,
)
from household_ledger.domain.errors import NotFoundError
from household_ledger.domain.models import Account
from household_ledger.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)


class LedgerUseCase:
    """Base class wiring a repository, loggers and the mutation engine."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
        usage_logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port opening units of work on the ledger.
            logger: Optional logger compatible with logging.Logger-like API.
            usage_logger: Optional logger for the balance mutation trail.
        """
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()

    def _engine(self, uow: LedgerUnitOfWorkPort) -> LedgerMutationEngine:
        return LedgerMutationEngine(uow, usage_logger=self._usage_logger)

    @staticmethod
    def _require_account(
        uow: LedgerUnitOfWorkPort,
        account_id: str,
        for_update: bool = False,
    ) -> Account:
        account = uow.get_account(account_id, for_update=for_update)
        if account is None:
            raise NotFoundError("Account", account_id)
        return account

    @classmethod
    def _require_member_account(
        cls,
        uow: LedgerUnitOfWorkPort,
        account_id: str,
        caller_id: str,
        for_update: bool = False,
    ) -> Account:
        """Return an account the caller belongs to.

        Raises:
            NotFoundError: If the account is absent or the caller is not a
                member of it.
        """
        account = cls._require_account(uow, account_id, for_update=for_update)
        if not uow.is_account_member(account_id, caller_id):
            raise NotFoundError("Account", account_id)
        return account

    @staticmethod
    def _lock_accounts(
        uow: LedgerUnitOfWorkPort,
        account_ids,
    ) -> dict[str, Account]:
        """Lock every account an event touches, in ascending id order.

        Entity rows (expenses, incomes, loans, debts) are locked before this
        call, account rows only through it.

        Raises:
            NotFoundError: If one of the accounts does not exist.
        """
        wanted = sorted(set(account_ids))
        locked = uow.lock_accounts(wanted)
        for account_id in wanted:
            if account_id not in locked:
                raise NotFoundError("Account", account_id)
        return locked


__all__ = ["LedgerUseCase"]
