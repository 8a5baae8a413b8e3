"""Automatic repayment of pending loans out of freshly received CUP."""

from dataclasses import replace
from decimal import Decimal
from logging import Logger

from household_ledger.application.ports.ledger_repository import (
    LedgerUnitOfWorkPort,
)
from household_ledger.application.use_cases.ledger_engine import (
    LedgerMutationEngine,
)
from household_ledger.domain.currency import CUP_BUCKETS
from household_ledger.domain.models import (
    ChangeAction,
    EntityType,
    Loan,
    TransactionType,
)
from household_ledger.utils.utils import utc_now


def lock_pending_loans(
    uow: LedgerUnitOfWorkPort,
    account_id: str,
    personal_origin_only: bool = False,
) -> list[Loan]:
    """Lock the unpaid CUP loans owed by an account, oldest first.

    Args:
        uow: Open unit of work.
        account_id: Account that received the loans.
        personal_origin_only: Only consider loans coming from non-shared
            accounts.

    Returns:
        list[Loan]: Pending loans in repayment order.
    """
    return uow.list_pending_loans_to_account(
        account_id,
        CUP_BUCKETS,
        personal_origin_only=personal_origin_only,
    )


def sweep_pending_loans(
    uow: LedgerUnitOfWorkPort,
    engine: LedgerMutationEngine,
    pending: list[Loan],
    account_id: str,
    available: Decimal,
    author_id: str,
    logger: Logger,
) -> list[Loan]:
    """Repay unpaid CUP loans owed to an account, oldest first.

    Each repayment moves value in the loan's own bucket back from the
    receiving account to the lending account, and the sweep stops once
    ``available`` is exhausted.

    Args:
        uow: Open unit of work.
        engine: Mutation engine bound to ``uow``.
        pending: Loans from :func:`lock_pending_loans`, whose lending
            accounts are already locked.
        account_id: Account that received the loans.
        available: CUP amount that may be spent on repayments.
        author_id: User credited with the repayments.
        logger: Logger for the sweep summary.

    Returns:
        list[Loan]: Loans touched by the sweep, in their updated state.
    """
    remaining = available
    repaid: list[Loan] = []
    for loan in pending:
        if remaining <= 0:
            break
        repayment = min(loan.outstanding, remaining)
        if repayment <= 0:
            continue
        engine.apply_balance_delta(account_id, loan.currency, -repayment)
        engine.apply_balance_delta(loan.from_account_id, loan.currency, repayment)
        paid_amount = loan.paid_amount + repayment
        is_paid = paid_amount >= loan.amount
        updated = replace(
            loan,
            paid_amount=paid_amount,
            is_paid=is_paid,
            paid_date=utc_now() if is_paid else loan.paid_date,
        )
        uow.update_loan(updated)
        engine.record_transaction(
            TransactionType.LOAN_PAYMENT,
            repayment,
            loan.currency,
            "Automatic loan repayment",
            loan.id,
            author_id,
            loan.from_account_id,
        )
        engine.record_change(
            ChangeAction.UPDATE,
            EntityType.LOAN,
            loan.id,
            loan,
            updated,
            author_id,
            loan_id=loan.id,
        )
        remaining -= repayment
        repaid.append(updated)
    if repaid:
        logger.info(
            f"Swept {len(repaid)} loans to account {account_id}, "
            f"repaid {available - remaining}"
        )
    return repaid


__all__ = ["lock_pending_loans", "sweep_pending_loans"]
