"""Fan a shared amount out to the members of a shared account."""

from dataclasses import dataclass
from decimal import Decimal
from logging import Logger

from household_ledger.application.ports.ledger_repository import (
    LedgerUnitOfWorkPort,
)
from household_ledger.domain.currency import Currency
from household_ledger.domain.models import Account, User
from household_ledger.domain.services.allocation import compute_allocations


@dataclass(frozen=True)
class MemberShare:
    """Share of a shared amount charged to one member.

    Attributes:
        user: Member the share belongs to.
        account_id: Account the share is applied to, the member's personal
            account when one exists and the shared account otherwise.
        amount: Monetary share.
        percentage: Share of the total, in percent.
    """

    user: User
    account_id: str
    amount: Decimal
    percentage: Decimal


def allocate_to_members(
    uow: LedgerUnitOfWorkPort,
    shared_account: Account,
    currency: Currency,
    amount: Decimal,
    logger: Logger,
) -> list[MemberShare]:
    """Split an amount among the members of a shared account.

    Args:
        uow: Open unit of work.
        shared_account: Account whose members carry the amount.
        currency: Bucket the amount is denominated in.
        amount: Total to distribute.
        logger: Logger used for degenerate cases.

    Returns:
        list[MemberShare]: One share per member, in membership order.
    """
    members = [member.user for member in uow.list_account_members(shared_account.id)]
    if not members:
        logger.warning(
            f"Shared account {shared_account.id} has no members; "
            "nothing to allocate"
        )
        return []
    shares = []
    for allocation in compute_allocations(members, currency, amount, logger):
        personal = uow.find_personal_account(allocation.user.id)
        shares.append(
            MemberShare(
                user=allocation.user,
                account_id=personal.id if personal else shared_account.id,
                amount=allocation.amount,
                percentage=allocation.percentage,
            )
        )
    return shares


__all__ = ["MemberShare", "allocate_to_members"]
