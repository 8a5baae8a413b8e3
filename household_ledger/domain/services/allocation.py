"""Proportional allocation of a shared amount among household members.

Weights come from each member's configured monthly income in the currency
family of the amount. When nobody has configured an income in that family the
members' ``income_percentage`` is used instead, and when those are all zero
every share is zero.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from logging import Logger

from household_ledger.domain.currency import Currency, currency_family
from household_ledger.domain.models.accounts import User


ZERO = Decimal("0")
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class Allocation:
    """Share of one member.

    Attributes:
        user: Member receiving the share.
        amount: Monetary share.
        percentage: Share of the total, in percent.
    """

    user: User
    amount: Decimal
    percentage: Decimal


def allocation_weights(
    members: Sequence[User],
    currency: Currency,
) -> list[Decimal]:
    """Return the weight of each member for a currency.

    Args:
        members: Members of the shared account.
        currency: Bucket the amount is denominated in.

    Returns:
        list[Decimal]: Monthly incomes in the currency family, or the income
        percentages when no member has a positive income configured.
    """
    family = currency_family(currency)
    incomes = [max(member.monthly_income_for(family), ZERO) for member in members]
    if sum(incomes, ZERO) > 0:
        return incomes
    return [max(member.income_percentage, ZERO) for member in members]


def compute_allocations(
    members: Sequence[User],
    currency: Currency,
    amount: Decimal,
    logger: Logger | None = None,
) -> list[Allocation]:
    """Split an amount among members proportionally to their weights.

    Args:
        members: Members of the shared account, in a stable order.
        currency: Bucket the amount is denominated in.
        amount: Total to distribute.
        logger: Optional logger used for degenerate cases.

    Returns:
        list[Allocation]: One allocation per member, in input order. Shares
        sum to ``amount`` whenever at least one weight is positive.
    """
    weights = allocation_weights(members, currency)
    total = sum(weights, ZERO)
    if total <= 0:
        if logger is not None and members:
            logger.warning(
                f"No income or percentage configured for {currency.value}; "
                f"allocating zero to {len(members)} members"
            )
        return [Allocation(user=m, amount=ZERO, percentage=ZERO) for m in members]
    return [
        Allocation(
            user=member,
            amount=amount * weight / total,
            percentage=weight * HUNDRED / total,
        )
        for member, weight in zip(members, weights)
    ]


__all__ = ["Allocation", "allocation_weights", "compute_allocations"]
