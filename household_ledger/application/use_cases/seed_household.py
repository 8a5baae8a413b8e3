"""Use case seeding a demo household into an empty ledger.

The household has two members, one personal account each, a shared "Casa"
account both belong to, a principal bank account used by the USD to CUP
income path, and the default expense categories.
"""

from dataclasses import dataclass
from decimal import Decimal

from household_ledger.application.ports.ledger_repository import (
    LedgerRepositoryPort,
)
from household_ledger.domain.models import Account, AccountRole, Category, User
from household_ledger.infrastructure.logging.logger import get_app_logger
from household_ledger.utils.utils import new_id, utc_now


DEFAULT_CATEGORIES = (
    ("Casa", "#f97316"),
    ("Comida", "#22c55e"),
    ("Transporte", "#3b82f6"),
    ("Entretenimiento", "#a855f7"),
    ("Salud", "#ef4444"),
    ("Recarga", "#14b8a6"),
    ("Remesa", "#eab308"),
    ("Servicios", "#64748b"),
    ("Otros", "#9ca3af"),
)

DEFAULT_MEMBERS = (
    {
        "name": "Ana",
        "email": "ana@example.com",
        "income_percentage": Decimal("60"),
        "monthly_income_usd": Decimal("600"),
    },
    {
        "name": "Ben",
        "email": "ben@example.com",
        "income_percentage": Decimal("40"),
        "monthly_income_usd": Decimal("200"),
    },
)


@dataclass(frozen=True)
class SeedHouseholdResult:
    """Identifiers created by a seed run.

    Attributes:
        user_ids: Member ids, in creation order.
        personal_account_ids: Personal account id per member id.
        shared_account_id: Id of the shared "Casa" account.
        principal_account_id: Id of the principal bank account.
        category_ids: Category id per category name.
    """

    user_ids: list[str]
    personal_account_ids: dict[str, str]
    shared_account_id: str
    principal_account_id: str
    category_ids: dict[str, str]


class SeedHouseholdUseCase:
    """Create the demo household in one unit of work."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
        members: tuple[dict, ...] = DEFAULT_MEMBERS,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port opening units of work on the ledger.
            logger: Optional logger compatible with logging.Logger-like API.
            members: User fields of each member to create.
        """
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()
        self._members = members

    def run(self) -> SeedHouseholdResult:
        """Insert users, accounts, memberships and categories.

        Returns:
            SeedHouseholdResult: Identifiers of everything created.
        """
        now = utc_now()
        user_ids: list[str] = []
        personal_account_ids: dict[str, str] = {}
        shared = Account(id=new_id(), name="Casa", is_shared=True, created_at=now)
        principal = Account(id=new_id(), name="Banco Principal", created_at=now)
        category_ids: dict[str, str] = {}

        with self._ledger_repository.unit_of_work() as uow:
            uow.add_account(shared)
            uow.add_account(principal)
            for fields in self._members:
                user = User(id=new_id(), created_at=now, **fields)
                uow.add_user(user)
                personal = Account(
                    id=new_id(),
                    name=f"Personal {user.name}",
                    created_at=now,
                )
                uow.add_account(personal)
                uow.add_account_member(personal.id, user.id, AccountRole.OWNER)
                uow.add_account_member(shared.id, user.id, AccountRole.MEMBER)
                uow.add_account_member(principal.id, user.id, AccountRole.MEMBER)
                user_ids.append(user.id)
                personal_account_ids[user.id] = personal.id
            for name, color in DEFAULT_CATEGORIES:
                category = Category(id=new_id(), name=name, color=color)
                uow.add_category(category)
                category_ids[name] = category.id

        self._logger.info(
            f"Seeded household: {len(user_ids)} members, "
            f"{len(category_ids)} categories"
        )
        return SeedHouseholdResult(
            user_ids=user_ids,
            personal_account_ids=personal_account_ids,
            shared_account_id=shared.id,
            principal_account_id=principal.id,
            category_ids=category_ids,
        )


__all__ = ["SeedHouseholdUseCase", "SeedHouseholdResult", "DEFAULT_CATEGORIES"]
