"""Tests for the SeedHouseholdUseCase."""

from unittest.mock import MagicMock

from household_ledger.application.use_cases.seed_household import (
    DEFAULT_CATEGORIES,
    SeedHouseholdUseCase,
)
from household_ledger.domain.models import AccountRole


def test_run_creates_household(repository):
    """Members share Casa and each owns exactly one personal account."""
    logger = MagicMock()

    result = SeedHouseholdUseCase(repository, logger=logger).run()

    assert len(result.user_ids) == 2
    assert set(result.category_ids) == {name for name, _ in DEFAULT_CATEGORIES}
    with repository.unit_of_work() as uow:
        shared = uow.get_account(result.shared_account_id)
        members = uow.list_account_members(result.shared_account_id)
        assert shared.is_shared is True
        assert [m.user.id for m in members] == result.user_ids
        for user_id in result.user_ids:
            personal = uow.find_personal_account(user_id)
            assert personal.id == result.personal_account_ids[user_id]
            assert uow.is_account_member(result.principal_account_id, user_id)
        roles = {m.role for m in uow.list_account_members(result.principal_account_id)}
        assert roles == {AccountRole.MEMBER}
    logger.info.assert_called_once()
