"""Tests for infrastructure settings."""

from household_ledger.infrastructure import settings as settings_module
from household_ledger.infrastructure.settings import LedgerSettings


def test_from_env_reads_principal_account(monkeypatch) -> None:
    """The principal account id should come from the environment."""
    monkeypatch.setattr(settings_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setenv("LEDGER_PRINCIPAL_ACCOUNT_ID", "  bank-1 ")

    settings = LedgerSettings.from_env()

    assert settings.principal_account_id == "bank-1"


def test_from_env_blank_principal_is_none(monkeypatch) -> None:
    """A blank value should leave the principal account unset."""
    monkeypatch.setattr(settings_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setenv("LEDGER_PRINCIPAL_ACCOUNT_ID", "")

    settings = LedgerSettings.from_env()

    assert settings.principal_account_id is None
