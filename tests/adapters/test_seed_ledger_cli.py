"""Tests for the seed_ledger_cli adapter."""

from unittest.mock import MagicMock

from household_ledger.adapters import seed_ledger_cli
from household_ledger.infrastructure.schema import accounts, categories, users


def test_main_seeds_configured_database(monkeypatch, capsys, db_port, rows):
    """The CLI should seed the household and print the principal account id."""
    monkeypatch.setattr(seed_ledger_cli, "build_database_adapter", lambda: db_port)
    monkeypatch.setattr(seed_ledger_cli, "get_app_logger", lambda: MagicMock())

    seed_ledger_cli.main()

    output = capsys.readouterr().out
    principal = [row for row in rows(accounts) if row.name == "Banco Principal"][0]
    assert f"LEDGER_PRINCIPAL_ACCOUNT_ID={principal.id}" in output
    assert "Seeded 2 members and 9 categories." in output
    assert len(rows(users)) == 2
    assert len(rows(categories)) == 9
