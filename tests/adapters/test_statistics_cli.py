"""Tests for the statistics_cli adapter."""

import json
from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock

from household_ledger.adapters import statistics_cli
from household_ledger.domain.currency import Currency
from household_ledger.domain.models import FamilyTotals, LedgerStatistics


def _statistics() -> LedgerStatistics:
    return LedgerStatistics(
        expenses=FamilyTotals(usd=Decimal("25")),
        incomes=FamilyTotals(usd=Decimal("100")),
        balance=FamilyTotals(usd=Decimal("75")),
        by_category={"Comida": FamilyTotals(cup=Decimal("300"))},
        available={Currency.USDT: Decimal("4")},
    )


def test_main_prints_statistics_as_json(monkeypatch, capsys):
    """The CLI should read its window from the environment and print JSON."""
    captured = {}

    class _UseCase:
        def __init__(self, repository, logger=None) -> None:
            captured["repository"] = repository

        def execute(self, user_id, start=None, end=None):
            captured["args"] = (user_id, start, end)
            return _statistics()

    monkeypatch.setenv("LEDGER_STATS_USER_ID", "user-1")
    monkeypatch.setenv("LEDGER_STATS_START", "2024-01-01")
    monkeypatch.delenv("LEDGER_STATS_END", raising=False)
    monkeypatch.setattr(statistics_cli, "get_app_logger", lambda: MagicMock())
    monkeypatch.setattr(statistics_cli, "build_database_adapter", lambda: "db")
    monkeypatch.setattr(
        statistics_cli,
        "build_statistics_repository",
        lambda db: f"repo:{db}",
    )
    monkeypatch.setattr(statistics_cli, "GetStatisticsUseCase", _UseCase)

    statistics_cli.main()

    payload = json.loads(capsys.readouterr().out)
    assert captured["repository"] == "repo:db"
    assert captured["args"] == ("user-1", datetime(2024, 1, 1), None)
    assert payload["balance"]["USD"] == "75"
    assert payload["by_category"]["Comida"]["CUP"] == "300"
    assert payload["available"] == {"USDT": "4"}


def test_main_requires_a_user(monkeypatch, capsys):
    logger = MagicMock()
    monkeypatch.delenv("LEDGER_STATS_USER_ID", raising=False)
    monkeypatch.setattr(statistics_cli, "get_app_logger", lambda: logger)

    statistics_cli.main()

    logger.warning.assert_called_once()
    assert capsys.readouterr().out == ""


def test_parse_datetime_warns_on_invalid_value():
    logger = MagicMock()

    assert statistics_cli._parse_datetime("yesterday", logger) is None
    logger.warning.assert_called_once()
