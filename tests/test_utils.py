"""Tests for formatting and parsing helpers."""

import logging
from datetime import date, datetime
from decimal import Decimal

import pytest

from invoice_dashboard.lib import logs
from invoice_dashboard.utils import (
    format_currency,
    format_date,
    matches_query,
    parse_date,
    to_decimal,
    to_int,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2024-02-05", date(2024, 2, 5)),
        ("2024-02-05T13:45:00Z", date(2024, 2, 5)),
        ("02/05/2024", date(2024, 2, 5)),
        ("02/05/24", date(2024, 2, 5)),
        (datetime(2024, 2, 5, 9, 30), date(2024, 2, 5)),
        ("", None),
        (None, None),
        ("yesterday", None),
    ],
)
def test_parse_date(value, expected):
    assert parse_date(value) == expected


def test_format_date():
    assert format_date(date(2024, 2, 5)) == "Feb 05, 2024"
    assert format_date(None) == "N/A"


def test_format_currency_groups_thousands():
    assert format_currency(Decimal("20450")) == "USD 20,450.00"
    assert format_currency(Decimal("0.5"), "EUR") == "EUR 0.50"


def test_to_decimal_and_to_int():
    assert to_decimal(" 5.25 ") == Decimal("5.25")
    assert to_decimal("abc") is None
    assert to_decimal("nan") is None
    assert to_int("3") == 3
    assert to_int("3.5") is None


def test_matches_query():
    assert matches_query(["INV-2024-001", "Design Studio"], "studio")
    assert matches_query(["INV-2024-001"], "  ")
    assert not matches_query(["INV-2024-001", None], "acme")


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        (
            "/srv/app/src/invoice_dashboard/services/chatbot.py",
            "invoice_dashboard.services.chatbot",
        ),
        (
            "/srv/app/src/invoice_dashboard/services/__init__.py",
            "invoice_dashboard.services",
        ),
        ("/srv/app/src/invoice_dashboard/state.py", "invoice_dashboard.state"),
        ("/tmp/scratch.py", "invoice_dashboard.scratch"),
    ],
)
def test_module_name_follows_package_path(path, expected):
    assert logs.module_name(path) == expected


@pytest.mark.parametrize(
    ("env", "expected"),
    [
        ({}, logging.INFO),
        ({"LOG_LEVEL": "debug"}, logging.DEBUG),
        ({"LOG_LEVEL": "debug", "INVOICE_DASHBOARD_LOG_LEVEL": "ERROR"}, logging.ERROR),
        ({"INVOICE_DASHBOARD_LOG_LEVEL": "loud"}, logging.INFO),
    ],
)
def test_log_level_from_environment(monkeypatch, env, expected):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("INVOICE_DASHBOARD_LOG_LEVEL", raising=False)
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    assert logs.level() == expected


def test_logger_is_configured_once():
    log = logs.logger("/somewhere/invoice_dashboard/services/chatbot.py")
    assert log.name == "invoice_dashboard.services.chatbot"
    assert len(log.handlers) == 1
    assert logs.logger(log.name) is log
