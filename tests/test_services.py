"""Tests for the service factories."""

import pytest

from invoice_dashboard import services
from invoice_dashboard.services import (
    MemoryInvoiceService,
    RemoteChatResponder,
    RemoteInvoiceService,
    RuleChatResponder,
    get_chat_responder,
    get_invoice_service,
)


@pytest.fixture(autouse=True)
def clear_factory_cache():
    get_invoice_service.cache_clear()
    get_chat_responder.cache_clear()
    yield
    get_invoice_service.cache_clear()
    get_chat_responder.cache_clear()


def test_memory_is_the_default(monkeypatch):
    monkeypatch.delenv("INVOICE_DASHBOARD_SERVICE", raising=False)

    assert isinstance(get_invoice_service(), MemoryInvoiceService)
    assert isinstance(get_chat_responder(), RuleChatResponder)


def test_service_is_cached():
    assert get_invoice_service("memory") is get_invoice_service("memory")


def test_remote_kind_from_environment(monkeypatch):
    monkeypatch.setenv("INVOICE_DASHBOARD_SERVICE", "remote")

    assert isinstance(get_invoice_service(), RemoteInvoiceService)
    assert isinstance(get_chat_responder(), RemoteChatResponder)


def test_latency_can_be_disabled(monkeypatch):
    monkeypatch.setenv("INVOICE_DASHBOARD_LATENCY", "false")
    assert not services._latency_enabled()


def test_unknown_kind_raises():
    with pytest.raises(ValueError, match="Unknown invoice service kind: ledger"):
        get_invoice_service("ledger")
    with pytest.raises(ValueError, match="Unknown chat responder kind: ledger"):
        get_chat_responder("ledger")
