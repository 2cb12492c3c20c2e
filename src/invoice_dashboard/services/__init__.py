"""
Service factories for the Invoice Dashboard.

This module provides get_invoice_service() and get_chat_responder(), which
return the implementation matching the configured variant.

Available Variants:
- memory: In-memory store seeded with demo invoices and a canned assistant
- remote: HTTP clients for the invoice API and its chatbot endpoint

Instances are cached at the module level, so the same service is shared
across all sessions. Configure via the INVOICE_DASHBOARD_SERVICE
environment variable; INVOICE_DASHBOARD_LATENCY=false disables the
simulated delays of the memory variant.
"""

import os
from functools import cache
from typing import Callable, Dict

from invoice_dashboard.lib import logs
from invoice_dashboard.services.chatbot import (
    ChatResponder,
    RemoteChatResponder,
    RuleChatResponder,
)
from invoice_dashboard.services.invoice_service import InvoiceService
from invoice_dashboard.services.invoice_service_memory import MemoryInvoiceService
from invoice_dashboard.services.invoice_service_remote import (
    RemoteInvoiceService,
    build_client,
)

LOG = logs.logger(__file__)

_TRUTHY = {"1", "true", "yes"}


def _latency_enabled() -> bool:
    return os.getenv("INVOICE_DASHBOARD_LATENCY", "true").lower() in _TRUTHY


_SERVICE_REGISTRY: Dict[str, Callable[[], InvoiceService]] = {
    "memory": lambda: MemoryInvoiceService(latency=_latency_enabled()),
    "remote": lambda: RemoteInvoiceService(),
}

_RESPONDER_REGISTRY: Dict[str, Callable[[], ChatResponder]] = {
    "memory": lambda: RuleChatResponder(delay=1.0 if _latency_enabled() else 0),
    "remote": lambda: RemoteChatResponder(build_client()),
}


def _resolve_kind(kind: str | None) -> str:
    return (kind or os.getenv("INVOICE_DASHBOARD_SERVICE", "memory")).lower()


@cache
def get_invoice_service(kind: str | None = None) -> InvoiceService:
    """Return the configured invoice service implementation."""
    resolved_kind = _resolve_kind(kind)
    LOG.info("get_invoice_service - kind:%s resolved_kind:%s", kind, resolved_kind)
    try:
        factory = _SERVICE_REGISTRY[resolved_kind]
    except KeyError as exc:
        msg = f"Unknown invoice service kind: {resolved_kind}"
        raise ValueError(msg) from exc
    return factory()


@cache
def get_chat_responder(kind: str | None = None) -> ChatResponder:
    """Return the configured chat responder implementation."""
    resolved_kind = _resolve_kind(kind)
    LOG.info("get_chat_responder - kind:%s resolved_kind:%s", kind, resolved_kind)
    try:
        factory = _RESPONDER_REGISTRY[resolved_kind]
    except KeyError as exc:
        msg = f"Unknown chat responder kind: {resolved_kind}"
        raise ValueError(msg) from exc
    return factory()


__all__ = [
    "ChatResponder",
    "InvoiceService",
    "MemoryInvoiceService",
    "RemoteChatResponder",
    "RemoteInvoiceService",
    "RuleChatResponder",
    "get_chat_responder",
    "get_invoice_service",
]
