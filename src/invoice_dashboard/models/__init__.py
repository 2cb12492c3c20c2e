"""
Data models and serialization helpers for the Invoice Dashboard.

This package provides:
- Invoice domain models (Invoice, InvoiceDetail, LineItem, InvoiceListView)
- Container models (PaginatedList, InvoiceStats, ChatMessage)
- The API envelope (ApiResponse) and controller call results (Outcome)
- Reflex view models (in reflex_models, imported only by the UI)

All domain models use Python dataclasses.
"""

from invoice_dashboard.models.common import (
    ApiResponse,
    ChatMessage,
    InvoiceStats,
    Outcome,
    PaginatedList,
)
from invoice_dashboard.models.invoice import (
    Invoice,
    InvoiceDetail,
    InvoiceListView,
    InvoiceStatus,
    LineItem,
    deserialize_invoice,
    serialize_invoice,
    total_of,
)

__all__ = [
    "ApiResponse",
    "ChatMessage",
    "Invoice",
    "InvoiceDetail",
    "InvoiceListView",
    "InvoiceStats",
    "InvoiceStatus",
    "LineItem",
    "Outcome",
    "PaginatedList",
    "deserialize_invoice",
    "serialize_invoice",
    "total_of",
]
