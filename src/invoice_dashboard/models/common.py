"""
Common state models for the Invoice Dashboard.

This module defines the shared containers that flow between the access
layer, the controller and the view:

- Paginated lists with derived navigation metadata
- Aggregate invoice statistics
- Chat transcript messages
- The API response envelope
- Explicit call outcomes returned by controller actions

Paginated lists include to_dict/from_dict methods for the camelCase JSON
used by the invoice API.
"""

import math
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Generic, Iterable, Mapping, Sequence, TypeVar

from invoice_dashboard.errors import ApiError
from invoice_dashboard.models.invoice import Invoice, InvoiceListView, InvoiceStatus

T = TypeVar("T")


@dataclass
class PaginatedList(Generic[T]):
    """
    A bounded page of records plus metadata for navigating further pages.

    Attributes:
        items: Records on this page.
        page_index: Current page (0-indexed).
        page_size: Maximum number of records per page.
        total_count: Total number of records across all pages.
    """

    items: list[T] = field(default_factory=list)
    page_index: int = 0
    page_size: int = 10
    total_count: int = 0

    @property
    def total_pages(self) -> int:
        """Return ceil(total_count / page_size)."""
        if self.page_size <= 0:
            return 0
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_previous_page(self) -> bool:
        """Return True when a page precedes this one."""
        return self.page_index > 0

    @property
    def has_next_page(self) -> bool:
        """Return True when a page follows this one."""
        return self.page_index < self.total_pages - 1

    @classmethod
    def from_records(
        cls, records: Sequence[T], page_index: int, page_size: int
    ) -> "PaginatedList[T]":
        """Cut a single page out of an ordered sequence of records."""
        page_index, page_size = max(page_index, 0), max(page_size, 1)
        start = page_index * page_size
        return cls(
            items=list(records[start : start + page_size]),
            page_index=page_index,
            page_size=page_size,
            total_count=len(records),
        )

    def to_dict(self, item_to_dict: Callable[[T], dict]) -> dict:
        """Serialize to the camelCase structure returned by the API."""
        return {
            "items": [item_to_dict(item) for item in self.items],
            "pageIndex": self.page_index,
            "pageSize": self.page_size,
            "totalCount": self.total_count,
            "totalPages": self.total_pages,
            "hasPreviousPage": self.has_previous_page,
            "hasNextPage": self.has_next_page,
        }

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any] | None,
        item_from_dict: Callable[[Mapping[str, Any]], T],
    ) -> "PaginatedList[T]":
        """
        Deserialize from the API structure.

        totalPages and the has-previous/has-next flags on the wire are
        ignored; they are always derived from the counts.
        """
        if not data:
            return cls()
        return cls(
            items=[item_from_dict(item) for item in data.get("items") or []],
            page_index=int(data.get("pageIndex") or 0),
            page_size=int(data.get("pageSize") or 10),
            total_count=int(data.get("totalCount") or 0),
        )


@dataclass
class InvoiceStats:
    """
    Aggregate totals over a set of invoices.

    Attributes:
        total_invoices: Number of invoices.
        total_amount: Summed invoice amount.
        pending: Number of pending invoices (simple shape only).
        overdue: Number of overdue invoices (simple shape only).
    """

    total_invoices: int = 0
    total_amount: Decimal = Decimal("0")
    pending: int = 0
    overdue: int = 0

    @classmethod
    def from_invoices(cls, invoices: Iterable[Invoice]) -> "InvoiceStats":
        """Compute stats over a full set of simple invoices."""
        invoices = list(invoices)
        return cls(
            total_invoices=len(invoices),
            total_amount=sum((inv.amount for inv in invoices), Decimal("0")),
            pending=sum(1 for inv in invoices if inv.status is InvoiceStatus.PENDING),
            overdue=sum(1 for inv in invoices if inv.status is InvoiceStatus.OVERDUE),
        )

    @classmethod
    def from_page(cls, page: PaginatedList[InvoiceListView]) -> "InvoiceStats":
        """
        Compute stats from a loaded page.

        The count is the overall total but the amount only covers the
        items on this page, so it undercounts whenever there is more than
        one page.
        """
        return cls(
            total_invoices=page.total_count,
            total_amount=sum((inv.total_amount for inv in page.items), Decimal("0")),
        )


@dataclass
class ChatMessage:
    """A single entry of the chat transcript."""

    text: str
    is_user: bool = False
    timestamp: datetime = field(default_factory=datetime.now)
    id: str = field(default_factory=lambda: uuid.uuid4().hex)


@dataclass
class ApiResponse(Generic[T]):
    """
    Envelope wrapping every invoice API payload.

    Attributes:
        data: The payload, already converted by the caller's factory.
        success: Whether the server handled the request.
        message: Optional server message, usually set on failure.
    """

    data: T | None = None
    success: bool = False
    message: str | None = None

    def unwrap(self) -> T:
        """Return the payload, raising ApiError when the call did not succeed."""
        if not self.success:
            raise ApiError(self.message or "The server reported a failure")
        return self.data


@dataclass
class Outcome(Generic[T]):
    """
    Explicit result of a controller action.

    Exactly one of value or error is meaningful, depending on ok.
    """

    ok: bool
    value: T | None = None
    error: Exception | None = None

    @classmethod
    def success(cls, value: T | None = None) -> "Outcome[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: Exception) -> "Outcome[T]":
        return cls(ok=False, error=error)

    @property
    def error_message(self) -> str | None:
        """Return the error text for display, or None on success."""
        return str(self.error) if self.error else None
