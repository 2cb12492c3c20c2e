"""
Abstract base class defining the invoice data access contract.

All invoice service implementations extend InvoiceService and provide the
CRUD and paging methods. Every method is a coroutine so callers can await
remote and simulated-latency implementations alike.

Implementations:
- MemoryInvoiceService: Observable in-memory store seeded with demo invoices
- RemoteInvoiceService: HTTP client for the invoice API
"""

from abc import ABC, abstractmethod

from invoice_dashboard.models.common import InvoiceStats, PaginatedList
from invoice_dashboard.models.invoice import InvoiceDetail, InvoiceListView
from invoice_dashboard.utils import matches_query


class InvoiceService(ABC):
    """
    Abstract base class for invoice data access.

    Subclasses must implement paging, lookup and mutation. search() and
    stats() have default implementations built on list_paginated().
    """

    _SEARCH_PAGE_SIZE = 100

    @abstractmethod
    async def list_paginated(
        self, page_index: int = 0, page_size: int = 10
    ) -> PaginatedList[InvoiceListView]:
        """
        Return one page of invoices in list form.

        Args:
            page_index: Page number (0-indexed).
            page_size: Number of items per page.

        Raises:
            NetworkError: If the remote call fails.
        """

    @abstractmethod
    async def get_by_id(self, invoice_id: int) -> InvoiceDetail:
        """
        Return the detailed invoice.

        Raises:
            NotFoundError: If no invoice matches.
        """

    @abstractmethod
    async def create(self, invoice: InvoiceDetail) -> InvoiceDetail:
        """Persist a new invoice and return it with its assigned id."""

    @abstractmethod
    async def update(self, invoice_id: int, invoice: InvoiceDetail) -> InvoiceDetail:
        """
        Replace an existing invoice.

        Raises:
            NotFoundError: If no invoice matches.
        """

    @abstractmethod
    async def delete(self, invoice_id: int) -> bool:
        """Remove an invoice and return True on success."""

    async def search(self, query: str) -> list[InvoiceListView]:
        """
        Return invoices whose number or client name contains the query.

        The default implementation walks every page; matches keep their
        collection order.
        """
        matches: list[InvoiceListView] = []
        page_index = 0
        while True:
            page = await self.list_paginated(page_index, self._SEARCH_PAGE_SIZE)
            matches.extend(
                inv
                for inv in page.items
                if matches_query((inv.invoice_number, inv.client_name), query)
            )
            if not page.has_next_page:
                return matches
            page_index += 1

    async def stats(self) -> InvoiceStats:
        """
        Return stats derived from the first page.

        Backends without a stats endpoint only expose page totals, so the
        amount undercounts when there is more than one page.
        """
        page = await self.list_paginated(0, self._SEARCH_PAGE_SIZE)
        return InvoiceStats.from_page(page)

    async def close(self) -> None:
        """Release any resources held by the service."""
