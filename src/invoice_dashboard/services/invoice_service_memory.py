"""
In-memory implementation of InvoiceService backed by an InvoiceStore.

This service is useful for:
- Local development without the invoice API
- Testing the dashboard with realistic data
- Demonstrating the application offline

Mutations and searches await a short fixed delay to emulate network
latency; pass latency=False to disable it.
"""

import asyncio
import copy
import time

from invoice_dashboard.data.seed_invoices import SEED_INVOICES
from invoice_dashboard.errors import NotFoundError
from invoice_dashboard.lib import logs
from invoice_dashboard.models.common import InvoiceStats, PaginatedList
from invoice_dashboard.models.invoice import InvoiceDetail, InvoiceListView
from invoice_dashboard.services.invoice_service import InvoiceService
from invoice_dashboard.services.invoice_store import InvoiceStore
from invoice_dashboard.utils import matches_query

LOG = logs.logger(__file__)


class MemoryInvoiceService(InvoiceService):
    """
    Invoice service over an in-process observable store.

    Attributes:
        store: The working set; subscribe to it to observe changes.
    """

    _MUTATION_DELAY = 0.5
    _SEARCH_DELAY = 0.3

    def __init__(
        self,
        invoices: list[InvoiceDetail] | None = None,
        latency: bool = True,
    ) -> None:
        """
        Initialize with invoice data.

        Args:
            invoices: Initial working set, or None to use SEED_INVOICES.
            latency: Whether to simulate network delays.
        """
        seed = SEED_INVOICES if invoices is None else invoices
        self.store = InvoiceStore(copy.deepcopy(seed))
        self._latency = latency
        self._last_id = 0

    async def list_paginated(
        self, page_index: int = 0, page_size: int = 10
    ) -> PaginatedList[InvoiceListView]:
        views = [inv.list_view() for inv in self.store.snapshot()]
        return PaginatedList.from_records(views, page_index, page_size)

    async def get_by_id(self, invoice_id: int) -> InvoiceDetail:
        invoice = self.store.find(invoice_id)
        if invoice is None:
            raise NotFoundError(invoice_id)
        return copy.deepcopy(invoice)

    async def create(self, invoice: InvoiceDetail) -> InvoiceDetail:
        created = copy.deepcopy(invoice).with_id(self._next_id())
        self.store.insert_first(created)
        LOG.info("Created invoice %s (%s)", created.id, created.invoice_number)
        await self._delay(self._MUTATION_DELAY)
        return copy.deepcopy(created)

    async def update(self, invoice_id: int, invoice: InvoiceDetail) -> InvoiceDetail:
        updated = copy.deepcopy(invoice).with_id(invoice_id)
        if not self.store.replace(updated):
            raise NotFoundError(invoice_id)
        LOG.info("Updated invoice %s", invoice_id)
        await self._delay(self._MUTATION_DELAY)
        return copy.deepcopy(updated)

    async def delete(self, invoice_id: int) -> bool:
        """
        Remove an invoice.

        Deleting an id that is not present leaves the collection untouched
        and still reports success.
        """
        if not self.store.remove(invoice_id):
            LOG.warning("Delete of unknown invoice %s ignored", invoice_id)
        await self._delay(self._MUTATION_DELAY)
        return True

    async def search(self, query: str) -> list[InvoiceListView]:
        """Match the query against invoice number, client name and status."""
        matches = [
            inv.list_view()
            for inv in self.store.snapshot()
            if matches_query(inv.searchable_terms(), query)
        ]
        await self._delay(self._SEARCH_DELAY)
        return matches

    async def stats(self) -> InvoiceStats:
        """Return stats over the full working set, including status counts."""
        return self.store.stats()

    def _next_id(self) -> int:
        """Return a millisecond timestamp, bumped so ids never repeat."""
        candidate = time.time_ns() // 1_000_000
        self._last_id = max(candidate, self._last_id + 1)
        return self._last_id

    async def _delay(self, seconds: float) -> None:
        if self._latency:
            await asyncio.sleep(seconds)
