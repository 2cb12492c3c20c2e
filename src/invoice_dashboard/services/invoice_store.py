"""
Observable in-memory working set of invoices.

InvoiceStore is the only shared mutable resource of the in-memory variant.
It publishes a fresh immutable snapshot on every change: subscribers
receive the current snapshot as soon as they subscribe and again after
each mutation. Derived statistics are recomputed on every read.
"""

from typing import Callable, Iterable

from invoice_dashboard.lib import logs
from invoice_dashboard.models.common import InvoiceStats
from invoice_dashboard.models.invoice import InvoiceDetail

LOG = logs.logger(__file__)

Snapshot = tuple[InvoiceDetail, ...]
Subscriber = Callable[[Snapshot], None]


class InvoiceStore:
    """
    Ordered collection of invoices with publish-on-change subscriptions.

    Mutations are only possible through insert_first, replace and remove.
    """

    def __init__(self, invoices: Iterable[InvoiceDetail] = ()) -> None:
        self._invoices: Snapshot = tuple(invoices)
        self._subscribers: list[Subscriber] = []

    def snapshot(self) -> Snapshot:
        """Return the current invoices in collection order."""
        return self._invoices

    def __len__(self) -> int:
        return len(self._invoices)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback for state changes.

        The callback is invoked immediately with the current snapshot and
        then after every change.

        Returns:
            A function that removes the subscription; calling it twice is safe.
        """
        self._subscribers.append(callback)
        callback(self._invoices)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def find(self, invoice_id: int) -> InvoiceDetail | None:
        """Return the invoice with the given id, or None."""
        return next((inv for inv in self._invoices if inv.id == invoice_id), None)

    def insert_first(self, invoice: InvoiceDetail) -> None:
        """Insert an invoice at the head of the collection."""
        self._publish((invoice, *self._invoices))

    def replace(self, invoice: InvoiceDetail) -> bool:
        """
        Replace the invoice sharing the given invoice's id, keeping its position.

        Returns:
            False when no invoice with that id exists.
        """
        for index, current in enumerate(self._invoices):
            if current.id == invoice.id:
                updated = list(self._invoices)
                updated[index] = invoice
                self._publish(tuple(updated))
                return True
        return False

    def remove(self, invoice_id: int) -> bool:
        """
        Remove the invoice with the given id.

        Returns:
            True when an invoice was removed. The snapshot is republished
            either way.
        """
        remaining = tuple(inv for inv in self._invoices if inv.id != invoice_id)
        removed = len(remaining) != len(self._invoices)
        self._publish(remaining)
        return removed

    def stats(self) -> InvoiceStats:
        """Compute stats over the full working set."""
        return InvoiceStats.from_invoices(inv.summary() for inv in self._invoices)

    def _publish(self, invoices: Snapshot) -> None:
        self._invoices = invoices
        for callback in list(self._subscribers):
            try:
                callback(invoices)
            except Exception:
                LOG.error("Store subscriber failed", exc_info=True)
