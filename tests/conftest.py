"""Shared fixtures for the invoice dashboard tests."""

from datetime import date
from decimal import Decimal

import pytest

from invoice_dashboard.controller import DashboardController
from invoice_dashboard.models.invoice import InvoiceDetail, InvoiceStatus, LineItem
from invoice_dashboard.services.chatbot import RuleChatResponder
from invoice_dashboard.services.invoice_service_memory import MemoryInvoiceService


def make_invoice(
    invoice_id: int,
    number: str,
    client: str = "Acme",
    items: list[tuple[int, str]] | None = None,
    status: InvoiceStatus = InvoiceStatus.PENDING,
) -> InvoiceDetail:
    """Build an InvoiceDetail with (quantity, unit price) line items."""
    items = [(1, "100.00")] if items is None else items
    return InvoiceDetail(
        id=invoice_id,
        invoice_number=number,
        client_name=client,
        issue_date=date(2024, 1, invoice_id % 28 + 1),
        line_items=[
            LineItem(
                id=index,
                item_name=f"Item {index}",
                quantity=qty,
                unit_price=Decimal(price),
            )
            for index, (qty, price) in enumerate(items, start=1)
        ],
        status=status,
    )


@pytest.fixture()
def service() -> MemoryInvoiceService:
    """Memory service over the seed invoices, without simulated latency."""
    return MemoryInvoiceService(latency=False)


@pytest.fixture()
def responder() -> RuleChatResponder:
    return RuleChatResponder(delay=0)


@pytest.fixture()
def controller(
    service: MemoryInvoiceService, responder: RuleChatResponder
) -> DashboardController:
    return DashboardController(service, responder, page_size=5)
