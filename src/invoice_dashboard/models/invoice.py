"""
Invoice domain models and serialization helpers.

Two invoice shapes coexist:

    Invoice           simple record (number, client, amount, status, dates)
    InvoiceDetail     detailed record with ordered LineItem[] and a
                      computed total
    └── InvoiceListView   reduced projection used by the paginated list

Serialization functions convert between dataclasses and the camelCase JSON
dictionaries exchanged with the invoice API.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, List, Mapping, Sequence

from invoice_dashboard.utils import CENT, format_currency, parse_date, to_decimal


class InvoiceStatus(str, Enum):
    """Lifecycle state of a simple invoice."""

    PENDING = "Pending"
    PAID = "Paid"
    OVERDUE = "Overdue"

    @classmethod
    def parse(cls, value: Any) -> "InvoiceStatus":
        """Return the matching status, case-insensitively; Pending when unknown."""
        if isinstance(value, cls):
            return value
        normalized = str(value or "").strip().lower()
        for status in cls:
            if status.value.lower() == normalized:
                return status
        return cls.PENDING


@dataclass(slots=True)
class LineItem:
    """A single billable entry on an invoice."""

    item_name: str
    quantity: int
    unit_price: Decimal
    id: int = 0

    @property
    def line_total(self) -> Decimal:
        """Return quantity multiplied by unit price."""
        return self.quantity * self.unit_price

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "itemName": self.item_name,
            "quantity": self.quantity,
            "unitPrice": float(self.unit_price),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LineItem":
        return cls(
            id=int(data.get("id") or 0),
            item_name=data.get("itemName") or "",
            quantity=int(data.get("quantity") or 0),
            unit_price=to_decimal(data.get("unitPrice")) or Decimal("0"),
        )


@dataclass(slots=True)
class Invoice:
    """Simple invoice record with a stored amount and a status."""

    id: str
    number: str
    client: str
    amount: Decimal
    status: InvoiceStatus
    issue_date: date | None
    due_date: date | None = None

    def formatted_amount(self) -> str:
        """Return the amount formatted for display."""
        return format_currency(self.amount)


@dataclass(slots=True)
class InvoiceListView:
    """Projection of an invoice used for list display (no line items)."""

    id: int
    invoice_number: str
    client_name: str
    issue_date: date | None
    total_amount: Decimal

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "invoiceNumber": self.invoice_number,
            "clientName": self.client_name,
            "issueDate": self.issue_date.isoformat() if self.issue_date else None,
            "totalAmount": float(self.total_amount),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "InvoiceListView":
        return cls(
            id=int(data.get("id") or 0),
            invoice_number=data.get("invoiceNumber") or "",
            client_name=data.get("clientName") or "",
            issue_date=parse_date(data.get("issueDate")),
            total_amount=to_decimal(data.get("totalAmount")) or Decimal("0"),
        )


@dataclass(slots=True)
class InvoiceDetail:
    """
    Detailed invoice with ordered line items.

    The total amount is always derived from the line items and never
    stored. Status and due date are only tracked by the in-memory variant;
    the remote API ignores them.
    """

    id: int
    invoice_number: str
    client_name: str
    issue_date: date | None
    line_items: List[LineItem] = field(default_factory=list)
    status: InvoiceStatus = InvoiceStatus.PENDING
    due_date: date | None = None

    @property
    def total_amount(self) -> Decimal:
        """Return the sum of quantity times unit price over all line items."""
        return total_of(self.line_items)

    def searchable_terms(self) -> List[str]:
        """Return the terms that are matched when searching."""
        return [self.invoice_number, self.client_name, self.status.value]

    def list_view(self) -> InvoiceListView:
        """Project to the reduced list representation."""
        return InvoiceListView(
            id=self.id,
            invoice_number=self.invoice_number,
            client_name=self.client_name,
            issue_date=self.issue_date,
            total_amount=self.total_amount,
        )

    def summary(self) -> Invoice:
        """Project to the simple invoice shape."""
        return Invoice(
            id=str(self.id),
            number=self.invoice_number,
            client=self.client_name,
            amount=self.total_amount,
            status=self.status,
            issue_date=self.issue_date,
            due_date=self.due_date,
        )

    def with_id(self, invoice_id: int) -> "InvoiceDetail":
        """Return a copy carrying the given identifier."""
        return replace(self, id=invoice_id, line_items=list(self.line_items))


def serialize_invoice(invoice: InvoiceDetail) -> dict:
    """Convert an InvoiceDetail into the camelCase API payload."""
    return {
        "id": invoice.id,
        "invoiceNumber": invoice.invoice_number,
        "clientName": invoice.client_name,
        "issueDate": invoice.issue_date.isoformat() if invoice.issue_date else None,
        "totalAmount": float(invoice.total_amount),
        "invoiceDetails": [item.to_dict() for item in invoice.line_items],
    }


def deserialize_invoice(payload: Mapping[str, Any]) -> InvoiceDetail:
    """
    Convert an API payload back into an InvoiceDetail.

    Any totalAmount on the wire is ignored; the total is recomputed from
    the line items.
    """
    return InvoiceDetail(
        id=int(payload.get("id") or 0),
        invoice_number=payload.get("invoiceNumber") or "",
        client_name=payload.get("clientName") or "",
        issue_date=parse_date(payload.get("issueDate")),
        line_items=[
            LineItem.from_dict(item) for item in payload.get("invoiceDetails") or []
        ],
        status=InvoiceStatus.parse(payload.get("status")),
        due_date=parse_date(payload.get("dueDate")),
    )


def total_of(items: Sequence[LineItem]) -> Decimal:
    """Return the combined total of a sequence of line items."""
    return sum((item.line_total for item in items), Decimal("0")).quantize(CENT)
