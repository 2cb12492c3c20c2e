"""
Invoice create/edit form state.

An InvoiceForm is an ordered, mutable record of the header fields plus a
list of LineItemForm rows. Values are kept exactly as typed so that
invalid input can be shown back to the user; validation and conversion to
an InvoiceDetail happen on demand.

Invariant: a form always holds at least one line item row.
"""

from dataclasses import dataclass, field, replace
from decimal import Decimal

from invoice_dashboard.errors import ValidationError
from invoice_dashboard.models.invoice import InvoiceDetail, LineItem
from invoice_dashboard.utils import CENT, parse_date, to_decimal, to_int

MIN_QUANTITY = 1
MIN_UNIT_PRICE = Decimal("0.01")

HEADER_FIELDS = ("invoice_number", "client_name", "issue_date")
ITEM_FIELDS = ("item_name", "quantity", "unit_price")


@dataclass
class LineItemForm:
    """One editable line item row."""

    item_name: str = ""
    quantity: object = MIN_QUANTITY
    unit_price: object = MIN_UNIT_PRICE
    id: int = 0
    touched: bool = False

    @classmethod
    def from_line_item(cls, item: LineItem) -> "LineItemForm":
        return cls(
            item_name=item.item_name,
            quantity=item.quantity,
            unit_price=item.unit_price,
            id=item.id,
        )

    @property
    def line_total(self) -> Decimal:
        """Return quantity times unit price, treating non-numeric input as zero."""
        quantity = to_decimal(self.quantity) or Decimal("0")
        unit_price = to_decimal(self.unit_price) or Decimal("0")
        return quantity * unit_price

    def errors(self) -> dict[str, str]:
        """Return validation messages keyed by field name."""
        errors: dict[str, str] = {}
        if not str(self.item_name or "").strip():
            errors["item_name"] = "Item name is required"
        quantity = to_int(self.quantity)
        if quantity is None:
            errors["quantity"] = "Quantity is required"
        elif quantity < MIN_QUANTITY:
            errors["quantity"] = f"Quantity must be at least {MIN_QUANTITY}"
        unit_price = to_decimal(self.unit_price)
        if unit_price is None:
            errors["unit_price"] = "Unit price is required"
        elif unit_price < MIN_UNIT_PRICE:
            errors["unit_price"] = f"Unit price must be at least {MIN_UNIT_PRICE}"
        return errors

    def to_line_item(self) -> LineItem:
        """Convert a valid row; call errors() first."""
        return LineItem(
            id=self.id,
            item_name=str(self.item_name).strip(),
            quantity=to_int(self.quantity),
            unit_price=to_decimal(self.unit_price),
        )


@dataclass
class InvoiceForm:
    """Header fields and line item rows of the create or edit modal."""

    invoice_number: str = ""
    client_name: str = ""
    issue_date: str = ""
    line_items: list[LineItemForm] = field(default_factory=lambda: [LineItemForm()])
    touched: bool = False

    def reset(self) -> None:
        """Clear every field and leave a single default row."""
        self.invoice_number = ""
        self.client_name = ""
        self.issue_date = ""
        self.line_items = [LineItemForm()]
        self.touched = False

    def patch(self, invoice: InvoiceDetail) -> None:
        """
        Load an existing invoice into the form.

        An invoice without line items gets one default row.
        """
        self.invoice_number = invoice.invoice_number
        self.client_name = invoice.client_name
        self.issue_date = invoice.issue_date.isoformat() if invoice.issue_date else ""
        self.line_items = [
            LineItemForm.from_line_item(item) for item in invoice.line_items
        ] or [LineItemForm()]
        self.touched = False

    def set_field(self, name: str, value: str) -> None:
        if name not in HEADER_FIELDS:
            raise KeyError(name)
        setattr(self, name, value)

    def set_item_field(self, index: int, name: str, value: object) -> None:
        if name not in ITEM_FIELDS:
            raise KeyError(name)
        setattr(self.line_items[index], name, value)

    def add_item(self) -> None:
        """Append a default row."""
        self.line_items.append(LineItemForm())

    def remove_item(self, index: int) -> bool:
        """
        Remove the row at index.

        Returns:
            False, leaving the rows untouched, when only one row remains or
            the index is out of range.
        """
        if len(self.line_items) <= 1 or not 0 <= index < len(self.line_items):
            return False
        del self.line_items[index]
        return True

    @property
    def total_amount(self) -> Decimal:
        """Return the sum of every row's quantity times unit price."""
        total = sum((item.line_total for item in self.line_items), Decimal("0"))
        return total.quantize(CENT)

    def errors(self) -> dict[str, str]:
        """Return validation messages keyed by field path."""
        errors: dict[str, str] = {}
        if not self.invoice_number.strip():
            errors["invoice_number"] = "Invoice number is required"
        if not self.client_name.strip():
            errors["client_name"] = "Client name is required"
        if not self.issue_date.strip():
            errors["issue_date"] = "Issue date is required"
        elif parse_date(self.issue_date) is None:
            errors["issue_date"] = "Issue date is not a valid date"
        if not self.line_items:
            errors["line_items"] = "At least one line item is required"
        for index, item in enumerate(self.line_items):
            for name, message in item.errors().items():
                errors[f"line_items.{index}.{name}"] = message
        return errors

    @property
    def is_valid(self) -> bool:
        return not self.errors()

    def visible_errors(self) -> dict[str, str]:
        """Return the errors of touched fields only."""
        if not self.touched:
            return {}
        return self.errors()

    def mark_all_touched(self) -> None:
        """Mark the form and every row as touched so their errors are shown."""
        self.touched = True
        for item in self.line_items:
            item.touched = True

    def to_invoice(self, base: InvoiceDetail | None = None) -> InvoiceDetail:
        """
        Build the invoice described by the form.

        Fields the form does not edit (id, status, due date) are taken from
        base when given.

        Raises:
            ValidationError: If any field is invalid.
        """
        errors = self.errors()
        if errors:
            raise ValidationError(errors)
        values = dict(
            invoice_number=self.invoice_number.strip(),
            client_name=self.client_name.strip(),
            issue_date=parse_date(self.issue_date),
            line_items=[item.to_line_item() for item in self.line_items],
        )
        if base is None:
            return InvoiceDetail(id=0, **values)
        return replace(base, **values)
