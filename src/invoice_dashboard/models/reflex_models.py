"""
Reflex-compatible view models for the Invoice Dashboard.

These models extend rx.Base so they can be used with rx.foreach and other
Reflex reactive components. Money and dates are preformatted strings;
form values stay as typed.
"""

import reflex as rx

from invoice_dashboard.forms import InvoiceForm, LineItemForm
from invoice_dashboard.models.common import ChatMessage, InvoiceStats
from invoice_dashboard.models.invoice import InvoiceListView
from invoice_dashboard.utils import format_currency, format_date


class InvoiceRowModel(rx.Base):
    """One row of the invoice table."""

    id: int = 0
    invoice_number: str = ""
    client_name: str = ""
    issue_date: str = ""
    total_amount: str = ""


class StatsModel(rx.Base):
    """Stat cards above the table."""

    total_invoices: int = 0
    total_amount: str = format_currency(0)
    pending: int = 0
    overdue: int = 0


class LineItemRowModel(rx.Base):
    """One editable line item row with its validation messages."""

    item_name: str = ""
    quantity: str = "1"
    unit_price: str = "0.01"
    line_total: str = ""
    item_name_error: str = ""
    quantity_error: str = ""
    unit_price_error: str = ""


class InvoiceFormModel(rx.Base):
    """Create or edit modal form."""

    invoice_number: str = ""
    client_name: str = ""
    issue_date: str = ""
    line_items: list[LineItemRowModel] = []
    total_amount: str = format_currency(0)
    invoice_number_error: str = ""
    client_name_error: str = ""
    issue_date_error: str = ""
    can_remove_items: bool = False


class ChatMessageModel(rx.Base):
    """Chat transcript entry."""

    id: str = ""
    text: str = ""
    is_user: bool = False
    time: str = ""


def invoice_row_model(invoice: InvoiceListView) -> InvoiceRowModel:
    return InvoiceRowModel(
        id=invoice.id,
        invoice_number=invoice.invoice_number,
        client_name=invoice.client_name,
        issue_date=format_date(invoice.issue_date),
        total_amount=format_currency(invoice.total_amount),
    )


def stats_model(stats: InvoiceStats) -> StatsModel:
    return StatsModel(
        total_invoices=stats.total_invoices,
        total_amount=format_currency(stats.total_amount),
        pending=stats.pending,
        overdue=stats.overdue,
    )


def _line_item_model(item: LineItemForm) -> LineItemRowModel:
    errors = item.errors() if item.touched else {}
    return LineItemRowModel(
        item_name=str(item.item_name or ""),
        quantity=str(item.quantity if item.quantity is not None else ""),
        unit_price=str(item.unit_price if item.unit_price is not None else ""),
        line_total=format_currency(item.line_total),
        item_name_error=errors.get("item_name", ""),
        quantity_error=errors.get("quantity", ""),
        unit_price_error=errors.get("unit_price", ""),
    )


def invoice_form_model(form: InvoiceForm) -> InvoiceFormModel:
    """
    Convert form state to its view model.

    Validation messages are only filled in once the form has been touched.
    """
    errors = form.visible_errors()
    return InvoiceFormModel(
        invoice_number=form.invoice_number,
        client_name=form.client_name,
        issue_date=form.issue_date,
        line_items=[_line_item_model(item) for item in form.line_items],
        total_amount=format_currency(form.total_amount),
        invoice_number_error=errors.get("invoice_number", ""),
        client_name_error=errors.get("client_name", ""),
        issue_date_error=errors.get("issue_date", ""),
        can_remove_items=len(form.line_items) > 1,
    )


def chat_message_model(message: ChatMessage) -> ChatMessageModel:
    return ChatMessageModel(
        id=message.id,
        text=message.text,
        is_user=message.is_user,
        time=message.timestamp.strftime("%H:%M"),
    )
