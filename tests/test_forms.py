"""Tests for the invoice form state and validation."""

from datetime import date
from decimal import Decimal

import pytest

from invoice_dashboard.errors import ValidationError
from invoice_dashboard.forms import InvoiceForm, LineItemForm
from invoice_dashboard.models.invoice import InvoiceStatus

from conftest import make_invoice


def filled_form(**overrides) -> InvoiceForm:
    form = InvoiceForm(
        invoice_number="INV-100",
        client_name="Acme",
        issue_date="2024-03-01",
        line_items=[LineItemForm(item_name="Widget", quantity=2, unit_price="5.00")],
    )
    for name, value in overrides.items():
        setattr(form, name, value)
    return form


def test_new_form_has_one_default_row():
    form = InvoiceForm()
    assert len(form.line_items) == 1
    assert form.line_items[0].quantity == 1
    assert form.line_items[0].unit_price == Decimal("0.01")


def test_last_row_cannot_be_removed():
    form = InvoiceForm()
    assert form.remove_item(0) is False
    assert len(form.line_items) == 1


def test_added_row_can_be_removed():
    form = InvoiceForm()
    form.add_item()
    assert form.remove_item(1) is True
    assert len(form.line_items) == 1


def test_remove_out_of_range_is_ignored():
    form = InvoiceForm()
    form.add_item()
    assert form.remove_item(5) is False
    assert len(form.line_items) == 2


def test_total_recalculates_on_item_change():
    form = filled_form()
    assert form.total_amount == Decimal("10.00")

    form.set_item_field(0, "quantity", "3")
    form.add_item()
    form.set_item_field(1, "unit_price", "2.50")

    assert form.total_amount == Decimal("17.50")


def test_non_numeric_input_counts_as_zero_in_total():
    form = filled_form()
    form.set_item_field(0, "quantity", "abc")
    assert form.total_amount == Decimal("0.00")


def test_unknown_field_names_are_rejected():
    form = InvoiceForm()
    with pytest.raises(KeyError):
        form.set_field("total_amount", "1")
    with pytest.raises(KeyError):
        form.set_item_field(0, "line_total", "1")


def test_empty_form_reports_required_fields():
    errors = InvoiceForm(line_items=[LineItemForm(item_name="")]).errors()

    assert errors["invoice_number"] == "Invoice number is required"
    assert errors["client_name"] == "Client name is required"
    assert errors["issue_date"] == "Issue date is required"
    assert errors["line_items.0.item_name"] == "Item name is required"


@pytest.mark.parametrize(
    ("quantity", "message"),
    [
        ("", "Quantity is required"),
        ("1.5", "Quantity is required"),
        (0, "Quantity must be at least 1"),
    ],
)
def test_quantity_validation(quantity, message):
    form = filled_form()
    form.set_item_field(0, "quantity", quantity)
    assert form.errors()["line_items.0.quantity"] == message


def test_unit_price_minimum():
    form = filled_form()
    form.set_item_field(0, "unit_price", "0.001")
    message = form.errors()["line_items.0.unit_price"]
    assert message == "Unit price must be at least 0.01"


def test_invalid_issue_date():
    assert "issue_date" in filled_form(issue_date="not a date").errors()


def test_errors_hidden_until_touched():
    form = InvoiceForm()
    assert form.visible_errors() == {}

    form.mark_all_touched()

    assert form.visible_errors()
    assert all(item.touched for item in form.line_items)


def test_to_invoice_builds_detail():
    invoice = filled_form().to_invoice()

    assert invoice.id == 0
    assert invoice.issue_date == date(2024, 3, 1)
    assert invoice.total_amount == Decimal("10.00")
    assert invoice.line_items[0].quantity == 2


def test_to_invoice_rejects_invalid_form():
    with pytest.raises(ValidationError) as excinfo:
        InvoiceForm().to_invoice()
    assert "invoice_number" in excinfo.value.errors


def test_to_invoice_keeps_unedited_fields_of_base():
    base = make_invoice(7, "INV-7", status=InvoiceStatus.PAID)
    base.due_date = date(2024, 4, 1)

    invoice = filled_form().to_invoice(base)

    assert invoice.id == 7
    assert invoice.status is InvoiceStatus.PAID
    assert invoice.due_date == date(2024, 4, 1)
    assert invoice.invoice_number == "INV-100"


def test_patch_loads_invoice():
    form = InvoiceForm()
    form.patch(make_invoice(3, "INV-3", client="Globex", items=[(2, "5.00")]))

    assert form.invoice_number == "INV-3"
    assert form.client_name == "Globex"
    assert form.issue_date == "2024-01-04"
    assert form.total_amount == Decimal("10.00")


def test_patch_invoice_without_items_adds_default_row():
    form = InvoiceForm()
    form.patch(make_invoice(3, "INV-3", items=[]))
    assert len(form.line_items) == 1
    assert form.line_items[0].item_name == ""


def test_reset_clears_fields():
    form = filled_form()
    form.add_item()
    form.mark_all_touched()

    form.reset()

    assert form.invoice_number == ""
    assert len(form.line_items) == 1
    assert not form.touched
