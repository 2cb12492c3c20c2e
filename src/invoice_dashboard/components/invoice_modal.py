"""
Create and edit invoice dialogs.

Both dialogs share one layout: header fields, a dynamic list of line item
rows with a live total, and submit/cancel actions. `kind` selects which
form ("create" or "edit") the inputs are bound to.
"""

import reflex as rx

from invoice_dashboard.models.reflex_models import InvoiceFormModel, LineItemRowModel
from invoice_dashboard.state import DashboardState


def create_invoice_modal() -> rx.Component:
    return _invoice_modal(
        "create",
        "New Invoice",
        DashboardState.create_form,
        open_var=DashboardState.show_create_modal,
        on_open_change=DashboardState.set_create_open,
        on_submit=DashboardState.submit_create,
        submit_label="Create Invoice",
    )


def edit_invoice_modal() -> rx.Component:
    return _invoice_modal(
        "edit",
        "Edit Invoice",
        DashboardState.edit_form,
        open_var=DashboardState.show_edit_modal,
        on_open_change=DashboardState.set_edit_open,
        on_submit=DashboardState.submit_update,
        submit_label="Save Changes",
    )


def _invoice_modal(
    kind: str,
    title: str,
    form: InvoiceFormModel,
    open_var: rx.Var[bool],
    on_open_change: rx.EventHandler,
    on_submit: rx.EventHandler,
    submit_label: str,
) -> rx.Component:
    return rx.dialog.root(
        rx.dialog.content(
            rx.dialog.title(title),
            rx.cond(
                DashboardState.error_message != "",
                rx.callout(
                    DashboardState.error_message,
                    icon="triangle_alert",
                    color_scheme="red",
                    class_name="form-error",
                ),
            ),
            rx.box(
                _field(
                    kind,
                    "invoice_number",
                    "Invoice Number",
                    form.invoice_number,
                    form.invoice_number_error,
                ),
                _field(
                    kind,
                    "client_name",
                    "Client Name",
                    form.client_name,
                    form.client_name_error,
                ),
                _field(
                    kind,
                    "issue_date",
                    "Issue Date",
                    form.issue_date,
                    form.issue_date_error,
                    input_type="date",
                ),
                class_name="form-grid",
            ),
            rx.box(
                rx.hstack(
                    rx.heading("Line Items", size="2", as_="h4"),
                    rx.button(
                        rx.icon("plus", size=14),
                        "Add Item",
                        on_click=DashboardState.add_line_item(kind),
                        variant="soft",
                        size="1",
                    ),
                    justify="between",
                ),
                rx.foreach(
                    form.line_items,
                    lambda item, index: _line_item_row(
                        kind, item, index, form.can_remove_items
                    ),
                ),
                class_name="line-items",
            ),
            rx.box(
                rx.text("Total Amount", class_name="label"),
                rx.text(form.total_amount, class_name="total-value"),
                class_name="totals-row emphasize",
            ),
            rx.hstack(
                rx.dialog.close(
                    rx.button("Cancel", variant="soft", color_scheme="gray")
                ),
                rx.button(
                    submit_label, on_click=on_submit, class_name="primary-button"
                ),
                justify="end",
                spacing="3",
            ),
            max_width="720px",
        ),
        open=open_var,
        on_open_change=on_open_change,
    )


def _field(
    kind: str,
    name: str,
    label: str,
    value: rx.Var[str],
    error: rx.Var[str],
    input_type: str = "text",
) -> rx.Component:
    return rx.box(
        rx.text(label, class_name="label"),
        rx.input(
            value=value,
            type=input_type,
            on_change=lambda new_value: DashboardState.set_form_field(
                kind, name, new_value
            ),
        ),
        rx.cond(error != "", rx.text(error, class_name="field-error")),
        class_name="form-field",
    )


def _line_item_row(
    kind: str,
    item: LineItemRowModel,
    index: rx.Var[int],
    can_remove: rx.Var[bool],
) -> rx.Component:
    """Build one editable line item row."""
    return rx.box(
        _item_input(
            kind, index, "item_name", "Item name", item.item_name, item.item_name_error
        ),
        _item_input(
            kind,
            index,
            "quantity",
            "Qty",
            item.quantity,
            item.quantity_error,
            input_type="number",
        ),
        _item_input(
            kind,
            index,
            "unit_price",
            "Unit price",
            item.unit_price,
            item.unit_price_error,
            input_type="number",
        ),
        rx.text(item.line_total, class_name="line-total"),
        rx.icon_button(
            rx.icon("trash-2", size=14),
            on_click=DashboardState.remove_line_item(kind, index),
            disabled=~can_remove,
            variant="ghost",
            color_scheme="red",
            title="Remove item",
        ),
        class_name="line-item-row",
    )


def _item_input(
    kind: str,
    index: rx.Var[int],
    name: str,
    placeholder: str,
    value: rx.Var[str],
    error: rx.Var[str],
    input_type: str = "text",
) -> rx.Component:
    return rx.box(
        rx.input(
            value=value,
            type=input_type,
            placeholder=placeholder,
            on_change=lambda new_value: DashboardState.set_item_field(
                kind, index, name, new_value
            ),
        ),
        rx.cond(error != "", rx.text(error, class_name="field-error")),
        class_name=f"item-field item-{name.replace('_', '-')}",
    )
