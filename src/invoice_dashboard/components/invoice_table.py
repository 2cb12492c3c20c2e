"""
Invoice table component.

Displays stat cards, the current page of invoices with edit/delete
actions, pagination controls, and loading, empty and error states.
"""

import reflex as rx

from invoice_dashboard.models.reflex_models import InvoiceRowModel
from invoice_dashboard.state import DashboardState


def stats_cards() -> rx.Component:
    """Build the row of aggregate stat cards."""
    return rx.box(
        _stat_card("file-text", "Total Invoices", DashboardState.stats.total_invoices),
        _stat_card("dollar-sign", "Total Amount", DashboardState.stats.total_amount),
        _stat_card("clock", "Pending", DashboardState.stats.pending),
        _stat_card("triangle-alert", "Overdue", DashboardState.stats.overdue),
        class_name="stats-grid",
    )


def invoice_table() -> rx.Component:
    """
    Build the invoice table card.

    Returns:
        The table container with header actions and pagination.
    """
    return rx.box(
        rx.box(
            rx.heading("Invoices", size="4", as_="h2"),
            rx.button(
                rx.icon("plus", size=16),
                "New Invoice",
                on_click=DashboardState.open_create_modal,
                class_name="primary-button",
            ),
            class_name="card-header",
        ),
        rx.cond(DashboardState.error_message != "", _error_banner()),
        rx.cond(
            DashboardState.is_loading,
            _loader(),
            rx.cond(DashboardState.is_empty, _empty(), _table()),
        ),
        _pagination(),
        class_name="card table-card",
    )


def _table() -> rx.Component:
    return rx.table.root(
        rx.table.header(
            rx.table.row(
                rx.table.column_header_cell("Invoice #"),
                rx.table.column_header_cell("Client"),
                rx.table.column_header_cell("Issue Date"),
                rx.table.column_header_cell("Total"),
                rx.table.column_header_cell(""),
            )
        ),
        rx.table.body(rx.foreach(DashboardState.invoices, _row)),
        width="100%",
    )


def _row(invoice: InvoiceRowModel) -> rx.Component:
    return rx.table.row(
        rx.table.cell(invoice.invoice_number, class_name="mono"),
        rx.table.cell(invoice.client_name),
        rx.table.cell(invoice.issue_date),
        rx.table.cell(invoice.total_amount, class_name="amount"),
        rx.table.cell(
            rx.hstack(
                rx.icon_button(
                    rx.icon("pencil", size=16),
                    on_click=DashboardState.open_edit_modal(invoice.id),
                    variant="ghost",
                    title="Edit invoice",
                ),
                rx.icon_button(
                    rx.icon("trash-2", size=16),
                    on_click=DashboardState.delete_invoice(invoice.id),
                    variant="ghost",
                    color_scheme="red",
                    title="Delete invoice",
                ),
            )
        ),
    )


def _pagination() -> rx.Component:
    return rx.box(
        rx.text(DashboardState.result_summary, class_name="muted"),
        rx.hstack(
            rx.button(
                rx.icon("chevron-left", size=16),
                on_click=DashboardState.change_page(DashboardState.current_page - 1),
                disabled=~DashboardState.has_previous_page,
                variant="soft",
            ),
            rx.foreach(DashboardState.page_numbers, _page_button),
            rx.button(
                rx.icon("chevron-right", size=16),
                on_click=DashboardState.change_page(DashboardState.current_page + 1),
                disabled=~DashboardState.has_next_page,
                variant="soft",
            ),
        ),
        class_name="pagination",
    )


def _page_button(page_index: rx.Var[int]) -> rx.Component:
    return rx.button(
        page_index + 1,
        on_click=DashboardState.change_page(page_index),
        variant=rx.cond(page_index == DashboardState.current_page, "solid", "soft"),
    )


def _stat_card(icon: str, label: str, value: rx.Var) -> rx.Component:
    return rx.box(
        rx.icon(icon, class_name="stat-icon"),
        rx.box(
            rx.text(label, class_name="label"),
            rx.text(value, class_name="stat-value"),
        ),
        class_name="card stat-card",
    )


def _error_banner() -> rx.Component:
    return rx.callout(
        rx.hstack(
            rx.text(DashboardState.error_message),
            rx.icon_button(
                rx.icon("x", size=14),
                on_click=DashboardState.dismiss_error,
                variant="ghost",
            ),
            justify="between",
            width="100%",
        ),
        icon="triangle_alert",
        color_scheme="red",
        class_name="error-banner",
    )


def _empty() -> rx.Component:
    """Build the empty state when there are no invoices."""
    return rx.box(
        rx.icon("file-x", class_name="empty-icon", size=60),
        rx.heading("No invoices yet", size="3", as_="h3"),
        rx.text("Create your first invoice to get started.", class_name="muted"),
        class_name="empty-state",
    )


def _loader() -> rx.Component:
    return rx.box(
        rx.box(class_name="spinner"),
        rx.text("Loading invoices...", class_name="muted"),
        class_name="loading-state",
    )
