"""
Reflex application entry point for the Invoice Dashboard.

This module initializes the Reflex app and defines the main page layout.
"""

import os

import reflex as rx

from invoice_dashboard.components.chat_panel import chat_panel
from invoice_dashboard.components.invoice_modal import (
    create_invoice_modal,
    edit_invoice_modal,
)
from invoice_dashboard.components.invoice_table import invoice_table, stats_cards
from invoice_dashboard.lib import logs
from invoice_dashboard.state import APP_SUBTITLE, APP_TITLE, DashboardState

LOG = logs.logger(__file__)

# Configuration from environment
APP_PORT = int(os.getenv("DASHBOARD_APP_PORT", "3000"))
LOG.info(
    "INVOICE_DASHBOARD_SERVICE: %s",
    os.getenv("INVOICE_DASHBOARD_SERVICE", "memory"),
)

_FONT_URL = "https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700&family=Fira+Code:wght@400;500&display=swap"


def page_header() -> rx.Component:
    """Build the hero text area at the top of the page."""
    return rx.box(
        rx.heading(APP_TITLE, size="6", as_="h1"),
        rx.text(APP_SUBTITLE, class_name="muted"),
        class_name="page-header",
    )


def index() -> rx.Component:
    """
    Build the main page layout.

    Returns:
        The complete page with stats, invoice table, modals and chat.
    """
    return rx.box(
        rx.box(
            page_header(),
            stats_cards(),
            invoice_table(),
            class_name="app-container",
        ),
        create_invoice_modal(),
        edit_invoice_modal(),
        chat_panel(),
        class_name="app-shell",
        on_unmount=DashboardState.teardown,
    )


# Create the Reflex app
app = rx.App(
    theme=rx.theme(
        appearance="light",
        has_background=True,
        radius="large",
    ),
    stylesheets=[
        _FONT_URL,
        "/styles.css",
    ],
)

# Add the index page
app.add_page(
    index,
    title=APP_TITLE,
    on_load=DashboardState.on_load,
)


def main() -> None:
    """Entrypoint used by `invoice-dashboard`; runs `reflex run`."""
    import subprocess
    import sys

    subprocess.run(
        [sys.executable, "-m", "reflex", "run", "--frontend-port", str(APP_PORT)]
    )


if __name__ == "__main__":
    main()
