"""Reflex configuration for the Invoice Dashboard application."""

import reflex as rx

config = rx.Config(
    app_name="invoice_dashboard",
    # Use the src directory structure
    app_module_import="invoice_dashboard.app",
)
