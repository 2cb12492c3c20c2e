"""
Reflex UI components for the Invoice Dashboard.

This package provides:
- invoice_table: Stat cards, the invoice table and pagination controls
- invoice_modal: Create and edit dialogs with dynamic line item rows
- chat_panel: Floating assistant panel with its transcript

All components are functions returning rx.Component trees bound to
DashboardState.
"""
