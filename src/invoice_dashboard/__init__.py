"""
Invoice Dashboard: a Reflex application for managing invoices.

This package provides a browser dashboard over invoices with paginated
listing, modal create/edit forms with dynamic line items, and a canned
bilingual chat assistant.

Subpackages:
- components: Reflex UI components
- data: Seed invoices for the in-memory variant
- lib: Logging helpers
- models: Dataclasses and serialization
- services: Invoice access layer and chat responders

Main entry points:
- controller.DashboardController: Framework-free dashboard orchestration
- app.app: The Reflex application instance
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
