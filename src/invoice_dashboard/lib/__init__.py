"""
Local library modules shared across the dashboard.

Modules:
    logs: Logger factory with consistent formatting
"""

from invoice_dashboard.lib import logs

__all__ = ["logs"]
