"""
Exception types raised by the invoice access layer, chat responders and forms.

The controller catches every one of these at its action boundary and turns
it into a failure Outcome; nothing here is retried.
"""


class InvoiceDashboardError(Exception):
    """Base class for all dashboard errors."""


class NetworkError(InvoiceDashboardError):
    """A remote call failed at the transport level or returned a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(InvoiceDashboardError):
    """No invoice matches the requested identifier."""

    def __init__(self, invoice_id: object) -> None:
        super().__init__(f"Invoice not found: {invoice_id}")
        self.invoice_id = invoice_id


class ApiError(InvoiceDashboardError):
    """The API answered with an envelope whose success flag is false."""


class ValidationError(InvoiceDashboardError):
    """
    A form failed validation.

    Attributes:
        errors: Mapping of field path (e.g. "line_items.0.quantity") to message.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__(f"Invalid form: {', '.join(sorted(errors))}")
        self.errors = errors


class OperationCancelled(InvoiceDashboardError):
    """The call was cancelled because its owning view was torn down."""
