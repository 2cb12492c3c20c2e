"""
Dashboard controller: view state and orchestration for one dashboard view.

The controller owns everything the view renders (the loaded page and its
stats, modal flags, both forms, the chat transcript) and drives the
invoice service and chat responder. It has no UI framework dependency;
DashboardState adapts it to Reflex.

Every service call is awaited at the call site and reported back as an
Outcome. Calls run as tasks registered with the controller so that close()
cancels all of them with one signal.
"""

import asyncio
import inspect
from dataclasses import replace
from typing import Awaitable, TypeVar

from invoice_dashboard.errors import (
    InvoiceDashboardError,
    OperationCancelled,
    ValidationError,
)
from invoice_dashboard.forms import InvoiceForm
from invoice_dashboard.lib import logs
from invoice_dashboard.models.common import (
    ChatMessage,
    InvoiceStats,
    Outcome,
    PaginatedList,
)
from invoice_dashboard.models.invoice import InvoiceDetail, InvoiceListView
from invoice_dashboard.services.chatbot import (
    FAILURE_MESSAGE,
    WELCOME_MESSAGE,
    ChatResponder,
)
from invoice_dashboard.services.invoice_service import InvoiceService

LOG = logs.logger(__file__)

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10


class DashboardController:
    """
    Orchestrates loading, pagination, modal forms and chat for one view.

    Attributes:
        invoices: Items of the currently loaded page.
        page: The last page loaded successfully, or None before the first load.
        stats: Page count and amount, with status counts from the service.
        current_page: Page index requested by the view (0-indexed).
        page_size: Fixed number of invoices per page.
        is_loading: True while a page load is in flight.
        error_message: Last failure to surface, cleared by the next success.
        create_form: Form state of the create modal.
        edit_form: Form state of the edit modal.
        selected_invoice: Invoice being edited.
        chat_messages: Append-only transcript for this session.
        current_message: Text in the chat input.
        is_typing: True while the assistant reply is pending.
    """

    def __init__(
        self,
        service: InvoiceService,
        responder: ChatResponder,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self.service = service
        self.responder = responder
        self.page_size = max(page_size, 1)

        self.current_page = 0
        self.invoices: list[InvoiceListView] = []
        self.page: PaginatedList[InvoiceListView] | None = None
        self.stats = InvoiceStats()
        self.is_loading = False
        self.error_message: str | None = None

        self.show_create_modal = False
        self.show_edit_modal = False
        self.selected_invoice: InvoiceDetail | None = None
        self.create_form = InvoiceForm()
        self.edit_form = InvoiceForm()

        self.show_chatbot = False
        self.chat_messages: list[ChatMessage] = []
        self.current_message = ""
        self.is_typing = False

        self._pending: set[asyncio.Task] = set()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def initialize(self) -> Outcome[PaginatedList[InvoiceListView]]:
        """Seed the chat transcript and load the first page."""
        self.chat_messages = [ChatMessage(text=WELCOME_MESSAGE)]
        return await self.load_invoices()

    def close(self) -> None:
        """Cancel every in-flight call; later calls fail with OperationCancelled."""
        self._closed = True
        pending = list(self._pending)
        for task in pending:
            task.cancel()
        if pending:
            LOG.info("Cancelled %d pending calls", len(pending))

    # Invoices

    async def load_invoices(self) -> Outcome[PaginatedList[InvoiceListView]]:
        """
        Load the current page.

        On failure the previously loaded page stays in place. When the
        current page no longer exists (its last row was deleted), the last
        existing page is loaded instead.
        """
        self.is_loading = True
        try:
            outcome = await self._call(
                self.service.list_paginated(self.current_page, self.page_size)
            )
            if outcome.ok:
                last_page = max(outcome.value.total_pages - 1, 0)
                if self.current_page > last_page:
                    self.current_page = last_page
                    return await self.load_invoices()
                await self._apply_page(outcome.value)
        finally:
            self.is_loading = False
        if not outcome.ok:
            LOG.error("Failed to load invoices: %s", outcome.error)
            self.error_message = f"Failed to load invoices: {outcome.error}"
        return outcome

    async def _apply_page(self, page: PaginatedList[InvoiceListView]) -> None:
        """
        Store a loaded page and its stats.

        Counts and amount come from the page; the pending and overdue
        counts come from the service's stats, which are left at zero when
        that call fails.
        """
        self.page = page
        self.invoices = list(page.items)
        self.error_message = None
        stats = InvoiceStats.from_page(page)
        outcome = await self._call(self.service.stats())
        if outcome.ok:
            stats = replace(
                stats, pending=outcome.value.pending, overdue=outcome.value.overdue
            )
        else:
            LOG.warning("Failed to load invoice stats: %s", outcome.error)
        self.stats = stats

    async def change_page(
        self, page_index: int
    ) -> Outcome[PaginatedList[InvoiceListView]]:
        """Move to another page and reload; out-of-range indexes are rejected."""
        last_page = max(self.page.total_pages - 1, 0) if self.page else None
        if page_index < 0 or (last_page is not None and page_index > last_page):
            return Outcome.failure(IndexError(f"Page out of range: {page_index}"))
        self.current_page = page_index
        return await self.load_invoices()

    async def delete_invoice(self, invoice_id: int) -> Outcome[bool]:
        """Delete an invoice and reload the current page."""
        outcome = await self._call(self.service.delete(invoice_id))
        if not outcome.ok:
            LOG.error("Failed to delete invoice %s: %s", invoice_id, outcome.error)
            self.error_message = f"Failed to delete invoice: {outcome.error}"
            return outcome
        await self.load_invoices()
        return outcome

    def dismiss_error(self) -> None:
        self.error_message = None

    # Modals

    def open_create_modal(self) -> None:
        self.create_form.reset()
        self.error_message = None
        self.show_create_modal = True

    def close_create_modal(self) -> None:
        self.show_create_modal = False
        self.create_form.reset()

    async def open_edit_modal(self, invoice_id: int) -> Outcome[InvoiceDetail]:
        """Fetch the full invoice, load it into the edit form and open the modal."""
        outcome = await self._call(self.service.get_by_id(invoice_id))
        if not outcome.ok:
            LOG.error("Failed to load invoice %s: %s", invoice_id, outcome.error)
            self.error_message = f"Failed to load invoice: {outcome.error}"
            return outcome
        self.selected_invoice = outcome.value
        self.edit_form.patch(outcome.value)
        self.error_message = None
        self.show_edit_modal = True
        return outcome

    def close_edit_modal(self) -> None:
        self.show_edit_modal = False
        self.selected_invoice = None
        self.edit_form.reset()

    def form(self, kind: str) -> InvoiceForm:
        """Return the create or edit form by name."""
        forms = {"create": self.create_form, "edit": self.edit_form}
        try:
            return forms[kind]
        except KeyError as exc:
            raise ValueError(f"Unknown form: {kind}") from exc

    def add_line_item(self, form: InvoiceForm) -> None:
        form.add_item()

    def remove_line_item(self, form: InvoiceForm, index: int) -> bool:
        """Remove a row; a form's last remaining row is never removed."""
        return form.remove_item(index)

    async def submit_create(self) -> Outcome[InvoiceDetail]:
        """
        Validate the create form and create the invoice.

        Invalid forms are marked touched and nothing is sent. On success
        the modal closes and the list reloads; on failure it stays open.
        """
        try:
            invoice = self.create_form.to_invoice()
        except ValidationError as exc:
            self.create_form.mark_all_touched()
            return Outcome.failure(exc)

        outcome = await self._call(self.service.create(invoice))
        if not outcome.ok:
            LOG.error("Failed to create invoice: %s", outcome.error)
            self.error_message = f"Failed to create invoice: {outcome.error}"
            return outcome
        self.close_create_modal()
        await self.load_invoices()
        return outcome

    async def submit_update(self) -> Outcome[InvoiceDetail]:
        """Validate the edit form and update the selected invoice."""
        if self.selected_invoice is None:
            return Outcome.failure(ValidationError({"invoice": "No invoice selected"}))
        try:
            invoice = self.edit_form.to_invoice(self.selected_invoice)
        except ValidationError as exc:
            self.edit_form.mark_all_touched()
            return Outcome.failure(exc)

        outcome = await self._call(self.service.update(invoice.id, invoice))
        if not outcome.ok:
            LOG.error("Failed to update invoice %s: %s", invoice.id, outcome.error)
            self.error_message = f"Failed to update invoice: {outcome.error}"
            return outcome
        self.close_edit_modal()
        await self.load_invoices()
        return outcome

    # Chat

    def toggle_chatbot(self) -> None:
        self.show_chatbot = not self.show_chatbot

    def begin_message(self) -> str | None:
        """
        Append the typed message to the transcript and clear the input.

        Returns:
            The text to send, or None when the input is blank.
        """
        text = self.current_message
        if not text.strip():
            return None
        self.chat_messages.append(ChatMessage(text=text, is_user=True))
        self.current_message = ""
        self.is_typing = True
        return text

    async def complete_message(self, text: str) -> Outcome[str]:
        """Ask the responder and append its reply, or a failure notice."""
        try:
            outcome = await self._call(self.responder.respond(text))
        finally:
            self.is_typing = False
        if outcome.ok:
            reply = outcome.value
        else:
            LOG.error("Chat responder failed: %s", outcome.error)
            reply = FAILURE_MESSAGE
        self.chat_messages.append(ChatMessage(text=reply))
        return outcome

    async def send_message(self) -> Outcome[str]:
        text = self.begin_message()
        if text is None:
            return Outcome.failure(ValidationError({"message": "Message is empty"}))
        return await self.complete_message(text)

    async def _call(self, awaitable: Awaitable[T]) -> Outcome[T]:
        """Run a service call as a cancellable task and capture its outcome."""
        if self._closed:
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            return Outcome.failure(OperationCancelled("The dashboard view was closed"))

        task = asyncio.ensure_future(awaitable)
        self._pending.add(task)
        try:
            return Outcome.success(await task)
        except asyncio.CancelledError:
            if self._closed and task.cancelled():
                return Outcome.failure(
                    OperationCancelled("The dashboard view was closed")
                )
            raise
        except InvoiceDashboardError as exc:
            return Outcome.failure(exc)
        finally:
            self._pending.discard(task)
