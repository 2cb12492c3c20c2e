"""
Reflex state management for the Invoice Dashboard.

DashboardState adapts one DashboardController per browser session to
Reflex. Controllers are kept in a module-level registry keyed by the
client token, because they hold live tasks and service handles that
cannot be serialized into state. Every event handler delegates to the
controller and then copies its view state into Reflex vars.
"""

import os

import reflex as rx

from invoice_dashboard.controller import DashboardController
from invoice_dashboard.lib import logs
from invoice_dashboard.models.reflex_models import (
    ChatMessageModel,
    InvoiceFormModel,
    InvoiceRowModel,
    StatsModel,
    chat_message_model,
    invoice_form_model,
    invoice_row_model,
    stats_model,
)
from invoice_dashboard.services import get_chat_responder, get_invoice_service
from invoice_dashboard.sessions import ControllerRegistry

LOG = logs.logger(__file__)

# Configuration from environment
PAGE_SIZE = int(os.getenv("INVOICE_DASHBOARD_PAGE_SIZE", "10"))

APP_TITLE = "Invoice Dashboard"
APP_SUBTITLE = "Create, edit and track your invoices."

CHAT_END_ID = "chat-end"


def _new_controller() -> DashboardController:
    return DashboardController(
        get_invoice_service(), get_chat_responder(), page_size=PAGE_SIZE
    )


_CONTROLLERS = ControllerRegistry(_new_controller)


class DashboardState(rx.State):
    """
    Main application state for the Invoice Dashboard.

    Handles the invoice table, pagination, create/edit modals and chat.
    """

    # Invoice table
    invoices: list[InvoiceRowModel] = []
    stats: StatsModel = StatsModel()
    current_page: int = 0
    total_pages: int = 0
    total_count: int = 0
    has_previous_page: bool = False
    has_next_page: bool = False
    is_loading: bool = True
    error_message: str = ""

    # Modals
    show_create_modal: bool = False
    show_edit_modal: bool = False
    create_form: InvoiceFormModel = InvoiceFormModel()
    edit_form: InvoiceFormModel = InvoiceFormModel()

    # Chat
    show_chatbot: bool = False
    chat_messages: list[ChatMessageModel] = []
    is_typing: bool = False

    @rx.var
    def page_numbers(self) -> list[int]:
        """Zero-based indexes of every page."""
        return list(range(self.total_pages))

    @rx.var
    def result_summary(self) -> str:
        """Generate summary text for the table footer."""
        if self.total_count == 0:
            return "No invoices"
        start = self.current_page * PAGE_SIZE + 1
        end = start + len(self.invoices) - 1
        return f"Showing {start}-{end} of {self.total_count} invoices"

    @rx.var
    def is_empty(self) -> bool:
        """Check if empty state should be shown."""
        return not self.is_loading and len(self.invoices) == 0

    def _controller(self) -> DashboardController:
        return _CONTROLLERS.get_or_create(self.router.session.client_token)

    def _sync(self, controller: DashboardController) -> None:
        """Copy controller view state into Reflex vars."""
        page = controller.page
        self.invoices = [invoice_row_model(inv) for inv in controller.invoices]
        self.stats = stats_model(controller.stats)
        self.current_page = controller.current_page
        self.total_pages = page.total_pages if page else 0
        self.total_count = page.total_count if page else 0
        self.has_previous_page = page.has_previous_page if page else False
        self.has_next_page = page.has_next_page if page else False
        self.is_loading = controller.is_loading
        self.error_message = controller.error_message or ""
        self.show_create_modal = controller.show_create_modal
        self.show_edit_modal = controller.show_edit_modal
        self.create_form = invoice_form_model(controller.create_form)
        self.edit_form = invoice_form_model(controller.edit_form)
        self.show_chatbot = controller.show_chatbot
        self.chat_messages = [chat_message_model(m) for m in controller.chat_messages]
        self.is_typing = controller.is_typing

    @rx.event
    async def on_load(self):
        """
        Event handler for initial page load.

        Yields the loading state, then fetches the first page.
        """
        controller = self._controller()
        self.is_loading = True
        yield
        await controller.initialize()
        self._sync(controller)

    @rx.event
    def teardown(self):
        """Cancel pending calls when the dashboard unmounts."""
        _CONTROLLERS.close(self.router.session.client_token)

    @rx.event
    async def change_page(self, page_index: int):
        controller = self._controller()
        self.is_loading = True
        yield
        await controller.change_page(page_index)
        self._sync(controller)

    @rx.event
    async def delete_invoice(self, invoice_id: int):
        controller = self._controller()
        await controller.delete_invoice(invoice_id)
        self._sync(controller)

    @rx.event
    def dismiss_error(self):
        controller = self._controller()
        controller.dismiss_error()
        self._sync(controller)

    @rx.event
    def open_create_modal(self):
        controller = self._controller()
        controller.open_create_modal()
        self._sync(controller)

    @rx.event
    def set_create_open(self, is_open: bool):
        """Dialog open-change handler; only closing is acted on."""
        if not is_open:
            controller = self._controller()
            controller.close_create_modal()
            self._sync(controller)

    @rx.event
    async def open_edit_modal(self, invoice_id: int):
        controller = self._controller()
        await controller.open_edit_modal(invoice_id)
        self._sync(controller)

    @rx.event
    def set_edit_open(self, is_open: bool):
        if not is_open:
            controller = self._controller()
            controller.close_edit_modal()
            self._sync(controller)

    @rx.event
    def set_form_field(self, kind: str, name: str, value: str):
        controller = self._controller()
        controller.form(kind).set_field(name, value)
        self._sync(controller)

    @rx.event
    def set_item_field(self, kind: str, index: int, name: str, value: str):
        controller = self._controller()
        controller.form(kind).set_item_field(index, name, value)
        self._sync(controller)

    @rx.event
    def add_line_item(self, kind: str):
        controller = self._controller()
        controller.add_line_item(controller.form(kind))
        self._sync(controller)

    @rx.event
    def remove_line_item(self, kind: str, index: int):
        controller = self._controller()
        controller.remove_line_item(controller.form(kind), index)
        self._sync(controller)

    @rx.event
    async def submit_create(self):
        controller = self._controller()
        await controller.submit_create()
        self._sync(controller)

    @rx.event
    async def submit_update(self):
        controller = self._controller()
        await controller.submit_update()
        self._sync(controller)

    @rx.event
    def toggle_chatbot(self):
        controller = self._controller()
        controller.toggle_chatbot()
        self._sync(controller)
        if self.show_chatbot:
            return rx.scroll_to(CHAT_END_ID)

    @rx.event(background=True)
    async def send_message(self, form_data: dict):
        """
        Chat form submit handler.

        The user message is shown immediately; the reply is appended when
        the responder answers. Runs in the background so other events are
        not blocked while the assistant is typing.
        """
        async with self:
            controller = _CONTROLLERS.get(self.router.session.client_token)
            if controller is None:
                LOG.warning("Chat message arrived after the dashboard closed")
                return
            controller.current_message = form_data.get("message", "")
            text = controller.begin_message()
            if text is None:
                return
            self._sync(controller)
        yield rx.scroll_to(CHAT_END_ID)

        await controller.complete_message(text)

        async with self:
            self._sync(controller)
        yield rx.scroll_to(CHAT_END_ID)
