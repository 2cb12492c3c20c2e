"""Tests for the dashboard controller flows."""

import asyncio
from decimal import Decimal

import pytest

from invoice_dashboard.controller import DashboardController
from invoice_dashboard.errors import (
    NetworkError,
    NotFoundError,
    OperationCancelled,
    ValidationError,
)
from invoice_dashboard.models.invoice import InvoiceStatus
from invoice_dashboard.services.chatbot import (
    FAILURE_MESSAGE,
    WELCOME_MESSAGE,
    ChatResponder,
    match_response,
)
from invoice_dashboard.services.invoice_service_memory import MemoryInvoiceService

from conftest import make_invoice


class RecordingService(MemoryInvoiceService):
    """Memory service that records mutations and can be told to fail loads."""

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("latency", False)
        super().__init__(*args, **kwargs)
        self.created = []
        self.fail_loads = False

    async def list_paginated(self, page_index=0, page_size=10):
        if self.fail_loads:
            raise NetworkError("service unavailable", 503)
        return await super().list_paginated(page_index, page_size)

    async def create(self, invoice):
        self.created.append(invoice)
        return await super().create(invoice)


class FailingResponder(ChatResponder):
    async def respond(self, text):
        raise NetworkError("chatbot down")


class BlockingResponder(ChatResponder):
    """Never answers; signals once a question has been received."""

    def __init__(self):
        self.started = asyncio.Event()

    async def respond(self, text):
        self.started.set()
        await asyncio.Event().wait()


def fill_form(form, number="INV-100", client="Acme", quantity="2", price="5.00"):
    form.set_field("invoice_number", number)
    form.set_field("client_name", client)
    form.set_field("issue_date", "2024-03-01")
    form.set_item_field(0, "item_name", "Widget")
    form.set_item_field(0, "quantity", quantity)
    form.set_item_field(0, "unit_price", price)


@pytest.fixture()
def recording_service():
    return RecordingService()


@pytest.fixture()
def recording_controller(recording_service, responder):
    return DashboardController(recording_service, responder, page_size=5)


# ---------------------------------------------------------------------------
# Loading and pagination
# ---------------------------------------------------------------------------

def test_initialize_loads_first_page_and_welcomes(controller):
    outcome = asyncio.run(controller.initialize())

    assert outcome.ok
    assert len(controller.invoices) == 5
    assert controller.invoices[0].invoice_number == "INV-2024-008"
    assert [m.text for m in controller.chat_messages] == [WELCOME_MESSAGE]
    assert not controller.is_loading
    assert controller.error_message is None


def test_stats_count_all_but_sum_loaded_page(controller):
    asyncio.run(controller.initialize())

    assert controller.stats.total_invoices == 8
    assert controller.stats.total_amount == Decimal("14850.00")
    assert controller.stats.pending == 3
    assert controller.stats.overdue == 2


def test_status_counts_follow_mutations(controller):
    async def scenario():
        await controller.initialize()
        await controller.delete_invoice(2)

    asyncio.run(scenario())

    assert controller.stats.overdue == 1
    assert controller.stats.pending == 3


def test_stats_failure_keeps_page(responder):
    class NoStatsService(RecordingService):
        async def stats(self):
            raise NetworkError("stats unavailable", 503)

    controller = DashboardController(NoStatsService(), responder, page_size=5)

    outcome = asyncio.run(controller.initialize())

    assert outcome.ok
    assert len(controller.invoices) == 5
    assert controller.stats.total_invoices == 8
    assert controller.stats.pending == 0
    assert controller.error_message is None


def test_change_page_loads_requested_page(controller):
    async def scenario():
        await controller.initialize()
        return await controller.change_page(1)

    outcome = asyncio.run(scenario())

    assert outcome.ok
    assert controller.current_page == 1
    assert [inv.invoice_number for inv in controller.invoices] == [
        "INV-2024-003",
        "INV-2024-002",
        "INV-2024-001",
    ]
    assert not controller.page.has_next_page


def test_change_page_out_of_range_is_rejected(controller):
    async def scenario():
        await controller.initialize()
        return await controller.change_page(2), await controller.change_page(-1)

    beyond, negative = asyncio.run(scenario())

    assert not beyond.ok
    assert isinstance(beyond.error, IndexError)
    assert not negative.ok
    assert controller.current_page == 0


def test_load_failure_keeps_previous_page(recording_controller, recording_service):
    async def scenario():
        await recording_controller.initialize()
        before = list(recording_controller.invoices)
        recording_service.fail_loads = True
        return before, await recording_controller.load_invoices()

    before, outcome = asyncio.run(scenario())

    assert not outcome.ok
    assert recording_controller.invoices == before
    assert not recording_controller.is_loading
    assert recording_controller.error_message.startswith("Failed to load invoices")


def test_delete_reloads_page(controller):
    async def scenario():
        await controller.initialize()
        return await controller.delete_invoice(1)

    outcome = asyncio.run(scenario())

    assert outcome.ok
    assert controller.invoices[0].invoice_number == "INV-2024-007"
    assert controller.stats.total_invoices == 7


def test_deleting_only_row_of_last_page_moves_back(responder):
    invoices = [make_invoice(n, f"INV-{n}") for n in range(1, 7)]
    service = MemoryInvoiceService(invoices, latency=False)
    controller = DashboardController(service, responder, page_size=5)

    async def scenario():
        await controller.initialize()
        await controller.change_page(1)
        assert [inv.id for inv in controller.invoices] == [6]
        return await controller.delete_invoice(6)

    outcome = asyncio.run(scenario())

    assert outcome.ok
    assert controller.current_page == 0
    assert len(controller.invoices) == 5
    assert controller.page.page_index == 0
    assert controller.page.total_pages == 1
    assert not controller.is_loading


def test_dismiss_error(recording_controller, recording_service):
    recording_service.fail_loads = True
    asyncio.run(recording_controller.load_invoices())

    recording_controller.dismiss_error()

    assert recording_controller.error_message is None


# ---------------------------------------------------------------------------
# Create modal
# ---------------------------------------------------------------------------

def test_create_flow_closes_modal_and_reloads(
    recording_controller, recording_service
):
    async def scenario():
        await recording_controller.initialize()
        recording_controller.open_create_modal()
        fill_form(recording_controller.create_form)
        return await recording_controller.submit_create()

    outcome = asyncio.run(scenario())

    assert outcome.ok
    assert outcome.value.total_amount == Decimal("10.00")
    assert recording_service.created[0].client_name == "Acme"
    assert not recording_controller.show_create_modal
    assert recording_controller.invoices[0].invoice_number == "INV-100"
    assert recording_controller.invoices[0].total_amount == Decimal("10.00")
    assert recording_controller.stats.total_invoices == 9
    assert recording_controller.create_form.invoice_number == ""


def test_invalid_create_is_not_sent(recording_controller, recording_service):
    recording_controller.open_create_modal()

    outcome = asyncio.run(recording_controller.submit_create())

    assert not outcome.ok
    assert isinstance(outcome.error, ValidationError)
    assert recording_service.created == []
    assert recording_controller.show_create_modal
    assert recording_controller.create_form.touched
    assert recording_controller.create_form.visible_errors()


def test_create_failure_keeps_modal_open(recording_controller):
    class RejectingService(RecordingService):
        async def create(self, invoice):
            raise NetworkError("create rejected", 500)

    controller = DashboardController(RejectingService(), recording_controller.responder)
    controller.open_create_modal()
    fill_form(controller.create_form)

    outcome = asyncio.run(controller.submit_create())

    assert not outcome.ok
    assert controller.show_create_modal
    assert controller.error_message == "Failed to create invoice: create rejected"
    assert controller.create_form.invoice_number == "INV-100"


def test_opening_modal_clears_stale_error(recording_controller, recording_service):
    recording_service.fail_loads = True
    asyncio.run(recording_controller.load_invoices())

    recording_controller.open_create_modal()

    assert recording_controller.error_message is None


def test_closing_create_modal_resets_form(controller):
    controller.open_create_modal()
    fill_form(controller.create_form)
    controller.add_line_item(controller.create_form)

    controller.close_create_modal()

    assert not controller.show_create_modal
    assert controller.create_form.invoice_number == ""
    assert len(controller.create_form.line_items) == 1


def test_last_line_item_cannot_be_removed(controller):
    form = controller.form("create")
    assert controller.remove_line_item(form, 0) is False
    assert len(form.line_items) == 1


def test_unknown_form_name(controller):
    with pytest.raises(ValueError):
        controller.form("delete")


# ---------------------------------------------------------------------------
# Edit modal
# ---------------------------------------------------------------------------

def test_edit_flow_updates_in_place(controller, service):
    async def scenario():
        await controller.initialize()
        await controller.open_edit_modal(4)
        controller.edit_form.set_field("client_name", "Enterprise Corp Ltd")
        return await controller.submit_update()

    outcome = asyncio.run(scenario())

    assert outcome.ok
    assert not controller.show_edit_modal
    assert controller.selected_invoice is None
    assert controller.invoices[3].client_name == "Enterprise Corp Ltd"
    assert service.store.find(4).status is InvoiceStatus.PENDING


def test_open_edit_modal_loads_form(controller):
    outcome = asyncio.run(controller.open_edit_modal(2))

    assert outcome.ok
    assert controller.show_edit_modal
    assert controller.edit_form.invoice_number == "INV-2024-007"
    assert controller.edit_form.total_amount == Decimal("4200.00")


def test_open_edit_modal_without_items_gets_default_row(responder):
    service = MemoryInvoiceService([make_invoice(1, "INV-1", items=[])], latency=False)
    controller = DashboardController(service, responder)

    asyncio.run(controller.open_edit_modal(1))

    assert len(controller.edit_form.line_items) == 1


def test_open_edit_modal_unknown_invoice(controller):
    outcome = asyncio.run(controller.open_edit_modal(999))

    assert isinstance(outcome.error, NotFoundError)
    assert not controller.show_edit_modal
    assert "Invoice not found: 999" in controller.error_message


def test_update_of_deleted_invoice_keeps_modal_open(controller, service):
    async def scenario():
        await controller.open_edit_modal(4)
        await service.delete(4)
        return await controller.submit_update()

    outcome = asyncio.run(scenario())

    assert isinstance(outcome.error, NotFoundError)
    assert controller.show_edit_modal
    assert controller.error_message == "Failed to update invoice: Invoice not found: 4"


def test_submit_update_without_selection(controller):
    outcome = asyncio.run(controller.submit_update())
    assert isinstance(outcome.error, ValidationError)


# ---------------------------------------------------------------------------
# Chat
# ---------------------------------------------------------------------------

def test_send_message_appends_question_then_reply(controller):
    controller.current_message = "Any pending invoices?"

    outcome = asyncio.run(controller.send_message())

    assert outcome.ok
    assert [(m.text, m.is_user) for m in controller.chat_messages] == [
        ("Any pending invoices?", True),
        (match_response("Any pending invoices?"), False),
    ]
    assert controller.current_message == ""
    assert not controller.is_typing


def test_begin_message_shows_question_while_typing(controller):
    controller.current_message = "hello"

    assert controller.begin_message() == "hello"
    assert controller.is_typing
    assert controller.chat_messages[-1].is_user


def test_blank_message_is_ignored(controller):
    controller.current_message = "   "

    outcome = asyncio.run(controller.send_message())

    assert not outcome.ok
    assert controller.chat_messages == []
    assert not controller.is_typing


def test_responder_failure_posts_failure_message(service):
    controller = DashboardController(service, FailingResponder())
    controller.current_message = "hello"

    outcome = asyncio.run(controller.send_message())

    assert not outcome.ok
    assert controller.chat_messages[-1].text == FAILURE_MESSAGE
    assert not controller.chat_messages[-1].is_user
    assert not controller.is_typing


def test_toggle_chatbot(controller):
    controller.toggle_chatbot()
    assert controller.show_chatbot
    controller.toggle_chatbot()
    assert not controller.show_chatbot


# ---------------------------------------------------------------------------
# Teardown
# ---------------------------------------------------------------------------

def test_close_cancels_pending_calls(service):
    responder = BlockingResponder()
    controller = DashboardController(service, responder)

    async def scenario():
        controller.current_message = "hello"
        text = controller.begin_message()
        task = asyncio.ensure_future(controller.complete_message(text))
        await responder.started.wait()
        controller.close()
        return await task

    outcome = asyncio.run(scenario())

    assert isinstance(outcome.error, OperationCancelled)
    assert controller.closed
    assert not controller.is_typing


def test_calls_after_close_are_cancelled(controller):
    controller.close()

    outcome = asyncio.run(controller.load_invoices())

    assert isinstance(outcome.error, OperationCancelled)
    assert not controller.is_loading
