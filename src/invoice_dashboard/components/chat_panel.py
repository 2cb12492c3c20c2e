"""
Chat assistant panel.

A floating toggle button opens a panel with the transcript, a typing
indicator and a text area. Enter sends the message and Shift+Enter
inserts a newline.
"""

import reflex as rx

from invoice_dashboard.models.reflex_models import ChatMessageModel
from invoice_dashboard.state import CHAT_END_ID, DashboardState


def chat_panel() -> rx.Component:
    """Build the toggle button and, when open, the chat panel."""
    return rx.box(
        rx.cond(DashboardState.show_chatbot, _panel()),
        rx.icon_button(
            rx.cond(
                DashboardState.show_chatbot,
                rx.icon("x", size=22),
                rx.icon("message-circle", size=22),
            ),
            on_click=DashboardState.toggle_chatbot,
            radius="full",
            size="4",
            class_name="chat-toggle",
            title="Invoice assistant",
        ),
        class_name="chat-widget",
    )


def _panel() -> rx.Component:
    return rx.box(
        rx.box(
            rx.icon("bot", class_name="title-icon"),
            rx.heading("Invoice Assistant", size="3", as_="h3"),
            class_name="chat-header",
        ),
        rx.box(
            rx.foreach(DashboardState.chat_messages, _message),
            rx.cond(DashboardState.is_typing, _typing_indicator()),
            rx.box(id=CHAT_END_ID),
            class_name="chat-messages",
        ),
        rx.form(
            rx.hstack(
                rx.text_area(
                    name="message",
                    placeholder="Ask about your invoices...",
                    enter_key_submit=True,
                    rows="2",
                    class_name="chat-input",
                ),
                rx.icon_button(rx.icon("send", size=16), type="submit"),
                align="end",
            ),
            on_submit=DashboardState.send_message,
            reset_on_submit=True,
        ),
        class_name="card chat-panel",
    )


def _message(message: ChatMessageModel) -> rx.Component:
    return rx.box(
        rx.text(message.text, white_space="pre-wrap"),
        rx.text(message.time, class_name="chat-time"),
        class_name=rx.cond(
            message.is_user, "chat-message user", "chat-message assistant"
        ),
    )


def _typing_indicator() -> rx.Component:
    return rx.box(
        rx.box(class_name="dot"),
        rx.box(class_name="dot"),
        rx.box(class_name="dot"),
        class_name="chat-message assistant typing",
    )
