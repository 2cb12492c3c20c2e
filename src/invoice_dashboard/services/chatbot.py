"""
Chat responders for the dashboard assistant.

The in-memory assistant is an ordered list of (predicate, response) rules
evaluated top to bottom; the first match wins. Input containing any
Arabic-script character is answered from the Arabic rules, everything else
from the English rules. Figures quoted in the responses are fixed text and
are not derived from the invoice store.

Implementations:
- RuleChatResponder: Canned rules with a simulated response delay
- RemoteChatResponder: Delegates to the API's chatbot endpoint
"""

import asyncio
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Sequence

import httpx

from invoice_dashboard.errors import NetworkError
from invoice_dashboard.lib import logs

LOG = logs.logger(__file__)

WELCOME_MESSAGE = (
    "Welcome! I can help you with your invoices. Try:\n"
    "• Show me the total value of invoices this month\n"
    "• Give me a summary of invoice number .."
)

FAILURE_MESSAGE = "Sorry, something went wrong."

ENGLISH_FALLBACK = (
    "I'm not sure I understand. You can ask me about total invoice value, "
    "pending invoices, overdue invoices or paid invoices."
)

ARABIC_FALLBACK = (
    "عذراً، لم أفهم سؤالك. يمكنك السؤال عن إجمالي الفواتير "
    "أو الفواتير المعلقة أو المتأخرة أو المدفوعة."
)

_ARABIC_SCRIPT = re.compile(
    "[\u0600-\u06ff\u0750-\u077f\u08a0-\u08ff\ufb50-\ufdff\ufe70-\ufeff]"
)


@dataclass(frozen=True, slots=True)
class ChatRule:
    """A canned response returned when its predicate accepts the input."""

    predicate: Callable[[str], bool]
    response: str


def _contains(*keywords: str) -> Callable[[str], bool]:
    """Predicate matching when any keyword occurs as a substring."""
    return lambda text: any(keyword in text for keyword in keywords)


def _word(*words: str) -> Callable[[str], bool]:
    """Predicate matching when any word occurs on its own."""
    pattern = re.compile(r"\b(?:" + "|".join(map(re.escape, words)) + r")\b")
    return lambda text: pattern.search(text) is not None


ENGLISH_RULES: tuple[ChatRule, ...] = (
    ChatRule(
        _contains("pending", "unpaid"),
        "You currently have 3 pending invoices totalling USD 7,650.00. "
        "The oldest is INV-2024-001 for Design Studio.",
    ),
    ChatRule(
        _contains("overdue", "past due"),
        "There are 2 overdue invoices worth USD 7,000.00. "
        "Innovation Labs (INV-2024-007) is the most overdue.",
    ),
    ChatRule(
        _word("paid"),
        "3 invoices have been paid this quarter, for a total of USD 5,800.00.",
    ),
    ChatRule(
        _word("total", "value", "sum", "amount"),
        "The total value of your invoices this month is USD 20,450.00 "
        "across 8 invoices.",
    ),
    ChatRule(
        _contains("summary", "invoice number", "inv-"),
        "Invoice INV-2024-008 for Digital Agency: 1 line item, total "
        "USD 1,200.00, issued Feb 05, 2024 and due Mar 05, 2024.",
    ),
    ChatRule(
        _word("hello", "hi", "hey"),
        "Hello! How can I help you with your invoices today?",
    ),
    ChatRule(
        _contains("help"),
        "You can ask me about the total invoice value, pending invoices, "
        "overdue invoices, paid invoices or a summary of an invoice.",
    ),
)

ARABIC_RULES: tuple[ChatRule, ...] = (
    ChatRule(
        _contains("معلقة", "غير مدفوعة"),
        "لديك 3 فواتير معلقة بقيمة إجمالية 7,650.00 دولار.",
    ),
    ChatRule(
        _contains("متأخرة", "متاخرة"),
        "هناك فاتورتان متأخرتان بقيمة 7,000.00 دولار.",
    ),
    ChatRule(
        _contains("مدفوعة"),
        "تم دفع 3 فواتير هذا الربع بإجمالي 5,800.00 دولار.",
    ),
    ChatRule(
        _contains("إجمالي", "اجمالي", "مجموع", "قيمة"),
        "القيمة الإجمالية لفواتيرك هذا الشهر هي 20,450.00 دولار لـ 8 فواتير.",
    ),
    ChatRule(
        _contains("ملخص", "رقم الفاتورة"),
        "الفاتورة INV-2024-008 لـ Digital Agency بإجمالي 1,200.00 دولار.",
    ),
    ChatRule(
        _contains("مرحبا", "مرحباً", "السلام"),
        "مرحباً! كيف يمكنني مساعدتك في فواتيرك اليوم؟",
    ),
    ChatRule(
        _contains("مساعدة", "ساعدني"),
        "يمكنك السؤال عن إجمالي الفواتير أو الفواتير المعلقة أو المتأخرة أو المدفوعة.",
    ),
)


def is_arabic(text: str) -> bool:
    """Return True when the text contains any Arabic-script character."""
    return _ARABIC_SCRIPT.search(text) is not None


def match_response(
    text: str,
    english_rules: Sequence[ChatRule] = ENGLISH_RULES,
    arabic_rules: Sequence[ChatRule] = ARABIC_RULES,
) -> str:
    """
    Return the canned response for a message.

    Args:
        text: Free-text user input.
        english_rules: Rules used for non-Arabic input, in priority order.
        arabic_rules: Rules used for Arabic input, in priority order.

    Returns:
        The first matching response, or the language's fallback.
    """
    normalized = text.strip().lower()
    if is_arabic(normalized):
        rules, fallback = arabic_rules, ARABIC_FALLBACK
    else:
        rules, fallback = english_rules, ENGLISH_FALLBACK
    return next(
        (rule.response for rule in rules if rule.predicate(normalized)), fallback
    )


class ChatResponder(ABC):
    """Maps a user message to the assistant's reply."""

    @abstractmethod
    async def respond(self, text: str) -> str:
        """Return the reply to a single message; no conversation memory is kept."""

    async def close(self) -> None:
        """Release any resources held by the responder."""


class RuleChatResponder(ChatResponder):
    """Answers from the canned rules after a fixed delay."""

    def __init__(self, delay: float = 1.0) -> None:
        """
        Args:
            delay: Simulated processing time in seconds.
        """
        self._delay = delay

    async def respond(self, text: str) -> str:
        if self._delay > 0:
            await asyncio.sleep(self._delay)
        return match_response(text)


class RemoteChatResponder(ChatResponder):
    """Posts the question to the API and returns its plain-text answer."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self.client = client

    async def respond(self, text: str) -> str:
        try:
            response = await self.client.post("api/chatbot", json={"question": text})
            response.raise_for_status()
        except httpx.HTTPError as exc:
            LOG.error("Chatbot request failed: %s", exc)
            raise NetworkError(f"Chatbot request failed: {exc}") from exc
        return response.text

    async def close(self) -> None:
        await self.client.aclose()
