"""
Utility functions for invoice formatting and parsing.

Provides helpers for:
- Date parsing (ISO timestamps and m/d/y formats)
- Currency formatting
- Decimal coercion for form input
- Case-insensitive query matching
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Iterable

CENT = Decimal("0.01")


def parse_date(value: str | date | None) -> date | None:
    """
    Parse a date from an ISO string, an ISO timestamp or m/d/y text.

    Only the date part of timestamps is kept, e.g. "2024-02-05T00:00:00Z"
    becomes 2024-02-05.

    Args:
        value: String, date, datetime or None.

    Returns:
        date object if parsing succeeds, None otherwise.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value:
        value = value.strip()
    if not value:
        return None

    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        pass

    for fmt in ("%m/%d/%Y", "%m/%d/%y"):
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    return None


def format_date(value: date | None) -> str:
    """Format a date for display, or N/A when missing."""
    if not value:
        return "N/A"
    return value.strftime("%b %d, %Y")


def format_currency(value: Decimal | float, currency: str = "USD") -> str:
    """
    Format a currency amount with the currency code prefix.

    Args:
        value: Numeric amount to format.
        currency: Currency code (e.g., 'USD', 'EUR').

    Returns:
        Formatted string like 'USD 1,234.56'.
    """
    return f"{currency} {value:,.2f}"


def to_decimal(value: object) -> Decimal | None:
    """Coerce form or wire input to a Decimal, or None when not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return result if result.is_finite() else None


def to_int(value: object) -> int | None:
    """Coerce form input to an int, rejecting fractional values."""
    number = to_decimal(value)
    if number is None or number != number.to_integral_value():
        return None
    return int(number)


def matches_query(terms: Iterable[str], query: str) -> bool:
    """
    Check whether any term contains the query.

    Matching is a case-insensitive substring test; an empty query
    matches everything.
    """
    normalized = query.strip().lower()
    if not normalized:
        return True
    return any(normalized in term.lower() for term in terms if term)
