"""Invoices loaded into the in-memory store on startup, newest first."""

from datetime import date
from decimal import Decimal

from invoice_dashboard.models.invoice import InvoiceDetail, InvoiceStatus, LineItem


def _invoice(
    invoice_id: int,
    number: str,
    client: str,
    item_name: str,
    amount: str,
    status: InvoiceStatus,
    issued: date,
    due: date,
) -> InvoiceDetail:
    return InvoiceDetail(
        id=invoice_id,
        invoice_number=number,
        client_name=client,
        issue_date=issued,
        line_items=[
            LineItem(
                id=invoice_id,
                item_name=item_name,
                quantity=1,
                unit_price=Decimal(amount),
            )
        ],
        status=status,
        due_date=due,
    )


SEED_INVOICES: list[InvoiceDetail] = [
    _invoice(
        1,
        "INV-2024-008",
        "Digital Agency",
        "Landing page build",
        "1200",
        InvoiceStatus.PENDING,
        date(2024, 2, 5),
        date(2024, 3, 5),
    ),
    _invoice(
        2,
        "INV-2024-007",
        "Innovation Labs",
        "Prototype engineering",
        "4200",
        InvoiceStatus.OVERDUE,
        date(2023, 11, 15),
        date(2023, 12, 15),
    ),
    _invoice(
        3,
        "INV-2024-006",
        "Local Business Co",
        "Logo refresh",
        "750",
        InvoiceStatus.PAID,
        date(2024, 2, 1),
        date(2024, 3, 1),
    ),
    _invoice(
        4,
        "INV-2024-005",
        "Enterprise Corp",
        "Platform integration",
        "5500",
        InvoiceStatus.PENDING,
        date(2024, 1, 30),
        date(2024, 2, 28),
    ),
    _invoice(
        5,
        "INV-2024-004",
        "Tech Startup",
        "MVP development sprint",
        "3200",
        InvoiceStatus.PAID,
        date(2024, 1, 25),
        date(2024, 2, 25),
    ),
    _invoice(
        6,
        "INV-2024-003",
        "Marketing Firm",
        "Campaign analytics",
        "2800",
        InvoiceStatus.OVERDUE,
        date(2023, 12, 20),
        date(2024, 1, 20),
    ),
    _invoice(
        7,
        "INV-2024-002",
        "Consulting Group",
        "Process workshop",
        "1850",
        InvoiceStatus.PAID,
        date(2024, 1, 15),
        date(2024, 2, 15),
    ),
    _invoice(
        8,
        "INV-2024-001",
        "Design Studio",
        "UI mockups",
        "950",
        InvoiceStatus.PENDING,
        date(2024, 1, 10),
        date(2024, 2, 10),
    ),
]
