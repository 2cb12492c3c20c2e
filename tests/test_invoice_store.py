"""Tests for the observable in-memory invoice store."""

from invoice_dashboard.services.invoice_store import InvoiceStore

from conftest import make_invoice


def test_subscriber_receives_current_state_immediately():
    store = InvoiceStore([make_invoice(1, "INV-1")])
    received = []

    store.subscribe(received.append)

    assert len(received) == 1
    assert [inv.id for inv in received[0]] == [1]


def test_subscriber_receives_every_change():
    store = InvoiceStore([make_invoice(1, "INV-1")])
    received = []
    store.subscribe(received.append)

    store.insert_first(make_invoice(2, "INV-2"))
    store.remove(1)

    assert [[inv.id for inv in snap] for snap in received] == [[1], [2, 1], [2]]


def test_unsubscribe_stops_notifications():
    store = InvoiceStore()
    received = []
    unsubscribe = store.subscribe(received.append)

    unsubscribe()
    unsubscribe()
    store.insert_first(make_invoice(1, "INV-1"))

    assert len(received) == 1


def test_replace_keeps_position():
    store = InvoiceStore(
        [make_invoice(1, "A"), make_invoice(2, "B"), make_invoice(3, "C")]
    )

    assert store.replace(make_invoice(2, "B-2"))
    assert [inv.invoice_number for inv in store.snapshot()] == ["A", "B-2", "C"]


def test_replace_unknown_id_returns_false():
    store = InvoiceStore([make_invoice(1, "A")])
    assert store.replace(make_invoice(9, "Z")) is False
    assert [inv.id for inv in store.snapshot()] == [1]


def test_failing_subscriber_does_not_block_others():
    store = InvoiceStore()
    received = []
    calls = []

    def broken(_snapshot):
        calls.append(_snapshot)
        if len(calls) > 1:
            raise RuntimeError("boom")

    store.subscribe(received.append)
    store.subscribe(broken)
    store.insert_first(make_invoice(1, "INV-1"))

    assert len(received) == 2
    assert len(calls) == 2
