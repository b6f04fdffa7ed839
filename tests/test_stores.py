#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
    tests.test_stores
    ~~~~~~~~~~~~~~~~~

    Tests for the asset status store, checkout ledger and hold queue.

    :copyright: (c) 2025 by Authors.
    :license: see LICENSE for more details.
"""

import datetime
import pytest
from circdesk.core.models import AssetStatus, Checkout, CheckoutHistory, Hold
from circdesk.core.status import AssetStatusStore
from circdesk.core.ledger import CheckoutLedger
from circdesk.core.holds import HoldQueue
from circdesk.core.exceptions import AssetNotFoundError, NotFoundError

T0 = datetime.datetime(2024, 3, 1, 9, 0, 0)


def test_status_roundtrip(library):
    store = AssetStatusStore(library)
    assert store.get_status(1) is AssetStatus.AVAILABLE

    store.set_status(1, AssetStatus.LOST)
    assert store.get_status(1) is AssetStatus.LOST

    store.set_status(1, "On Hold")
    assert store.get_status(1) is AssetStatus.ON_HOLD

def test_status_unknown_asset(library):
    store = AssetStatusStore(library)
    with pytest.raises(AssetNotFoundError):
        store.set_status(99, AssetStatus.LOST)
    with pytest.raises(NotFoundError):
        store.get_status(99)

def test_status_rejects_unknown_label(library):
    with pytest.raises(ValueError):
        AssetStatusStore(library).set_status(1, "Misplaced")

def test_record_checkout_creates_checkout_and_open_history(library):
    ledger = CheckoutLedger(library)
    until = T0 + datetime.timedelta(days=30)
    ledger.record_checkout(1, 2, since=T0, until=until)

    assert ledger.is_checked_out(1)
    assert not ledger.is_checked_out(2)
    checkout = ledger.latest_checkout(1)
    assert (checkout.card_id, checkout.since, checkout.until) == (2, T0, until)

    history = ledger.history_for(1)
    assert len(history) == 1
    assert history[0].checked_out == T0
    assert history[0].checked_in is None
    assert history[0].is_open

def test_close_active_checkout(library):
    ledger = CheckoutLedger(library)
    ledger.record_checkout(1, 2, since=T0, until=T0 + datetime.timedelta(days=30))
    returned = T0 + datetime.timedelta(days=3)

    ledger.close_active_checkout(1, returned)

    assert not ledger.is_checked_out(1)
    assert library.query(Checkout).count() == 0
    [history] = ledger.history_for(1)
    assert history.checked_in == returned

def test_close_active_checkout_is_idempotent(library):
    ledger = CheckoutLedger(library)
    ledger.close_active_checkout(1, T0)
    assert library.query(CheckoutHistory).count() == 0

    ledger.record_checkout(1, 2, since=T0, until=T0)
    ledger.close_active_checkout(1, T0 + datetime.timedelta(days=1))
    ledger.close_active_checkout(1, T0 + datetime.timedelta(days=2))
    [history] = ledger.history_for(1)
    assert history.checked_in == T0 + datetime.timedelta(days=1)

def test_close_active_checkout_without_history_row(library):
    """A checkout added directly has no history; closing still removes it."""
    ledger = CheckoutLedger(library)
    ledger.add(Checkout(asset_id=1, card_id=1, since=T0, until=T0))
    ledger.close_active_checkout(1, T0)
    assert not ledger.is_checked_out(1)
    assert ledger.history_for(1) == []

def test_history_is_ordered_by_checkout_time(library):
    ledger = CheckoutLedger(library)
    for days, card_id in ((0, 1), (5, 2), (10, 3)):
        since = T0 + datetime.timedelta(days=days)
        ledger.record_checkout(1, card_id, since=since, until=since)
        ledger.close_active_checkout(1, since + datetime.timedelta(days=1))

    assert [h.card_id for h in ledger.history_for(1)] == [1, 2, 3]
    assert all(h.checked_in is not None for h in ledger.history_for(1))

def test_latest_checkout_none(library):
    assert CheckoutLedger(library).latest_checkout(1) is None

def test_hold_queue_earliest_wins(library):
    queue = HoldQueue(library)
    late = queue.place_hold(1, 3, T0 + datetime.timedelta(hours=2))
    early = queue.place_hold(1, 2, T0)
    queue.place_hold(2, 1, T0 - datetime.timedelta(days=1))

    assert [h.id for h in queue.holds_for(1)] == [late.id, early.id]
    assert queue.earliest_hold(1).id == early.id

    queue.consume_hold(early)
    assert queue.earliest_hold(1).id == late.id
    assert library.query(Hold).filter(Hold.asset_id == 1).count() == 1

def test_hold_queue_allows_duplicate_holds(library):
    queue = HoldQueue(library)
    queue.place_hold(1, 2, T0)
    queue.place_hold(1, 2, T0 + datetime.timedelta(minutes=1))
    assert len(queue.holds_for(1)) == 2

def test_hold_queue_empty(library):
    queue = HoldQueue(library)
    assert queue.holds_for(1) == []
    assert queue.earliest_hold(1) is None
    assert queue.get(123) is None
