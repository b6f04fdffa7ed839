#!/usr/bin/env python

"""
    Checkout ledger for circdesk: active checkouts plus the
    append-only checkout history.

    Writes are flushed but never committed; the circulation engine
    owns the transaction.

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

import logging
from typing import List, Optional
from circdesk.core.db import session
from circdesk.core.models import Checkout, CheckoutHistory

logger = logging.getLogger(__name__)


class CheckoutLedger:

    def __init__(self, db=None):
        self.db = db if db is not None else session

    def add(self, checkout: Checkout) -> Checkout:
        self.db.add(checkout)
        self.db.flush()
        return checkout

    def get_all(self) -> List[Checkout]:
        return self.db.query(Checkout).order_by(Checkout.id).all()

    def get(self, checkout_id) -> Optional[Checkout]:
        return self.db.get(Checkout, checkout_id)

    def record_checkout(self, asset_id, card_id, since, until) -> Checkout:
        """Creates the active Checkout and opens a history episode.

        Does not look for an existing active checkout first; callers
        must check `is_checked_out` under the asset's lock.
        """
        checkout = Checkout(asset_id=asset_id, card_id=card_id, since=since, until=until)
        history = CheckoutHistory(asset_id=asset_id, card_id=card_id, checked_out=since)
        self.db.add_all([checkout, history])
        self.db.flush()
        logger.debug(f"recorded checkout of asset {asset_id} to card {card_id} until {until}")
        return checkout

    def active_checkout(self, asset_id) -> Optional[Checkout]:
        return self.db.query(Checkout).filter(Checkout.asset_id == asset_id).first()

    def open_history(self, asset_id) -> Optional[CheckoutHistory]:
        return self.db.query(CheckoutHistory).filter(
            CheckoutHistory.asset_id == asset_id,
            CheckoutHistory.checked_in == None  # noqa: E711
        ).first()

    def close_active_checkout(self, asset_id, now):
        """Removes the active checkout and closes the open history row.

        Either half is skipped when its record is absent, so this is
        safe to repeat.
        """
        if checkout := self.active_checkout(asset_id):
            self.db.delete(checkout)
        if history := self.open_history(asset_id):
            history.checked_in = now
        # delete must reach the database before any new checkout
        # row for the same asset is inserted
        self.db.flush()

    def latest_checkout(self, asset_id) -> Optional[Checkout]:
        return self.db.query(Checkout).filter(
            Checkout.asset_id == asset_id
        ).order_by(Checkout.since.desc()).first()

    def history_for(self, asset_id) -> List[CheckoutHistory]:
        return self.db.query(CheckoutHistory).filter(
            CheckoutHistory.asset_id == asset_id
        ).order_by(CheckoutHistory.checked_out, CheckoutHistory.id).all()

    def is_checked_out(self, asset_id) -> bool:
        return self.db.query(
            self.db.query(Checkout).filter(Checkout.asset_id == asset_id).exists()
        ).scalar()
