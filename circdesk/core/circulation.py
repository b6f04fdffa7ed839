#!/usr/bin/env python

"""
    Circulation engine for circdesk.

    Moves an asset between Available, Checked Out, On Hold and Lost
    while keeping the checkout ledger and hold queue consistent:

    * check out   -> Checked Out, new Checkout + open history row
                     (silently ignored if the asset is already out)
    * check in    -> closes the checkout, then either hands the asset
                     to the earliest hold or makes it Available
    * place hold  -> Available becomes On Hold; any other status stays
    * mark lost   -> Lost, ledger and holds left untouched
    * mark found  -> Available, stale checkout closed, holds ignored

    Each mutating operation runs under the asset's lock and commits
    exactly once; any failure rolls the whole operation back.

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

import enum
import logging
import datetime
from contextlib import contextmanager
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from circdesk.configs import LOAN_PERIOD_DAYS
from circdesk.core.db import session
from circdesk.core.models import AssetStatus, Checkout
from circdesk.core.locks import ASSET_LOCKS
from circdesk.core.status import AssetStatusStore
from circdesk.core.ledger import CheckoutLedger
from circdesk.core.holds import HoldQueue
from circdesk.core.patrons import PatronDirectory
from circdesk.core.exceptions import DatabaseCommitError
from circdesk.schemas import CheckoutRead, CheckoutHistoryRead, HoldRead, PatronRead

logger = logging.getLogger(__name__)


class CheckoutResult(enum.Enum):
    OK = "ok"
    ALREADY_CHECKED_OUT = "already_checked_out"


class CheckinResult(enum.Enum):
    AVAILABLE = "available"
    FULFILLED_HOLD = "fulfilled_hold"


class CirculationService:

    def __init__(self, db=None, clock=None, locks=None, loan_period_days=None):
        self.db = db if db is not None else session
        self.clock = clock or datetime.datetime.utcnow
        self.locks = locks if locks is not None else ASSET_LOCKS
        self.loan_period_days = LOAN_PERIOD_DAYS if loan_period_days is None else loan_period_days
        self.statuses = AssetStatusStore(self.db)
        self.ledger = CheckoutLedger(self.db)
        self.holds = HoldQueue(self.db)
        self.patrons = PatronDirectory(self.db)

    @contextmanager
    def _transaction(self, asset_id):
        """Serializes work on `asset_id` and commits it as one unit."""
        with self.locks.acquire(asset_id):
            try:
                yield
                self.db.commit()
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error(f"rolled back circulation change on asset {asset_id}: {e}")
                raise DatabaseCommitError(
                    f"Failed to commit circulation change on asset {asset_id}: {str(e)}."
                ) from e
            except Exception:
                self.db.rollback()
                raise

    def due_date(self, since: datetime.datetime) -> datetime.datetime:
        return since + datetime.timedelta(days=self.loan_period_days)

    # Transitions

    def check_out_item(self, asset_id, card_id) -> CheckoutResult:
        with self._transaction(asset_id):
            return self._check_out(asset_id, card_id)

    def _check_out(self, asset_id, card_id) -> CheckoutResult:
        if self.ledger.is_checked_out(asset_id):
            logger.warning(f"asset {asset_id} is already checked out; ignoring checkout to card {card_id}")
            return CheckoutResult.ALREADY_CHECKED_OUT

        self.patrons.card(card_id)
        self.statuses.set_status(asset_id, AssetStatus.CHECKED_OUT)
        now = self.clock()
        self.ledger.record_checkout(asset_id, card_id, since=now, until=self.due_date(now))
        logger.info(f"asset {asset_id} checked out to card {card_id}")
        return CheckoutResult.OK

    def check_in_item(self, asset_id) -> CheckinResult:
        with self._transaction(asset_id):
            self.statuses.get_asset(asset_id)
            self.ledger.close_active_checkout(asset_id, self.clock())

            if hold := self.holds.earliest_hold(asset_id):
                card_id = hold.card_id
                self.holds.consume_hold(hold)
                # goes straight to the next patron, never through Available
                self._check_out(asset_id, card_id)
                logger.info(f"asset {asset_id} checked in and passed to hold of card {card_id}")
                return CheckinResult.FULFILLED_HOLD

            self.statuses.set_status(asset_id, AssetStatus.AVAILABLE)
            logger.info(f"asset {asset_id} checked in and available")
            return CheckinResult.AVAILABLE

    def place_hold(self, asset_id, card_id) -> HoldRead:
        with self._transaction(asset_id):
            status = self.statuses.get_status(asset_id)
            self.patrons.card(card_id)
            if status is AssetStatus.AVAILABLE:
                self.statuses.set_status(asset_id, AssetStatus.ON_HOLD)
            hold = self.holds.place_hold(asset_id, card_id, self.clock())
            logger.info(f"hold {hold.id} placed on asset {asset_id} for card {card_id}")
            return HoldRead.model_validate(hold)

    def mark_lost(self, asset_id):
        with self._transaction(asset_id):
            self.statuses.set_status(asset_id, AssetStatus.LOST)
            logger.info(f"asset {asset_id} marked lost")

    def mark_found(self, asset_id):
        with self._transaction(asset_id):
            self.statuses.set_status(asset_id, AssetStatus.AVAILABLE)
            self.ledger.close_active_checkout(asset_id, self.clock())
            logger.info(f"asset {asset_id} marked found")

    def add_checkout(self, checkout: Checkout) -> CheckoutRead:
        """Stores a caller-built Checkout as is, without touching status or history."""
        with self._transaction(checkout.asset_id):
            return CheckoutRead.model_validate(self.ledger.add(checkout))

    # Reads

    def get_status(self, asset_id) -> AssetStatus:
        return self.statuses.get_status(asset_id)

    def is_checked_out(self, asset_id) -> bool:
        return self.ledger.is_checked_out(asset_id)

    def get_all_checkouts(self) -> List[CheckoutRead]:
        return [CheckoutRead.model_validate(c) for c in self.ledger.get_all()]

    def get_checkout(self, checkout_id) -> Optional[CheckoutRead]:
        if checkout := self.ledger.get(checkout_id):
            return CheckoutRead.model_validate(checkout)

    def get_latest_checkout(self, asset_id) -> Optional[CheckoutRead]:
        if checkout := self.ledger.latest_checkout(asset_id):
            return CheckoutRead.model_validate(checkout)

    def get_checkout_history(self, asset_id) -> List[CheckoutHistoryRead]:
        return [CheckoutHistoryRead.model_validate(h) for h in self.ledger.history_for(asset_id)]

    def get_current_holds(self, asset_id) -> List[HoldRead]:
        return [HoldRead.model_validate(h) for h in self.holds.holds_for(asset_id)]

    def get_current_checkout_patron(self, asset_id) -> str:
        checkout = self.ledger.active_checkout(asset_id)
        if checkout is None:
            return ""
        return self.patrons.name_for_card(checkout.card_id)

    def get_current_hold_patron_name(self, hold_id) -> str:
        hold = self.holds.get(hold_id)
        return self.patrons.name_for_card(hold.card_id if hold else None)

    def get_current_hold_placed(self, hold_id) -> Optional[datetime.datetime]:
        if hold := self.holds.get(hold_id):
            return hold.hold_placed

    # Patron reads

    def get_patron(self, patron_id) -> Optional[PatronRead]:
        if patron := self.patrons.get(patron_id):
            return PatronRead.model_validate(patron)

    def get_patrons(self) -> List[PatronRead]:
        return [PatronRead.model_validate(p) for p in self.patrons.get_all()]

    def get_patron_checkout_history(self, patron_id) -> List[CheckoutHistoryRead]:
        return [CheckoutHistoryRead.model_validate(h) for h in self.patrons.get_checkout_history(patron_id)]

    def get_patron_holds(self, patron_id) -> List[HoldRead]:
        return [HoldRead.model_validate(h) for h in self.patrons.get_holds(patron_id)]

    def get_patron_checkouts(self, patron_id) -> List[CheckoutRead]:
        return [CheckoutRead.model_validate(c) for c in self.patrons.get_checkouts(patron_id)]
