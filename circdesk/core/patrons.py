#!/usr/bin/env python

"""
    Read-only patron and library card directory for circdesk.

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

from typing import List, Optional
from circdesk.core.db import session
from circdesk.core.models import LibraryCard, Patron, Checkout, CheckoutHistory, Hold
from circdesk.core.exceptions import CardNotFoundError


class PatronDirectory:

    def __init__(self, db=None):
        self.db = db if db is not None else session

    def card(self, card_id) -> LibraryCard:
        """Returns the library card or raises CardNotFoundError."""
        if card := self.db.get(LibraryCard, card_id):
            return card
        raise CardNotFoundError(f"Library card '{card_id}' does not exist.")

    def get(self, patron_id) -> Optional[Patron]:
        return self.db.get(Patron, patron_id)

    def get_all(self) -> List[Patron]:
        return Patron.get_many(self.db)

    def get_by_card(self, card_id) -> Optional[Patron]:
        if card_id is None:
            return None
        return self.db.query(Patron).filter(Patron.library_card_id == card_id).first()

    def name_for_card(self, card_id) -> str:
        """Display name of the card's patron, or "" if there is none."""
        patron = self.get_by_card(card_id)
        return patron.full_name if patron else ""

    def _card_id(self, patron_id):
        patron = self.get(patron_id)
        return patron.library_card_id if patron else None

    def get_checkout_history(self, patron_id) -> List[CheckoutHistory]:
        card_id = self._card_id(patron_id)
        return self.db.query(CheckoutHistory).filter(
            CheckoutHistory.card_id == card_id
        ).order_by(CheckoutHistory.checked_out).all()

    def get_holds(self, patron_id) -> List[Hold]:
        card_id = self._card_id(patron_id)
        return self.db.query(Hold).filter(Hold.card_id == card_id).order_by(Hold.hold_placed).all()

    def get_checkouts(self, patron_id) -> List[Checkout]:
        card_id = self._card_id(patron_id)
        return self.db.query(Checkout).filter(Checkout.card_id == card_id).order_by(Checkout.since).all()
