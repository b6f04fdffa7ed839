import logging
from typing import List, Optional
from circdesk.core.db import session
from circdesk.core.models import Hold

logger = logging.getLogger(__name__)


class HoldQueue:
    """Pending holds per asset. Consumed holds are deleted, not archived."""

    def __init__(self, db=None):
        self.db = db if db is not None else session

    def get(self, hold_id) -> Optional[Hold]:
        return self.db.get(Hold, hold_id)

    def place_hold(self, asset_id, card_id, now) -> Hold:
        # the same card may hold the same asset more than once
        hold = Hold(asset_id=asset_id, card_id=card_id, hold_placed=now)
        self.db.add(hold)
        self.db.flush()
        return hold

    def holds_for(self, asset_id) -> List[Hold]:
        """All holds on the asset in storage order; sort by hold_placed for priority."""
        return self.db.query(Hold).filter(Hold.asset_id == asset_id).order_by(Hold.id).all()

    def earliest_hold(self, asset_id) -> Optional[Hold]:
        return self.db.query(Hold).filter(
            Hold.asset_id == asset_id
        ).order_by(Hold.hold_placed, Hold.id).first()

    def consume_hold(self, hold: Hold):
        logger.debug(f"consuming hold {hold.id} on asset {hold.asset_id}")
        self.db.delete(hold)
        self.db.flush()
