from circdesk.schemas.checkout import CheckoutRead, CheckoutHistoryRead
from circdesk.schemas.hold import HoldRead
from circdesk.schemas.patron import PatronRead

__all__ = ["CheckoutRead", "CheckoutHistoryRead", "HoldRead", "PatronRead"]
