#!/usr/bin/env python
"""
    Checkout Schemas for circdesk,
    read models for active checkouts and checkout history rows.

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

from pydantic import BaseModel
from typing import Optional
from datetime import datetime

class CheckoutRead(BaseModel):
    id: int
    asset_id: int
    card_id: int
    since: datetime
    until: datetime

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "asset_id": 42,
                "card_id": 7,
                "since": "2023-10-01T12:00:00",
                "until": "2023-10-31T12:00:00"
            }
        }

class CheckoutHistoryRead(BaseModel):
    id: int
    asset_id: int
    card_id: int
    checked_out: datetime
    checked_in: Optional[datetime] = None

    class Config:
        from_attributes = True
