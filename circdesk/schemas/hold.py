from pydantic import BaseModel
from datetime import datetime

class HoldRead(BaseModel):
    id: int
    asset_id: int
    card_id: int
    hold_placed: datetime

    class Config:
        from_attributes = True
