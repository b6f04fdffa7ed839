from pydantic import BaseModel
from typing import Optional

class PatronRead(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: Optional[str] = None
    telephone: Optional[str] = None
    library_card_id: Optional[int] = None

    class Config:
        from_attributes = True
