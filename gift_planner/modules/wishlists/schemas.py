from typing import Optional

from pydantic import Field

from gift_planner.core.schemas import BaseSchema, Timestamp
from gift_planner.core.timestamps import now_millis


class Wishlist(BaseSchema):
    id: str
    receiver_id: str
    event_id: Optional[str] = None  # None means a general wishlist, not tied to an event
    name: Optional[str] = None
    created_at: Timestamp = Field(default_factory=now_millis)
    created_by: str


class WishlistCreate(BaseSchema):
    event_id: Optional[str] = None
    name: Optional[str] = None


class WishlistUpdate(BaseSchema):
    event_id: Optional[str] = None
    name: Optional[str] = None
