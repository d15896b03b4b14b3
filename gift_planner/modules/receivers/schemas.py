from typing import Optional

from pydantic import Field

from gift_planner.core.schemas import BaseSchema, Timestamp
from gift_planner.core.timestamps import now_millis


class Receiver(BaseSchema):
    id: str
    event_id: str
    name: str
    created_at: Timestamp = Field(default_factory=now_millis)
    created_by: str


class ReceiverCreate(BaseSchema):
    name: str = Field(min_length=1)


class ReceiverUpdate(BaseSchema):
    name: Optional[str] = None
