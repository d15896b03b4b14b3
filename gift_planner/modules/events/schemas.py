from typing import Optional

from pydantic import Field

from gift_planner.core.schemas import BaseSchema, OptionalTimestamp, Timestamp
from gift_planner.core.timestamps import now_millis


class Event(BaseSchema):
    id: str
    group_id: str
    name: str
    description: Optional[str] = None
    date: OptionalTimestamp = None
    created_at: Timestamp = Field(default_factory=now_millis)
    created_by: str


class EventCreate(BaseSchema):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    date: OptionalTimestamp = None


class EventUpdate(BaseSchema):
    name: Optional[str] = None
    description: Optional[str] = None
    date: OptionalTimestamp = None
