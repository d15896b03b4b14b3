from typing import Optional

from pydantic import Field

from gift_planner.core.schemas import BaseSchema, OptionalTimestamp, Timestamp
from gift_planner.core.timestamps import now_millis


class GiftAssignment(BaseSchema):
    id: str
    gift_id: str
    assigned_to_user_id: str
    assigned_at: Timestamp = Field(default_factory=now_millis)
    assigned_by: str
    is_purchased: bool = False
    purchased_at: OptionalTimestamp = None


class GiftAssignmentCreate(BaseSchema):
    assigned_to_user_id: str = Field(min_length=1)


class GiftAssignmentUpdate(BaseSchema):
    is_purchased: Optional[bool] = None
    purchased_at: OptionalTimestamp = None
