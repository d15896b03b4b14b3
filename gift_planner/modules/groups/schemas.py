from typing import Optional

from pydantic import Field

from gift_planner.core.schemas import BaseSchema, Timestamp
from gift_planner.core.timestamps import now_millis


class Group(BaseSchema):
    id: str
    name: str
    description: Optional[str] = None
    created_at: Timestamp = Field(default_factory=now_millis)
    created_by: str


class GroupCreate(BaseSchema):
    name: str = Field(min_length=1)
    description: Optional[str] = None


class GroupUpdate(BaseSchema):
    name: Optional[str] = None
    description: Optional[str] = None


class GroupMember(BaseSchema):
    id: str
    group_id: str
    user_id: str
    joined_at: Timestamp = Field(default_factory=now_millis)


class GroupMemberAdd(BaseSchema):
    user_id: str = Field(min_length=1)
