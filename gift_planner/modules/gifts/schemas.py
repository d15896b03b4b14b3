from typing import Optional

from pydantic import Field

from gift_planner.core.schemas import BaseSchema, OptionalUrl, Timestamp
from gift_planner.core.timestamps import now_millis


class Gift(BaseSchema):
    id: str
    wishlist_id: str
    name: str
    picture: OptionalUrl = None
    link: OptionalUrl = None
    is_qualified: bool = False
    created_at: Timestamp = Field(default_factory=now_millis)
    created_by: str


class GiftCreate(BaseSchema):
    """Gift creation"""

    name: str = Field(min_length=1)
    picture: OptionalUrl = None
    link: OptionalUrl = None
    is_qualified: bool = False


class GiftUpdate(BaseSchema):
    """Gift update (all fields are optional)"""

    name: Optional[str] = None
    picture: OptionalUrl = None
    link: OptionalUrl = None
    is_qualified: Optional[bool] = None
