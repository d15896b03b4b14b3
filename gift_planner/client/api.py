"""
REST namespaces over ApiClient, one per entity.

Responses are returned as the server's camelCase JSON, except users which are
parsed into User models.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ValidationError

from gift_planner.client.api_client import ApiClient
from gift_planner.config import settings
from gift_planner.core.timestamps import to_epoch_millis
from gift_planner.modules.users.schemas import User
from gift_planner.store.storage import FileStorage

logger = logging.getLogger(__name__)

Payload = Union[BaseModel, Dict[str, Any]]


def _payload(data: Payload) -> Dict[str, Any]:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True, exclude_unset=True)
    return dict(data)


def transform_user(data: Any) -> User:
    """Parse a user payload, falling back to whatever can be salvaged when it has an id"""
    try:
        return User.model_validate(data)
    except ValidationError as e:
        logger.warning("User validation failed, raw data: %r (%s)", data, e)
        if isinstance(data, dict) and data.get("id"):
            return User.model_construct(
                id=data["id"],
                name=data.get("name") or "",
                email=data.get("email") or None,
                created_at=to_epoch_millis(data.get("createdAt", data.get("created_at"))),
            )
        raise ValueError(f"Invalid user data: {e}") from e


class _Namespace:
    def __init__(self, client: ApiClient):
        self.client = client


class AuthApi(_Namespace):
    def create_user(self, name: str, email: str) -> User:
        return transform_user(self.client.post("/auth/users", {"name": name, "email": email}))


class UsersApi(_Namespace):
    def get_all(self) -> List[User]:
        return [transform_user(item) for item in self.client.get("/users")]

    def get_by_id(self, user_id: str) -> User:
        return transform_user(self.client.get(f"/users/{user_id}"))

    def update(self, user_id: str, data: Payload) -> User:
        return transform_user(self.client.put(f"/users/{user_id}", _payload(data)))


class GroupsApi(_Namespace):
    def get_all(self) -> List[dict]:
        return self.client.get("/groups")

    def get_by_id(self, group_id: str) -> dict:
        return self.client.get(f"/groups/{group_id}")

    def create(self, data: Payload) -> dict:
        return self.client.post("/groups", _payload(data))

    def update(self, group_id: str, data: Payload) -> dict:
        return self.client.put(f"/groups/{group_id}", _payload(data))

    def delete(self, group_id: str) -> dict:
        return self.client.delete(f"/groups/{group_id}")


class GroupMembersApi(_Namespace):
    def get_by_group(self, group_id: str) -> List[dict]:
        return self.client.get(f"/groups/{group_id}/members")

    def add(self, group_id: str, user_id: str) -> dict:
        return self.client.post(f"/groups/{group_id}/members", {"userId": user_id})

    def remove(self, group_id: str, member_id: str) -> dict:
        return self.client.delete(f"/groups/{group_id}/members/{member_id}")


class _ChildResourceApi(_Namespace):
    """CRUD for a resource nested under a parent: /<parent>/{id}/<resource> and /<resource>/{id}"""

    parent = ""
    resource = ""

    def get_by_parent(self, parent_id: str) -> List[dict]:
        return self.client.get(f"/{self.parent}/{parent_id}/{self.resource}")

    def get_by_id(self, item_id: str) -> dict:
        return self.client.get(f"/{self.resource}/{item_id}")

    def create(self, parent_id: str, data: Payload) -> dict:
        return self.client.post(f"/{self.parent}/{parent_id}/{self.resource}", _payload(data))

    def update(self, item_id: str, data: Payload) -> dict:
        return self.client.put(f"/{self.resource}/{item_id}", _payload(data))

    def delete(self, item_id: str) -> dict:
        return self.client.delete(f"/{self.resource}/{item_id}")


class EventsApi(_ChildResourceApi):
    parent = "groups"
    resource = "events"

    def get_by_group(self, group_id: str) -> List[dict]:
        return self.get_by_parent(group_id)


class ReceiversApi(_ChildResourceApi):
    parent = "events"
    resource = "receivers"

    def get_by_event(self, event_id: str) -> List[dict]:
        return self.get_by_parent(event_id)


class WishlistsApi(_ChildResourceApi):
    parent = "receivers"
    resource = "wishlists"

    def get_by_receiver(self, receiver_id: str) -> List[dict]:
        return self.get_by_parent(receiver_id)


class GiftsApi(_ChildResourceApi):
    parent = "wishlists"
    resource = "gifts"

    def get_by_wishlist(self, wishlist_id: str) -> List[dict]:
        return self.get_by_parent(wishlist_id)


class GiftAssignmentsApi(_Namespace):
    def get_by_gift(self, gift_id: str) -> List[dict]:
        return self.client.get(f"/gifts/{gift_id}/assignments")

    def create(self, gift_id: str, assigned_to_user_id: str) -> dict:
        return self.client.post(f"/gifts/{gift_id}/assignments", {"assignedToUserId": assigned_to_user_id})

    def update(self, assignment_id: str, data: Payload) -> dict:
        return self.client.put(f"/assignments/{assignment_id}", _payload(data))

    def delete(self, assignment_id: str) -> dict:
        return self.client.delete(f"/assignments/{assignment_id}")


class GiftPlannerApi:
    """All namespaces bound to one client"""

    def __init__(self, client: Optional[ApiClient] = None):
        self.client = client or ApiClient()
        self.auth = AuthApi(self.client)
        self.users = UsersApi(self.client)
        self.groups = GroupsApi(self.client)
        self.group_members = GroupMembersApi(self.client)
        self.events = EventsApi(self.client)
        self.receivers = ReceiversApi(self.client)
        self.wishlists = WishlistsApi(self.client)
        self.gifts = GiftsApi(self.client)
        self.gift_assignments = GiftAssignmentsApi(self.client)


# Shared by the module-level namespaces; the auth token persists in client_storage_path
api_client = ApiClient(storage=FileStorage(settings.client_storage_path))
auth_api = AuthApi(api_client)
users_api = UsersApi(api_client)
groups_api = GroupsApi(api_client)
group_members_api = GroupMembersApi(api_client)
events_api = EventsApi(api_client)
receivers_api = ReceiversApi(api_client)
wishlists_api = WishlistsApi(api_client)
gifts_api = GiftsApi(api_client)
gift_assignments_api = GiftAssignmentsApi(api_client)
