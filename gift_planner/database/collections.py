"""
Collections known to every backend.

Relational tables (Supabase / Postgres), all keyed by ``id uuid``:

users:            name text not null, email text unique, created_at timestamptz
groups:           name text not null, description text, created_at, created_by uuid -> users.id
group_members:    group_id uuid -> groups.id, user_id uuid -> users.id, joined_at
events:           group_id -> groups.id, name, description, date timestamptz, created_at, created_by
receivers:        event_id -> events.id, name, created_at, created_by
wishlists:        receiver_id -> receivers.id, event_id -> events.id (null = general), name, created_at, created_by
gifts:            wishlist_id -> wishlists.id, name, picture, link, is_qualified bool default false, created_at, created_by
gift_assignments: gift_id -> gifts.id, assigned_to_user_id -> users.id, assigned_at, assigned_by,
                  is_purchased bool default false, purchased_at timestamptz

The document database uses the same fields in camelCase, in the collections
named by ``document_collection``.
"""

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class CollectionMeta:
    name: str
    entity: str
    document_collection: str
    timestamp_fields: Tuple[str, ...] = ("created_at",)


USERS = CollectionMeta("users", "User", "users")
GROUPS = CollectionMeta("groups", "Group", "groups")
GROUP_MEMBERS = CollectionMeta("group_members", "Member", "groupMembers", ("joined_at",))
EVENTS = CollectionMeta("events", "Event", "events", ("created_at", "date"))
RECEIVERS = CollectionMeta("receivers", "Receiver", "receivers")
WISHLISTS = CollectionMeta("wishlists", "Wishlist", "wishlists")
GIFTS = CollectionMeta("gifts", "Gift", "gifts")
GIFT_ASSIGNMENTS = CollectionMeta("gift_assignments", "Assignment", "giftAssignments", ("assigned_at", "purchased_at"))

COLLECTIONS: Dict[str, CollectionMeta] = {
    meta.name: meta
    for meta in (USERS, GROUPS, GROUP_MEMBERS, EVENTS, RECEIVERS, WISHLISTS, GIFTS, GIFT_ASSIGNMENTS)
}


def get_collection(name: str) -> CollectionMeta:
    try:
        return COLLECTIONS[name]
    except KeyError:
        raise ValueError(f"Unknown collection: {name}") from None
