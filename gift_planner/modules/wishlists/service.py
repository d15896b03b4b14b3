from typing import List

from gift_planner.core.exceptions import NotFoundError
from gift_planner.core.timestamps import now_millis
from gift_planner.database.collections import WISHLISTS
from gift_planner.database.repository import Repository
from gift_planner.modules.wishlists.schemas import Wishlist, WishlistCreate, WishlistUpdate


class WishlistService:
    def __init__(self, repository: Repository):
        self.repository = repository

    def list_wishlists(self, receiver_id: str) -> List[Wishlist]:
        wishlists = [
            Wishlist.model_validate(w)
            for w in self.repository.list(WISHLISTS.name, {"receiver_id": receiver_id})
        ]
        return sorted(wishlists, key=lambda w: w.created_at)

    def create_wishlist(self, receiver_id: str, wishlist_data: WishlistCreate, user_id: str) -> Wishlist:
        """Create a wishlist for a receiver; without an event_id it is a general wishlist"""
        record = self.repository.insert(WISHLISTS.name, {
            **wishlist_data.to_record(),
            "receiver_id": receiver_id,
            "created_at": now_millis(),
            "created_by": user_id,
        })
        return Wishlist.model_validate(record)

    def get_wishlist_by_id(self, wishlist_id: str) -> Wishlist:
        record = self.repository.get(WISHLISTS.name, wishlist_id)
        if record is None:
            raise NotFoundError.for_entity(WISHLISTS.entity)
        return Wishlist.model_validate(record)

    def update_wishlist(self, wishlist_id: str, wishlist_data: WishlistUpdate) -> Wishlist:
        changes = wishlist_data.to_changes()
        if not changes:
            return self.get_wishlist_by_id(wishlist_id)
        record = self.repository.update(WISHLISTS.name, wishlist_id, changes)
        if record is None:
            raise NotFoundError.for_entity(WISHLISTS.entity)
        return Wishlist.model_validate(record)

    def delete_wishlist(self, wishlist_id: str) -> bool:
        if not self.repository.delete(WISHLISTS.name, wishlist_id):
            raise NotFoundError.for_entity(WISHLISTS.entity)
        return True
