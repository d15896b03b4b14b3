from typing import List

from gift_planner.core.exceptions import NotFoundError
from gift_planner.core.timestamps import now_millis
from gift_planner.database.collections import GIFTS
from gift_planner.database.repository import Repository
from gift_planner.modules.gifts.schemas import Gift, GiftCreate, GiftUpdate


class GiftService:
    def __init__(self, repository: Repository):
        self.repository = repository

    def list_gifts(self, wishlist_id: str) -> List[Gift]:
        gifts = [Gift.model_validate(g) for g in self.repository.list(GIFTS.name, {"wishlist_id": wishlist_id})]
        return sorted(gifts, key=lambda g: g.created_at)

    def create_gift(self, wishlist_id: str, gift_data: GiftCreate, user_id: str) -> Gift:
        record = self.repository.insert(GIFTS.name, {
            **gift_data.to_record(),
            "wishlist_id": wishlist_id,
            "created_at": now_millis(),
            "created_by": user_id,
        })
        return Gift.model_validate(record)

    def get_gift_by_id(self, gift_id: str) -> Gift:
        record = self.repository.get(GIFTS.name, gift_id)
        if record is None:
            raise NotFoundError.for_entity(GIFTS.entity)
        return Gift.model_validate(record)

    def update_gift(self, gift_id: str, gift_data: GiftUpdate) -> Gift:
        changes = gift_data.to_changes("name", "is_qualified")
        if not changes:
            return self.get_gift_by_id(gift_id)
        record = self.repository.update(GIFTS.name, gift_id, changes)
        if record is None:
            raise NotFoundError.for_entity(GIFTS.entity)
        return Gift.model_validate(record)

    def delete_gift(self, gift_id: str) -> bool:
        if not self.repository.delete(GIFTS.name, gift_id):
            raise NotFoundError.for_entity(GIFTS.entity)
        return True
