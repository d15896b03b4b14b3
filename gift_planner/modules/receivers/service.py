from typing import List

from gift_planner.core.exceptions import NotFoundError
from gift_planner.core.timestamps import now_millis
from gift_planner.database.collections import RECEIVERS
from gift_planner.database.repository import Repository
from gift_planner.modules.receivers.schemas import Receiver, ReceiverCreate, ReceiverUpdate


class ReceiverService:
    def __init__(self, repository: Repository):
        self.repository = repository

    def list_receivers(self, event_id: str) -> List[Receiver]:
        receivers = [
            Receiver.model_validate(r)
            for r in self.repository.list(RECEIVERS.name, {"event_id": event_id})
        ]
        return sorted(receivers, key=lambda r: r.created_at)

    def create_receiver(self, event_id: str, receiver_data: ReceiverCreate, user_id: str) -> Receiver:
        record = self.repository.insert(RECEIVERS.name, {
            "event_id": event_id,
            "name": receiver_data.name,
            "created_at": now_millis(),
            "created_by": user_id,
        })
        return Receiver.model_validate(record)

    def get_receiver_by_id(self, receiver_id: str) -> Receiver:
        record = self.repository.get(RECEIVERS.name, receiver_id)
        if record is None:
            raise NotFoundError.for_entity(RECEIVERS.entity)
        return Receiver.model_validate(record)

    def update_receiver(self, receiver_id: str, receiver_data: ReceiverUpdate) -> Receiver:
        changes = receiver_data.to_changes("name")
        if not changes:
            return self.get_receiver_by_id(receiver_id)
        record = self.repository.update(RECEIVERS.name, receiver_id, changes)
        if record is None:
            raise NotFoundError.for_entity(RECEIVERS.entity)
        return Receiver.model_validate(record)

    def delete_receiver(self, receiver_id: str) -> bool:
        if not self.repository.delete(RECEIVERS.name, receiver_id):
            raise NotFoundError.for_entity(RECEIVERS.entity)
        return True
