from typing import List

from gift_planner.core.exceptions import NotFoundError
from gift_planner.core.timestamps import now_millis
from gift_planner.database.collections import EVENTS
from gift_planner.database.repository import Repository
from gift_planner.modules.events.schemas import Event, EventCreate, EventUpdate


class EventService:
    def __init__(self, repository: Repository):
        self.repository = repository

    def list_events(self, group_id: str) -> List[Event]:
        events = [Event.model_validate(e) for e in self.repository.list(EVENTS.name, {"group_id": group_id})]
        return sorted(events, key=lambda e: e.created_at)

    def create_event(self, group_id: str, event_data: EventCreate, user_id: str) -> Event:
        record = self.repository.insert(EVENTS.name, {
            **event_data.to_record(),
            "group_id": group_id,
            "created_at": now_millis(),
            "created_by": user_id,
        })
        return Event.model_validate(record)

    def get_event_by_id(self, event_id: str) -> Event:
        record = self.repository.get(EVENTS.name, event_id)
        if record is None:
            raise NotFoundError.for_entity(EVENTS.entity)
        return Event.model_validate(record)

    def update_event(self, event_id: str, event_data: EventUpdate) -> Event:
        changes = event_data.to_changes("name")
        if not changes:
            return self.get_event_by_id(event_id)
        record = self.repository.update(EVENTS.name, event_id, changes)
        if record is None:
            raise NotFoundError.for_entity(EVENTS.entity)
        return Event.model_validate(record)

    def delete_event(self, event_id: str) -> bool:
        if not self.repository.delete(EVENTS.name, event_id):
            raise NotFoundError.for_entity(EVENTS.entity)
        return True
