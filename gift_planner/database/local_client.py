import logging
import threading
from typing import Callable, Dict, List, Optional

from gift_planner.config import settings
from gift_planner.database.collections import COLLECTIONS
from gift_planner.database.repository import Record, Repository, generate_id, matches
from gift_planner.modules.assignments.schemas import GiftAssignment
from gift_planner.modules.events.schemas import Event
from gift_planner.modules.gifts.schemas import Gift
from gift_planner.modules.groups.schemas import Group, GroupMember
from gift_planner.modules.receivers.schemas import Receiver
from gift_planner.modules.users.schemas import User
from gift_planner.modules.wishlists.schemas import Wishlist
from gift_planner.store import Collection, FileStorage, KeyValueStorage, persist_collection

logger = logging.getLogger(__name__)

SCHEMAS = {
    "users": User,
    "groups": Group,
    "group_members": GroupMember,
    "events": Event,
    "receivers": Receiver,
    "wishlists": Wishlist,
    "gifts": Gift,
    "gift_assignments": GiftAssignment,
}


class LocalRepository(Repository):
    """
    Local-only backend: one reactive ``Collection`` per entity, each mirrored
    to the key-value storage under ``gift-planner-db-<collection>``.
    """

    backend_name = "local"

    def __init__(self, storage: Optional[KeyValueStorage] = None):
        self.storage = storage if storage is not None else FileStorage(settings.local_storage_path)
        self.collections: Dict[str, Collection] = {}
        self._unsubscribers: List[Callable[[], None]] = []
        self._lock = threading.RLock()
        for name, schema in SCHEMAS.items():
            collection = Collection(name, schema)
            self._unsubscribers.append(
                persist_collection(collection, self.storage, COLLECTIONS[name].document_collection)
            )
            self.collections[name] = collection

    def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def _collection(self, name: str) -> Collection:
        try:
            return self.collections[name]
        except KeyError:
            raise ValueError(f"Unknown collection: {name}") from None

    def list(self, collection, filters=None, ids=None) -> List[Record]:
        records = (item.to_record() for item in self._collection(collection).get_all())
        return [r for r in records if matches(r, filters, ids)]

    def get(self, collection, record_id) -> Optional[Record]:
        item = self._collection(collection).get(record_id)
        return item.to_record() if item is not None else None

    def insert(self, collection, record) -> Record:
        record = dict(record)
        record.setdefault("id", generate_id())
        with self._lock:
            return self._collection(collection).insert(record).to_record()

    def update(self, collection, record_id, changes) -> Optional[Record]:
        target = self._collection(collection)
        with self._lock:
            if record_id not in target:
                return None
            return target.update(record_id, changes).to_record()

    def delete(self, collection, record_id) -> bool:
        with self._lock:
            return self._collection(collection).delete(record_id)
