from gift_planner.store.auth_store import AuthState, AuthStore, AuthUser
from gift_planner.store.collection import Collection, LiveQuery
from gift_planner.store.persistence import (
    initialize_collection_from_storage,
    load_from_storage,
    persist_collection,
    save_to_storage,
)
from gift_planner.store.storage import FileStorage, KeyValueStorage, MemoryStorage
from gift_planner.store.store import Store

__all__ = [
    "AuthState",
    "AuthStore",
    "AuthUser",
    "Collection",
    "FileStorage",
    "KeyValueStorage",
    "LiveQuery",
    "MemoryStorage",
    "Store",
    "initialize_collection_from_storage",
    "load_from_storage",
    "persist_collection",
    "save_to_storage",
]
