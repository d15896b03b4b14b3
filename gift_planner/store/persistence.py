"""Mirror collections to a key-value storage and rehydrate them on start."""

import json
import logging
from typing import Callable, List

from pydantic import ValidationError as PydanticValidationError

from gift_planner.core.exceptions import DuplicateKeyError
from gift_planner.store.collection import Collection
from gift_planner.store.storage import KeyValueStorage

logger = logging.getLogger(__name__)

STORAGE_PREFIX = "gift-planner-db-"


def get_storage_key(collection_name: str) -> str:
    return f"{STORAGE_PREFIX}{collection_name}"


def load_from_storage(storage: KeyValueStorage, collection_name: str) -> List[dict]:
    try:
        stored = storage.get_item(get_storage_key(collection_name))
        if stored:
            data = json.loads(stored)
            if isinstance(data, list):
                return data
            logger.error("Stored %s is not a list, ignoring it", collection_name)
    except (OSError, ValueError) as e:
        logger.error("Error loading %s from storage: %s", collection_name, e)
    return []


def save_to_storage(storage: KeyValueStorage, collection_name: str, data: List) -> None:
    try:
        payload = [
            item.model_dump(mode="json", by_alias=True, exclude_none=True) if hasattr(item, "model_dump") else item
            for item in data
        ]
        storage.set_item(get_storage_key(collection_name), json.dumps(payload))
    except (OSError, TypeError, ValueError) as e:
        logger.error("Error saving %s to storage: %s", collection_name, e)


def initialize_collection_from_storage(collection: Collection, storage: KeyValueStorage, collection_name: str) -> int:
    """Insert every stored item into ``collection``; returns how many were inserted"""
    inserted = 0
    for item in load_from_storage(storage, collection_name):
        try:
            collection.insert(item)
            inserted += 1
        except DuplicateKeyError:
            # Already in memory
            continue
        except PydanticValidationError as e:
            logger.warning("Skipping invalid stored %s item: %s", collection_name, e)
    return inserted


def persist_collection(collection: Collection, storage: KeyValueStorage, collection_name: str = None) -> Callable[[], None]:
    """
    Rehydrate ``collection`` from storage, then save it after every change.

    Returns the unsubscribe callable that stops the mirroring.
    """
    name = collection_name or collection.name
    count = initialize_collection_from_storage(collection, storage, name)
    if count:
        logger.info("Loaded %d %s from storage", count, name)
    return collection.subscribe(lambda items: save_to_storage(storage, name, items))
