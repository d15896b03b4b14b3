import logging
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel

from gift_planner.core.exceptions import DuplicateKeyError, NotFoundError
from gift_planner.store.store import Store

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)
Changes = Union[Mapping[str, Any], Callable[[T], Optional[T]]]


class Collection(Generic[T]):
    """
    Keyed, observable collection of validated records.

    The state held by the underlying ``Store`` is a ``{"items": {key: record}}``
    mapping which is replaced, never mutated, on every change so listeners can
    keep the snapshot they were given.
    """

    def __init__(self, name: str, schema: Type[T], get_key: Callable[[T], str] = lambda record: record.id):
        self.name = name
        self.schema = schema
        self.get_key = get_key
        self.store: Store[Dict[str, Dict[str, T]]] = Store({"items": {}})

    def _validate(self, item: Union[T, Mapping[str, Any]]) -> T:
        if isinstance(item, self.schema):
            return item
        return self.schema.model_validate(item)

    @property
    def items(self) -> Dict[str, T]:
        return self.store.state["items"]

    def insert(self, item: Union[T, Mapping[str, Any]]) -> T:
        record = self._validate(item)
        key = self.get_key(record)

        def add(state):
            if key in state["items"]:
                raise DuplicateKeyError(f"{self.name}: key {key} already exists")
            items = dict(state["items"])
            items[key] = record
            return {"items": items}

        self.store.set_state(add)
        return record

    def update(self, key: str, changes: Changes) -> T:
        """
        Overwrite fields of the record stored under ``key``.

        ``changes`` is either a mapping of field names to new values or a
        callable receiving a copy of the record; the callable may mutate the
        copy in place or return a replacement.
        """
        updated: Dict[str, T] = {}

        def apply(state):
            current = state["items"].get(key)
            if current is None:
                raise NotFoundError(f"{self.name}: key {key} not found")
            if callable(changes):
                draft = current.model_copy(deep=True)
                result = changes(draft)
                record = self._validate(result if result is not None else draft)
            else:
                record = self.schema.model_validate({**current.model_dump(), **dict(changes)})
            items = dict(state["items"])
            items[key] = record
            updated["record"] = record
            return {"items": items}

        self.store.set_state(apply)
        return updated["record"]

    def delete(self, key: str) -> bool:
        if key not in self.items:
            return False

        def remove(state):
            items = dict(state["items"])
            items.pop(key, None)
            return {"items": items}

        self.store.set_state(remove)
        return True

    def get(self, key: str) -> Optional[T]:
        return self.items.get(key)

    def get_all(self) -> List[T]:
        return list(self.items.values())

    def __len__(self):
        return len(self.items)

    def __contains__(self, key):
        return key in self.items

    def subscribe(self, listener: Callable[[List[T]], None]) -> Callable[[], None]:
        """``listener`` receives the full list of records after every change"""
        return self.store.subscribe(lambda state: listener(list(state["items"].values())))


class LiveQuery(Generic[T]):
    """Derived view over a collection, recomputed whenever the collection changes"""

    def __init__(self, collection: Collection[T], query_fn: Callable[[List[T]], List[T]]):
        self.collection = collection
        self.query_fn = query_fn
        self._data = query_fn(collection.get_all())
        self._unsubscribe = collection.subscribe(self._refresh)

    def _refresh(self, items: List[T]) -> None:
        self._data = self.query_fn(items)

    @property
    def data(self) -> List[T]:
        return self._data

    def close(self) -> None:
        self._unsubscribe()
