import uuid
from typing import Any, Dict, List, Mapping, Optional

Record = Dict[str, Any]


def generate_id() -> str:
    return str(uuid.uuid4())


class Repository:
    """
    Storage backend used by the module services.

    Records are plain dicts with snake_case keys and epoch millisecond
    timestamps. ``filters`` are equality matches that must all hold and
    ``ids`` restricts the result to the given record ids.
    """

    backend_name = "abstract"

    def list(
        self,
        collection: str,
        filters: Optional[Mapping[str, Any]] = None,
        ids: Optional[List[str]] = None,
    ) -> List[Record]:
        raise NotImplementedError

    def get(self, collection: str, record_id: str) -> Optional[Record]:
        raise NotImplementedError

    def insert(self, collection: str, record: Mapping[str, Any]) -> Record:
        """Store ``record``, generating an ``id`` when it has none, and return the stored record"""
        raise NotImplementedError

    def update(self, collection: str, record_id: str, changes: Mapping[str, Any]) -> Optional[Record]:
        """Overwrite the given fields; returns None when the record does not exist"""
        raise NotImplementedError

    def delete(self, collection: str, record_id: str) -> bool:
        raise NotImplementedError


def matches(record: Mapping[str, Any], filters: Optional[Mapping[str, Any]], ids: Optional[List[str]] = None) -> bool:
    if ids is not None and record.get("id") not in ids:
        return False
    if filters and any(record.get(k) != v for k, v in filters.items()):
        return False
    return True
