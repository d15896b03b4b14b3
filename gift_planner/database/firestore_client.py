import logging
from typing import Any, List, Mapping, Optional

from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter
from pydantic.alias_generators import to_camel, to_snake

from gift_planner.config import settings
from gift_planner.core.timestamps import parse_timestamp, to_datetime
from gift_planner.database.collections import get_collection
from gift_planner.database.repository import Record, Repository, generate_id

logger = logging.getLogger(__name__)


class FirestoreClient:
    _client: firestore.Client = None

    @classmethod
    def get_client(cls) -> firestore.Client:
        if cls._client is None:
            kwargs = {}
            if settings.firestore_project_id:
                kwargs["project"] = settings.firestore_project_id
            if settings.firestore_database:
                kwargs["database"] = settings.firestore_database
            cls._client = firestore.Client(**kwargs)
        return cls._client

    @classmethod
    def reset_client(cls):
        cls._client = None


def get_firestore() -> firestore.Client:
    return FirestoreClient.get_client()


class FirestoreRepository(Repository):
    """
    Document backend. Documents carry camelCase fields and Firestore
    timestamps; the document id doubles as the ``id`` field.
    """

    backend_name = "firestore"

    def __init__(self, db: Optional[firestore.Client] = None):
        self.db = db or FirestoreClient.get_client()

    def _collection(self, collection: str):
        return self.db.collection(get_collection(collection).document_collection)

    def _to_document(self, collection: str, record: Mapping[str, Any], clear_none: bool = False) -> dict:
        timestamps = get_collection(collection).timestamp_fields
        document = {}
        for key, value in record.items():
            if value is None:
                if clear_none:
                    document[to_camel(key)] = firestore.DELETE_FIELD
                continue
            if key in timestamps:
                value = to_datetime(value)
            document[to_camel(key)] = value
        return document

    def _from_document(self, collection: str, snapshot) -> Record:
        timestamps = get_collection(collection).timestamp_fields
        record = {"id": snapshot.id}
        for key, value in (snapshot.to_dict() or {}).items():
            field = to_snake(key)
            if value is None:
                continue
            record[field] = parse_timestamp(value) if field in timestamps else value
        return record

    def list(self, collection, filters=None, ids: Optional[List[str]] = None) -> List[Record]:
        if ids is not None:
            records = [self.get(collection, record_id) for record_id in ids]
            return [
                r for r in records
                if r is not None and all(r.get(k) == v for k, v in (filters or {}).items())
            ]
        query = self._collection(collection)
        for key, value in (filters or {}).items():
            query = query.where(filter=FieldFilter(to_camel(key), "==", value))
        return [self._from_document(collection, snapshot) for snapshot in query.stream()]

    def get(self, collection, record_id) -> Optional[Record]:
        snapshot = self._collection(collection).document(record_id).get()
        if not snapshot.exists:
            return None
        return self._from_document(collection, snapshot)

    def insert(self, collection, record) -> Record:
        record = dict(record)
        record_id = record.pop("id", None) or generate_id()
        document = self._to_document(collection, record)
        document["id"] = record_id
        self._collection(collection).document(record_id).set(document)
        return {"id": record_id, **{k: v for k, v in record.items() if v is not None}}

    def update(self, collection, record_id, changes) -> Optional[Record]:
        ref = self._collection(collection).document(record_id)
        if not ref.get().exists:
            return None
        ref.update(self._to_document(collection, changes, clear_none=True))
        return self.get(collection, record_id)

    def delete(self, collection, record_id) -> bool:
        ref = self._collection(collection).document(record_id)
        if not ref.get().exists:
            return False
        ref.delete()
        return True
