import logging
from typing import Any, List, Mapping, Optional

from supabase import create_client, Client

from gift_planner.config import settings
from gift_planner.core.timestamps import parse_timestamp, to_iso
from gift_planner.database.collections import get_collection
from gift_planner.database.repository import Record, Repository, generate_id

logger = logging.getLogger(__name__)


class SupabaseClient:
    _client: Client = None
    _service_client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def get_service_client(cls) -> Client:
        """Client with service_role key; bypasses RLS."""
        if cls._service_client is None and settings.supabase_service_role_key:
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client or cls.get_client()

    @classmethod
    def reset_client(cls):
        cls._client = None
        cls._service_client = None


def get_supabase() -> Client:
    return SupabaseClient.get_client()


class SupabaseRepository(Repository):
    """Relational backend: one table per collection, timestamp columns as ISO-8601"""

    backend_name = "supabase"

    def __init__(self, supabase: Optional[Client] = None):
        self.supabase = supabase or SupabaseClient.get_service_client()

    def _to_row(self, collection: str, record: Mapping[str, Any]) -> dict:
        row = dict(record)
        for field in get_collection(collection).timestamp_fields:
            if row.get(field) is not None:
                row[field] = to_iso(row[field])
        return row

    def _from_row(self, collection: str, row: Mapping[str, Any]) -> Record:
        record = {k: v for k, v in row.items() if v is not None}
        for field in get_collection(collection).timestamp_fields:
            if field in record:
                record[field] = parse_timestamp(record[field])
        return record

    def list(self, collection, filters=None, ids: Optional[List[str]] = None) -> List[Record]:
        if ids is not None and not ids:
            return []
        query = self.supabase.table(collection).select("*")
        for key, value in (filters or {}).items():
            query = query.eq(key, value)
        if ids is not None:
            query = query.in_("id", ids)
        result = query.execute()
        return [self._from_row(collection, row) for row in result.data or []]

    def get(self, collection, record_id) -> Optional[Record]:
        result = self.supabase.table(collection)\
            .select("*")\
            .eq("id", record_id)\
            .limit(1)\
            .execute()
        if not result.data:
            return None
        return self._from_row(collection, result.data[0])

    def insert(self, collection, record) -> Record:
        row = self._to_row(collection, record)
        row.setdefault("id", generate_id())
        result = self.supabase.table(collection).insert(row).execute()
        if not result.data:
            raise RuntimeError(f"Failed to insert into {collection}")
        return self._from_row(collection, result.data[0])

    def update(self, collection, record_id, changes) -> Optional[Record]:
        result = self.supabase.table(collection)\
            .update(self._to_row(collection, changes))\
            .eq("id", record_id)\
            .execute()
        if not result.data:
            return None
        return self._from_row(collection, result.data[0])

    def delete(self, collection, record_id) -> bool:
        result = self.supabase.table(collection)\
            .delete()\
            .eq("id", record_id)\
            .execute()
        return bool(result.data)
