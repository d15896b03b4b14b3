from datetime import datetime, timezone
from unittest import mock

import pytest
from google.cloud import firestore

from gift_planner.database import create_repository
from gift_planner.database.firestore_client import FirestoreRepository
from gift_planner.database.local_client import LocalRepository
from gift_planner.database.supabase_client import SupabaseRepository
from gift_planner.store import MemoryStorage

NEW_YEAR = 1735689600000


def supabase_query(data):
    query = mock.MagicMock()
    for name in ("select", "eq", "in_", "limit", "insert", "update", "delete"):
        getattr(query, name).return_value = query
    query.execute.return_value = mock.Mock(data=data)
    supabase = mock.Mock()
    supabase.table.return_value = query
    return supabase, query


class TestSupabaseRepository:
    def test_list_applies_filters_and_parses_timestamps(self):
        supabase, query = supabase_query([
            {"id": "e1", "group_id": "g1", "name": "Xmas", "description": None,
             "created_at": "2025-01-01T00:00:00+00:00", "date": None},
        ])
        records = SupabaseRepository(supabase).list("events", {"group_id": "g1"})
        supabase.table.assert_called_with("events")
        query.eq.assert_called_once_with("group_id", "g1")
        assert records == [{"id": "e1", "group_id": "g1", "name": "Xmas", "created_at": NEW_YEAR}]

    def test_list_by_ids(self):
        supabase, query = supabase_query([])
        repo = SupabaseRepository(supabase)
        repo.list("groups", ids=["g1", "g2"])
        query.in_.assert_called_once_with("id", ["g1", "g2"])
        assert repo.list("groups", ids=[]) == []

    def test_insert_writes_iso_timestamps(self):
        supabase, query = supabase_query([{"id": "a1", "assigned_at": "2025-01-01T00:00:00Z", "is_purchased": False}])
        record = SupabaseRepository(supabase).insert(
            "gift_assignments", {"id": "a1", "assigned_at": NEW_YEAR, "is_purchased": False}
        )
        row = query.insert.call_args.args[0]
        assert row["assigned_at"] == "2025-01-01T00:00:00Z"
        assert record["assigned_at"] == NEW_YEAR

    def test_insert_generates_id(self):
        supabase, query = supabase_query([{"id": "x"}])
        SupabaseRepository(supabase).insert("groups", {"name": "Family"})
        assert query.insert.call_args.args[0]["id"]

    def test_get_update_delete_missing(self):
        supabase, _ = supabase_query([])
        repo = SupabaseRepository(supabase)
        assert repo.get("groups", "g1") is None
        assert repo.update("groups", "g1", {"name": "x"}) is None
        assert repo.delete("groups", "g1") is False


def firestore_snapshot(doc_id, data, exists=True):
    snapshot = mock.Mock()
    snapshot.id = doc_id
    snapshot.exists = exists
    snapshot.to_dict.return_value = data
    return snapshot


class TestFirestoreRepository:
    def test_get_maps_fields_and_timestamps(self):
        db = mock.MagicMock()
        db.collection.return_value.document.return_value.get.return_value = firestore_snapshot(
            "m1", {"groupId": "g1", "userId": "u1", "joinedAt": datetime(2025, 1, 1, tzinfo=timezone.utc)}
        )
        record = FirestoreRepository(db).get("group_members", "m1")
        db.collection.assert_called_with("groupMembers")
        assert record == {"id": "m1", "group_id": "g1", "user_id": "u1", "joined_at": NEW_YEAR}

    def test_get_missing(self):
        db = mock.MagicMock()
        db.collection.return_value.document.return_value.get.return_value = firestore_snapshot("x", None, exists=False)
        assert FirestoreRepository(db).get("groups", "x") is None

    def test_insert_writes_camel_case_document(self):
        db = mock.MagicMock()
        record = FirestoreRepository(db).insert(
            "gift_assignments", {"id": "a1", "gift_id": "gi1", "assigned_at": NEW_YEAR, "purchased_at": None}
        )
        db.collection.assert_called_with("giftAssignments")
        document = db.collection.return_value.document.return_value.set.call_args.args[0]
        assert document == {
            "id": "a1",
            "giftId": "gi1",
            "assignedAt": datetime(2025, 1, 1, tzinfo=timezone.utc),
        }
        assert record == {"id": "a1", "gift_id": "gi1", "assigned_at": NEW_YEAR}

    def test_update_clears_none_fields(self):
        db = mock.MagicMock()
        ref = db.collection.return_value.document.return_value
        ref.get.return_value = firestore_snapshot("w1", {"receiverId": "r1"})
        FirestoreRepository(db).update("wishlists", "w1", {"event_id": None, "name": "Books"})
        assert ref.update.call_args.args[0] == {"eventId": firestore.DELETE_FIELD, "name": "Books"}

    def test_list_with_filters(self):
        db = mock.MagicMock()
        query = db.collection.return_value.where.return_value
        query.stream.return_value = [firestore_snapshot("e1", {"groupId": "g1", "name": "Xmas"})]
        records = FirestoreRepository(db).list("events", {"group_id": "g1"})
        field_filter = db.collection.return_value.where.call_args.kwargs["filter"]
        assert field_filter.field_path == "groupId"
        assert records == [{"id": "e1", "group_id": "g1", "name": "Xmas"}]

    def test_delete_missing(self):
        db = mock.MagicMock()
        ref = db.collection.return_value.document.return_value
        ref.get.return_value = firestore_snapshot("x", None, exists=False)
        assert FirestoreRepository(db).delete("groups", "x") is False
        ref.delete.assert_not_called()


class TestLocalRepository:
    def test_crud(self):
        repo = LocalRepository(MemoryStorage())
        created = repo.insert("groups", {"name": "Family", "created_by": "u1", "created_at": 1})
        assert repo.get("groups", created["id"]) == created
        assert repo.list("groups", {"created_by": "u1"}) == [created]
        assert repo.list("groups", ids=[]) == []
        assert repo.update("groups", created["id"], {"name": "Kin"})["name"] == "Kin"
        assert repo.update("groups", "missing", {"name": "x"}) is None
        assert repo.delete("groups", created["id"]) is True
        assert repo.delete("groups", created["id"]) is False

    def test_reloads_from_storage(self):
        storage = MemoryStorage()
        created = LocalRepository(storage).insert("users", {"name": "Alice", "created_at": 1})
        assert LocalRepository(storage).get("users", created["id"])["name"] == "Alice"

    def test_unknown_collection(self):
        with pytest.raises(ValueError):
            LocalRepository(MemoryStorage()).list("nope")


def test_create_repository_rejects_unknown_backend():
    with pytest.raises(ValueError, match="Unknown data backend"):
        create_repository("mongo")
