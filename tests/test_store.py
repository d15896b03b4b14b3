import json

import pytest

from gift_planner.core.exceptions import DuplicateKeyError, NotFoundError
from gift_planner.modules.gifts.schemas import Gift
from gift_planner.store import (
    Collection, FileStorage, LiveQuery, MemoryStorage, Store,
    initialize_collection_from_storage, load_from_storage, persist_collection, save_to_storage,
)


def make_gift(gift_id="g1", **overrides):
    data = {"id": gift_id, "wishlistId": "w1", "name": "Book", "createdAt": 1, "createdBy": "u1"}
    data.update(overrides)
    return data


class TestStore:
    def test_set_state_with_value_and_updater(self):
        store = Store(1)
        store.set_state(5)
        store.set_state(lambda n: n + 1)
        assert store.state == 6

    def test_listeners_run_in_order_until_unsubscribed(self):
        store = Store(0)
        calls = []
        unsubscribe = store.subscribe(lambda s: calls.append(("a", s)))
        store.subscribe(lambda s: calls.append(("b", s)))
        store.set_state(1)
        unsubscribe()
        store.set_state(2)
        assert calls == [("a", 1), ("b", 1), ("b", 2)]


class TestCollection:
    def test_insert_and_get(self):
        gifts = Collection("gifts", Gift)
        gift = gifts.insert(make_gift())
        assert gifts.get("g1") == gift
        assert len(gifts) == 1
        assert "g1" in gifts

    def test_insert_duplicate(self):
        gifts = Collection("gifts", Gift)
        gifts.insert(make_gift())
        with pytest.raises(DuplicateKeyError):
            gifts.insert(make_gift(name="Other"))
        assert gifts.get("g1").name == "Book"

    def test_update_with_mapping_and_callable(self):
        gifts = Collection("gifts", Gift)
        gifts.insert(make_gift())
        assert gifts.update("g1", {"name": "Novel"}).name == "Novel"

        def qualify(draft):
            draft.is_qualified = True

        assert gifts.update("g1", qualify).is_qualified is True

    def test_update_missing(self):
        with pytest.raises(NotFoundError):
            Collection("gifts", Gift).update("nope", {"name": "x"})

    def test_snapshots_are_not_mutated(self):
        gifts = Collection("gifts", Gift)
        snapshots = []
        gifts.subscribe(snapshots.append)
        gifts.insert(make_gift())
        gifts.insert(make_gift("g2"))
        gifts.delete("g1")
        assert [[g.id for g in snap] for snap in snapshots] == [["g1"], ["g1", "g2"], ["g2"]]

    def test_delete_missing_returns_false(self):
        assert Collection("gifts", Gift).delete("nope") is False

    def test_live_query(self):
        gifts = Collection("gifts", Gift)
        qualified = LiveQuery(gifts, lambda items: [g for g in items if g.is_qualified])
        gifts.insert(make_gift())
        assert qualified.data == []
        gifts.update("g1", {"is_qualified": True})
        assert [g.id for g in qualified.data] == ["g1"]
        qualified.close()
        gifts.delete("g1")
        assert [g.id for g in qualified.data] == ["g1"]


class TestPersistence:
    def test_load_missing_and_corrupt(self, caplog):
        storage = MemoryStorage({"gift-planner-db-gifts": "{broken"})
        assert load_from_storage(storage, "gifts") == []
        assert load_from_storage(storage, "events") == []
        assert "Error loading gifts" in caplog.text

    def test_save_uses_camel_case(self):
        storage = MemoryStorage()
        save_to_storage(storage, "gifts", [Gift.model_validate(make_gift())])
        stored = json.loads(storage.get_item("gift-planner-db-gifts"))
        assert stored[0]["wishlistId"] == "w1"
        assert "picture" not in stored[0]

    def test_initialize_skips_existing_and_invalid(self):
        storage = MemoryStorage({"gift-planner-db-gifts": json.dumps([make_gift(), make_gift("g2"), {"id": "bad"}])})
        gifts = Collection("gifts", Gift)
        gifts.insert(make_gift(name="In memory"))
        assert initialize_collection_from_storage(gifts, storage, "gifts") == 1
        assert gifts.get("g1").name == "In memory"
        assert "g2" in gifts

    def test_persist_collection(self):
        storage = MemoryStorage({"gift-planner-db-gifts": json.dumps([make_gift()])})
        gifts = Collection("gifts", Gift)
        unsubscribe = persist_collection(gifts, storage)
        assert "g1" in gifts

        gifts.insert(make_gift("g2"))
        assert [g["id"] for g in json.loads(storage.get_item("gift-planner-db-gifts"))] == ["g1", "g2"]

        unsubscribe()
        gifts.delete("g1")
        assert len(json.loads(storage.get_item("gift-planner-db-gifts"))) == 2


class TestFileStorage:
    def test_round_trip_through_file(self, tmp_path):
        path = tmp_path / "nested" / "storage.json"
        storage = FileStorage(path)
        storage.set_item("a", "1")
        storage.set_item("b", "2")
        storage.remove_item("b")
        assert FileStorage(path).get_item("a") == "1"
        assert FileStorage(path).keys() == ["a"]

    def test_corrupt_file_starts_empty(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text("[not json", encoding="utf-8")
        assert FileStorage(path).keys() == []
