"""Unit tests for the JSON-file booking store."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import json
import stat
import pytest
from unittest.mock import patch
from app.models.booking import Booking
from app.store import BookingStore


def make_booking(booking_id=None, vehicle="Civic", **kwargs):
    return Booking(id=booking_id, vehicle=vehicle, pickup_date="2024-06-01",
                   return_date="2024-06-05", location="Main Office", name="Ali",
                   email="ali@example.com", contact="0300-0000000", status="Pending",
                   created_at="2024-05-20T10:00:00.000Z", **kwargs)


@pytest.fixture
def store(tmp_path):
    return BookingStore(str(tmp_path / "bookings.json"))


class TestLoad:
    def test_missing_file_loads_empty(self, store):
        assert store.load() == []
        assert len(store) == 0

    def test_malformed_file_loads_empty(self, store):
        with open(store.path, "w") as f:
            f.write("{not json")
        assert store.load() == []

    def test_non_array_file_loads_empty(self, store):
        with open(store.path, "w") as f:
            json.dump({"id": 1}, f)
        assert store.load() == []

    def test_non_object_entries_are_skipped(self, store):
        with open(store.path, "w") as f:
            json.dump([1, "x", {"id": 4, "vehicle": "Civic"}], f)
        bookings = store.load()
        assert [b.id for b in bookings] == [4]

    def test_round_trip_preserves_fields_and_order(self, store):
        original = [make_booking(3), make_booking(1, vehicle="Corolla"), make_booking(2)]
        store.save(original)
        loaded = store.load()
        assert [b.to_dict() for b in loaded] == [b.to_dict() for b in original]

    def test_unknown_keys_survive_round_trip(self, store):
        with open(store.path, "w") as f:
            json.dump([{"id": 1, "vehicle": "Civic", "notes": "VIP"}], f)
        store.load()
        store.save()
        with open(store.path) as f:
            assert json.load(f)[0]["notes"] == "VIP"

    def test_file_uses_camel_case_keys(self, store):
        store.save([make_booking(1)])
        with open(store.path) as f:
            record = json.load(f)[0]
        assert record["pickupDate"] == "2024-06-01"
        assert record["returnDate"] == "2024-06-05"
        assert record["createdAt"] == "2024-05-20T10:00:00.000Z"


class TestNextId:
    def test_empty_store_starts_at_one(self, store):
        assert store.next_id([]) == 1

    def test_max_plus_one(self, store):
        assert store.next_id([make_booking(2), make_booking(7), make_booking(3)]) == 8

    def test_non_numeric_ids_count_as_zero(self, store):
        assert store.next_id([make_booking("abc"), make_booking(None)]) == 1
        assert store.next_id([make_booking("abc"), make_booking(5)]) == 6

    def test_ids_not_reused_after_deleting_newest(self, store):
        store.load()
        first = store.add(make_booking())
        second = store.add(make_booking())
        assert (first.id, second.id) == (1, 2)
        assert store.remove(2)
        assert store.add(make_booking()).id == 3

    def test_next_id_is_read_only(self, store):
        store.load()
        store.add(make_booking())
        store.add(make_booking())
        assert store.next_id([]) == 1
        assert store.next_id() == 3
        assert store.next_id() == 3
        assert store.add(make_booking()).id == 3

    def test_counter_resumes_from_loaded_file(self, store):
        store.save([make_booking(10)])
        store.load()
        assert store.add(make_booking()).id == 11


class TestMutations:
    @pytest.mark.skipif(os.name == "nt", reason="POSIX file modes")
    def test_save_keeps_file_mode(self, store):
        store.save([])
        os.chmod(store.path, 0o640)
        store.load()
        store.add(make_booking())
        assert stat.S_IMODE(os.stat(store.path).st_mode) == 0o640

    @pytest.mark.skipif(os.name == "nt", reason="POSIX file modes")
    def test_new_file_is_not_private(self, store):
        store.save([])
        assert stat.S_IMODE(os.stat(store.path).st_mode) == 0o644

    def test_add_persists(self, store):
        store.load()
        store.add(make_booking())
        assert [b.id for b in BookingStore(store.path).load()] == [1]

    def test_get_matches_string_ids(self, store):
        store.load()
        store.add(make_booking())
        assert store.get("1") is store.get(1)
        assert store.get("2") is None

    def test_update_persists(self, store):
        store.load()
        store.add(make_booking())
        store.update(1, status="Accepted")
        assert BookingStore(store.path).load()[0].status == "Accepted"

    def test_update_unknown_returns_none(self, store):
        store.load()
        assert store.update(42, status="Accepted") is None

    def test_remove_unknown_returns_false(self, store):
        store.load()
        assert store.remove(42) is False

    def test_failed_save_rolls_back_add(self, store):
        store.load()
        with patch("app.store.write_json_file", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                store.add(make_booking())
        assert store.all() == []

    def test_failed_save_rolls_back_update(self, store):
        store.load()
        store.add(make_booking())
        with patch("app.store.write_json_file", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                store.update(1, status="Accepted")
        assert store.get(1).status == "Pending"

    def test_failed_save_rolls_back_remove(self, store):
        store.load()
        store.add(make_booking())
        with patch("app.store.write_json_file", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                store.remove(1)
        assert store.get(1) is not None
