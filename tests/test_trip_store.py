"""Tests for the file-backed trip store."""

import json

import pytest

from tests.conftest import make_costs, make_points, make_saved_trip
from src.core.resolvers import ResolverError
from src.core.trip_store import TripStore


@pytest.fixture
def store(tmp_path):
    """TripStore backed by a temp file."""
    return TripStore(store_file=str(tmp_path / "trips.json"))


class TestSaveAndGet:
    def test_save_then_get(self, store):
        store.save(make_saved_trip("Portugal", current_savings=1500))
        trip = store.get("Portugal")
        assert trip.name == "Portugal"
        assert trip.current_savings == 1500
        assert trip.costs == make_costs()

    def test_get_is_case_insensitive(self, store):
        store.save(make_saved_trip("Portugal"))
        assert store.get("  portugal ").name == "Portugal"

    def test_save_stamps_updated_on(self, store):
        saved = store.save(make_saved_trip())
        assert saved.updated_on is not None

    def test_save_replaces_existing(self, store):
        store.save(make_saved_trip("Portugal", current_savings=100))
        store.save(make_saved_trip("portugal", current_savings=900))
        assert len(store.list()) == 1
        assert store.get("Portugal").current_savings == 900

    def test_points_persisted(self, store):
        store.save(make_saved_trip(points=make_points()))
        trip = store.get("Portugal")
        assert trip.points.use_points
        assert trip.points.connected_balance == 80000

    def test_unknown_trip_raises(self, store):
        store.save(make_saved_trip("Portugal"))
        with pytest.raises(ResolverError) as exc_info:
            store.get("Japan")
        assert "Portugal" in str(exc_info.value)


class TestPersistence:
    def test_survives_reload(self, tmp_path):
        path = str(tmp_path / "trips.json")
        TripStore(store_file=path).save(make_saved_trip("Portugal"))
        assert TripStore(store_file=path).get("Portugal").name == "Portugal"

    def test_only_raw_figures_stored(self, tmp_path):
        path = tmp_path / "trips.json"
        TripStore(store_file=str(path)).save(make_saved_trip("Portugal"))
        stored = json.loads(path.read_text())["portugal"]
        assert set(stored) == {
            "name", "costs", "current_savings", "monthly_savings", "points", "updated_on",
        }

    def test_corrupt_file_loads_empty(self, tmp_path):
        path = tmp_path / "trips.json"
        path.write_text("{not json")
        assert TripStore(store_file=str(path)).list() == []

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "trips.json"
        TripStore(store_file=str(path)).save(make_saved_trip())
        assert path.exists()

    def test_skips_malformed_entries(self, tmp_path):
        path = tmp_path / "trips.json"
        path.write_text(json.dumps({"broken": {"costs": "nope"}}))
        assert TripStore(store_file=str(path)).list() == []


class TestListAndDelete:
    def test_list_sorted_by_name(self, store):
        store.save(make_saved_trip("Zanzibar"))
        store.save(make_saved_trip("Alps"))
        assert [t.name for t in store.list()] == ["Alps", "Zanzibar"]

    def test_delete(self, store):
        store.save(make_saved_trip("Portugal"))
        assert store.delete("PORTUGAL") is True
        assert store.list() == []

    def test_delete_missing(self, store):
        assert store.delete("Nowhere") is False

    def test_clear(self, store):
        store.save(make_saved_trip("A"))
        store.save(make_saved_trip("B"))
        store.clear()
        assert store.list() == []
