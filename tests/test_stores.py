"""
Unit tests for the JSON blob stores and the SQLite key-value backend.

Usage:
    pytest tests/test_stores.py -v
"""
import json

import pytest

from fridge_ai.models import UserHealthProfile, WorkoutOption, WorkoutType
from fridge_ai.stores import (
    FAVORITES_KEY,
    PROFILE_KEY,
    FavoritesStore,
    ProfileStore,
    StoreUnavailable,
    WorkoutStore,
)
from server.fridge_api.database import SQLiteKeyValueStore

from conftest import BrokenKeyValueStore, MemoryKeyValueStore, make_recipe


class TestJsonBlobStores:
    """Test load/save semantics over a key-value backend."""

    def test_missing_blob_loads_none(self, backend):
        assert FavoritesStore(backend).load() is None
        assert ProfileStore(backend).load() is None

    def test_favorites_round_trip_keeps_ids(self, backend):
        recipes = [make_recipe("A"), make_recipe("B")]
        store = FavoritesStore(backend)

        store.save(recipes)
        loaded = store.load()

        assert [r.id for r in loaded] == [r.id for r in recipes]
        assert loaded == recipes

    def test_blob_uses_camel_case_keys(self, backend):
        ProfileStore(backend).save(UserHealthProfile(dietary_preferences=["Vegan"], fitness_goal="weight loss"))

        stored = json.loads(backend.data[PROFILE_KEY])

        assert stored["dietaryPreferences"] == ["Vegan"]
        assert stored["fitnessGoal"] == "weight loss"

    def test_undecodable_json_loads_none(self):
        backend = MemoryKeyValueStore({FAVORITES_KEY: "[{'name': broken"})

        assert FavoritesStore(backend).load() is None

    def test_wrong_shape_loads_none(self):
        backend = MemoryKeyValueStore({FAVORITES_KEY: json.dumps({"recipes": []})})

        assert FavoritesStore(backend).load() is None

    def test_save_rewrites_whole_blob(self, backend):
        store = WorkoutStore(backend)
        first = WorkoutOption(type=WorkoutType.WALKING, duration=30, calories_burned=120)
        second = WorkoutOption(type=WorkoutType.CYCLING, duration=20, calories_burned=200)

        store.save([first, second])
        store.save([second])

        assert [w.id for w in store.load()] == [second.id]
        assert backend.writes == 2

    def test_backend_read_failure_loads_none(self):
        """A broken backend reads as "nothing saved yet"."""
        assert FavoritesStore(BrokenKeyValueStore()).load() is None
        assert ProfileStore(BrokenKeyValueStore()).load() is None

    def test_backend_write_failure_is_swallowed(self, caplog):
        ProfileStore(BrokenKeyValueStore()).save(UserHealthProfile())

        assert "Could not write" in caplog.text


class TestSQLiteKeyValueStore:
    """Test the SQLite-backed key-value table."""

    def test_get_missing_key(self, tmp_path):
        store = SQLiteKeyValueStore(str(tmp_path / "kv.db"))

        assert store.get("nothing") is None

    def test_set_then_overwrite(self, tmp_path):
        store = SQLiteKeyValueStore(str(tmp_path / "kv.db"))

        store.set("FavoriteRecipes", "[]")
        store.set("FavoriteRecipes", '[{"id": "1"}]')

        assert store.get("FavoriteRecipes") == '[{"id": "1"}]'

    def test_persists_across_instances(self, tmp_path):
        path = str(tmp_path / "kv.db")
        SQLiteKeyValueStore(path).set("userHealthProfile", "{}")

        assert SQLiteKeyValueStore(path).get("userHealthProfile") == "{}"

    def test_backs_typed_store(self, tmp_path):
        backend = SQLiteKeyValueStore(str(tmp_path / "kv.db"))
        profile = UserHealthProfile(height=160, weight=55)

        ProfileStore(backend).save(profile)

        assert ProfileStore(backend).load() == profile

    def test_sqlite_errors_raise_store_unavailable(self, tmp_path):
        """A database that cannot be opened surfaces as StoreUnavailable."""
        store = SQLiteKeyValueStore(str(tmp_path / "kv.db"))
        store.db_path = str(tmp_path)

        with pytest.raises(StoreUnavailable):
            store.get("FavoriteRecipes")
        with pytest.raises(StoreUnavailable):
            store.set("FavoriteRecipes", "[]")

    def test_unopenable_database_loads_none(self, tmp_path):
        store = SQLiteKeyValueStore(str(tmp_path / "kv.db"))
        store.db_path = str(tmp_path)

        assert FavoritesStore(store).load() is None
