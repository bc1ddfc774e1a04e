"""
Persistence adapters over a flat string key-value store.

Each store owns one key and rewrites its whole JSON blob on every save.
A missing or undecodable blob loads as None ("no cached value"); corrupt
local data is logged and otherwise treated as "nothing saved yet".
"""

import logging
from typing import Generic, List, Optional, Protocol, TypeVar

from pydantic import TypeAdapter, ValidationError

from .models import Recipe, UserHealthProfile, WorkoutOption

logger = logging.getLogger(__name__)

FAVORITES_KEY = "FavoriteRecipes"
WORKOUTS_KEY = "SavedWorkouts"
PROFILE_KEY = "userHealthProfile"

T = TypeVar("T")


class StoreUnavailable(Exception):
    """The key-value backend could not be read or written."""


class KeyValueStore(Protocol):
    """
    Flat string-keyed storage of string values.

    Backends raise StoreUnavailable when the underlying storage fails.
    """

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class JsonBlobStore(Generic[T]):
    """One typed JSON document under one key."""

    def __init__(self, backend: KeyValueStore, key: str, adapter: TypeAdapter):
        self.backend = backend
        self.key = key
        self._adapter = adapter

    def load(self) -> Optional[T]:
        try:
            raw = self.backend.get(self.key)
        except StoreUnavailable as e:
            logger.warning(f"[STORE] Could not read '{self.key}': {e}")
            return None
        if raw is None:
            return None
        try:
            return self._adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning(
                f"[STORE] Ignoring undecodable '{self.key}' blob ({e.error_count()} error(s))"
            )
            return None

    def save(self, value: T) -> None:
        """Rewrite the blob. A backend failure is logged and the value stays unsaved."""
        blob = self._adapter.dump_json(value, by_alias=True).decode("utf-8")
        try:
            self.backend.set(self.key, blob)
        except StoreUnavailable as e:
            logger.warning(f"[STORE] Could not write '{self.key}': {e}")


class FavoritesStore(JsonBlobStore[List[Recipe]]):
    def __init__(self, backend: KeyValueStore):
        super().__init__(backend, FAVORITES_KEY, TypeAdapter(List[Recipe]))


class WorkoutStore(JsonBlobStore[List[WorkoutOption]]):
    def __init__(self, backend: KeyValueStore):
        super().__init__(backend, WORKOUTS_KEY, TypeAdapter(List[WorkoutOption]))


class ProfileStore(JsonBlobStore[UserHealthProfile]):
    def __init__(self, backend: KeyValueStore):
        super().__init__(backend, PROFILE_KEY, TypeAdapter(UserHealthProfile))

