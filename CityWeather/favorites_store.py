"""Key-value persistence for the favorites list."""
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from typing import Dict, List, Optional
from weather_data import FavoriteCity
from weather_provider import StorageError

STORAGE_KEY = "@cityweather:favorites"


class KeyValueStorage(ABC):
    """String key-value storage."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass


class MemoryStorage(KeyValueStorage):
    """Dict-backed storage, lost on exit."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStorage(KeyValueStorage):
    """
    Storage kept as one JSON object in a file.

    Writes go to a temporary file in the same directory which then replaces
    the original, so a crash mid-write leaves the previous contents intact.
    """

    def __init__(self, path: str):
        self.path = os.path.abspath(os.path.expanduser(path))

    def _read_all(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logging.error(f"Failed to read storage file {self.path}: {e}")
            raise StorageError(f"Failed to read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Storage file {self.path} does not hold a JSON object")
        return data

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        directory = os.path.dirname(self.path)
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".favorites-", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2)
                os.replace(tmp_path, self.path)
            except OSError:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
        except OSError as e:
            logging.error(f"Failed to write storage file {self.path}: {e}")
            raise StorageError(f"Failed to write {self.path}: {e}") from e
        logging.debug(f"Wrote key '{key}' to {self.path}")


class FavoritesStore:
    """Serializes the favorites list under a single storage key."""

    def __init__(self, storage: KeyValueStorage, key: str = STORAGE_KEY):
        self.storage = storage
        self.key = key

    def load(self) -> List[FavoriteCity]:
        """
        Read the saved favorites; an unset key means an empty list.

        Raises:
            StorageError: If the stored value cannot be read or decoded
        """
        raw = self.storage.get(self.key)
        if not raw:
            return []
        try:
            items = json.loads(raw)
            favorites = [FavoriteCity.from_dict(item) for item in items]
        except (ValueError, TypeError, KeyError) as e:
            logging.error(f"Stored favorites are corrupt: {e}")
            raise StorageError(f"Stored favorites are corrupt: {e}") from e
        logging.info(f"Loaded {len(favorites)} favorite(s)")
        return favorites

    def save(self, favorites: List[FavoriteCity]) -> None:
        """
        Write the full list and confirm it by reading it back.

        Raises:
            StorageError: If the write fails or cannot be confirmed
        """
        raw = json.dumps([f.to_dict() for f in favorites])
        self.storage.set(self.key, raw)
        if self.storage.get(self.key) != raw:
            logging.error("Favorites write could not be confirmed")
            raise StorageError("Favorites write could not be confirmed")
        logging.info(f"Saved {len(favorites)} favorite(s)")
