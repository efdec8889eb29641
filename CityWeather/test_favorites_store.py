"""Tests for favorites persistence."""
import json
import pytest
from favorites_store import (
    STORAGE_KEY,
    FavoritesStore,
    JsonFileStorage,
    KeyValueStorage,
    MemoryStorage,
)
from weather_data import FavoriteCity
from weather_provider import StorageError


@pytest.fixture
def favorites():
    return [
        FavoriteCity(id="51.51_-0.13", name="London, GB", lat=51.51, lon=-0.13, temp=15),
        FavoriteCity(id="48.85_2.35", name="Paris, FR", lat=48.85, lon=2.35, temp=None),
    ]


def test_load_empty_storage():
    assert FavoritesStore(MemoryStorage()).load() == []


def test_save_and_load(favorites):
    storage = MemoryStorage()
    store = FavoritesStore(storage)

    store.save(favorites)

    assert json.loads(storage.get(STORAGE_KEY))[0]["id"] == "51.51_-0.13"
    assert store.load() == favorites


def test_corrupt_value_raises():
    storage = MemoryStorage({STORAGE_KEY: "{not json"})
    with pytest.raises(StorageError):
        FavoritesStore(storage).load()


def test_unconfirmed_write_raises(favorites):
    """Test a write that does not read back is reported."""

    class DroppingStorage(KeyValueStorage):
        def get(self, key):
            return None

        def set(self, key, value):
            pass

    with pytest.raises(StorageError):
        FavoritesStore(DroppingStorage()).save(favorites)


def test_json_file_storage_survives_restart(tmp_path, favorites):
    """Test a new store instance sees what the previous one saved."""
    path = tmp_path / "nested" / "favorites.json"

    FavoritesStore(JsonFileStorage(str(path))).save(favorites)
    reloaded = FavoritesStore(JsonFileStorage(str(path))).load()

    assert reloaded == favorites
    assert list(tmp_path.joinpath("nested").iterdir()) == [path]


def test_json_file_storage_keeps_other_keys(tmp_path):
    storage = JsonFileStorage(str(tmp_path / "data.json"))
    storage.set("a", "1")
    storage.set("b", "2")

    assert storage.get("a") == "1"
    assert storage.get("b") == "2"
    assert storage.get("c") is None


def test_json_file_storage_corrupt_file(tmp_path):
    path = tmp_path / "data.json"
    path.write_text("not json", encoding="utf-8")

    with pytest.raises(StorageError):
        JsonFileStorage(str(path)).get("a")


def test_json_file_storage_not_an_object(tmp_path):
    path = tmp_path / "data.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(StorageError):
        JsonFileStorage(str(path)).get("a")
