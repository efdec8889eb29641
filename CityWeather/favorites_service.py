"""Favorites management: dedupe by coordinates, persist on every change."""
import logging
from typing import Callable, List, Optional
from app_state import AppState
from favorites_store import FavoritesStore
from weather_data import FavoriteCity, Place, favorite_id
from weather_provider import WeatherProviderError

# (lat, lon) -> rounded temperature in °C
WeatherLookup = Callable[[float, float], int]


class FavoritesService:
    """
    Keeps ``state.favorites`` and the store in step.

    Each mutation writes the full list to the store first and only then
    publishes it to the state, so a failed write leaves the state at its last
    committed value. Calls are assumed to be sequential from a single caller;
    concurrent add/remove from several triggers is not supported.
    """

    def __init__(
        self,
        store: FavoritesStore,
        state: AppState,
        weather_lookup: Optional[WeatherLookup] = None
    ):
        self.store = store
        self.state = state
        self.weather_lookup = weather_lookup

    def load_favorites(self) -> List[FavoriteCity]:
        favorites = self.store.load()
        self.state.update(favorites=favorites)
        return favorites

    def add_favorite(self, place: Place, weather_lookup: Optional[WeatherLookup] = None) -> FavoriteCity:
        """
        Save a search result with its current temperature.

        A failed temperature lookup still saves the place, with no temperature.

        Raises:
            StorageError: If the list cannot be persisted
        """
        lookup = weather_lookup or self.weather_lookup
        temp = None
        if lookup is not None:
            try:
                temp = lookup(place.lat, place.lon)
            except WeatherProviderError as e:
                logging.warning(f"Could not fetch temperature for {place.label}: {e}")

        favorite = FavoriteCity(
            id=favorite_id(place.lat, place.lon),
            name=place.label,
            lat=place.lat,
            lon=place.lon,
            temp=temp,
        )
        return self.add_favorite_item(favorite)

    def add_favorite_item(self, favorite: FavoriteCity) -> FavoriteCity:
        """Replace the entry with the same id in place, or prepend a new one."""
        favorites = self.state.favorites
        if any(f.id == favorite.id for f in favorites):
            logging.info(f"Updating favorite {favorite.id} ({favorite.name})")
            new_list = [favorite if f.id == favorite.id else f for f in favorites]
        else:
            logging.info(f"Adding favorite {favorite.id} ({favorite.name})")
            new_list = [favorite] + favorites

        self._commit(new_list)
        return favorite

    def remove_favorite(self, favorite_id: str) -> None:
        favorites = self.state.favorites
        filtered = [f for f in favorites if f.id != favorite_id]
        if len(filtered) == len(favorites):
            logging.debug(f"Favorite {favorite_id} not found, nothing to remove")
            return
        logging.info(f"Removing favorite {favorite_id}")
        self._commit(filtered)

    def clear_all(self) -> None:
        if not self.state.favorites:
            return
        logging.info(f"Clearing {len(self.state.favorites)} favorite(s)")
        self._commit([])

    def get(self, favorite_id: str) -> Optional[FavoriteCity]:
        for favorite in self.state.favorites:
            if favorite.id == favorite_id:
                return favorite
        return None

    def _commit(self, favorites: List[FavoriteCity]) -> None:
        self.store.save(favorites)
        self.state.update(favorites=favorites)
