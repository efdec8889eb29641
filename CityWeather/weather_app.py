"""Entry point for UI collaborators: state plus the operations that change it."""
import logging
import time
from typing import Callable, List, Optional
from app_state import AppState
from config import AppConfig
from favorites_service import FavoritesService
from favorites_store import FavoritesStore, JsonFileStorage, KeyValueStorage
from geocoding import GeocodingSearch
from openweather_provider import OpenWeatherProvider
from weather_data import FavoriteCity, Place, WeatherSnapshot
from weather_provider import SearchError, WeatherProviderBase
from weather_service import WeatherService


class WeatherApp:
    """
    Wires the provider, storage and orchestrators around one AppState.

    Views read ``state`` (or subscribe to it) and call the methods below;
    they never mutate the state themselves.
    """

    def __init__(
        self,
        provider: WeatherProviderBase,
        storage: KeyValueStorage,
        clock: Callable[[], float] = time.time
    ):
        self.state = AppState()
        self.weather = WeatherService(provider, self.state, clock=clock)
        self.geocoding = GeocodingSearch(provider)
        self.favorites = FavoritesService(
            FavoritesStore(storage),
            self.state,
            weather_lookup=self.weather.current_temperature,
        )

    @classmethod
    def from_config(cls, config: AppConfig) -> "WeatherApp":
        provider = OpenWeatherProvider(
            api_key=config.api_key,
            lang=config.lang,
            timeout=config.timeout,
        )
        storage = JsonFileStorage(config.favorites_file)
        logging.info(f"Weather app ready (favorites file={storage.path})")
        return cls(provider, storage)

    def load_favorites(self) -> List[FavoriteCity]:
        return self.favorites.load_favorites()

    def add_favorite(self, place: Place) -> FavoriteCity:
        return self.favorites.add_favorite(place)

    def remove_favorite(self, favorite_id: str) -> None:
        self.favorites.remove_favorite(favorite_id)

    def clear_favorites(self) -> None:
        self.favorites.clear_all()

    def fetch_weather(self, lat: float, lon: float, name: Optional[str] = None) -> WeatherSnapshot:
        return self.weather.fetch_weather(lat, lon, name)

    def fetch_favorite(self, favorite_id: str) -> WeatherSnapshot:
        """
        Fetch weather for a saved favorite.

        Raises:
            KeyError: If no favorite has this id
            WeatherFetchError: If both endpoints failed
        """
        favorite = self.favorites.get(favorite_id)
        if favorite is None:
            raise KeyError(favorite_id)
        return self.weather.fetch_weather(favorite.lat, favorite.lon, favorite.name)

    def search(self, query: str) -> List[Place]:
        """
        Search places; a failed search is reported in ``state.error``.

        Raises:
            ValidationError: If the query is too short
        """
        try:
            return self.geocoding.search(query)
        except SearchError as e:
            self.state.update(error=str(e))
            return []
