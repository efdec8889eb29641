"""Shared application state observed by the UI layer."""
import logging
from typing import Callable, List, Optional
from weather_data import FavoriteCity, WeatherSnapshot

Listener = Callable[["AppState"], None]

_FIELDS = ("favorites", "weather", "loading", "error")


class AppState:
    """
    Current favorites, weather snapshot, loading flag and error message.

    Only the orchestrators mutate this object, through update(). Listeners
    are called after every update. Concurrent fetches are not coordinated:
    whichever completes last owns ``weather``.
    """

    def __init__(self):
        self.favorites: List[FavoriteCity] = []
        self.weather: Optional[WeatherSnapshot] = None
        self.loading: bool = False
        self.error: Optional[str] = None
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def update(self, **changes) -> None:
        unknown = set(changes) - set(_FIELDS)
        if unknown:
            raise AttributeError(f"Unknown state fields: {', '.join(sorted(unknown))}")
        for name, value in changes.items():
            setattr(self, name, value)
        logging.debug(f"State updated: {', '.join(sorted(changes))}")
        for listener in list(self._listeners):
            listener(self)
