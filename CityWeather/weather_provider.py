"""Weather provider abstraction and the error types shared across the app."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class RichResponse:
    """Decoded reply of the forecast endpoint (current + hourly + daily)."""
    payload: Dict[str, Any]


@dataclass(frozen=True)
class BasicResponse:
    """Decoded reply of the current-conditions endpoint."""
    payload: Dict[str, Any]


class WeatherProviderBase(ABC):
    """Abstract base class for weather data providers."""

    @abstractmethod
    def get_forecast(self, lat: float, lon: float) -> RichResponse:
        """
        Fetch current conditions plus hourly and daily forecast.

        Raises:
            WeatherProviderError: If the provider fails to fetch data
        """
        pass

    @abstractmethod
    def get_current(self, lat: float, lon: float) -> BasicResponse:
        """
        Fetch current conditions only.

        Raises:
            WeatherProviderError: If the provider fails to fetch data
        """
        pass

    @abstractmethod
    def search_places(self, query: str, limit: int = 5) -> List[Dict[str, Any]]:
        """
        Resolve a free-text query to candidate places, best match first.

        Raises:
            WeatherProviderError: If the provider fails to fetch data
        """
        pass


class WeatherAppError(Exception):
    """Base class for all application errors."""
    pass


class WeatherProviderError(WeatherAppError):
    """Exception raised when a weather provider fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ValidationError(WeatherAppError):
    """Bad user input, detected before any network call."""
    pass


class SearchError(WeatherAppError):
    """Geocoding request or decode failure."""
    pass


class WeatherFetchError(WeatherAppError):
    """Both the forecast and the current-conditions endpoints failed."""
    pass


class StorageError(WeatherAppError):
    """Persistence read or write failure."""
    pass
