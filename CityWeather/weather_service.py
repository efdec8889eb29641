"""Weather fetch orchestration with a single fallback to the basic endpoint."""
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Union
from app_state import AppState
from weather_data import WeatherSnapshot
from weather_normalizer import normalize, round_temp
from weather_provider import (
    WeatherAppError,
    WeatherFetchError,
    WeatherProviderBase,
    WeatherProviderError,
)


@dataclass(frozen=True)
class Ok:
    """The forecast endpoint answered."""
    snapshot: WeatherSnapshot


@dataclass(frozen=True)
class Fallback:
    """The forecast endpoint failed, current conditions were used instead."""
    snapshot: WeatherSnapshot
    reason: str


@dataclass(frozen=True)
class Failed:
    """No snapshot could be produced."""
    error: WeatherFetchError


FetchOutcome = Union[Ok, Fallback, Failed]


class WeatherService:
    """
    Fetches weather for coordinates and publishes it to the shared state.

    The forecast endpoint is tried first. If it answers with an error status,
    the current-conditions endpoint is tried exactly once; there are no
    further retries or delays. Network and decode failures on the forecast
    endpoint fail the fetch without a second request.
    A failed refresh keeps the previous snapshot in place and records the
    error message instead.
    """

    def __init__(
        self,
        provider: WeatherProviderBase,
        state: AppState,
        clock: Callable[[], float] = time.time
    ):
        """
        Initialize weather service.

        Args:
            provider: Weather provider to use
            state: Shared state that receives snapshots, loading and errors
            clock: Returns the current UNIX time; used for themes and timestamps
        """
        self.provider = provider
        self.state = state
        self.clock = clock

    def fetch(self, lat: float, lon: float, display_name: Optional[str] = None) -> FetchOutcome:
        """
        Fetch, normalize and publish weather for a location.

        Returns:
            Ok, Fallback or Failed. Never raises for upstream failures.
        """
        self.state.update(loading=True, error=None)
        try:
            outcome = self._run(lat, lon, display_name)
            if isinstance(outcome, Failed):
                self.state.update(error=str(outcome.error))
            else:
                self.state.update(weather=outcome.snapshot)
            return outcome
        finally:
            self.state.update(loading=False)

    def fetch_weather(self, lat: float, lon: float, display_name: Optional[str] = None) -> WeatherSnapshot:
        """
        Like fetch(), but returns the snapshot directly.

        Raises:
            WeatherFetchError: If no snapshot could be produced
        """
        outcome = self.fetch(lat, lon, display_name)
        if isinstance(outcome, Failed):
            raise outcome.error
        return outcome.snapshot

    def current_temperature(self, lat: float, lon: float) -> int:
        """
        Rounded current temperature from the basic endpoint.

        Raises:
            WeatherProviderError: If the request fails
        """
        response = self.provider.get_current(lat, lon)
        main = response.payload.get("main")
        if not main:
            raise WeatherProviderError("Response missing 'main' block")
        return round_temp(main.get("temp"))

    def _normalize(self, response, display_name: Optional[str]) -> WeatherSnapshot:
        try:
            return normalize(response, display_name, self.clock())
        except (KeyError, ValueError, TypeError, AttributeError, OverflowError, OSError) as e:
            logging.error(f"Failed to parse weather response: {e}", exc_info=True)
            raise WeatherProviderError(f"Failed to parse response: {str(e)}")

    def _run(self, lat: float, lon: float, display_name: Optional[str]) -> FetchOutcome:
        logging.info(f"Fetching forecast for lat={lat} lon={lon} ({display_name or 'unnamed'})")
        try:
            response = self.provider.get_forecast(lat, lon)
            snapshot = self._normalize(response, display_name)
            logging.info(f"Forecast fetch successful: {snapshot.temp}°C, {snapshot.condition}")
            return Ok(snapshot)
        except WeatherProviderError as e:
            # Only an HTTP error status falls back; network and decode errors fail
            if e.status_code is None:
                logging.error(f"Failed to fetch forecast for lat={lat} lon={lon}: {e}")
                return Failed(WeatherFetchError(f"Failed to fetch weather: {e}"))
            reason = str(e)
            logging.warning(f"Forecast endpoint failed ({reason}), falling back to current conditions")

        try:
            response = self.provider.get_current(lat, lon)
            snapshot = self._normalize(response, display_name)
            logging.info(f"Fallback fetch successful: {snapshot.temp}°C, {snapshot.condition}")
            return Fallback(snapshot, reason)
        except WeatherAppError as e:
            logging.error(f"Failed to fetch weather for lat={lat} lon={lon}: {e}")
            return Failed(WeatherFetchError(f"Failed to fetch weather: {e}"))
