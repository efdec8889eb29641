"""Integration tests - can optionally hit real API (disabled by default)."""
import os
import pytest
from app_state import AppState
from geocoding import GeocodingSearch
from openweather_provider import OpenWeatherProvider
from weather_service import Failed, WeatherService


@pytest.mark.skipif(
    not os.environ.get("OPENWEATHER_API_KEY"),
    reason="OPENWEATHER_API_KEY not set - skipping integration test"
)
def test_geocoding_integration():
    """
    Integration test that hits the real OpenWeather geocoding API.

    Set OPENWEATHER_API_KEY environment variable to run this test.
    """
    provider = OpenWeatherProvider(api_key=os.environ.get("OPENWEATHER_API_KEY"))

    places = GeocodingSearch(provider).search("London")

    assert 0 < len(places) <= 5
    assert all(-90 <= p.lat <= 90 for p in places)


@pytest.mark.skipif(
    not os.environ.get("OPENWEATHER_API_KEY"),
    reason="OPENWEATHER_API_KEY not set - skipping integration test"
)
def test_weather_service_integration():
    """Integration test for WeatherService with real API (either endpoint)."""
    provider = OpenWeatherProvider(api_key=os.environ.get("OPENWEATHER_API_KEY"))
    state = AppState()
    service = WeatherService(provider, state)

    outcome = service.fetch(51.51, -0.13, "London")

    assert not isinstance(outcome, Failed)
    assert state.weather.theme is not None
    assert state.loading is False
