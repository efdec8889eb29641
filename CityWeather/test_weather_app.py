"""End-to-end tests for the application facade with a mocked HTTP layer."""
import pytest
import requests
from unittest.mock import Mock, patch
from config import AppConfig
from favorites_store import JsonFileStorage, MemoryStorage
from openweather_provider import OpenWeatherProvider
from weather_app import WeatherApp
from weather_data import Place
from weather_provider import ValidationError, WeatherFetchError
from weather_service import Failed

# 2024-01-15 14:00:00 UTC
NOW = 1705327200


def _response(data, status=200):
    mock_response = Mock()
    mock_response.ok = 200 <= status < 300
    mock_response.status_code = status
    mock_response.json.return_value = data
    mock_response.text = str(data)
    return mock_response


def route(onecall=None, current=None, geo=None):
    """Build a requests.get replacement answering per endpoint."""
    def fake_get(url, params=None, timeout=None):
        if url == OpenWeatherProvider.ONECALL_URL:
            return onecall
        if url == OpenWeatherProvider.CURRENT_URL:
            return current
        if url == OpenWeatherProvider.GEOCODING_URL:
            if isinstance(geo, Exception):
                raise geo
            return geo
        raise AssertionError(f"Unexpected URL {url}")
    return fake_get


@pytest.fixture
def app():
    provider = OpenWeatherProvider(api_key="test_key")
    return WeatherApp(provider, MemoryStorage(), clock=lambda: NOW)


def test_add_favorite_end_to_end(app):
    """Test adding London stores the rounded basic-endpoint temperature."""
    current = _response({"main": {"temp": 15.4}, "weather": [{"main": "Clouds"}], "name": "London"})
    with patch('openweather_provider.requests.get', side_effect=route(current=current)):
        favorite = app.add_favorite(Place("London", 51.51, -0.13))

    assert favorite.id == "51.51_-0.13"
    assert favorite.temp == 15
    assert app.state.favorites == [favorite]


def test_add_favorite_twice_keeps_length(app):
    first = _response({"main": {"temp": 15.4}})
    second = _response({"main": {"temp": 9.6}})
    with patch('openweather_provider.requests.get', side_effect=route(current=first)):
        app.add_favorite(Place("London", 51.51, -0.13))
    with patch('openweather_provider.requests.get', side_effect=route(current=second)):
        app.add_favorite(Place("London", 51.51, -0.13))

    assert len(app.state.favorites) == 1
    assert app.state.favorites[0].temp == 10


def test_fetch_weather_rich_end_to_end(app):
    """Test a rich reply with 20.6°C rain gives 21°C and the rain theme."""
    onecall = _response({
        "timezone_offset": 0,
        "current": {"dt": NOW, "temp": 20.6, "weather": [{"main": "Rain"}]},
    })
    with patch('openweather_provider.requests.get', side_effect=route(onecall=onecall)):
        snapshot = app.fetch_weather(51.51, -0.13, "London")

    assert snapshot.temp == 21
    assert snapshot.condition == "Rain"
    assert snapshot.theme.background == "rain"
    assert app.state.weather is snapshot


def test_fetch_weather_falls_back(app):
    onecall = _response({"cod": 401, "message": "Invalid API key"}, status=401)
    current = _response({"main": {"temp": 5.2}, "weather": [{"main": "Snow"}], "name": "London"})
    with patch('openweather_provider.requests.get', side_effect=route(onecall=onecall, current=current)) as mock_get:
        snapshot = app.fetch_weather(51.51, -0.13, "Greater London")

    assert mock_get.call_count == 2
    assert snapshot.city == "London"
    assert snapshot.theme.name == "Snow"
    assert snapshot.hourly == []


def test_fetch_weather_both_fail(app):
    failure = _response({"cod": 500, "message": "Internal error"}, status=500)
    with patch('openweather_provider.requests.get', side_effect=route(onecall=failure, current=failure)):
        with pytest.raises(WeatherFetchError):
            app.fetch_weather(51.51, -0.13, "London")

    assert app.state.weather is None
    assert "Internal error" in app.state.error
    assert app.state.loading is False


def test_fetch_favorite(app):
    current = _response({"main": {"temp": 15.4}})
    onecall = _response({"current": {"temp": 11.0, "weather": [{"main": "Mist"}]}})
    with patch('openweather_provider.requests.get', side_effect=route(onecall=onecall, current=current)):
        app.add_favorite(Place("London", 51.51, -0.13, None, "GB"))
        snapshot = app.fetch_favorite("51.51_-0.13")

    assert snapshot.city == "London, GB"
    assert snapshot.condition == "Mist"


def test_fetch_unknown_favorite(app):
    with pytest.raises(KeyError):
        app.fetch_favorite("0_0")


def test_search_end_to_end(app):
    geo = _response([{"name": "London", "country": "GB", "lat": 51.51, "lon": -0.13}])
    with patch('openweather_provider.requests.get', side_effect=route(geo=geo)):
        places = app.search("London")

    assert places == [Place("London", 51.51, -0.13, None, "GB")]
    assert app.state.error is None


def test_search_failure_returns_empty_and_records_error(app):
    geo = requests.exceptions.ConnectionError("no route to host")
    with patch('openweather_provider.requests.get', side_effect=route(geo=geo)):
        places = app.search("London")

    assert places == []
    assert "no route to host" in app.state.error


def test_search_validation_makes_no_request(app):
    with patch('openweather_provider.requests.get') as mock_get:
        with pytest.raises(ValidationError):
            app.search(" L ")

    mock_get.assert_not_called()


def test_remove_and_clear(app):
    current = _response({"main": {"temp": 1.0}})
    with patch('openweather_provider.requests.get', side_effect=route(current=current)):
        app.add_favorite(Place("London", 51.51, -0.13))
        app.add_favorite(Place("Paris", 48.85, 2.35))

    app.remove_favorite("51.51_-0.13")
    assert [f.id for f in app.state.favorites] == ["48.85_2.35"]

    app.clear_favorites()
    assert app.state.favorites == []


def test_from_config_persists_to_file(tmp_path):
    config = AppConfig(api_key="key", favorites_file=str(tmp_path / "favorites.json"), timeout=3)
    app = WeatherApp.from_config(config)

    assert isinstance(app.favorites.store.storage, JsonFileStorage)
    assert app.weather.provider.timeout == 3

    current = _response({"main": {"temp": 15.4}})
    with patch('openweather_provider.requests.get', side_effect=route(current=current)):
        app.add_favorite(Place("London", 51.51, -0.13))

    reloaded = WeatherApp.from_config(config)
    assert [f.id for f in reloaded.load_favorites()] == ["51.51_-0.13"]


def test_connection_error_on_forecast_makes_one_request(app):
    """Test a dropped connection fails the fetch without trying the fallback."""
    current = _response({"main": {"temp": 5.2}, "name": "London"})
    with patch('openweather_provider.requests.get') as mock_get:
        mock_get.side_effect = [requests.exceptions.ConnectionError("down"), current]
        outcome = app.weather.fetch(51.51, -0.13, "London")

    assert isinstance(outcome, Failed)
    assert mock_get.call_count == 1
    assert "down" in app.state.error
    assert app.state.weather is None
