"""OpenWeather API provider implementation."""
import logging
import requests
from typing import Any, Dict, List
from weather_provider import (
    BasicResponse,
    RichResponse,
    WeatherProviderBase,
    WeatherProviderError,
)


class OpenWeatherProvider(WeatherProviderBase):
    """
    Weather provider for the OpenWeather geocoding and weather APIs.

    Three endpoints are used:
    - Geocoding (https://openweathermap.org/api/geocoding-api) for place search
    - One Call (current + hourly + daily) for the rich forecast
    - Current Weather (https://openweathermap.org/current) as the basic fallback
    """

    GEOCODING_URL = "https://api.openweathermap.org/geo/1.0/direct"
    ONECALL_URL = "https://api.openweathermap.org/data/2.5/onecall"
    CURRENT_URL = "https://api.openweathermap.org/data/2.5/weather"

    def __init__(
        self,
        api_key: str,
        units: str = "metric",
        lang: str = "en",
        timeout: int = 10
    ):
        """
        Initialize OpenWeather provider.

        Args:
            api_key: OpenWeather API key
            units: Temperature units ("metric", "imperial", or "standard")
            lang: Language code for descriptions (e.g., "en", "de")
            timeout: HTTP request timeout in seconds
        """
        self.api_key = api_key
        self.units = units
        self.lang = lang
        self.timeout = timeout

    def get_forecast(self, lat: float, lon: float) -> RichResponse:
        """
        Fetch current conditions with hourly and daily forecast.

        Raises:
            WeatherProviderError: If the API request fails
        """
        params = {
            "lat": lat,
            "lon": lon,
            "units": self.units,
            "exclude": "minutely,alerts",
            "lang": self.lang,
            "appid": self.api_key,
        }
        data = self._get(self.ONECALL_URL, params)
        if not isinstance(data, dict):
            raise WeatherProviderError("Forecast response is not a JSON object")
        return RichResponse(payload=data)

    def get_current(self, lat: float, lon: float) -> BasicResponse:
        """
        Fetch current weather from the Current Weather API.

        Raises:
            WeatherProviderError: If the API request fails
        """
        params = {
            "lat": lat,
            "lon": lon,
            "units": self.units,
            "lang": self.lang,
            "appid": self.api_key,
        }
        data = self._get(self.CURRENT_URL, params)
        if not isinstance(data, dict):
            raise WeatherProviderError("Current weather response is not a JSON object")
        return BasicResponse(payload=data)

    def search_places(self, query: str, limit: int = 5) -> List[Dict[str, Any]]:
        """
        Look up places matching a free-text query.

        The result count is capped upstream via the ``limit`` parameter.

        Raises:
            WeatherProviderError: If the API request fails
        """
        params = {
            "q": query,
            "limit": limit,
            "appid": self.api_key,
        }
        data = self._get(self.GEOCODING_URL, params)
        if data is None:
            return []
        if not isinstance(data, list):
            raise WeatherProviderError("Geocoding response is not a JSON array")
        return data

    def _get(self, url: str, params: Dict[str, Any]) -> Any:
        """Issue a GET request and return the decoded JSON body."""
        try:
            logging.info(f"Making OpenWeather API request: {url}")
            logging.debug(
                "Request parameters: %s",
                {k: v for k, v in params.items() if k != "appid"},
            )

            response = requests.get(url, params=params, timeout=self.timeout)

            logging.info(f"API response status: {response.status_code}")

            if not response.ok:
                logging.error(f"API request failed with status {response.status_code}")
                self._handle_error_response(response)

            data = response.json()
            # Log full response in debug mode (truncated for readability)
            logging.debug(f"API response (truncated): {str(data)[:500]}...")
            return data

        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during API request: {e}")
            raise WeatherProviderError(f"Network error: {str(e)}")
        except ValueError as e:
            logging.error(f"Failed to decode API response: {e}")
            raise WeatherProviderError(f"Failed to parse response: {str(e)}")

    def _handle_error_response(self, response: requests.Response) -> None:
        """Parse and raise error from OpenWeather error response."""
        try:
            error_data = response.json()
        except ValueError:
            # Not JSON, use HTTP status
            logging.error(f"Non-JSON error response: HTTP {response.status_code}, body: {response.text[:500]}")
            raise WeatherProviderError(
                f"HTTP {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )

        if not isinstance(error_data, dict):
            error_data = {}
        cod = error_data.get("cod", response.status_code)
        message = error_data.get("message", "Unknown error")
        parameters = error_data.get("parameters", [])

        logging.error(f"OpenWeather API error response: {error_data}")

        error_msg = f"OpenWeather API error {cod}: {message}"
        if parameters:
            error_msg += f" (parameters: {', '.join(parameters)})"

        raise WeatherProviderError(error_msg, status_code=response.status_code)
