"""Place search on top of the provider's geocoding endpoint."""
import logging
from typing import List
from weather_data import Place
from weather_provider import (
    SearchError,
    ValidationError,
    WeatherProviderBase,
    WeatherProviderError,
)

MIN_QUERY_LENGTH = 2
RESULT_LIMIT = 5


class GeocodingSearch:
    """Resolves free-text queries to candidate places in provider order."""

    def __init__(self, provider: WeatherProviderBase, limit: int = RESULT_LIMIT):
        self.provider = provider
        self.limit = limit

    def search(self, query: str) -> List[Place]:
        """
        Look up places matching ``query``.

        Raises:
            ValidationError: If the trimmed query is shorter than 2 characters
            SearchError: If the request fails or the reply cannot be decoded
        """
        query = (query or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            raise ValidationError(f"Type at least {MIN_QUERY_LENGTH} letters")

        logging.info(f"Searching places for '{query}'")
        try:
            entries = self.provider.search_places(query, limit=self.limit)
        except WeatherProviderError as e:
            logging.error(f"Place search failed: {e}")
            raise SearchError(f"Search failed: {e}") from e

        try:
            places = [
                Place(
                    name=entry["name"],
                    lat=float(entry["lat"]),
                    lon=float(entry["lon"]),
                    state=entry.get("state"),
                    country=entry.get("country"),
                )
                for entry in entries
            ]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logging.error(f"Failed to parse geocoding response: {e}")
            raise SearchError(f"Search failed: malformed place entry ({e})") from e

        logging.info(f"Found {len(places)} place(s) for '{query}'")
        return places
