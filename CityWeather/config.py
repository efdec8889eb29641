"""Environment configuration, optionally read from a .env file."""
import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_FAVORITES_FILE = os.path.join("~", ".cityweather", "favorites.json")
DEFAULT_TIMEOUT = 10


class ConfigError(Exception):
    """Missing or invalid configuration."""
    pass


@dataclass
class AppConfig:
    api_key: str
    favorites_file: str = DEFAULT_FAVORITES_FILE
    timeout: int = DEFAULT_TIMEOUT
    lang: str = "en"


def load_config() -> AppConfig:
    """
    Build the configuration from the environment.

    Variables:
        WEATHER_API_KEY: OpenWeather API key (required)
        WEATHER_FAVORITES_FILE: Where favorites are stored
        WEATHER_TIMEOUT: HTTP timeout in seconds
        WEATHER_LANG: Language code for condition descriptions

    Raises:
        ConfigError: If the API key is missing or the timeout is not a number
    """
    load_dotenv()
    api_key = os.getenv("WEATHER_API_KEY")
    favorites_file = os.getenv("WEATHER_FAVORITES_FILE", DEFAULT_FAVORITES_FILE)
    timeout = os.getenv("WEATHER_TIMEOUT", str(DEFAULT_TIMEOUT))
    lang = os.getenv("WEATHER_LANG", "en")

    if not api_key:
        raise ConfigError("Missing WEATHER_API_KEY in environment")

    try:
        timeout_val = int(timeout)
    except ValueError as exc:
        raise ConfigError(f"Invalid WEATHER_TIMEOUT: {exc}") from exc
    if timeout_val <= 0:
        raise ConfigError("WEATHER_TIMEOUT must be positive")

    logging.info("Configuration loaded: favorites=%s timeout=%ss lang=%s", favorites_file, timeout_val, lang)
    return AppConfig(
        api_key=api_key,
        favorites_file=favorites_file,
        timeout=timeout_val,
        lang=lang,
    )
