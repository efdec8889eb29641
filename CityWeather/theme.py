"""Condition to theme mapping - pure functions, the clock is always passed in."""
from datetime import datetime, timezone
from typing import Optional
from weather_data import (
    CLEAR,
    CLOUDS,
    MIST,
    RAIN,
    SNOW,
    THUNDERSTORM,
    Theme,
)

NIGHT = "Night"
DEFAULT = "Default"

# Clear skies before this hour or from NIGHT_START_HOUR on use the night theme
NIGHT_START_HOUR = 19
NIGHT_END_HOUR = 5

THEMES = {
    CLEAR: Theme(CLEAR, "sunny", "#FFFFFF", ("#4FACFE", "#00F2FE", "#FFE259"), "sunny"),
    NIGHT: Theme(NIGHT, "night", "#FFFFFF", ("#0F2027", "#203A43", "#2C5364"), "moon"),
    CLOUDS: Theme(CLOUDS, "evening", "#222222", ("#BDC3C7", "#8E9EAB", "#6D7B8D"), "cloudy"),
    RAIN: Theme(RAIN, "rain", "#FFFFFF", ("#4B79A1", "#283E51", "#1C2A3A"), "rainy"),
    THUNDERSTORM: Theme(THUNDERSTORM, "rain", "#FFFFFF", ("#232526", "#414345", "#5B5F97"), "thunderstorm"),
    SNOW: Theme(SNOW, "snow", "#000000", ("#E6DADA", "#D7E1EC", "#FFFFFF"), "snow"),
    MIST: Theme(MIST, "evening", "#222222", ("#CFD9DF", "#E2EBF0", "#B8C6DB"), "cloudy"),
    DEFAULT: Theme(DEFAULT, "sunny", "#FFFFFF", ("#56CCF2", "#2F80ED", "#1E3C72"), "partly-sunny"),
}

GENERIC_ICON = "cloud"


def is_night(hour: int) -> bool:
    return hour >= NIGHT_START_HOUR or hour < NIGHT_END_HOUR


def theme_for_hour(condition: Optional[str], hour: int) -> Theme:
    """
    Look up the theme for a condition at a given local hour (0-23).

    Unmapped or missing conditions get the Default theme; a clear sky at
    night gets the Night theme.
    """
    if condition == CLEAR and is_night(hour):
        return THEMES[NIGHT]
    return THEMES.get(condition or DEFAULT, THEMES[DEFAULT])


def resolve_theme(
    condition: Optional[str],
    now_epoch_seconds: float,
    utc_offset_seconds: int = 0
) -> Theme:
    """
    Resolve the theme for a condition at a point in time.

    Args:
        condition: Normalized condition, e.g. "Clear"
        now_epoch_seconds: Current time as UNIX timestamp (UTC)
        utc_offset_seconds: Offset of the location from UTC

    Returns:
        Theme: Never None, unknown conditions give the Default theme
    """
    local = datetime.fromtimestamp(now_epoch_seconds + utc_offset_seconds, tz=timezone.utc)
    return theme_for_hour(condition, local.hour)


def icon_for_condition(condition: Optional[str]) -> str:
    """Icon key for forecast entries; missing or unmapped conditions get a cloud."""
    if not condition or condition not in THEMES or condition == DEFAULT:
        return GENERIC_ICON
    return THEMES[condition].icon
