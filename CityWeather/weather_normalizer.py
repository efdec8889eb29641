"""Normalize OpenWeather responses into WeatherSnapshot records.

Two upstream shapes are supported:

- RichResponse (One Call): nested ``current`` object plus ``hourly`` and
  ``daily`` lists, epoch timestamps and a ``timezone_offset`` in seconds.
- BasicResponse (Current Weather): flat ``main``/``wind``/``sys`` blocks,
  a single ``weather[0]`` condition and a ``timezone`` offset in seconds.

Missing numbers default to 0, missing conditions to "Unknown" and missing or
zero timestamps to an empty string. Blocks or forecast entries of the wrong
JSON type count as missing. Temperatures are rounded here, not at
display time.
"""
import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union
from theme import icon_for_condition, resolve_theme
from weather_data import (
    DailyForecast,
    HourlyForecast,
    WeatherSnapshot,
    normalize_condition,
)
from weather_provider import BasicResponse, RichResponse

UNKNOWN_CITY = "UNKNOWN"
MAX_HOURLY = 24
MAX_DAILY = 7


def round_temp(value: Optional[float]) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value is None:
        return 0
    value = float(value)
    rounded = math.floor(abs(value) + 0.5)
    return int(-rounded if value < 0 else rounded)


def _number(value: Any) -> float:
    try:
        return float(value) if value is not None else 0.0
    except (TypeError, ValueError):
        return 0.0


def _block(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _entries(value: Any) -> List[Dict[str, Any]]:
    """Forecast list with non-object entries dropped; anything but a list is absent."""
    if not isinstance(value, list):
        return []
    return [entry for entry in value if isinstance(entry, dict)]


def _percent(value: Any) -> float:
    return min(max(_number(value), 0.0), 100.0)


def _local(epoch: float, offset: int) -> datetime:
    return datetime.fromtimestamp(epoch + offset, tz=timezone.utc)


def format_time(epoch: Optional[float], offset: int = 0) -> str:
    """Time of day, e.g. "6:05 AM"; empty for a missing or zero timestamp."""
    if not epoch:
        return ""
    dt = _local(epoch, offset)
    return f"{dt.hour % 12 or 12}:{dt.minute:02d} {'AM' if dt.hour < 12 else 'PM'}"


def format_hour_label(epoch: Optional[float], offset: int = 0) -> str:
    """Hour label, e.g. "3 PM"."""
    if not epoch:
        return ""
    dt = _local(epoch, offset)
    return f"{dt.hour % 12 or 12} {'AM' if dt.hour < 12 else 'PM'}"


def format_day_label(epoch: Optional[float], offset: int = 0) -> str:
    """Short weekday, e.g. "Mon"."""
    if not epoch:
        return ""
    return _local(epoch, offset).strftime("%a")


def _condition_of(block: Dict[str, Any]) -> Optional[str]:
    weather = block.get("weather")
    if not isinstance(weather, list) or not weather or not isinstance(weather[0], dict):
        return None
    return weather[0].get("main")


def _entry_icon(block: Dict[str, Any]) -> str:
    raw = _condition_of(block)
    if not raw:
        return icon_for_condition(None)
    return icon_for_condition(normalize_condition(raw))


def _hourly(entries: List[Dict[str, Any]], offset: int) -> List[HourlyForecast]:
    return [
        HourlyForecast(
            label=format_hour_label(entry.get("dt"), offset),
            icon=_entry_icon(entry),
            temp=round_temp(entry.get("temp")),
        )
        for entry in entries[:MAX_HOURLY]
    ]


def _daily(entries: List[Dict[str, Any]], offset: int) -> List[DailyForecast]:
    result = []
    for entry in entries[:MAX_DAILY]:
        temps = entry.get("temp")
        if not isinstance(temps, dict):
            temps = {}
        result.append(
            DailyForecast(
                label=format_day_label(entry.get("dt"), offset),
                icon=_entry_icon(entry),
                high=round_temp(temps.get("max")),
                low=round_temp(temps.get("min")),
            )
        )
    return result


def normalize_rich(response: RichResponse, display_name: Optional[str], now: float) -> WeatherSnapshot:
    """Map a One Call reply onto a snapshot, keeping up to 24 hours and 7 days."""
    data = response.payload
    current = _block(data.get("current"))
    offset = int(_number(data.get("timezone_offset")))
    condition = normalize_condition(_condition_of(current))
    feels_like = current.get("feels_like")

    snapshot = WeatherSnapshot(
        city=display_name or UNKNOWN_CITY,
        temp=round_temp(current.get("temp")),
        feels_like=round_temp(feels_like) if feels_like is not None else None,
        condition=condition,
        humidity=_percent(current.get("humidity")),
        wind_speed=max(_number(current.get("wind_speed")), 0.0),
        sunrise=format_time(current.get("sunrise"), offset),
        sunset=format_time(current.get("sunset"), offset),
        last_updated=format_time(current.get("dt") or now, offset),
        theme=resolve_theme(condition, now, offset),
        hourly=_hourly(_entries(data.get("hourly")), offset),
        daily=_daily(_entries(data.get("daily")), offset),
        source="onecall",
    )
    logging.debug(
        f"Normalized forecast: {snapshot.temp}°C {snapshot.condition}, "
        f"{len(snapshot.hourly)} hourly, {len(snapshot.daily)} daily"
    )
    return snapshot


def normalize_basic(response: BasicResponse, display_name: Optional[str], now: float) -> WeatherSnapshot:
    """Map a Current Weather reply onto a snapshot; hourly and daily stay empty."""
    data = response.payload
    main = _block(data.get("main"))
    wind = _block(data.get("wind"))
    sys_block = _block(data.get("sys"))
    offset = int(_number(data.get("timezone")))
    condition = normalize_condition(_condition_of(data))
    feels_like = main.get("feels_like")

    # The upstream location name wins over the passed one on this path
    city = data.get("name") or display_name or UNKNOWN_CITY

    snapshot = WeatherSnapshot(
        city=city,
        temp=round_temp(main.get("temp")),
        feels_like=round_temp(feels_like) if feels_like is not None else None,
        condition=condition,
        humidity=_percent(main.get("humidity")),
        wind_speed=max(_number(wind.get("speed")), 0.0),
        sunrise=format_time(sys_block.get("sunrise"), offset),
        sunset=format_time(sys_block.get("sunset"), offset),
        last_updated=format_time(data.get("dt") or now, offset),
        theme=resolve_theme(condition, now, offset),
        source="current",
    )
    logging.debug(f"Normalized current weather: {snapshot.temp}°C {snapshot.condition}")
    return snapshot


def normalize(
    response: Union[RichResponse, BasicResponse],
    display_name: Optional[str],
    now: float
) -> WeatherSnapshot:
    """Dispatch on the response shape."""
    if isinstance(response, RichResponse):
        return normalize_rich(response, display_name, now)
    if isinstance(response, BasicResponse):
        return normalize_basic(response, display_name, now)
    raise TypeError(f"Unsupported response type: {type(response).__name__}")
