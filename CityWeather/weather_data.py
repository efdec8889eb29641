"""Weather domain model - pure data structures independent of any API."""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Tuple


# Canonical condition vocabulary
CLEAR = "Clear"
CLOUDS = "Clouds"
RAIN = "Rain"
THUNDERSTORM = "Thunderstorm"
SNOW = "Snow"
MIST = "Mist"
UNKNOWN = "Unknown"

CONDITIONS = (CLEAR, CLOUDS, RAIN, THUNDERSTORM, SNOW, MIST)

# OpenWeather condition groups that fold into the vocabulary above
_CONDITION_ALIASES = {
    "drizzle": RAIN,
    "fog": MIST,
    "haze": MIST,
    "smoke": MIST,
    "dust": MIST,
    "sand": MIST,
    "ash": MIST,
    "squall": MIST,
    "tornado": MIST,
}


def normalize_condition(text: Optional[str]) -> str:
    """Map an upstream condition group (e.g. "Drizzle") onto the vocabulary."""
    if not text:
        return UNKNOWN
    key = str(text).strip().lower()
    for condition in CONDITIONS:
        if condition.lower() == key:
            return condition
    return _CONDITION_ALIASES.get(key, UNKNOWN)


def _format_coord(value: float) -> str:
    """Shortest plain decimal form: no exponent, no trailing ".0", no "-0"."""
    value = float(value)
    if value == 0:
        return "0"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def favorite_id(lat: float, lon: float) -> str:
    """Stable favorite id derived from coordinates, e.g. "51.51_-0.13"."""
    return f"{_format_coord(lat)}_{_format_coord(lon)}"


@dataclass
class Place:
    """A geocoding candidate."""
    name: str
    lat: float
    lon: float
    state: Optional[str] = None
    country: Optional[str] = None

    @property
    def label(self) -> str:
        parts = [self.name, self.state, self.country]
        return ", ".join(p for p in parts if p)


@dataclass
class Theme:
    """Presentation descriptor for a weather condition."""
    name: str
    background: str  # asset key, e.g. "sunny"
    text_color: str
    gradient: Tuple[str, str, str]
    icon: str


@dataclass
class HourlyForecast:
    label: str  # e.g. "3 PM"
    icon: str
    temp: int


@dataclass
class DailyForecast:
    label: str  # e.g. "Mon"
    icon: str
    high: int
    low: int


@dataclass
class WeatherSnapshot:
    """Normalized weather record with its theme attached."""
    city: str
    temp: int
    feels_like: Optional[int]
    condition: str
    humidity: float
    wind_speed: float
    sunrise: str
    sunset: str
    last_updated: str
    theme: Theme
    hourly: List[HourlyForecast] = field(default_factory=list)
    daily: List[DailyForecast] = field(default_factory=list)
    source: str = "onecall"  # "onecall" or "current"


@dataclass
class FavoriteCity:
    """A saved place with its last-known temperature."""
    id: str
    name: str
    lat: float
    lon: float
    temp: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "lat": self.lat,
            "lon": self.lon,
            "temp": self.temp,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FavoriteCity":
        lat = float(data["lat"])
        lon = float(data["lon"])
        temp = data.get("temp")
        return cls(
            id=data.get("id") or favorite_id(lat, lon),
            name=data.get("name", ""),
            lat=lat,
            lon=lon,
            temp=int(temp) if temp is not None else None,
        )
