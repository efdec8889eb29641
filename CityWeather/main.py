"""Command line front end for city search, weather lookup and favorites."""
import argparse
import logging
import sys
from typing import List, Optional

from config import ConfigError, load_config
from weather_app import WeatherApp
from weather_data import FavoriteCity, Place, WeatherSnapshot
from weather_provider import StorageError, ValidationError, WeatherAppError


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("City weather and favorites")
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--verbose", action="store_true")
    commands = parser.add_subparsers(dest="command", required=True)

    search = commands.add_parser("search", help="Search places by name")
    search.add_argument("query")

    weather = commands.add_parser("weather", help="Show weather for coordinates")
    weather.add_argument("lat", type=float)
    weather.add_argument("lon", type=float)
    weather.add_argument("--name", default=None)

    favorites = commands.add_parser("favorites", help="Manage saved cities")
    actions = favorites.add_subparsers(dest="action", required=True)
    actions.add_parser("list")
    add = actions.add_parser("add", help="Search and save a place")
    add.add_argument("query")
    add.add_argument("--index", type=int, default=0, help="Which search result to save")
    remove = actions.add_parser("remove")
    remove.add_argument("id")
    actions.add_parser("clear")
    show = actions.add_parser("show", help="Show weather for a saved city")
    show.add_argument("id")

    return parser.parse_args(argv)


def setup_logging(log_file: Optional[str], verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.WARNING
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers
    )


def format_place(index: int, place: Place) -> str:
    return f"[{index}] {place.label}  (lat: {place.lat:.2f} lon: {place.lon:.2f})"


def format_favorite(favorite: FavoriteCity) -> str:
    temp = f"{favorite.temp}°C" if favorite.temp is not None else "—"
    return f"{favorite.id:<24} {favorite.name}  {temp}"


def format_weather(weather: WeatherSnapshot) -> List[str]:
    feels = f"{weather.feels_like}°" if weather.feels_like is not None else "—"
    lines = [
        f"{weather.city}  (updated {weather.last_updated})",
        f"{weather.temp}°C  {weather.condition}  feels like {feels}",
        f"Humidity {weather.humidity:.0f}%  Wind {weather.wind_speed:.1f} m/s",
        f"Sunrise {weather.sunrise or '—'}  Sunset {weather.sunset or '—'}",
        f"Theme {weather.theme.name} ({weather.theme.background}, {' > '.join(weather.theme.gradient)})",
    ]
    if weather.hourly:
        lines.append("Hourly: " + "  ".join(f"{h.label} {h.temp}°" for h in weather.hourly[:8]))
    if weather.daily:
        lines.append("Daily:  " + "  ".join(f"{d.label} {d.high}/{d.low}°" for d in weather.daily))
    return lines


def run(app: WeatherApp, args: argparse.Namespace) -> int:
    if args.command == "search":
        places = app.search(args.query)
        if app.state.error:
            print(app.state.error, file=sys.stderr)
            return 1
        if not places:
            print("No results")
        for index, place in enumerate(places):
            print(format_place(index, place))
        return 0

    if args.command == "weather":
        weather = app.fetch_weather(args.lat, args.lon, args.name)
        print("\n".join(format_weather(weather)))
        return 0

    app.load_favorites()

    if args.action == "list":
        if not app.state.favorites:
            print("No saved cities")
        for favorite in app.state.favorites:
            print(format_favorite(favorite))
    elif args.action == "add":
        places = app.search(args.query)
        if not 0 <= args.index < len(places):
            print(app.state.error or "No matching place", file=sys.stderr)
            return 1
        favorite = app.add_favorite(places[args.index])
        print(f"Saved {favorite.name}")
    elif args.action == "remove":
        app.remove_favorite(args.id)
    elif args.action == "clear":
        app.clear_favorites()
    elif args.action == "show":
        try:
            weather = app.fetch_favorite(args.id)
        except KeyError:
            print(f"No saved city with id {args.id}", file=sys.stderr)
            return 1
        print("\n".join(format_weather(weather)))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    try:
        config = load_config()
    except ConfigError as exc:
        raise SystemExit(str(exc)) from exc

    app = WeatherApp.from_config(config)
    try:
        return run(app, args)
    except ValidationError as err:
        print(str(err), file=sys.stderr)
        return 2
    except StorageError as err:
        logging.error("Storage failure: %s", err)
        print(f"Storage error: {err}", file=sys.stderr)
        return 1
    except WeatherAppError as err:
        logging.error("Weather fetch failed: %s", err)
        print(str(err), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
