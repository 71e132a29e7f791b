"""CLI: apply a weather payload file to a model and print the resulting snapshot."""

from __future__ import annotations

import argparse
import sys
import uuid
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from rich.console import Console
from rich.table import Table

from .config import Settings, load_settings
from .exceptions import ConfigError, JournalError
from .journal import JournalWriter
from .log_setup import setup_logger
from .weather.formatting import format_date
from .weather.model import WeatherModel
from .weather.models import Coordinate, WeatherSnapshot


class CliInputError(Exception):
    """Raised when command-line input cannot be used."""


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse weather update CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Apply a weather provider payload to a weather model."
    )
    parser.add_argument("payload", help="Path to a JSON payload file, or '-' for stdin.")
    parser.add_argument("--lat", type=float, default=None, help="Latitude of the payload.")
    parser.add_argument("--lon", type=float, default=None, help="Longitude of the payload.")
    parser.add_argument(
        "--timezone",
        type=str,
        default=None,
        help="Override WEATHR_DISPLAY_TIMEZONE for the printed timestamp.",
    )
    return parser.parse_args(argv)


def _read_payload(source: str) -> bytes:
    if source == "-":
        return sys.stdin.buffer.read()
    path = Path(source)
    try:
        return path.read_bytes()
    except OSError as exc:
        raise CliInputError(f"Failed reading payload file {path}: {exc}") from exc


def _resolve_location(args: argparse.Namespace, settings: Settings) -> Coordinate | None:
    lat = args.lat if args.lat is not None else settings.default_lat
    lon = args.lon if args.lon is not None else settings.default_lon
    if lat is None and lon is None:
        return None
    if lat is None or lon is None:
        raise CliInputError("Provide both latitude and longitude, or neither.")
    if not (-90 <= lat <= 90):
        raise CliInputError(f"Invalid latitude {lat}; expected between -90 and 90.")
    if not (-180 <= lon <= 180):
        raise CliInputError(f"Invalid longitude {lon}; expected between -180 and 180.")
    return Coordinate(latitude=lat, longitude=lon)


def _resolve_timezone(args: argparse.Namespace, settings: Settings) -> ZoneInfo:
    if not args.timezone:
        return settings.tzinfo()
    try:
        return ZoneInfo(args.timezone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise CliInputError(f"Unknown timezone {args.timezone!r}.") from exc


def _print_snapshot(
    console: Console, snapshot: WeatherSnapshot, date_format: str, tz: ZoneInfo
) -> None:
    table = Table(title="Current Weather")
    table.add_column("Field")
    table.add_column("Value", overflow="fold")

    location = snapshot.location
    table.add_row("Location", snapshot.location_name or "-")
    table.add_row(
        "Coordinates",
        f"{location.latitude:.4f}, {location.longitude:.4f}" if location else "-",
    )
    table.add_row("Conditions", snapshot.description or "-")
    table.add_row(
        "Temperature",
        f"{snapshot.temperature:g}" if snapshot.temperature is not None else "-",
    )
    table.add_row("Icon", snapshot.icon or "-")
    table.add_row(
        "Updated",
        format_date(snapshot.last_updated, fmt=date_format, tz=tz)
        if snapshot.last_updated
        else "-",
    )
    console.print(table)


class _UpdatePrinter:
    """Observer that prints the model's snapshot when it changes."""

    def __init__(
        self, model: WeatherModel, console: Console, date_format: str, tz: ZoneInfo
    ) -> None:
        self.model = model
        self.console = console
        self.date_format = date_format
        self.tz = tz
        self.notified = 0

    def weather_model_updated(self) -> None:
        self.notified += 1
        _print_snapshot(self.console, self.model.snapshot, self.date_format, self.tz)


def main(argv: list[str] | None = None) -> int:
    """Run the weather update flow."""
    args = parse_args(argv)
    session_id = uuid.uuid4().hex[:12]
    logger = setup_logger(session_id=session_id)
    console = Console()
    journal: JournalWriter | None = None

    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return 2
    logger = setup_logger(level=settings.log_level, session_id=session_id)

    if settings.journal_enabled:
        try:
            journal = JournalWriter(journal_dir=settings.journal_dir, session_id=session_id)
            journal.write_event(
                "weather_update_start",
                payload={
                    "source": args.payload,
                    "field_paths": settings.field_paths().as_mapping(),
                },
                metadata={"session_id": session_id},
            )
        except JournalError as exc:
            logger.error("Failed to initialize weather journal: %s", exc)
            return 3

    exit_code = 0
    try:
        location = _resolve_location(args, settings)
        tz = _resolve_timezone(args, settings)
        raw = _read_payload(args.payload)

        model = WeatherModel(field_paths=settings.field_paths(), logger=logger)
        printer = _UpdatePrinter(model, console, settings.date_format, tz)
        model.observer = printer
        result = model.update_from_payload(raw, location=location)

        if result.ok:
            if journal is not None:
                journal.write_event(
                    "weather_update_success",
                    payload=result.snapshot.model_dump(mode="json"),
                    metadata={"session_id": session_id},
                )
        else:
            exit_code = 4
            console.print(f"Payload rejected: {result.error}", markup=False)
            if journal is not None:
                journal.write_event(
                    "weather_update_rejected",
                    payload={
                        "error": str(result.error),
                        "type": type(result.error).__name__,
                    },
                    metadata={"session_id": session_id},
                )
    except (CliInputError, JournalError) as exc:
        exit_code = 4
        logger.error("Weather update failure: %s", exc)
    except Exception as exc:  # pragma: no cover - defensive catch for CLI runtime
        exit_code = 99
        logger.exception("Unexpected weather CLI failure: %s", exc)
    finally:
        if journal is not None:
            try:
                journal.write_event(
                    "weather_shutdown",
                    payload={"exit_code": exit_code},
                    metadata={"session_id": session_id},
                )
            except JournalError:
                logger.error("Failed to write weather_shutdown event.")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
