"""Weather snapshot model and payload parsing."""

from .formatting import DEFAULT_DATE_FORMAT, format_date
from .model import WeatherModel
from .models import Coordinate, ModelState, UpdateResult, WeatherSnapshot
from .observer import WeatherModelObserver
from .schema import ParsedObservation, PayloadFieldPaths, parse_payload

__all__ = [
    "DEFAULT_DATE_FORMAT",
    "Coordinate",
    "ModelState",
    "ParsedObservation",
    "PayloadFieldPaths",
    "UpdateResult",
    "WeatherModel",
    "WeatherModelObserver",
    "WeatherSnapshot",
    "format_date",
    "parse_payload",
]
