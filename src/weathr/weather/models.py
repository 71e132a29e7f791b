"""Typed models for weather snapshots and update outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import WeatherModelError


class Coordinate(BaseModel):
    """Geographic coordinate a snapshot corresponds to."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class WeatherSnapshot(BaseModel):
    """Latest known weather fields for one location at one point in time."""

    model_config = ConfigDict(frozen=True)

    description: str = ""
    temperature: float | None = None
    icon: str | None = None
    location_name: str | None = None
    last_updated: datetime | None = None
    location: Coordinate | None = None

    @property
    def is_populated(self) -> bool:
        return self.last_updated is not None


class ModelState(str, Enum):
    """Lifecycle state of a weather model."""

    EMPTY = "empty"
    POPULATED = "populated"


@dataclass(slots=True, frozen=True)
class UpdateResult:
    """Outcome of a single payload update attempt."""

    ok: bool
    snapshot: WeatherSnapshot
    error: WeatherModelError | None = None
