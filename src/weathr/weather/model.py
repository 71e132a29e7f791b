"""Weather model: holds the latest snapshot and refreshes it from raw payloads."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from ..exceptions import WeatherModelError
from ..log_setup import DEFAULT_LOGGER_NAME
from .models import Coordinate, ModelState, UpdateResult, WeatherSnapshot
from .observer import ObserverRef
from .schema import PayloadFieldPaths, parse_payload


class WeatherModel:
    """Latest known weather snapshot for a location.

    The snapshot is an immutable value replaced wholesale on each successful
    update, so readers never observe a half-applied payload. Calls on a single
    instance must be serialized by the caller.
    """

    def __init__(
        self,
        field_paths: PayloadFieldPaths | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.field_paths = field_paths or PayloadFieldPaths()
        self.logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self._snapshot = WeatherSnapshot()
        self._observer: ObserverRef | None = None
        self._last_error: WeatherModelError | None = None
        self._update_count = 0

    @property
    def observer(self) -> Any | None:
        if self._observer is None:
            return None
        return self._observer.get()

    @observer.setter
    def observer(self, value: Any | None) -> None:
        self._observer = None if value is None else ObserverRef(value)

    @property
    def snapshot(self) -> WeatherSnapshot:
        return self._snapshot

    @property
    def state(self) -> ModelState:
        return ModelState.POPULATED if self._snapshot.is_populated else ModelState.EMPTY

    @property
    def last_error(self) -> WeatherModelError | None:
        """Error from the most recent update attempt, or None if it succeeded."""
        return self._last_error

    @property
    def update_count(self) -> int:
        return self._update_count

    @property
    def description(self) -> str:
        return self._snapshot.description

    @property
    def temperature(self) -> float | None:
        return self._snapshot.temperature

    @property
    def icon(self) -> str | None:
        return self._snapshot.icon

    @property
    def location_name(self) -> str | None:
        return self._snapshot.location_name

    @property
    def last_updated(self) -> datetime | None:
        return self._snapshot.last_updated

    @property
    def location(self) -> Coordinate | None:
        return self._snapshot.location

    def apply_payload(
        self, raw: bytes, *, location: Coordinate | None = None
    ) -> WeatherSnapshot:
        """Apply a payload, raising PayloadDecodeError/PayloadSchemaError on failure.

        On success the new snapshot is committed before the observer is notified.
        """
        try:
            observation = parse_payload(raw, self.field_paths)
        except WeatherModelError as exc:
            self._last_error = exc
            raise

        staged = WeatherSnapshot(
            description=observation.description,
            temperature=observation.temperature,
            icon=observation.icon,
            location_name=observation.location_name,
            last_updated=datetime.now(UTC),
            location=location if location is not None else self._snapshot.location,
        )
        self._snapshot = staged
        self._last_error = None
        self._update_count += 1
        self.logger.debug(
            "Weather snapshot updated for %s: %s, %g",
            staged.location_name,
            staged.description,
            staged.temperature,
        )

        if self._observer is not None and not self._observer.notify():
            self.logger.debug("Weather model observer released; notification skipped")
        return staged

    def update_from_payload(
        self, raw: bytes, *, location: Coordinate | None = None
    ) -> UpdateResult:
        """Refresh the snapshot from raw payload bytes.

        Rejected payloads leave the snapshot untouched, skip the observer and
        are reported through the returned result and ``last_error``.
        """
        try:
            snapshot = self.apply_payload(raw, location=location)
        except WeatherModelError as exc:
            self.logger.warning(
                "Rejected weather payload (%s): %s", type(exc).__name__, exc
            )
            return UpdateResult(ok=False, snapshot=self._snapshot, error=exc)
        return UpdateResult(ok=True, snapshot=snapshot)
