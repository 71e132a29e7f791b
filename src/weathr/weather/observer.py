"""Observer contract and non-owning observer references."""

from __future__ import annotations

import weakref
from abc import ABC, abstractmethod
from typing import Any


class WeatherModelObserver(ABC):
    """Single-callback target informed after each successful update."""

    @abstractmethod
    def weather_model_updated(self) -> None:
        """Called synchronously once new snapshot fields are readable."""


class ObserverRef:
    """Weak reference to an observer; never keeps the observer alive."""

    def __init__(self, observer: Any) -> None:
        if not callable(getattr(observer, "weather_model_updated", None)):
            raise TypeError(
                f"{type(observer).__name__} does not provide a callable weather_model_updated()"
            )
        self._ref = weakref.ref(observer)

    def get(self) -> Any | None:
        """Return the live observer or None when it has been released."""
        return self._ref()

    def notify(self) -> bool:
        """Invoke the callback if the observer is alive; return whether it ran."""
        observer = self._ref()
        if observer is None:
            return False
        observer.weather_model_updated()
        return True
