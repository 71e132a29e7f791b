"""Application exception classes."""


class ConfigError(Exception):
    """Raised when configuration is invalid or incomplete."""


class JournalError(Exception):
    """Raised when writing to journal files fails."""


class WeatherModelError(Exception):
    """Raised when a payload cannot be applied to a weather model."""


class PayloadDecodeError(WeatherModelError):
    """Raised when payload bytes are not a UTF-8 JSON object."""


class PayloadSchemaError(WeatherModelError):
    """Raised when a required payload field is missing or has the wrong type."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field
