"""Typed settings loader for the weathr model and CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError
from .weather.schema import PayloadFieldPaths


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    field_description: str = Field(default="desc", alias="WEATHR_FIELD_DESCRIPTION")
    field_temperature: str = Field(default="temp", alias="WEATHR_FIELD_TEMPERATURE")
    field_icon: str = Field(default="icon", alias="WEATHR_FIELD_ICON")
    field_location_name: str = Field(default="loc", alias="WEATHR_FIELD_LOCATION_NAME")

    date_format: str = Field(default="%d %b %Y %H:%M", alias="WEATHR_DATE_FORMAT")
    display_timezone: str = Field(default="UTC", alias="WEATHR_DISPLAY_TIMEZONE")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", alias="WEATHR_LOG_LEVEL"
    )

    journal_enabled: bool = Field(default=True, alias="WEATHR_JOURNAL_ENABLED")
    journal_dir: Path = Field(default=Path("./data/journal"), alias="JOURNAL_DIR")

    default_lat: float | None = Field(default=None, alias="WEATHR_DEFAULT_LAT")
    default_lon: float | None = Field(default=None, alias="WEATHR_DEFAULT_LON")

    @field_validator("default_lat", "default_lon", mode="before")
    @classmethod
    def empty_string_to_none(cls, value: Any) -> Any:
        """Treat empty env-string values as unset optional coordinates."""
        if isinstance(value, str) and value.strip() == "":
            return None
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("display_timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone {value!r}.") from exc
        return value

    def field_paths(self) -> PayloadFieldPaths:
        """Build the payload field-path contract from configured values."""
        return PayloadFieldPaths(
            description=self.field_description,
            temperature=self.field_temperature,
            icon=self.field_icon,
            location_name=self.field_location_name,
        )

    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.display_timezone)


def load_settings() -> Settings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        settings = Settings()
        # Field paths are validated here so a bad path fails at startup.
        settings.field_paths()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc
    return settings
