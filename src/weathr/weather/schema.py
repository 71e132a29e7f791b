"""Payload field-path contract and typed staging structure for weather payloads."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError, field_validator

from ..exceptions import PayloadDecodeError, PayloadSchemaError

PATH_SEPARATOR = "."


class PayloadFieldPaths(BaseModel):
    """Dotted paths locating each observable field inside a provider document.

    Integer segments index into JSON arrays, so ``weather.0.icon`` reads the
    ``icon`` key of the first element of the ``weather`` list.
    """

    model_config = ConfigDict(frozen=True)

    description: str = "desc"
    temperature: str = "temp"
    icon: str = "icon"
    location_name: str = "loc"

    @field_validator("description", "temperature", "icon", "location_name")
    @classmethod
    def validate_path(cls, value: str) -> str:
        candidate = value.strip()
        if not candidate:
            raise ValueError("Field path must not be empty.")
        if any(segment == "" for segment in candidate.split(PATH_SEPARATOR)):
            raise ValueError(f"Field path {value!r} contains an empty segment.")
        return candidate

    def as_mapping(self) -> dict[str, str]:
        return self.model_dump()


class ParsedObservation(BaseModel):
    """Fully validated observation, staged before it is committed to a model."""

    model_config = ConfigDict(frozen=True)

    description: StrictStr
    temperature: float = Field(allow_inf_nan=False)
    icon: StrictStr
    location_name: StrictStr

    @field_validator("temperature", mode="before")
    @classmethod
    def require_number(cls, value: Any) -> Any:
        # bool is an int subclass and numeric strings would otherwise coerce.
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"expected a number, got {type(value).__name__}")
        try:
            return float(value)
        except OverflowError as exc:
            raise ValueError("temperature out of range") from exc


def decode_payload(raw: bytes) -> dict[str, Any]:
    """Decode raw payload bytes into a JSON object."""
    if not isinstance(raw, (bytes, bytearray, memoryview)):
        raise PayloadDecodeError(f"Payload must be bytes, got {type(raw).__name__}.")
    try:
        document = json.loads(bytes(raw).decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise PayloadDecodeError(f"Payload is not valid UTF-8: {exc.reason}.") from exc
    except (ValueError, RecursionError) as exc:
        raise PayloadDecodeError(f"Payload is not valid JSON: {exc}.") from exc

    if not isinstance(document, dict):
        raise PayloadDecodeError(
            f"Payload must be a JSON object, got {type(document).__name__}."
        )
    return document


def _is_index(segment: str) -> bool:
    # ASCII 0-9 only; int() rejects superscript digits that isdigit() accepts.
    return segment.isascii() and segment.isdecimal()


def resolve_path(document: Any, path: str) -> Any:
    """Walk a dotted path through nested objects and arrays.

    Raises KeyError naming the first segment that could not be resolved.
    """
    current = document
    for segment in path.split(PATH_SEPARATOR):
        if isinstance(current, dict) and segment in current:
            current = current[segment]
        elif isinstance(current, list) and _is_index(segment) and int(segment) < len(current):
            current = current[int(segment)]
        else:
            raise KeyError(segment)
    return current


def extract_observation(document: dict[str, Any], paths: PayloadFieldPaths) -> ParsedObservation:
    """Extract and validate all observable fields from a decoded document."""
    values: dict[str, Any] = {}
    for field_name, path in paths.as_mapping().items():
        try:
            values[field_name] = resolve_path(document, path)
        except KeyError as exc:
            raise PayloadSchemaError(
                f"Payload missing required field {field_name!r} at path {path!r} "
                f"(unresolved segment {exc.args[0]!r}).",
                field=field_name,
            ) from exc

    try:
        return ParsedObservation.model_validate(values)
    except ValidationError as exc:
        first = exc.errors()[0]
        field_name = str(first["loc"][0]) if first["loc"] else None
        raise PayloadSchemaError(
            f"Payload field {field_name!r} is invalid: {first['msg']}.",
            field=field_name,
        ) from exc


def parse_payload(raw: bytes, paths: PayloadFieldPaths) -> ParsedObservation:
    """Decode raw bytes and extract a validated observation in one step."""
    return extract_observation(decode_payload(raw), paths)
