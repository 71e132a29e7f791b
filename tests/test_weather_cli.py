"""Tests for the weather update CLI flow."""

from __future__ import annotations

import json
from argparse import Namespace
from pathlib import Path
from types import SimpleNamespace

import pytest

from weathr.weather.models import Coordinate
from weathr.weather_cli import CliInputError, _resolve_location, main

ENV_NAMES = (
    "WEATHR_FIELD_DESCRIPTION",
    "WEATHR_FIELD_TEMPERATURE",
    "WEATHR_FIELD_ICON",
    "WEATHR_FIELD_LOCATION_NAME",
    "WEATHR_DISPLAY_TIMEZONE",
    "WEATHR_JOURNAL_ENABLED",
    "WEATHR_DEFAULT_LAT",
    "WEATHR_DEFAULT_LON",
)


@pytest.fixture
def workdir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    monkeypatch.chdir(tmp_path)
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("JOURNAL_DIR", str(tmp_path / "journal"))
    return tmp_path


def _write_payload(directory: Path, document: object) -> Path:
    path = directory / "payload.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def _journal_events(directory: Path) -> list[str]:
    files = list((directory / "journal").glob("*.jsonl"))
    assert len(files) == 1
    lines = files[0].read_text(encoding="utf-8").splitlines()
    return [json.loads(line)["event_type"] for line in lines]


def test_successful_update_prints_snapshot_and_journals(
    workdir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    payload = _write_payload(
        workdir, {"desc": "Cloudy", "temp": 15.2, "icon": "cloud", "loc": "London"}
    )

    exit_code = main([str(payload), "--lat", "51.5", "--lon", "-0.12"])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "London" in out
    assert "Cloudy" in out
    assert "15.2" in out
    assert _journal_events(workdir) == [
        "weather_update_start",
        "weather_update_success",
        "weather_shutdown",
    ]


def test_rejected_payload_exits_4(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    payload = _write_payload(workdir, {"desc": "Cloudy"})

    exit_code = main([str(payload)])

    assert exit_code == 4
    assert "Payload rejected" in capsys.readouterr().out
    assert _journal_events(workdir) == [
        "weather_update_start",
        "weather_update_rejected",
        "weather_shutdown",
    ]


def test_configured_nested_paths(workdir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WEATHR_FIELD_DESCRIPTION", "current.summary")
    monkeypatch.setenv("WEATHR_FIELD_TEMPERATURE", "current.temperature")
    monkeypatch.setenv("WEATHR_FIELD_ICON", "current.icon")
    monkeypatch.setenv("WEATHR_FIELD_LOCATION_NAME", "place")
    payload = _write_payload(
        workdir,
        {
            "place": "Bristol",
            "current": {"summary": "Drizzle", "temperature": 11, "icon": "rain"},
        },
    )
    assert main([str(payload)]) == 0


def test_missing_payload_file_exits_4(workdir: Path) -> None:
    assert main([str(workdir / "absent.json")]) == 4
    assert _journal_events(workdir)[-1] == "weather_shutdown"


def test_unknown_timezone_argument_exits_4(workdir: Path) -> None:
    payload = _write_payload(
        workdir, {"desc": "Cloudy", "temp": 15.2, "icon": "cloud", "loc": "London"}
    )
    assert main([str(payload), "--timezone", "Nowhere/Special"]) == 4


def test_invalid_configuration_exits_2(workdir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WEATHR_FIELD_ICON", "weather..icon")
    payload = _write_payload(workdir, {})
    assert main([str(payload)]) == 2


def test_journal_can_be_disabled(workdir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WEATHR_JOURNAL_ENABLED", "false")
    payload = _write_payload(
        workdir, {"desc": "Cloudy", "temp": 15.2, "icon": "cloud", "loc": "London"}
    )
    assert main([str(payload)]) == 0
    assert not (workdir / "journal").exists()


def test_resolve_location_uses_settings_defaults() -> None:
    args = Namespace(lat=None, lon=None)
    settings = SimpleNamespace(default_lat=51.5, default_lon=-0.12)
    assert _resolve_location(args, settings) == Coordinate(latitude=51.5, longitude=-0.12)


def test_resolve_location_none_when_unset() -> None:
    args = Namespace(lat=None, lon=None)
    settings = SimpleNamespace(default_lat=None, default_lon=None)
    assert _resolve_location(args, settings) is None


@pytest.mark.parametrize(
    ("lat", "lon", "match"),
    [
        (40.0, None, "both latitude and longitude"),
        (91.0, 0.0, "Invalid latitude"),
        (0.0, -181.0, "Invalid longitude"),
    ],
)
def test_resolve_location_rejects_bad_input(
    lat: float | None, lon: float | None, match: str
) -> None:
    args = Namespace(lat=lat, lon=lon)
    settings = SimpleNamespace(default_lat=None, default_lon=None)
    with pytest.raises(CliInputError, match=match):
        _resolve_location(args, settings)
