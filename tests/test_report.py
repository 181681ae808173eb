"""Tests for report rendering."""

import time
from datetime import datetime, timezone

import pytest

from gallon_logger.models.event import REFILL_LABEL, Chemical, LogEntry, WeatherConditions
from gallon_logger.report import (
    build_report,
    format_conditions_summary,
    last_application_conditions,
    partition_events,
    report_filename,
)

GENERATED = datetime(2026, 5, 4, 17, 30, 0)
SUNNY = WeatherConditions(weather="Sunny", temperature=72, wind_direction="South West", wind_speed=5)
WINDY = WeatherConditions(weather="Windy", temperature=65.5, wind_direction="North", wind_speed=12)


def _application(road, used, left, conditions=SUNNY, ts=None, ratio="0.2000"):
    return LogEntry(
        id=f"app-{road}",
        road_name=road,
        gallons_used=used,
        gallons_left=left,
        initial_tank_volume=600,
        chemical_mix=[Chemical(name="Milestone 2.5 Gal", total_oz=120, oz_per_gal=ratio)],
        weather_conditions=conditions,
        timestamp=ts,
    )


def _refill(added, left, ts=None):
    return LogEntry(
        id=f"refill-{left}",
        road_name=REFILL_LABEL,
        gallons_used=-added,
        gallons_left=left,
        initial_tank_volume=600,
        timestamp=ts,
    )


def _render(events, conditions=None):
    return build_report(events, 600, "op-1", conditions, GENERATED)


def test_partition_keeps_chronological_order():
    a1 = _application("Elk", 50, 550)
    r1 = _refill(20, 570)
    a2 = _application("Moose", 30, 540)

    applications, refills = partition_events([a1, r1, a2])

    assert applications == [a1, a2]
    assert refills == [r1]


def test_report_numbers_each_section_independently():
    """Test one application and one refill are each numbered #1."""
    events = [_application("Elk", 50, 550), _refill(20, 570)]

    text = _render(events, SUNNY)

    assert "Total Road Applications: 1" in text
    assert "Total Refills: 1" in text
    assert "ENTRY #1 (Logged: N/A)" in text
    assert "REFILL #1 (Logged: N/A)" in text
    assert "ENTRY #2" not in text
    assert "Road Name: Elk" in text
    assert "Gallons Used: 50.00 gal" in text
    assert "Gallons Left: 550.00 gal" in text
    assert "Gallons ADDED: 20.00 gal" in text
    assert "Gallons Left: 570.00 gal" in text


def test_report_lists_newest_first():
    events = [_application("Elk", 50, 550), _application("Moose", 30, 520), _application("Lily", 20, 500)]

    text = _render(events)

    lily = text.index("ENTRY #3")
    moose = text.index("ENTRY #2")
    elk = text.index("ENTRY #1")
    assert lily < moose < elk
    assert text.index("Road Name: Lily") < text.index("Road Name: Elk")


def test_report_chemical_quantities():
    text = _render([_application("Elk", 50, 550)])
    assert "    - Milestone 2.5 Gal: 10.00 oz applied" in text


def test_report_zero_ratio_chemical():
    text = _render([_application("Elk", 50, 550, ratio=0)])
    assert "Milestone 2.5 Gal: 0.00 oz applied" in text


def test_report_header():
    text = _render([])
    lines = text.splitlines()

    assert lines[0] == "=" * 44
    assert lines[1] == "APPLICATION HISTORY REPORT"
    assert "Generated: 5/4/2026 5:30:00 PM" in text
    assert "User ID: op-1" in text
    assert "Total Tank Capacity: 600 gallons" in text


def test_report_conditions_section():
    text = _render([_application("Elk", 50, 550, conditions=WINDY)], WINDY)

    assert ">>> ENVIRONMENTAL CONDITIONS (Last Logged) <<<" in text
    assert "Weather: Windy" in text
    assert "Temperature: 65.5°F" in text
    assert "Wind: 12 MPH from the North" in text


def test_report_conditions_not_available():
    text = _render([_refill(20, 600)])
    assert ">>> ENVIRONMENTAL CONDITIONS: N/A" in text
    assert "Weather:" not in text


def test_report_empty_sections():
    text = _render([])
    assert "No road application data to report." in text
    assert "No tank refill data to report." in text


def test_report_renders_timestamps():
    ts = datetime(2026, 5, 4, 9, 15, 42)
    text = _render([_application("Elk", 50, 550, ts=ts)])
    assert "ENTRY #1 (Logged: 5/4/2026, 9:15:42 AM)" in text


@pytest.mark.parametrize(
    "ts, expected",
    [
        (datetime(2026, 5, 4, 0, 5, 0), "5/4/2026, 12:05:00 AM"),
        (datetime(2026, 5, 4, 12, 0, 9), "5/4/2026, 12:00:09 PM"),
        (datetime(2026, 11, 30, 23, 59, 59), "11/30/2026, 11:59:59 PM"),
    ],
)
def test_report_twelve_hour_clock(ts, expected):
    text = _render([_refill(20, 600, ts=ts)])
    assert f"REFILL #1 (Logged: {expected})" in text


@pytest.fixture
def denver_tz(monkeypatch):
    """Local zone six hours behind UTC in May."""
    monkeypatch.setenv("TZ", "America/Denver")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


def test_report_shows_store_timestamps_in_local_time(denver_tz):
    """Test that the header and entry lines agree for the same instant."""
    instant = datetime(2026, 5, 4, 15, 15, 42, tzinfo=timezone.utc)

    text = build_report([_application("Elk", 50, 550, ts=instant)], 600, "op-1", None, instant.astimezone())

    assert "Generated: 5/4/2026 9:15:42 AM" in text
    assert "ENTRY #1 (Logged: 5/4/2026, 9:15:42 AM)" in text


def test_report_converts_utc_generation_time(denver_tz):
    generated = datetime(2026, 5, 4, 23, 30, 0, tzinfo=timezone.utc)
    text = build_report([], 600, "op-1", None, generated)
    assert "Generated: 5/4/2026 5:30:00 PM" in text


def test_report_is_deterministic():
    events = [_application("Elk", 50, 550), _refill(20, 570), _application("Moose", 30, 540)]
    assert _render(events, SUNNY) == _render(events, SUNNY)


def test_last_application_conditions_skips_refill():
    events = [_application("Elk", 50, 550, conditions=SUNNY), _application("Moose", 30, 520, conditions=WINDY), _refill(80, 600)]
    assert last_application_conditions(events) == WINDY


def test_last_application_conditions_none():
    assert last_application_conditions([]) is None
    assert last_application_conditions([_refill(20, 600)]) is None


def test_format_conditions_summary():
    assert format_conditions_summary(SUNNY) == "Sunny | 72°F | Wind: 5 MPH (South West)"
    assert format_conditions_summary(None) == "N/A"


def test_format_conditions_summary_without_wind():
    calm = SUNNY.model_copy(update={"wind_speed": 0})
    assert format_conditions_summary(calm) == "Sunny | 72°F | Wind: "


def test_report_filename():
    assert report_filename(GENERATED) == "Gallon_Log_Report_2026-05-04.txt"


def test_ledger_report_matches_snapshot(ledger, conditions):
    ledger.mix.add("Milestone 2.5 Gal", 120)
    ledger.log_application("Elk", 50, ledger.mix.chemicals, conditions)
    ledger.log_refill(20)

    first = ledger.build_report(GENERATED)
    second = ledger.build_report(GENERATED)

    assert first == second
    assert "ENTRY #1" in first
    assert "REFILL #1" in first
    assert "Milestone 2.5 Gal: 10.00 oz applied" in first
    assert "Weather: Sunny" in first
    assert "User ID: op-1" in first
