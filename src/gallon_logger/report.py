"""Text report rendering for the gallon ledger.

Everything here is a pure function of its arguments, so rendering the same
snapshot twice gives the same text.
"""

from datetime import datetime
from typing import Optional, Sequence

from .mix import quantity_applied
from .models.event import LogEntry, WeatherConditions

RULE = "=" * 44
DIVIDER = "-" * 44


def _num(value: float) -> str:
    """Render a number without a trailing .0 (70.0 -> 70, 12.5 -> 12.5)."""
    return f"{value:g}"


def _local(moment: datetime) -> datetime:
    """Aware timestamps are shown in local time; naive ones already are."""
    return moment.astimezone() if moment.tzinfo is not None else moment


def _date(moment: datetime) -> str:
    return f"{moment.month}/{moment.day}/{moment.year}"


def _time(moment: datetime) -> str:
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d}:{moment.second:02d} {suffix}"


def _ts(timestamp: Optional[datetime]) -> str:
    """en-US style local date and time, e.g. 5/4/2026, 9:15:42 AM."""
    if timestamp is None:
        return "N/A"
    moment = _local(timestamp)
    return f"{_date(moment)}, {_time(moment)}"


def partition_events(events: Sequence[LogEntry]) -> tuple[list[LogEntry], list[LogEntry]]:
    """Split events into (applications, refills), keeping chronological order."""
    applications = [e for e in events if not e.is_refill]
    refills = [e for e in events if e.is_refill]
    return applications, refills


def last_application_conditions(events: Sequence[LogEntry]) -> Optional[WeatherConditions]:
    """Conditions of the most recent application that recorded any.

    A refill can be the latest event but never carries conditions, so the
    scan skips it.
    """
    for entry in reversed(events):
        if entry.is_refill:
            continue
        if entry.weather_conditions is not None and entry.weather_conditions.weather:
            return entry.weather_conditions
    return None


def format_conditions_summary(conditions: Optional[WeatherConditions]) -> str:
    """One-line summary, e.g. 'Sunny | 70°F | Wind: 5 MPH (South West)'."""
    if conditions is None or not conditions.weather:
        return "N/A"
    wind = ""
    if conditions.wind_speed > 0:
        wind = f"{_num(conditions.wind_speed)} MPH ({conditions.wind_direction})"
    return f"{conditions.weather} | {_num(conditions.temperature)}°F | Wind: {wind}"


def report_filename(as_of: datetime) -> str:
    return f"Gallon_Log_Report_{as_of.strftime('%Y-%m-%d')}.txt"


def _render_conditions(conditions: Optional[WeatherConditions]) -> list[str]:
    if conditions is None:
        return [">>> ENVIRONMENTAL CONDITIONS: N/A", DIVIDER, ""]
    return [
        ">>> ENVIRONMENTAL CONDITIONS (Last Logged) <<<",
        f"Weather: {conditions.weather}",
        f"Temperature: {_num(conditions.temperature)}°F",
        f"Wind: {_num(conditions.wind_speed)} MPH from the {conditions.wind_direction}",
        DIVIDER,
        "",
    ]


def _render_application(entry: LogEntry, number: int) -> list[str]:
    lines = [
        f"ENTRY #{number} (Logged: {_ts(entry.timestamp)})",
        f"Road Name: {entry.road_name}",
        f"Gallons Used: {entry.gallons_used:.2f} gal",
        f"Gallons Left: {entry.gallons_left:.2f} gal",
        "  Chemical Mix:",
    ]
    for chem in entry.chemical_mix:
        applied = quantity_applied(entry.gallons_used, chem.oz_per_gal)
        lines.append(f"    - {chem.name}: {applied:.2f} oz applied")
    lines.append(DIVIDER)
    return lines


def _render_refill(entry: LogEntry, number: int) -> list[str]:
    return [
        f"REFILL #{number} (Logged: {_ts(entry.timestamp)})",
        f"Gallons ADDED: {entry.gallons_added:.2f} gal",
        f"Gallons Left: {entry.gallons_left:.2f} gal",
        DIVIDER,
    ]


def build_report(
    events: Sequence[LogEntry],
    capacity: float,
    operator_id: Optional[str],
    last_conditions: Optional[WeatherConditions],
    generated_at: datetime,
) -> str:
    """Render the application history report.

    Args:
        events: Ledger events in chronological order
        capacity: Current tank capacity
        operator_id: Operator the history belongs to
        last_conditions: Conditions of the last logged application, if any
        generated_at: Timestamp printed in the header

    Returns:
        Report text; applications and refills each listed newest first
    """
    applications, refills = partition_events(events)
    generated = _local(generated_at)

    lines = [
        RULE,
        "APPLICATION HISTORY REPORT",
        RULE,
        f"Generated: {_date(generated)} {_time(generated)}",
        f"User ID: {operator_id}",
        f"Total Tank Capacity: {_num(capacity)} gallons",
        f"Total Road Applications: {len(applications)}",
        f"Total Refills: {len(refills)}",
        RULE,
        "",
    ]
    lines.extend(_render_conditions(last_conditions))

    lines.append(">>> ROAD APPLICATION LOGS <<<")
    lines.append(DIVIDER)
    if not applications:
        lines.extend(["No road application data to report.", ""])
    for index, entry in enumerate(reversed(applications)):
        lines.extend(_render_application(entry, len(applications) - index))

    lines.append("")
    lines.append(">>> TANK REFILL LOGS <<<")
    lines.append(DIVIDER)
    if not refills:
        lines.extend(["No tank refill data to report.", ""])
    for index, entry in enumerate(reversed(refills)):
        lines.extend(_render_refill(entry, len(refills) - index))

    return "\n".join(lines) + "\n"
