from __future__ import annotations

import re
from datetime import date, datetime, timedelta

from agenda.domain.entities.professional import Professional, WeeklySchedule

WEEKDAY_KEYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

DEFAULT_SPACING_MINUTES = 30
END_OF_DAY = "23:59"
# Every window is placed on the same arbitrary day so only wall-clock time matters
_REFERENCE_DAY = date(1970, 1, 1)
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def canonical_weekday(day: date) -> str:
    """Locale-independent weekday key for a date, e.g. "saturday"."""
    return WEEKDAY_KEYS[day.weekday()]


def parse_spacing(value: str | int | None, default: int = DEFAULT_SPACING_MINUTES) -> int:
    """
    Appointment spacing in minutes, read from the leading integer of the value
    ("45min" -> 45, "1.5" -> 1). No leading integer, zero or negative falls back to default.
    """
    if default <= 0:
        default = DEFAULT_SPACING_MINUTES
    match = _LEADING_INT.match("" if value is None else str(value))
    if match is None:
        return default
    minutes = int(match.group(1))
    return minutes if minutes > 0 else default


def find_schedule(professional: Professional, weekday_key: str) -> WeeklySchedule | None:
    wanted = weekday_key.strip().lower()
    for schedule in professional.schedules:
        if schedule.weekday_key.strip().lower() == wanted:
            return schedule
    return None


def _parse_clock(value: str) -> datetime | None:
    try:
        parsed = datetime.strptime(value.strip(), "%H:%M")
    except (AttributeError, ValueError):
        return None
    return datetime.combine(_REFERENCE_DAY, parsed.time())


def compute_slots(
    professional: Professional,
    day: date,
    default_spacing: int = DEFAULT_SPACING_MINUTES,
) -> list[str]:
    """
    Bookable start times (HH:MM, ascending) for a professional on a date.

    Malformed input never raises: no schedules, no entry for the weekday, or a
    window whose start is not before its end all give an empty list.
    An end time of 00:00 is read as end of day (23:59).
    The first slot is offered whenever start < end even if it runs past the end;
    a further slot is only offered if it starts strictly before the end.
    """
    if not professional.schedules:
        return []

    schedule = find_schedule(professional, canonical_weekday(day))
    if schedule is None:
        return []

    duration = timedelta(minutes=parse_spacing(professional.appointment_spacing, default_spacing))
    end_time = END_OF_DAY if schedule.end_time == "00:00" else schedule.end_time

    start = _parse_clock(schedule.start_time)
    end = _parse_clock(end_time)
    if start is None or end is None or start >= end:
        return []

    slots: list[str] = []
    current = start
    while current < end:
        slots.append(current.strftime("%H:%M"))
        current += duration

    return slots
