from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple


@dataclass(frozen=True)
class WeeklySchedule:
    start_time: str  # HH:MM
    end_time: str  # HH:MM, "00:00" means end of day
    weekday: str = ""  # localized label, display only
    weekday_key: str = ""  # canonical day name, e.g. "monday"

    @staticmethod
    def from_payload(payload: dict[str, Any]) -> "WeeklySchedule":
        weekday_key = payload.get("weekdayEn") or payload.get("weekdayKey") or ""
        return WeeklySchedule(
            start_time=str(payload.get("startTime") or "").strip(),
            end_time=str(payload.get("endTime") or "").strip(),
            weekday=str(payload.get("weekday") or "").strip(),
            weekday_key=str(weekday_key).strip(),
        )


@dataclass(frozen=True)
class Professional:
    id: int
    name: str
    profession: str = ""
    appointment_spacing: str = ""  # minutes, kept as received
    schedules: Tuple[WeeklySchedule, ...] = ()

    @staticmethod
    def from_payload(payload: dict[str, Any]) -> "Professional":
        schedules = tuple(
            WeeklySchedule.from_payload(s) for s in (payload.get("schedules") or []) if isinstance(s, dict)
        )
        spacing = payload.get("appointmentSpacing")
        return Professional(
            id=int(payload["id"]),
            name=(payload.get("name") or "").strip(),
            profession=(payload.get("profession") or "").strip(),
            appointment_spacing="" if spacing is None else str(spacing).strip(),
            schedules=schedules,
        )
