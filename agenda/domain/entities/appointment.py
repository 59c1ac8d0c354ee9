from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any


def to_scheduled_instant(day: date, slot: str) -> str:
    """
    Combine a calendar date and an HH:MM slot into an ISO-8601 UTC instant.
    The slot is read as UTC wall-clock time, no local offset is applied.
    """
    instant = datetime.fromisoformat(f"{day.isoformat()}T{slot}:00+00:00")
    return instant.strftime("%Y-%m-%dT%H:%M:%S.") + f"{instant.microsecond // 1000:03d}Z"


@dataclass(frozen=True)
class CreateAppointmentCommand:
    scheduled_date: str  # ISO-8601 UTC, e.g. 2024-01-26T09:00:00.000Z
    description: str
    user_id: int | None = None
    ticket_id: int | None = None
    status: str = "pending"

    def to_payload(self) -> dict[str, Any]:
        return {
            "scheduledDate": self.scheduled_date,
            "description": self.description,
            "status": self.status,
            "userId": self.user_id,
            "ticketId": self.ticket_id,
        }
