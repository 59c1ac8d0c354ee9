from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from agenda.domain.entities.calendar_cursor import CalendarCursor
from agenda.domain.entities.professional import Professional
from agenda.domain.entities.selection_state import SelectionState


@dataclass(frozen=True)
class BookingSession:
    session_id: str
    cursor: CalendarCursor
    service_name: str = ""
    professionals: Tuple[Professional, ...] = ()
    selection: SelectionState = SelectionState()
    # Derived from (selection.professional, selection.date); replaced wholesale, never patched
    available_slots: Tuple[str, ...] = ()
    submitting: bool = False
    # Bumped on every committed transition; stores reject writes based on an older version
    version: int = 0
    # Opaque caller identifiers passed through to the booking service
    user_id: int | None = None
    ticket_id: int | None = None
