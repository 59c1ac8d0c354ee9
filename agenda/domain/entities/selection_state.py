from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from agenda.domain.entities.professional import Professional


class SelectionStatus(str, Enum):
    empty = "empty"
    professional_chosen = "professional_chosen"
    date_chosen = "date_chosen"
    slot_chosen = "slot_chosen"


@dataclass(frozen=True)
class SelectionState:
    professional: Professional | None = None
    date: date | None = None
    slot: str | None = None  # HH:MM, always a member of the session's available slots

    @property
    def status(self) -> SelectionStatus:
        if self.professional is None:
            return SelectionStatus.empty
        if self.date is None:
            return SelectionStatus.professional_chosen
        if self.slot is None:
            return SelectionStatus.date_chosen
        return SelectionStatus.slot_chosen

    @property
    def is_complete(self) -> bool:
        return self.professional is not None and self.date is not None and self.slot is not None
