from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class CalendarCursor:
    month: int  # 0-11
    year: int

    def __post_init__(self) -> None:
        if not 0 <= self.month <= 11:
            raise ValueError(f"month must be between 0 and 11, got {self.month}")

    @staticmethod
    def current(today: date | None = None) -> "CalendarCursor":
        today = today or date.today()
        return CalendarCursor(month=today.month - 1, year=today.year)

    def previous(self) -> "CalendarCursor":
        if self.month == 0:
            return CalendarCursor(month=11, year=self.year - 1)
        return CalendarCursor(month=self.month - 1, year=self.year)

    def next(self) -> "CalendarCursor":
        if self.month == 11:
            return CalendarCursor(month=0, year=self.year + 1)
        return CalendarCursor(month=self.month + 1, year=self.year)

    def days_in_month(self) -> int:
        return calendar.monthrange(self.year, self.month + 1)[1]

    def first_weekday_offset(self) -> int:
        """Leading blank cells before day 1 in a Sunday-first week grid."""
        # date.weekday() is Monday=0, shift so Sunday=0
        return (date(self.year, self.month + 1, 1).weekday() + 1) % 7

    def date_for(self, day: int) -> date:
        if not 1 <= day <= self.days_in_month():
            raise ValueError(
                f"day {day} is outside {self.year}-{self.month + 1:02d} (1-{self.days_in_month()})"
            )
        return date(self.year, self.month + 1, day)

    def month_grid(self) -> list[list[int | None]]:
        """
        Sunday-first weeks for the cursor month.
        Cells outside the month are None; the last week is padded to seven cells.
        """
        cells: list[int | None] = [None] * self.first_weekday_offset()
        cells.extend(range(1, self.days_in_month() + 1))
        while len(cells) % 7:
            cells.append(None)
        return [cells[i : i + 7] for i in range(0, len(cells), 7)]
