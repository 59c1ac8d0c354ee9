from __future__ import annotations

import logging

from agenda.application.exceptions import BookingSubmissionError
from agenda.application.ports.booking_service import BookingServicePort
from agenda.domain.entities.appointment import CreateAppointmentCommand


class MockBookingService(BookingServicePort):
    def __init__(self, fail_with: str | None = None) -> None:
        self._appointments: list[CreateAppointmentCommand] = []
        self._fail_with = fail_with
        self._logger = logging.getLogger(__name__)

    @property
    def appointments(self) -> list[CreateAppointmentCommand]:
        return list(self._appointments)

    def fail_next(self, message: str | None) -> None:
        """Make subsequent submissions fail with message; None restores success."""
        self._fail_with = message

    async def create_appointment(self, command: CreateAppointmentCommand) -> None:
        if self._fail_with is not None:
            raise BookingSubmissionError(self._fail_with)
        self._appointments.append(command)
        self._logger.info(
            "Mock appointment created",
            extra={
                "scheduled_date": command.scheduled_date,
                "description": command.description,
                "appointment_count": len(self._appointments),
            },
        )
