from __future__ import annotations

from abc import ABC, abstractmethod

from agenda.domain.entities.appointment import CreateAppointmentCommand


class BookingServicePort(ABC):
    @abstractmethod
    async def create_appointment(self, command: CreateAppointmentCommand) -> None:
        """
        Submit an appointment request to the remote booking service.
        Raises BookingSubmissionError when the request is rejected or the service is unreachable.
        """
        raise NotImplementedError

    async def aclose(self) -> None:
        """Release transport resources. Adapters without any keep this no-op."""
        return None
