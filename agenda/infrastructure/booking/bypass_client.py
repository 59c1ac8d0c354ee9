from __future__ import annotations

import json
import logging

import httpx

from agenda.application.exceptions import CONNECTIVITY_ERROR_MESSAGE, BookingSubmissionError
from agenda.application.ports.booking_service import BookingServicePort
from agenda.core.config import settings
from agenda.domain.entities.appointment import CreateAppointmentCommand


class BypassBookingService(BookingServicePort):
    """
    Create appointments through the bypass proxy, which forwards
    {"url", "method", "body"} envelopes to the appointments API.
    """

    def __init__(
        self,
        bypass_url: str | None = None,
        appointments_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._bypass_url = bypass_url or settings.BOOKING_BYPASS_URL
        self._appointments_url = appointments_url or settings.BOOKING_APPOINTMENTS_URL
        if not self._bypass_url:
            raise ValueError("BOOKING_BYPASS_URL is required for the HTTP booking service")

        self._client = client or httpx.AsyncClient(timeout=timeout or settings.BOOKING_TIMEOUT_SECONDS)
        self._logger = logging.getLogger(__name__)

    async def create_appointment(self, command: CreateAppointmentCommand) -> None:
        envelope = {
            "url": self._appointments_url,
            "method": "POST",
            "body": command.to_payload(),
        }
        try:
            response = await self._client.post(self._bypass_url, json=envelope)
        except httpx.HTTPError as e:
            self._logger.error("Booking service unreachable", extra={"error": str(e)})
            raise BookingSubmissionError(CONNECTIVITY_ERROR_MESSAGE) from e

        if response.status_code >= 400:
            message = _error_message(response)
            self._logger.error(
                "Booking service rejected appointment",
                extra={"status": response.status_code, "error": message},
            )
            raise BookingSubmissionError(message, status_code=response.status_code)

        self._logger.info(
            "Appointment request accepted",
            extra={"status": response.status_code, "scheduled_date": command.scheduled_date},
        )

    async def aclose(self) -> None:
        if not self._client.is_closed:
            await self._client.aclose()
        self._logger.info("Booking HTTP client closed")


def _error_message(response: httpx.Response) -> str:
    """The body's "message" field, or the whole body serialized when there is none."""
    try:
        data = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"

    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return json.dumps(data)
