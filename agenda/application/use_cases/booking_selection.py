from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from datetime import date
from typing import Iterable

from agenda.application.exceptions import (
    CONNECTIVITY_ERROR_MESSAGE,
    BookingSubmissionError,
    ProfessionalNotFoundError,
    SubmissionInProgressError,
)
from agenda.application.ports.booking_service import BookingServicePort
from agenda.application.ports.session_store import SessionStorePort
from agenda.application.utils.availability import DEFAULT_SPACING_MINUTES, compute_slots
from agenda.domain.entities.appointment import CreateAppointmentCommand, to_scheduled_instant
from agenda.domain.entities.booking_session import BookingSession
from agenda.domain.entities.calendar_cursor import CalendarCursor
from agenda.domain.entities.professional import Professional
from agenda.domain.entities.selection_state import SelectionState


@dataclass(frozen=True)
class ConfirmResult:
    status: str  # "unavailable", "in_flight", "submitted", "failed"
    session: BookingSession
    message: str | None = None
    command: CreateAppointmentCommand | None = None

    @property
    def ok(self) -> bool:
        return self.status == "submitted"


def new_session(
    professionals: Iterable[Professional],
    service_name: str = "",
    user_id: int | None = None,
    ticket_id: int | None = None,
    today: date | None = None,
) -> BookingSession:
    """Open a booking session with an empty selection and the cursor on the current month."""
    return BookingSession(
        session_id=uuid.uuid4().hex,
        cursor=CalendarCursor.current(today),
        service_name=service_name,
        professionals=tuple(professionals),
        user_id=user_id,
        ticket_id=ticket_id,
    )


class BookingSelectionController:
    """
    Drive one booking session through professional -> date -> slot -> confirm.

    Every transition replaces the session with an updated copy. Available slots
    are recomputed from (professional, date) whenever either changes.
    """

    def __init__(
        self,
        session: BookingSession,
        booking_service: BookingServicePort,
        store: SessionStorePort | None = None,
        default_spacing: int = DEFAULT_SPACING_MINUTES,
        description_template: str = "Appointment with {name}",
    ) -> None:
        self._session = session
        self._booking_service = booking_service
        self._store = store
        self._default_spacing = default_spacing
        self._description_template = description_template
        self._logger = logging.getLogger(__name__)

    @property
    def session(self) -> BookingSession:
        return self._session

    @property
    def selection(self) -> SelectionState:
        return self._session.selection

    @property
    def available_slots(self) -> tuple[str, ...]:
        return self._session.available_slots

    def select_professional(self, professional: Professional | None) -> BookingSession:
        """Choose a professional; any previously chosen date and slot are dropped."""
        self._ensure_idle()
        if professional is None:
            return self.dismiss()
        self._commit(
            replace(
                self._session,
                selection=SelectionState(professional=professional),
                available_slots=(),
            )
        )
        self._logger.info(
            "Professional selected",
            extra={"session_id": self._session.session_id, "professional_id": professional.id},
        )
        return self._session

    def select_professional_by_id(self, professional_id: int) -> BookingSession:
        for professional in self._session.professionals:
            if professional.id == professional_id:
                return self.select_professional(professional)
        raise ProfessionalNotFoundError(f"Professional {professional_id} is not offered in this session")

    def navigate_month(self, direction: str) -> BookingSession:
        self._ensure_idle()
        cursor = self._session.cursor
        if direction == "previous":
            cursor = cursor.previous()
        elif direction == "next":
            cursor = cursor.next()
        else:
            raise ValueError(f"Unknown direction {direction!r}, expected 'previous' or 'next'")
        self._commit(replace(self._session, cursor=cursor))
        return self._session

    def select_date(self, day: int) -> BookingSession:
        """Pick a day of the cursor month. Raises ValueError if the month has no such day."""
        self._ensure_idle()
        chosen = self._session.cursor.date_for(day)
        selection = self._session.selection
        professional = selection.professional

        slots: tuple[str, ...] = ()
        if professional is not None:
            slots = tuple(compute_slots(professional, chosen, self._default_spacing))

        self._commit(
            replace(
                self._session,
                selection=SelectionState(professional=professional, date=chosen),
                available_slots=slots,
            )
        )
        self._logger.info(
            "Date selected",
            extra={
                "session_id": self._session.session_id,
                "date": chosen.isoformat(),
                "slot_count": len(slots),
            },
        )
        return self._session

    def select_slot(self, slot: str) -> bool:
        """Pick one of the currently offered slots. Returns False for a slot that is not on offer."""
        self._ensure_idle()
        if slot not in self._session.available_slots:
            self._logger.warning(
                "Rejected slot not on offer",
                extra={"session_id": self._session.session_id, "slot": slot},
            )
            return False
        self._commit(
            replace(self._session, selection=replace(self._session.selection, slot=slot))
        )
        return True

    def can_confirm(self) -> bool:
        return self._session.selection.is_complete and not self._session.submitting

    def build_command(self) -> CreateAppointmentCommand:
        selection = self._session.selection
        if not selection.is_complete:
            raise ValueError("Professional, date and slot must all be selected")
        return CreateAppointmentCommand(
            scheduled_date=to_scheduled_instant(selection.date, selection.slot),
            description=self._description_template.format(name=selection.professional.name),
            user_id=self._session.user_id,
            ticket_id=self._session.ticket_id,
        )

    async def confirm(self) -> ConfirmResult:
        if self._session.submitting:
            return ConfirmResult(status="in_flight", session=self._session)
        if not self.can_confirm():
            return ConfirmResult(status="unavailable", session=self._session)

        command = self.build_command()
        try:
            self._commit(replace(self._session, submitting=True))
        except SubmissionInProgressError:
            # another controller on the same stored session got there first
            return ConfirmResult(status="in_flight", session=self._session)
        self._logger.info(
            "Submitting appointment",
            extra={"session_id": self._session.session_id, "scheduled_date": command.scheduled_date},
        )

        try:
            await self._booking_service.create_appointment(command)
        except BookingSubmissionError as e:
            self._commit(replace(self._session, submitting=False))
            self._logger.warning(
                "Appointment submission failed",
                extra={"session_id": self._session.session_id, "error": e.message},
            )
            return ConfirmResult(
                status="failed",
                session=self._session,
                message=e.message or CONNECTIVITY_ERROR_MESSAGE,
                command=command,
            )
        except BaseException:
            self._commit(replace(self._session, submitting=False))
            raise

        self._commit(
            replace(self._session, selection=SelectionState(), available_slots=(), submitting=False)
        )
        self._logger.info("Appointment created", extra={"session_id": self._session.session_id})
        return ConfirmResult(status="submitted", session=self._session, command=command)

    def cancel(self) -> BookingSession:
        return self.dismiss()

    def dismiss(self) -> BookingSession:
        """Drop the whole selection. The calendar cursor stays where it is."""
        self._ensure_idle()
        self._commit(replace(self._session, selection=SelectionState(), available_slots=()))
        return self._session

    def _ensure_idle(self) -> None:
        if self._session.submitting:
            raise SubmissionInProgressError(
                f"Session {self._session.session_id} has an appointment submission in flight"
            )

    def _commit(self, session: BookingSession) -> None:
        """Write the next version. Nothing changes locally if the store rejects it."""
        session = replace(session, version=self._session.version + 1)
        if self._store is not None:
            self._store.put(session)
        self._session = session
