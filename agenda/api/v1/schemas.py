from enum import Enum
from pydantic import BaseModel, Field

from agenda.domain.entities.booking_session import BookingSession
from agenda.domain.entities.professional import Professional


class Direction(str, Enum):
    previous = "previous"
    next = "next"


class WeeklyScheduleSchema(BaseModel):
    startTime: str
    endTime: str
    weekday: str = ""
    weekdayEn: str = ""
    weekdayKey: str | None = None  # alias of weekdayEn


class ProfessionalSchema(BaseModel):
    id: int
    name: str
    profession: str = ""
    appointmentSpacing: str | int | None = None
    schedules: list[WeeklyScheduleSchema] = Field(default_factory=list)

    def to_entity(self) -> Professional:
        return Professional.from_payload(self.model_dump(mode="json"))

    @staticmethod
    def from_entity(professional: Professional) -> "ProfessionalSchema":
        return ProfessionalSchema(
            id=professional.id,
            name=professional.name,
            profession=professional.profession,
            appointmentSpacing=professional.appointment_spacing,
            schedules=[
                WeeklyScheduleSchema(
                    startTime=s.start_time,
                    endTime=s.end_time,
                    weekday=s.weekday,
                    weekdayEn=s.weekday_key,
                )
                for s in professional.schedules
            ],
        )


class CreateSessionRequestSchema(BaseModel):
    professionals: list[ProfessionalSchema] = Field(default_factory=list)
    serviceName: str = ""
    userId: int | None = None
    ticketId: int | None = None


class SelectProfessionalRequestSchema(BaseModel):
    professional_id: int | None = None  # None dismisses the dialog


class NavigateRequestSchema(BaseModel):
    direction: Direction


class SelectDateRequestSchema(BaseModel):
    day: int = Field(ge=1, le=31)


class SelectSlotRequestSchema(BaseModel):
    slot: str


class CalendarCursorSchema(BaseModel):
    month: int
    year: int


class SelectionSchema(BaseModel):
    status: str
    professional_id: int | None = None
    date: str | None = None
    slot: str | None = None


class SessionResponseSchema(BaseModel):
    session_id: str
    service_name: str
    professionals: list[ProfessionalSchema]
    cursor: CalendarCursorSchema
    selection: SelectionSchema
    available_slots: list[str]
    can_confirm: bool
    submitting: bool

    @staticmethod
    def from_session(session: BookingSession) -> "SessionResponseSchema":
        selection = session.selection
        return SessionResponseSchema(
            session_id=session.session_id,
            service_name=session.service_name,
            professionals=[ProfessionalSchema.from_entity(p) for p in session.professionals],
            cursor=CalendarCursorSchema(month=session.cursor.month, year=session.cursor.year),
            selection=SelectionSchema(
                status=selection.status.value,
                professional_id=selection.professional.id if selection.professional else None,
                date=selection.date.isoformat() if selection.date else None,
                slot=selection.slot,
            ),
            available_slots=list(session.available_slots),
            can_confirm=selection.is_complete and not session.submitting,
            submitting=session.submitting,
        )


class CalendarResponseSchema(BaseModel):
    month: int
    year: int
    days_in_month: int
    weeks: list[list[int | None]]
    selected_day: int | None = None


class ConfirmResponseSchema(BaseModel):
    status: str
    message: str | None = None
    scheduled_date: str | None = None
    session: SessionResponseSchema
