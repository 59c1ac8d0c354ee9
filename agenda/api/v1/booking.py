import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from agenda.api.v1.schemas import (
    CalendarResponseSchema, ConfirmResponseSchema, CreateSessionRequestSchema,
    NavigateRequestSchema, SelectDateRequestSchema, SelectProfessionalRequestSchema,
    SelectSlotRequestSchema, SessionResponseSchema,
)
from agenda.application.exceptions import (
    ProfessionalNotFoundError, SessionNotFoundError, StaleSessionError, SubmissionInProgressError,
)
from agenda.application.ports.session_store import SessionStorePort
from agenda.application.use_cases.booking_selection import BookingSelectionController, new_session
from agenda.core.config import settings
from agenda.wiring.dependencies import get_controller_factory, get_session_store

router = APIRouter()
logger = logging.getLogger(__name__)


def _controller(session_id: str, factory) -> BookingSelectionController:
    try:
        return factory(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/sessions", response_model=SessionResponseSchema, status_code=201)
def create_session(
    req: CreateSessionRequestSchema,
    store: SessionStorePort = Depends(get_session_store),
):
    session = new_session(
        professionals=[p.to_entity() for p in req.professionals],
        service_name=req.serviceName,
        user_id=req.userId if req.userId is not None else settings.BOOKING_USER_ID,
        ticket_id=req.ticketId if req.ticketId is not None else settings.BOOKING_TICKET_ID,
    )
    store.create(session)
    logger.info(
        "Booking session opened",
        extra={"session_id": session.session_id, "professional_count": len(session.professionals)},
    )
    return SessionResponseSchema.from_session(session)


@router.get("/sessions/{session_id}", response_model=SessionResponseSchema)
def get_session(session_id: str, factory=Depends(get_controller_factory)):
    return SessionResponseSchema.from_session(_controller(session_id, factory).session)


@router.get("/sessions/{session_id}/calendar", response_model=CalendarResponseSchema)
def get_calendar(session_id: str, factory=Depends(get_controller_factory)):
    session = _controller(session_id, factory).session
    cursor = session.cursor
    selected = session.selection.date
    selected_day = (
        selected.day
        if selected and selected.year == cursor.year and selected.month == cursor.month + 1
        else None
    )
    return CalendarResponseSchema(
        month=cursor.month,
        year=cursor.year,
        days_in_month=cursor.days_in_month(),
        weeks=cursor.month_grid(),
        selected_day=selected_day,
    )


@router.post("/sessions/{session_id}/professional", response_model=SessionResponseSchema)
def select_professional(
    session_id: str,
    req: SelectProfessionalRequestSchema,
    factory=Depends(get_controller_factory),
):
    controller = _controller(session_id, factory)
    try:
        if req.professional_id is None:
            session = controller.dismiss()
        else:
            session = controller.select_professional_by_id(req.professional_id)
    except ProfessionalNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (SubmissionInProgressError, StaleSessionError) as e:
        raise HTTPException(status_code=409, detail=str(e))
    return SessionResponseSchema.from_session(session)


@router.post("/sessions/{session_id}/navigate", response_model=SessionResponseSchema)
def navigate_month(
    session_id: str,
    req: NavigateRequestSchema,
    factory=Depends(get_controller_factory),
):
    controller = _controller(session_id, factory)
    try:
        session = controller.navigate_month(req.direction.value)
    except (SubmissionInProgressError, StaleSessionError) as e:
        raise HTTPException(status_code=409, detail=str(e))
    return SessionResponseSchema.from_session(session)


@router.post("/sessions/{session_id}/date", response_model=SessionResponseSchema)
def select_date(
    session_id: str,
    req: SelectDateRequestSchema,
    factory=Depends(get_controller_factory),
):
    controller = _controller(session_id, factory)
    try:
        session = controller.select_date(req.day)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (SubmissionInProgressError, StaleSessionError) as e:
        raise HTTPException(status_code=409, detail=str(e))
    return SessionResponseSchema.from_session(session)


@router.post("/sessions/{session_id}/slot", response_model=SessionResponseSchema)
def select_slot(
    session_id: str,
    req: SelectSlotRequestSchema,
    factory=Depends(get_controller_factory),
):
    controller = _controller(session_id, factory)
    try:
        accepted = controller.select_slot(req.slot)
    except (SubmissionInProgressError, StaleSessionError) as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not accepted:
        raise HTTPException(status_code=409, detail=f"Slot {req.slot} is not available")
    return SessionResponseSchema.from_session(controller.session)


@router.post("/sessions/{session_id}/confirm", response_model=ConfirmResponseSchema)
async def confirm(session_id: str, factory=Depends(get_controller_factory)):
    controller = _controller(session_id, factory)
    try:
        result = await controller.confirm()
    except StaleSessionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if result.status in {"unavailable", "in_flight"}:
        detail = (
            "Select a professional, a date and a time slot first"
            if result.status == "unavailable"
            else "An appointment submission is already in progress"
        )
        raise HTTPException(status_code=409, detail=detail)
    if result.status == "failed":
        raise HTTPException(status_code=502, detail=result.message)

    return ConfirmResponseSchema(
        status=result.status,
        message=result.message,
        scheduled_date=result.command.scheduled_date if result.command else None,
        session=SessionResponseSchema.from_session(result.session),
    )


@router.post("/sessions/{session_id}/cancel", response_model=SessionResponseSchema)
def cancel(session_id: str, factory=Depends(get_controller_factory)):
    controller = _controller(session_id, factory)
    try:
        session = controller.cancel()
    except (SubmissionInProgressError, StaleSessionError) as e:
        raise HTTPException(status_code=409, detail=str(e))
    return SessionResponseSchema.from_session(session)


@router.delete("/sessions/{session_id}", status_code=204)
def close_session(session_id: str, store: SessionStorePort = Depends(get_session_store)):
    try:
        store.delete(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SubmissionInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    logger.info("Booking session closed", extra={"session_id": session_id})
    return Response(status_code=204)
