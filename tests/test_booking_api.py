"""
Tests for the booking HTTP API.
"""

from __future__ import annotations

import logging

from fastapi.testclient import TestClient

from agenda.infrastructure.booking.mock_booking import MockBookingService
from agenda.main import ContextFormatter, app
from agenda.wiring.dependencies import get_booking_service

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

PROFESSIONALS = [
    {
        "id": 10,
        "name": "Ana Souza",
        "profession": "Dentist",
        "appointmentSpacing": "30",
        # open every day so any day of the current month has slots
        "schedules": [
            {"startTime": "09:00", "endTime": "10:00", "weekday": day.title(), "weekdayEn": day}
            for day in WEEKDAYS
        ],
    },
    {
        "id": 11,
        "name": "Bruno Lima",
        "profession": "Physiotherapist",
        "appointmentSpacing": "abc",
        "schedules": [],
    },
]

client = TestClient(app)


def _open_session() -> dict:
    response = client.post(
        "/api/v1/sessions",
        json={"professionals": PROFESSIONALS, "serviceName": "Dental cleaning"},
    )
    assert response.status_code == 201
    return response.json()


def _booking_service() -> MockBookingService:
    booking = get_booking_service()
    assert isinstance(booking, MockBookingService)
    return booking


def test_health():
    """Test that the health check answers ok."""
    assert client.get("/health").json() == {"status": "ok"}


def test_create_session_returns_empty_selection():
    """Test that a new session lists the professionals with nothing selected."""
    session = _open_session()
    assert session["service_name"] == "Dental cleaning"
    assert [p["id"] for p in session["professionals"]] == [10, 11]
    assert session["selection"]["status"] == "empty"
    assert session["available_slots"] == []
    assert session["can_confirm"] is False


def test_unknown_session_is_404():
    """Test that an unknown session id is not found."""
    assert client.get("/api/v1/sessions/missing").status_code == 404


def test_full_booking_flow():
    """Test a booking from professional to confirmation over HTTP."""
    booking = _booking_service()
    booking.fail_next(None)
    session_id = _open_session()["session_id"]
    base = f"/api/v1/sessions/{session_id}"

    response = client.post(f"{base}/professional", json={"professional_id": 10})
    assert response.json()["selection"]["status"] == "professional_chosen"

    response = client.post(f"{base}/date", json={"day": 1})
    body = response.json()
    assert body["selection"]["status"] == "date_chosen"
    assert body["available_slots"] == ["09:00", "09:30"]

    response = client.post(f"{base}/slot", json={"slot": "09:30"})
    assert response.json()["can_confirm"] is True
    selected_date = response.json()["selection"]["date"]

    calendar = client.get(f"{base}/calendar").json()
    assert calendar["selected_day"] == 1
    assert sum(1 for week in calendar["weeks"] for d in week if d) == calendar["days_in_month"]

    before = len(booking.appointments)
    response = client.post(f"{base}/confirm")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "submitted"
    assert body["scheduled_date"] == f"{selected_date}T09:30:00.000Z"
    assert body["session"]["selection"]["status"] == "empty"

    appointments = booking.appointments
    assert len(appointments) == before + 1
    assert appointments[-1].description == "Appointment with Ana Souza"
    assert appointments[-1].user_id == 3
    assert appointments[-1].ticket_id == 12


def test_confirm_failure_keeps_selection():
    """Test that a rejected booking returns 502 and keeps the selection."""
    booking = _booking_service()
    session_id = _open_session()["session_id"]
    base = f"/api/v1/sessions/{session_id}"
    client.post(f"{base}/professional", json={"professional_id": 10})
    client.post(f"{base}/date", json={"day": 2})
    client.post(f"{base}/slot", json={"slot": "09:00"})

    booking.fail_next("Horário indisponível")
    try:
        response = client.post(f"{base}/confirm")
    finally:
        booking.fail_next(None)

    assert response.status_code == 502
    assert response.json()["detail"] == "Horário indisponível"
    session = client.get(base).json()
    assert session["selection"]["status"] == "slot_chosen"
    assert session["selection"]["slot"] == "09:00"
    assert session["submitting"] is False


def test_confirm_incomplete_selection_is_409():
    """Test that confirming without a date and slot is refused."""
    session_id = _open_session()["session_id"]
    base = f"/api/v1/sessions/{session_id}"
    client.post(f"{base}/professional", json={"professional_id": 10})
    assert client.post(f"{base}/confirm").status_code == 409


def test_stale_slot_is_409():
    """Test that a slot not on offer is refused."""
    session_id = _open_session()["session_id"]
    base = f"/api/v1/sessions/{session_id}"
    client.post(f"{base}/professional", json={"professional_id": 11})
    client.post(f"{base}/date", json={"day": 1})
    response = client.post(f"{base}/slot", json={"slot": "09:00"})
    assert response.status_code == 409


def test_invalid_day_and_unknown_professional():
    """Test that bad days and unknown professionals map to 422, 400 and 404."""
    session_id = _open_session()["session_id"]
    base = f"/api/v1/sessions/{session_id}"
    assert client.post(f"{base}/professional", json={"professional_id": 999}).status_code == 404
    assert client.post(f"{base}/date", json={"day": 0}).status_code == 422

    # step to February of some year so the 31st does not exist
    session = client.get(base).json()
    steps = (1 - session["cursor"]["month"]) % 12
    for _ in range(steps):
        client.post(f"{base}/navigate", json={"direction": "next"})
    assert client.get(base).json()["cursor"]["month"] == 1
    assert client.post(f"{base}/date", json={"day": 31}).status_code == 400


def test_navigation_and_cancel():
    """Test that cancelling keeps the navigated month and clears the selection."""
    session_id = _open_session()["session_id"]
    base = f"/api/v1/sessions/{session_id}"
    start = client.get(base).json()["cursor"]

    client.post(f"{base}/professional", json={"professional_id": 10})
    moved = client.post(f"{base}/navigate", json={"direction": "previous"}).json()["cursor"]
    assert (moved["month"] - start["month"]) % 12 == 11

    response = client.post(f"{base}/cancel")
    assert response.json()["selection"]["status"] == "empty"
    assert response.json()["cursor"] == moved

    assert client.post(f"{base}/navigate", json={"direction": "sideways"}).status_code == 422


def test_deselect_professional_dismisses():
    """Test that posting no professional empties the selection."""
    session_id = _open_session()["session_id"]
    base = f"/api/v1/sessions/{session_id}"
    client.post(f"{base}/professional", json={"professional_id": 10})
    response = client.post(f"{base}/professional", json={"professional_id": None})
    assert response.json()["selection"]["status"] == "empty"


def test_close_session():
    """Test that a closed session is gone and cannot be closed twice."""
    session_id = _open_session()["session_id"]
    base = f"/api/v1/sessions/{session_id}"

    assert client.delete(base).status_code == 204
    assert client.get(base).status_code == 404
    assert client.delete(base).status_code == 404


def test_shutdown_closes_booking_service(monkeypatch):
    """Test that application shutdown closes the cached booking service."""
    booking = _booking_service()
    closed = []

    async def aclose() -> None:
        closed.append(True)

    monkeypatch.setattr(booking, "aclose", aclose)

    with TestClient(app) as lifespan_client:
        assert lifespan_client.get("/health").status_code == 200

    assert closed == [True]
    assert get_booking_service() is not booking


def test_log_formatter_appends_booking_context():
    """Test that booking fields passed through extra are appended to the log line."""
    record = logging.LogRecord("agenda", logging.INFO, __file__, 1, "Submitting appointment", None, None)
    record.session_id = "abc"
    record.scheduled_date = "2024-01-22T09:30:00.000Z"
    record.appointment_count = 2
    record.professional_count = 0

    line = ContextFormatter("%(levelname)s:%(name)s:%(message)s").format(record)

    assert line == (
        "INFO:agenda:Submitting appointment | session_id=abc professional_count=0 "
        "scheduled_date=2024-01-22T09:30:00.000Z appointment_count=2"
    )
