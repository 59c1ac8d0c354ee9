from __future__ import annotations

import threading

from agenda.application.exceptions import (
    SessionNotFoundError,
    StaleSessionError,
    SubmissionInProgressError,
)
from agenda.application.ports.session_store import SessionStorePort
from agenda.domain.entities.booking_session import BookingSession


class MemorySessionStore(SessionStorePort):
    def __init__(self) -> None:
        self._sessions: dict[str, BookingSession] = {}
        self._lock = threading.Lock()

    def create(self, session: BookingSession) -> None:
        with self._lock:
            self._sessions[session.session_id] = session

    def get(self, session_id: str) -> BookingSession:
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(f"Unknown booking session {session_id}")
        return session

    def put(self, session: BookingSession) -> None:
        """
        Replace the stored session with the next version.
        The write must be based on the stored version (session.version == stored.version + 1).
        """
        with self._lock:
            stored = self._sessions.get(session.session_id)
            if stored is None:
                raise SessionNotFoundError(f"Unknown booking session {session.session_id}")
            if session.version != stored.version + 1:
                if stored.submitting:
                    raise SubmissionInProgressError(
                        f"Session {session.session_id} has an appointment submission in flight"
                    )
                raise StaleSessionError(
                    f"Session {session.session_id} changed since it was read "
                    f"(stored version {stored.version}, write based on {session.version - 1})"
                )
            self._sessions[session.session_id] = session

    def delete(self, session_id: str) -> None:
        with self._lock:
            stored = self._sessions.get(session_id)
            if stored is None:
                raise SessionNotFoundError(f"Unknown booking session {session_id}")
            if stored.submitting:
                raise SubmissionInProgressError(f"Session {session_id} has an appointment submission in flight")
            del self._sessions[session_id]
