from __future__ import annotations

from abc import ABC, abstractmethod

from agenda.domain.entities.booking_session import BookingSession


class SessionStorePort(ABC):
    @abstractmethod
    def create(self, session: BookingSession) -> None:
        raise NotImplementedError

    @abstractmethod
    def get(self, session_id: str) -> BookingSession:
        """Raises SessionNotFoundError for unknown ids."""
        raise NotImplementedError

    @abstractmethod
    def put(self, session: BookingSession) -> None:
        """
        Store the next version of a session.
        Raises SubmissionInProgressError if the stored session is submitting and the write
        is not based on it, StaleSessionError for any other write based on an older version.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, session_id: str) -> None:
        """Close a session. Raises SubmissionInProgressError while a submission is pending."""
        raise NotImplementedError
