CONNECTIVITY_ERROR_MESSAGE = "Failed to create the appointment. Check your connection."


class BookingSubmissionError(RuntimeError):
    """Raised when the booking service rejects an appointment or cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SubmissionInProgressError(RuntimeError):
    """Raised when a session is modified while its confirmation is still pending."""
    pass


class StaleSessionError(RuntimeError):
    """Raised when a write is based on a session version that another write has replaced."""
    pass


class SessionNotFoundError(LookupError):
    pass


class ProfessionalNotFoundError(LookupError):
    pass
