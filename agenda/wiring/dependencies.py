from functools import lru_cache
import logging

from agenda.core.config import settings
from agenda.application.ports.booking_service import BookingServicePort
from agenda.application.ports.session_store import SessionStorePort
from agenda.application.use_cases.booking_selection import BookingSelectionController
from agenda.infrastructure.booking.bypass_client import BypassBookingService
from agenda.infrastructure.booking.mock_booking import MockBookingService
from agenda.infrastructure.store.memory_store import MemorySessionStore


@lru_cache
def get_session_store() -> SessionStorePort:
    return MemorySessionStore()


@lru_cache
def get_booking_service() -> BookingServicePort:
    logger = logging.getLogger(__name__)
    if settings.BOOKING_PROVIDER.lower() != "http" or not settings.BOOKING_BYPASS_URL:
        if settings.ENV.lower() not in {"dev", "local"}:
            logger.warning("Booking HTTP endpoint not configured, appointments go to the mock service")
        else:
            logger.info("Using MockBookingService", extra={"env": settings.ENV})
        return MockBookingService()
    logger.info("Using BypassBookingService")
    return BypassBookingService()


def get_controller_factory():
    store = get_session_store()
    booking_service = get_booking_service()

    def build(session_id: str) -> BookingSelectionController:
        return BookingSelectionController(
            session=store.get(session_id),
            booking_service=booking_service,
            store=store,
            default_spacing=settings.DEFAULT_APPOINTMENT_SPACING,
            description_template=settings.DESCRIPTION_TEMPLATE,
        )

    return build
