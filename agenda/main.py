import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from agenda.api.v1.booking import router as booking_router
from agenda.core.config import settings
from agenda.wiring.dependencies import get_booking_service

LOG_CONTEXT_KEYS = (
    "session_id",
    "professional_id",
    "professional_count",
    "date",
    "slot",
    "slot_count",
    "scheduled_date",
    "description",
    "appointment_count",
    "status",
    "env",
    "error",
)


class ContextFormatter(logging.Formatter):
    """Append the booking context passed through `extra=` as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = [
            f"{key}={getattr(record, key)}"
            for key in LOG_CONTEXT_KEYS
            if getattr(record, key, None) not in (None, "")
        ]
        return f"{base} | {' '.join(extras)}" if extras else base


def configure_logging() -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

    root = logging.getLogger()
    root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # the booking service is cached for the process; close its HTTP client on shutdown
    await get_booking_service().aclose()
    get_booking_service.cache_clear()


configure_logging()

app = FastAPI(title="Agenda Booking", version="1.0.0", lifespan=lifespan)

app.include_router(booking_router, prefix="/api/v1", tags=["booking"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
