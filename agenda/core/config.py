from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    BOOKING_PROVIDER: str = "mock"  # "mock" | "http"
    BOOKING_BYPASS_URL: str | None = None
    BOOKING_APPOINTMENTS_URL: str = "https://api.tzsexpertacademy.com/appointments"
    BOOKING_TIMEOUT_SECONDS: float = 10.0

    # Opaque caller identifiers forwarded with every appointment
    BOOKING_USER_ID: int = 3
    BOOKING_TICKET_ID: int = 12

    DEFAULT_APPOINTMENT_SPACING: int = 30
    DESCRIPTION_TEMPLATE: str = "Appointment with {name}"


settings = Settings()
