from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "Slotbook"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    BOOKING_API_BASE_URL: str = "http://127.0.0.1:8000/api"
    BOOKING_API_TIMEOUT_SECONDS: float = 10.0

    DEFAULT_TIMEZONE: str = "UTC"
    SLOT_START_HOUR: int = 9
    SLOT_END_HOUR: int = 17
    SLOT_STEP_MINUTES: int = 30

    MEET_PROVIDER_DOMAIN: str = "google.com"

    GOOGLE_SERVICE_ACCOUNT_JSON: str | None = None
    GOOGLE_SERVICE_ACCOUNT_FILE: str | None = None
    GOOGLE_CALENDAR_ID: str = "primary"
    GOOGLE_TOKEN_URI: str = "https://oauth2.googleapis.com/token"
    GOOGLE_CALENDAR_API_BASE: str = "https://www.googleapis.com/calendar/v3"
    GOOGLE_API_TIMEOUT_SECONDS: float = 10.0

    FALLBACK_ON_AUTH_FAILURE: bool = True
    FALLBACK_ON_PROVIDER_ERROR: bool = True
    FALLBACK_ON_UNEXPECTED_ERROR: bool = True

    DEFAULT_EVENT_ID: str = "evt_consultation"
    DEFAULT_EVENT_SLUG: str = "consultation"
    DEFAULT_EVENT_NAME: str = "Consultation"
    DEFAULT_EVENT_DESCRIPTION: str = (
        "Book a consultation slot. A Google Meet link will be generated automatically."
    )
    DEFAULT_EVENT_DURATION_MINUTES: int = 30


settings = Settings()
