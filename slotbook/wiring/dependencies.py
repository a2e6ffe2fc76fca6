from functools import lru_cache
import logging

from slotbook.core.config import settings
from slotbook.application.policies.fallback import FallbackPolicy
from slotbook.application.ports.booking_api import BookingApiPort
from slotbook.application.ports.booking_store import BookingStorePort
from slotbook.application.ports.calendar_provider import CalendarProviderPort
from slotbook.application.use_cases.booking_workflow import BookingWorkflow
from slotbook.application.use_cases.create_booking import CreateBookingUseCase
from slotbook.application.use_cases.provision_meeting import MeetingProvisioner
from slotbook.domain.entities.event_type import EventType
from slotbook.infrastructure.calendar.google_calendar_provider import (
    GoogleCalendarProvider,
    load_service_account_info,
)
from slotbook.infrastructure.booking_api.http_booking_api import HttpBookingApi
from slotbook.infrastructure.calendar.mock_provider import MockCalendarProvider
from slotbook.infrastructure.store.memory_store import MemoryBookingStore


_booking_store: MemoryBookingStore | None = None


def _default_event_type() -> EventType:
    return EventType(
        id=settings.DEFAULT_EVENT_ID,
        name=settings.DEFAULT_EVENT_NAME,
        description=settings.DEFAULT_EVENT_DESCRIPTION,
        duration_minutes=settings.DEFAULT_EVENT_DURATION_MINUTES,
        slug=settings.DEFAULT_EVENT_SLUG,
    )


def get_booking_store() -> BookingStorePort:
    global _booking_store
    if _booking_store is None:
        _booking_store = MemoryBookingStore(event_types=[_default_event_type()])
    return _booking_store


@lru_cache
def get_calendar_provider() -> CalendarProviderPort:
    logger = logging.getLogger(__name__)
    has_credentials = bool(settings.GOOGLE_SERVICE_ACCOUNT_JSON or settings.GOOGLE_SERVICE_ACCOUNT_FILE)
    logger.info("Google service account configured=%s ENV=%s", has_credentials, settings.ENV)

    if not has_credentials and settings.ENV.lower() in {"dev", "local"}:
        logger.info("Using MockCalendarProvider (credentials missing, ENV=dev/local)")
        return MockCalendarProvider(provider_domain=settings.MEET_PROVIDER_DOMAIN)

    try:
        info = load_service_account_info(
            settings.GOOGLE_SERVICE_ACCOUNT_JSON,
            settings.GOOGLE_SERVICE_ACCOUNT_FILE,
        )
    except (OSError, ValueError) as e:
        # an unreadable key is an auth failure; the provisioner's policy decides what the guest sees
        logger.error("Service account key could not be loaded", extra={"error": str(e)})
        info = None
    return GoogleCalendarProvider(service_account_info=info)


def get_fallback_policy() -> FallbackPolicy:
    return FallbackPolicy.from_settings(settings)


def get_meeting_provisioner() -> MeetingProvisioner:
    return MeetingProvisioner(
        provider=get_calendar_provider(),
        policy=get_fallback_policy(),
        provider_domain=settings.MEET_PROVIDER_DOMAIN,
        app_name=settings.APP_NAME,
    )


def get_create_booking_use_case() -> CreateBookingUseCase:
    return CreateBookingUseCase(store=get_booking_store(), provisioner=get_meeting_provisioner())


def get_booking_api() -> HttpBookingApi:
    return HttpBookingApi(base_url=settings.BOOKING_API_BASE_URL)


def get_booking_workflow(slug: str, api: BookingApiPort) -> BookingWorkflow:
    """Guest-side workflow; the caller owns and closes ``api``."""
    return BookingWorkflow(
        slug=slug,
        api=api,
        start_hour=settings.SLOT_START_HOUR,
        end_hour=settings.SLOT_END_HOUR,
        step_minutes=settings.SLOT_STEP_MINUTES,
    )
