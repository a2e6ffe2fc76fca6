"""
Tests for MeetingProvisioner's layered fallback behaviour.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from conftest import FakeCalendarProvider
from slotbook.application.exceptions import ProviderApiError, ProviderAuthError
from slotbook.application.policies.fallback import FallbackPolicy
from slotbook.application.use_cases.provision_meeting import MeetingProvisioner, is_recoverable_provider_error
from slotbook.core.config import Settings
from slotbook.domain.entities.booking_request import BookingRequest

LINK_RE = re.compile(r"^https://meet\.google\.com/[a-z0-9]{3}-[a-z0-9]{3}-[a-z0-9]{3}$")


@pytest.fixture
def booking_request() -> BookingRequest:
    tz = ZoneInfo("America/New_York")
    start = datetime(2025, 6, 10, 14, 30, tzinfo=tz)
    return BookingRequest(
        event_type_id="evt_1",
        guest_name="Ada Lovelace",
        guest_email="ada@example.com",
        guest_timezone="America/New_York",
        scheduled_at=start,
        end_time=start + timedelta(minutes=30),
        description="Discuss engines",
    )


@pytest.mark.asyncio
async def test_auth_failure_returns_auth_fallback(booking_request):
    provider = FakeCalendarProvider(auth_error=ProviderAuthError("invalid_grant"))

    result = await MeetingProvisioner(provider).provision(booking_request)

    assert result.success is True
    assert LINK_RE.match(result.meeting_link)
    assert result.meeting_id.startswith("fallback_auth_")
    assert result.is_fallback is True
    assert provider.created == []


@pytest.mark.asyncio
async def test_any_auth_exception_is_absorbed(booking_request):
    provider = FakeCalendarProvider(auth_error=RuntimeError("socket closed"))

    result = await MeetingProvisioner(provider).provision(booking_request)

    assert result.success is True
    assert result.meeting_id.startswith("fallback_auth_")


@pytest.mark.asyncio
async def test_disabled_api_returns_api_fallback(booking_request):
    error = ProviderApiError("Google Calendar API has not been used in project 1 or it is disabled", 403)
    provider = FakeCalendarProvider(create_error=error)

    result = await MeetingProvisioner(provider).provision(booking_request)

    assert result.success is True
    assert result.meeting_id.startswith("fallback_api_")
    assert LINK_RE.match(result.meeting_link)


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [400, 401, 403])
async def test_recoverable_statuses_return_api_fallback(booking_request, status):
    provider = FakeCalendarProvider(create_error=ProviderApiError("Bad things", status))

    result = await MeetingProvisioner(provider).provision(booking_request)

    assert result.meeting_id.startswith("fallback_api_")


@pytest.mark.asyncio
async def test_unexpected_provider_error_returns_system_fallback(booking_request):
    provider = FakeCalendarProvider(create_error=ProviderApiError("Backend Error", 500))

    result = await MeetingProvisioner(provider).provision(booking_request)

    assert result.success is True
    assert result.meeting_id.startswith("fallback_sys_")


@pytest.mark.asyncio
async def test_parse_failure_returns_system_fallback(booking_request):
    provider = FakeCalendarProvider(create_error=ValueError("Expecting value"))

    result = await MeetingProvisioner(provider).provision(booking_request)

    assert result.success is True
    assert result.meeting_id.startswith("fallback_sys_")


def test_disabled_message_is_recoverable_regardless_of_status():
    assert is_recoverable_provider_error(ProviderApiError("API has been disabled", 503)) is True
    assert is_recoverable_provider_error(ProviderApiError("Backend Error", 500)) is False


@pytest.mark.asyncio
async def test_real_event_uses_hangout_link(booking_request):
    provider = FakeCalendarProvider()

    result = await MeetingProvisioner(provider).provision(booking_request, event_name="Intro")

    assert result.success is True
    assert result.meeting_link == "https://meet.google.com/real-link-xyz"
    assert result.meeting_id == "gcal_evt_1"
    assert result.is_fallback is False

    token, event = provider.created[0]
    assert token == "token-123"
    assert event["summary"] == "Intro: Ada Lovelace"
    assert event["attendees"] == [{"email": "ada@example.com"}]
    assert event["start"]["dateTime"] == "2025-06-10T14:30:00-04:00"
    assert event["end"]["dateTime"] == "2025-06-10T15:00:00-04:00"
    assert event["conferenceData"]["createRequest"]["conferenceSolutionKey"] == {"type": "hangoutsMeet"}
    assert "Discuss engines" in event["description"]


@pytest.mark.asyncio
async def test_missing_hangout_link_falls_back_to_html_link(booking_request):
    provider = FakeCalendarProvider(
        event_resource={"id": "gcal_evt_2", "htmlLink": "https://calendar.google.com/event?eid=abc"}
    )

    result = await MeetingProvisioner(provider).provision(booking_request)

    assert result.meeting_link == "https://calendar.google.com/event?eid=abc"


@pytest.mark.asyncio
async def test_strict_policy_surfaces_auth_failure(booking_request):
    provider = FakeCalendarProvider(auth_error=ProviderAuthError("invalid_grant"))

    result = await MeetingProvisioner(provider, policy=FallbackPolicy.strict()).provision(booking_request)

    assert result.success is False
    assert result.meeting_link is None
    assert result.message


@pytest.mark.asyncio
async def test_strict_policy_surfaces_provider_and_system_errors(booking_request):
    strict = FallbackPolicy.strict()

    api_result = await MeetingProvisioner(
        FakeCalendarProvider(create_error=ProviderApiError("API disabled", 403)), policy=strict
    ).provision(booking_request)
    sys_result = await MeetingProvisioner(
        FakeCalendarProvider(create_error=ProviderApiError("Backend Error", 500)), policy=strict
    ).provision(booking_request)

    assert api_result.success is False
    assert api_result.message == "API disabled"
    assert sys_result.success is False
    assert sys_result.message == "Backend Error"


@pytest.mark.asyncio
async def test_policy_flags_are_independent(booking_request):
    policy = FallbackPolicy(on_auth_failure=True, on_provider_error=False, on_unexpected_error=True)

    auth_result = await MeetingProvisioner(
        FakeCalendarProvider(auth_error=ProviderAuthError("x")), policy=policy
    ).provision(booking_request)
    api_result = await MeetingProvisioner(
        FakeCalendarProvider(create_error=ProviderApiError("Unauthorized", 401)), policy=policy
    ).provision(booking_request)

    assert auth_result.success is True
    assert api_result.success is False


def test_policy_from_settings():
    settings = Settings(FALLBACK_ON_AUTH_FAILURE=False)

    policy = FallbackPolicy.from_settings(settings)

    assert policy == FallbackPolicy(on_auth_failure=False, on_provider_error=True, on_unexpected_error=True)
