"""
Tests for placeholder links, slug normalization and guest detail validation.
"""

from __future__ import annotations

import re

import pytest

from slotbook.application.exceptions import GuestDetailsError
from slotbook.application.utils.guest_details import is_valid_email, validate_guest_details
from slotbook.application.utils.meet_links import fallback_meeting_id, generate_placeholder_link
from slotbook.application.utils.slugs import normalize_slug
from slotbook.domain.entities.selection import GuestDetails

LINK_RE = re.compile(r"^https://meet\.google\.com/[a-z0-9]{3}-[a-z0-9]{3}-[a-z0-9]{3}$")


def test_placeholder_link_shape():
    for _ in range(20):
        assert LINK_RE.match(generate_placeholder_link())


def test_placeholder_link_uses_provider_domain():
    assert generate_placeholder_link("example.org").startswith("https://meet.example.org/")


def test_fallback_meeting_id_is_tagged():
    meeting_id = fallback_meeting_id("auth")
    assert meeting_id.startswith("fallback_auth_")
    assert meeting_id.rsplit("_", 1)[1].isdigit()


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("agentic-ai-amro-4b0dab37", "agentic-ai-amro"),
        ("consultation", "consultation"),
        ("/embed/consultation-0123abcd/", "consultation"),
        ("meeting-tomorrow", "meeting-tomorrow"),
        ("  ", ""),
    ],
)
def test_normalize_slug(raw, expected):
    assert normalize_slug(raw) == expected


def test_validate_guest_details_trims_fields():
    details = validate_guest_details(GuestDetails(name="  Ada ", email=" ada@example.com ", reason=" intro "))

    assert details == GuestDetails(name="Ada", email="ada@example.com", reason="intro")


def test_validate_guest_details_requires_name_and_email():
    with pytest.raises(GuestDetailsError):
        validate_guest_details(GuestDetails(name=" ", email="ada@example.com"))
    with pytest.raises(GuestDetailsError):
        validate_guest_details(GuestDetails(name="Ada", email="not-an-email"))
    assert is_valid_email("a@b.co") is True
    assert is_valid_email("a@b") is False
    assert is_valid_email("ada@.example.com") is False
