from __future__ import annotations

from datetime import date

import pytest

from salon_booking.application.utils.clock import business_clock
from salon_booking.application.utils.contact_rules import looks_like_email, missing_booking_fields
from salon_booking.application.utils.deep_link import extract_service_slug, strip_service_param
from salon_booking.application.utils.localization import localized_text
from salon_booking.domain.entities.availability import AvailabilityQuery
from salon_booking.domain.entities.booking_selection import BookingSelection


@pytest.mark.parametrize(
    "url, slug",
    [
        ("https://salon.example/#booking?service=classic-facial", "classic-facial"),
        ("https://salon.example/de/?ref=ad#booking?service=brow-shaping&x=1", "brow-shaping"),
        ("https://salon.example/#booking", None),
        ("https://salon.example/#booking?service=", None),
        ("https://salon.example/?service=classic-facial", None),
    ],
)
def test_extract_service_slug(url, slug):
    assert extract_service_slug(url) == slug


def test_strip_service_param_keeps_page_query():
    url = "https://salon.example/de/?ref=ad#booking?service=brow-shaping"
    assert strip_service_param(url) == "https://salon.example/de/?ref=ad#booking"
    assert strip_service_param(url, anchor="termin") == "https://salon.example/de/?ref=ad#termin"


def test_localized_text_fallbacks():
    names = {"en": "Classic Facial", "de": "Klassische Gesichtsbehandlung"}
    assert localized_text(names, "de") == "Klassische Gesichtsbehandlung"
    assert localized_text(names, "fr") == "Classic Facial"
    assert localized_text({"de": "Nur Deutsch"}, "fr") == "Nur Deutsch"
    assert localized_text({"en": "", "de": ""}, "en") == ""
    assert localized_text(None, "en") == ""


@pytest.mark.parametrize(
    "value, ok",
    [
        ("jane@example.com", True),
        ("  jane@example.com ", True),
        ("jane@example", False),
        ("jane example@x.com", False),
        ("@example.com", False),
        ("", False),
    ],
)
def test_looks_like_email(value, ok):
    assert looks_like_email(value) is ok


def test_missing_fields_in_form_order():
    assert missing_booking_fields(BookingSelection()) == ["service", "date", "time", "name", "email", "phone"]


def test_query_cache_key():
    assert AvailabilityQuery(date=date(2025, 3, 10), service_id=7).cache_key == "2025-03-10:7"
    assert AvailabilityQuery(date=date(2025, 3, 10)).cache_key == "2025-03-10:-"


def test_business_clock_is_timezone_aware():
    now = business_clock("Europe/Berlin")()
    assert now.tzinfo is not None
    assert business_clock("Not/AZone")().utcoffset().total_seconds() == 0
