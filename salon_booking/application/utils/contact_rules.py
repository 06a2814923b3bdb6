from __future__ import annotations

import re

from salon_booking.domain.entities.booking_selection import BookingSelection

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def looks_like_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value.strip()))


def missing_booking_fields(selection: BookingSelection) -> list[str]:
    """List the fields that block submission, in form order. Empty list means complete."""
    missing: list[str] = []
    if selection.service is None:
        missing.append("service")
    if selection.date is None:
        missing.append("date")
    if not selection.time:
        missing.append("time")

    contact = selection.contact
    if not contact.name.strip():
        missing.append("name")
    if not contact.email.strip():
        missing.append("email")
    elif not looks_like_email(contact.email):
        missing.append("email_invalid")
    if not contact.phone.strip():
        missing.append("phone")
    return missing
