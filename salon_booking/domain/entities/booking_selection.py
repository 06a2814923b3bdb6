from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import IntEnum

from salon_booking.domain.entities.service_catalog import Service


class BookingStep(IntEnum):
    SERVICE_SELECTION = 1
    DATE_TIME = 2
    DETAILS = 3


@dataclass(frozen=True)
class ContactDetails:
    name: str = ""
    email: str = ""
    phone: str = ""


@dataclass(frozen=True)
class BookingSelection:
    step: BookingStep = BookingStep.SERVICE_SELECTION
    category: str | None = None  # category slug
    service: Service | None = None
    date: date | None = None
    time: str | None = None  # "HH:MM", only meaningful together with date
    contact: ContactDetails = field(default_factory=ContactDetails)

    @property
    def service_id(self) -> int | None:
        return self.service.id if self.service else None

    @property
    def is_empty(self) -> bool:
        return self == BookingSelection()
