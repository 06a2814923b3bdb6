from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

from salon_booking.application.dto.booking_payload import BookingPayload
from salon_booking.application.ports.availability import AvailabilitySourcePort
from salon_booking.application.ports.booking_gateway import BookingGatewayPort
from salon_booking.application.use_cases.availability import AvailabilityResolver
from salon_booking.domain.entities.booking_confirmation import BookingAck
from salon_booking.domain.entities.service_catalog import Service, ServiceCategory

TZ = ZoneInfo("Europe/Berlin")
NOW = datetime(2025, 3, 1, 9, 30, tzinfo=TZ)

FACIAL = Service(
    id=7,
    slug="classic-facial",
    category="facials",
    name={"en": "Classic Facial", "de": "Klassische Gesichtsbehandlung"},
    description={"en": "Deep cleansing."},
    duration=60,
    price=80,
)
WAXING = Service(
    id=12,
    slug="full-leg-waxing",
    category="hair-removal",
    name={"en": "Full Leg Waxing"},
    duration=45,
    price=55,
)
GROUPS = [
    ServiceCategory(id=1, slug="facials", name={"en": "Facials"}),
    ServiceCategory(id=2, slug="hair-removal", name={"en": "Hair Removal"}),
]


class FakeAvailabilitySource(AvailabilitySourcePort):
    """Replays scripted answers; an exception instance in the script is raised."""

    def __init__(self, *answers: object) -> None:
        self.answers = list(answers)
        self.calls: list[tuple[date, int | None]] = []

    def fetch_available_slots(self, day: date, service_id: int | None = None) -> list[str] | None:
        self.calls.append((day, service_id))
        answer = self.answers.pop(0) if len(self.answers) > 1 else self.answers[0]
        if isinstance(answer, Exception):
            raise answer
        return answer


class FakeBookingGateway(BookingGatewayPort):
    def __init__(self, ack: BookingAck | None = None, error: Exception | None = None) -> None:
        self.ack = ack or BookingAck(success=True, confirmation_id="B-1")
        self.error = error
        self.payloads: list[BookingPayload] = []

    def create_booking(self, payload: BookingPayload) -> BookingAck:
        self.payloads.append(payload)
        if self.error is not None:
            raise self.error
        return self.ack


def fixed_clock(now: datetime = NOW):
    return lambda: now


def make_resolver(source: AvailabilitySourcePort, now: datetime = NOW, **kwargs) -> AvailabilityResolver:
    kwargs.setdefault("sleep", lambda seconds: None)
    return AvailabilityResolver(source=source, clock=fixed_clock(now), **kwargs)



class DateChangingSource(AvailabilitySourcePort):
    """On its first call, moves `session` to `new_date` and loads slots for it before answering."""

    def __init__(self, new_date: date, slots: list[str]) -> None:
        self.new_date = new_date
        self.slots = slots
        self.session = None
        self.calls: list[tuple[date, int | None]] = []

    def fetch_available_slots(self, day: date, service_id: int | None = None) -> list[str] | None:
        self.calls.append((day, service_id))
        if len(self.calls) == 1:
            self.session.select_date(self.new_date)
            self.session.load_slots()
        return list(self.slots)
