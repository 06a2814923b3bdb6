from __future__ import annotations

import pytest

from salon_booking.application.exceptions import AvailabilityUnavailable, BookingTransportError
from salon_booking.application.ports.availability import AvailabilitySourcePort
from salon_booking.application.ports.booking_gateway import BookingGatewayPort
from salon_booking.application.use_cases.booking import BookingSubmitter
from salon_booking.application.use_cases.booking_session import BookingSession
from salon_booking.infrastructure.mock.mock_salon import MockSalonBackend

from support import (
    FACIAL,
    GROUPS,
    WAXING,
    FakeAvailabilitySource,
    FakeBookingGateway,
    fixed_clock,
    make_resolver,
)


@pytest.fixture
def unavailable() -> AvailabilityUnavailable:
    return AvailabilityUnavailable("connection refused")


@pytest.fixture
def transport_error() -> BookingTransportError:
    return BookingTransportError("connection reset")


@pytest.fixture
def backend() -> MockSalonBackend:
    return MockSalonBackend(services=[FACIAL, WAXING], groups=GROUPS)


@pytest.fixture
def make_session(backend):
    def _make(
        source: AvailabilitySourcePort | None = None,
        gateway: BookingGatewayPort | None = None,
        on_step_change=None,
    ) -> BookingSession:
        return BookingSession(
            session_id="s-1",
            catalog=backend,
            resolver=make_resolver(source or FakeAvailabilitySource(["14:00", "15:00"])),
            submitter=BookingSubmitter(gateway=gateway or FakeBookingGateway()),
            clock=fixed_clock(),
            on_step_change=on_step_change,
        )

    return _make
