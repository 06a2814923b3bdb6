from __future__ import annotations

import logging
from datetime import date

from salon_booking.application.dto.booking_payload import BookingPayload
from salon_booking.application.ports.auth import AuthPort
from salon_booking.application.ports.availability import AvailabilitySourcePort
from salon_booking.application.ports.booking_gateway import BookingGatewayPort
from salon_booking.application.ports.service_catalog import ServiceCatalogPort
from salon_booking.domain.entities.auth_session import AuthSession, AuthUser, LogoutResult
from salon_booking.domain.entities.booking_confirmation import BookingAck
from salon_booking.domain.entities.service_catalog import Service, ServiceCategory
from salon_booking.infrastructure.mock.catalog_data import SERVICE_GROUPS, SERVICES


class MockSalonBackend(ServiceCatalogPort, AvailabilitySourcePort, BookingGatewayPort, AuthPort):
    """In-memory salon backend for local runs. One booking per date and hour."""

    def __init__(
        self,
        services: list[Service] | None = None,
        groups: list[ServiceCategory] | None = None,
        open_hour: int = 10,
        last_slot_hour: int = 19,
    ) -> None:
        self._services = list(services if services is not None else SERVICES)
        self._groups = list(groups if groups is not None else SERVICE_GROUPS)
        self._hours = [f"{hour:02d}:00" for hour in range(open_hour, last_slot_hour + 1)]
        self._bookings: dict[str, BookingPayload] = {}
        self._signed_in = True
        self._logger = logging.getLogger(__name__)

    def fetch_services(self) -> list[Service]:
        return list(self._services)

    def fetch_service_groups(self) -> list[ServiceCategory]:
        return list(self._groups)

    def fetch_available_slots(self, day: date, service_id: int | None = None) -> list[str] | None:
        taken = {b.time for b in self._bookings.values() if b.date == day.isoformat()}
        return [label for label in self._hours if label not in taken]

    def create_booking(self, payload: BookingPayload) -> BookingAck:
        for booking in self._bookings.values():
            if booking.date == payload.date and booking.time == payload.time:
                return BookingAck(success=False, message="This time slot is no longer available")

        confirmation_id = f"mock_booking_{len(self._bookings) + 1}"
        self._bookings[confirmation_id] = payload
        self._logger.info(
            "Mock booking created",
            extra={"confirmation_id": confirmation_id, "service": payload.service_slug, "date": payload.date},
        )
        return BookingAck(success=True, confirmation_id=confirmation_id)

    def current_session(self) -> AuthSession:
        if not self._signed_in:
            return AuthSession()
        return AuthSession(
            authenticated=True,
            user=AuthUser(id="admin", username="admin", email="admin@example.com", display_name="Admin"),
        )

    def logout(self, redirect_to: str) -> LogoutResult:
        self._signed_in = False
        return LogoutResult(success=True, redirect_target=redirect_to)
