from __future__ import annotations

import logging

import httpx

from salon_booking.application.dto.booking_payload import BookingPayload
from salon_booking.application.dto.salon_api import CreateBookingResponseDTO
from salon_booking.application.exceptions import BookingTransportError
from salon_booking.application.ports.booking_gateway import BookingGatewayPort
from salon_booking.domain.entities.booking_confirmation import BookingAck
from salon_booking.infrastructure.salon_api.client import SalonApiClient


class HttpBookingGateway(BookingGatewayPort):
    def __init__(self, client: SalonApiClient) -> None:
        self._client = client
        self._logger = logging.getLogger(__name__)

    def create_booking(self, payload: BookingPayload) -> BookingAck:
        try:
            resp = self._client.post("/api/bookings", payload.to_wire())
        except httpx.HTTPError as e:
            raise BookingTransportError(f"Booking request failed: {e}") from e

        try:
            data = resp.json()
        except ValueError:
            data = None

        # Business failures (e.g. slot taken) come back as JSON with success=false,
        # often with a 4xx status.
        if isinstance(data, dict) and "success" in data:
            return CreateBookingResponseDTO.model_validate(data).to_ack()

        raise BookingTransportError(f"Unexpected booking response (HTTP {resp.status_code})")
