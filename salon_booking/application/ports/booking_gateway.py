from __future__ import annotations

from abc import ABC, abstractmethod

from salon_booking.application.dto.booking_payload import BookingPayload
from salon_booking.domain.entities.booking_confirmation import BookingAck


class BookingGatewayPort(ABC):
    @abstractmethod
    def create_booking(self, payload: BookingPayload) -> BookingAck:
        """Create a booking. Raises BookingTransportError if the call could not complete."""
        raise NotImplementedError
