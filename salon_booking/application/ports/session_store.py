from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from salon_booking.application.use_cases.booking_session import BookingSession


class BookingSessionStorePort(ABC):
    @abstractmethod
    def put(self, session: "BookingSession") -> None:
        raise NotImplementedError

    @abstractmethod
    def get(self, session_id: str) -> "BookingSession | None":
        raise NotImplementedError

    @abstractmethod
    def discard(self, session_id: str) -> None:
        raise NotImplementedError
