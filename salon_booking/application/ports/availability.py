from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date


class AvailabilitySourcePort(ABC):
    @abstractmethod
    def fetch_available_slots(self, day: date, service_id: int | None = None) -> list[str] | None:
        """
        Fetch bookable time labels ("HH:MM") for a day.

        Returns:
            The authoritative slot list (may be empty for a fully booked day),
            or None when the source answered without a usable slot list.

        Raises:
            AvailabilityUnavailable: transient failure, the caller may retry.
        """
        raise NotImplementedError
