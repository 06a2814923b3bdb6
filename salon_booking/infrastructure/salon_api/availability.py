from __future__ import annotations

import logging
from datetime import date

import httpx

from salon_booking.application.dto.salon_api import AvailableSlotsDTO
from salon_booking.application.exceptions import AvailabilityUnavailable
from salon_booking.application.ports.availability import AvailabilitySourcePort
from salon_booking.infrastructure.salon_api.client import SalonApiClient


class HttpAvailabilitySource(AvailabilitySourcePort):
    def __init__(self, client: SalonApiClient) -> None:
        self._client = client
        self._logger = logging.getLogger(__name__)

    def fetch_available_slots(self, day: date, service_id: int | None = None) -> list[str] | None:
        params: dict[str, str | int] = {"date": day.isoformat()}
        if service_id is not None:
            params["serviceId"] = service_id

        try:
            resp = self._client.get("/api/time-slots", params=params)
        except httpx.HTTPError as e:
            raise AvailabilityUnavailable(f"Time slot request failed: {e}") from e

        if resp.status_code >= 500:
            raise AvailabilityUnavailable(f"Time slot service responded with {resp.status_code}")
        if resp.status_code >= 400:
            # Not transient; the resolver falls back without retrying.
            return None

        try:
            data = resp.json()
        except ValueError:
            self._logger.warning("Time slot response is not JSON", extra={"date": params["date"]})
            return None
        return AvailableSlotsDTO.parse_slots(data)
