from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable
from datetime import date

from salon_booking.application.exceptions import AvailabilityUnavailable
from salon_booking.application.ports.availability import AvailabilitySourcePort
from salon_booking.application.utils.clock import Clock
from salon_booking.domain.entities.availability import AvailabilityQuery, SlotResolution


def fallback_base_slots(open_hour: int, last_slot_hour: int) -> list[str]:
    return [f"{hour:02d}:00" for hour in range(open_hour, last_slot_hour + 1)]


class AvailabilityResolver:
    """
    Resolve bookable time labels for a day, preferring the remote source.

    The remote source is retried on AvailabilityUnavailable. When retries run
    out, or the source answers without a slot list, an offline schedule is
    generated and the resolution is marked degraded. resolve() never raises.

    One resolver belongs to one booking session: remote results are cached by
    query for the resolver's lifetime and never invalidated.
    """

    def __init__(
        self,
        source: AvailabilitySourcePort,
        clock: Clock,
        retry_attempts: int = 2,
        retry_delay_seconds: float = 1.0,
        open_hour: int = 10,
        last_slot_hour: int = 19,
        thinning_enabled: bool = True,
        drop_rate: float = 0.3,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if retry_attempts < 0:
            raise ValueError("retry_attempts must be >= 0")
        if not 0.0 <= drop_rate < 1.0:
            raise ValueError("drop_rate must be in [0, 1)")
        self._source = source
        self._clock = clock
        self._retry_attempts = retry_attempts
        self._retry_delay_seconds = retry_delay_seconds
        self._open_hour = open_hour
        self._last_slot_hour = last_slot_hour
        self._thinning_enabled = thinning_enabled
        self._drop_rate = drop_rate
        self._sleep = sleep
        self._cache: dict[AvailabilityQuery, SlotResolution] = {}
        self._logger = logging.getLogger(__name__)

    def resolve(self, day: date, service_id: int | None = None) -> SlotResolution:
        query = AvailabilityQuery(date=day, service_id=service_id)
        cached = self._cache.get(query)
        if cached is not None:
            return cached

        slots = self._fetch_remote(query)
        if slots is None:
            return self._fallback(query)

        resolution = SlotResolution(query=query, slots=tuple(slots), source="remote")
        self._cache[query] = resolution
        if resolution.is_empty:
            self._logger.info("No slots available", extra={"query": query.cache_key})
        return resolution

    def _fetch_remote(self, query: AvailabilityQuery) -> list[str] | None:
        total_attempts = self._retry_attempts + 1
        for attempt in range(1, total_attempts + 1):
            try:
                slots = self._source.fetch_available_slots(query.date, query.service_id)
            except AvailabilityUnavailable as exc:
                if attempt >= total_attempts:
                    self._logger.warning(
                        "Availability source unavailable, using offline schedule",
                        extra={"query": query.cache_key, "attempt": attempt, "reason": str(exc)},
                    )
                    return None
                self._logger.info(
                    "Retrying availability query",
                    extra={"query": query.cache_key, "attempt": attempt, "reason": str(exc)},
                )
                self._sleep(self._retry_delay_seconds)
                continue
            except Exception as exc:
                self._logger.exception(
                    "Unexpected availability error, using offline schedule",
                    extra={"query": query.cache_key, "attempt": attempt, "reason": str(exc)},
                )
                return None

            if slots is None:
                self._logger.warning(
                    "Malformed availability response, using offline schedule",
                    extra={"query": query.cache_key, "attempt": attempt},
                )
            return slots
        return None

    def _fallback(self, query: AvailabilityQuery) -> SlotResolution:
        now = self._clock()
        slots = fallback_base_slots(self._open_hour, self._last_slot_hour)

        if query.date == now.date():
            slots = [slot for slot in slots if int(slot.split(":")[0]) > now.hour]

        if self._thinning_enabled and slots:
            # Placeholder for real availability; seeded per query so repeated lookups agree.
            rng = random.Random(query.cache_key)
            slots = [slot for slot in slots if rng.random() >= self._drop_rate]

        return SlotResolution(query=query, slots=tuple(slots), source="fallback")
