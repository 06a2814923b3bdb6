from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class AvailabilityQuery:
    date: date
    service_id: int | None = None

    @property
    def cache_key(self) -> str:
        return f"{self.date.isoformat()}:{self.service_id if self.service_id is not None else '-'}"


@dataclass(frozen=True)
class SlotResolution:
    query: AvailabilityQuery
    slots: tuple[str, ...]
    source: str = "remote"  # "remote" | "fallback"

    @property
    def degraded(self) -> bool:
        """True when the slots come from the offline schedule."""
        return self.source == "fallback"

    @property
    def is_empty(self) -> bool:
        return not self.slots
