from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class BookingAck:
    success: bool
    message: str | None = None
    confirmation_id: str | None = None


@dataclass(frozen=True)
class BookingConfirmation:
    confirmation_id: str | None
    message: str | None
    payload: dict[str, Any]
