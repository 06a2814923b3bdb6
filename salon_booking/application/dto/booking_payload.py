from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class BookingPayload(BaseModel):
    """Normalized booking sent to the backend. Price and duration are captured at submission time."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    service: int
    service_slug: str = Field(alias="serviceSlug")
    service_name: str = Field(alias="serviceName")
    price: float
    duration: int
    date: str  # YYYY-MM-DD
    time: str  # HH:MM
    name: str
    email: str
    phone: str

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
