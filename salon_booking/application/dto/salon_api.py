from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from salon_booking.domain.entities.auth_session import AuthSession, AuthUser, LogoutResult
from salon_booking.domain.entities.booking_confirmation import BookingAck
from salon_booking.domain.entities.service_catalog import Service, ServiceCategory


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ServiceGroupDTO(_WireModel):
    id: int
    slug: str
    name: dict[str, str] = Field(default_factory=dict)
    description: dict[str, str] | None = None

    def to_entity(self) -> ServiceCategory:
        return ServiceCategory(
            id=self.id,
            slug=self.slug,
            name=dict(self.name),
            description=dict(self.description or {}),
        )


class ServiceDTO(_WireModel):
    id: int
    slug: str
    category: str
    name: dict[str, str] = Field(default_factory=dict)
    description: dict[str, str] | None = None
    duration: int
    price: float
    image_url: str | None = Field(default=None, alias="imageUrl")

    def to_entity(self) -> Service:
        return Service(
            id=self.id,
            slug=self.slug,
            category=self.category,
            name=dict(self.name),
            description=dict(self.description or {}),
            duration=self.duration,
            price=self.price,
            image_url=self.image_url,
        )


class AvailableSlotsDTO(_WireModel):
    available_slots: list[str] | None = Field(default=None, alias="availableSlots")

    @classmethod
    def parse_slots(cls, data: Any) -> list[str] | None:
        """Return the slot list, or None when the body carries no usable `availableSlots`."""
        if not isinstance(data, dict) or "availableSlots" not in data:
            return None
        slots = data.get("availableSlots")
        if not isinstance(slots, list) or not all(isinstance(s, str) for s in slots):
            return None
        return list(cls.model_validate(data).available_slots or [])


class CreateBookingResponseDTO(_WireModel):
    success: bool = False
    message: str | None = None
    confirmation_id: str | None = Field(default=None, alias="confirmationId")

    def to_ack(self) -> BookingAck:
        return BookingAck(
            success=self.success,
            message=self.message,
            confirmation_id=self.confirmation_id,
        )


class CurrentUserDTO(_WireModel):
    id: str | int | None = None
    username: str | None = None
    first_name: str | None = Field(default=None, alias="firstName")
    email: str | None = None
    image_url: str | None = Field(default=None, alias="imageUrl")

    def to_session(self) -> AuthSession:
        user = AuthUser(
            id=str(self.id or "admin"),
            username=self.username or "admin",
            email=self.email,
            display_name=self.first_name or "Admin",
            avatar_url=self.image_url,
        )
        return AuthSession(authenticated=True, user=user)


class LogoutResponseDTO(_WireModel):
    success: bool = False
    redirect_to: str | None = Field(default=None, alias="redirectTo")

    def to_result(self) -> LogoutResult:
        return LogoutResult(success=self.success, redirect_target=self.redirect_to)
