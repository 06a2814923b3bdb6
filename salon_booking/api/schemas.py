from datetime import date
from typing import Any

from pydantic import BaseModel, Field

from salon_booking.application.utils.localization import localized_text
from salon_booking.domain.entities.availability import SlotResolution
from salon_booking.domain.entities.booking_selection import BookingSelection
from salon_booking.domain.entities.service_catalog import Service, ServiceCategory


class CreateSessionRequestSchema(BaseModel):
    language: str | None = None
    url: str | None = None  # page URL, may carry #booking?service=<slug>


class CategoryRequestSchema(BaseModel):
    slug: str = Field(min_length=1)


class ServiceRequestSchema(BaseModel):
    service_id: int


class DateRequestSchema(BaseModel):
    date: date


class TimeRequestSchema(BaseModel):
    time: str = Field(pattern=r"^\d{2}:\d{2}$")


class ContactRequestSchema(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""


class JumpRequestSchema(BaseModel):
    step: int = Field(ge=1, le=3)


class ServiceSchema(BaseModel):
    id: int
    slug: str
    category: str
    name: str
    description: str
    duration: int
    price: float
    image_url: str | None = None

    @classmethod
    def from_entity(cls, service: Service, language: str) -> "ServiceSchema":
        return cls(
            id=service.id,
            slug=service.slug,
            category=service.category,
            name=localized_text(service.name, language),
            description=localized_text(service.description, language),
            duration=service.duration,
            price=service.price,
            image_url=service.image_url,
        )


class ServiceGroupSchema(BaseModel):
    id: int
    slug: str
    name: str
    description: str

    @classmethod
    def from_entity(cls, group: ServiceCategory, language: str) -> "ServiceGroupSchema":
        return cls(
            id=group.id,
            slug=group.slug,
            name=localized_text(group.name, language),
            description=localized_text(group.description, language),
        )


class CatalogResponseSchema(BaseModel):
    groups: list[ServiceGroupSchema]
    services: list[ServiceSchema]


class ContactSchema(BaseModel):
    name: str
    email: str
    phone: str


class SelectionSchema(BaseModel):
    step: int
    category: str | None
    service: ServiceSchema | None
    date: date | None
    time: str | None
    contact: ContactSchema

    @classmethod
    def from_entity(cls, selection: BookingSelection, language: str) -> "SelectionSchema":
        return cls(
            step=int(selection.step),
            category=selection.category,
            service=ServiceSchema.from_entity(selection.service, language) if selection.service else None,
            date=selection.date,
            time=selection.time,
            contact=ContactSchema(
                name=selection.contact.name,
                email=selection.contact.email,
                phone=selection.contact.phone,
            ),
        )


class SlotsSchema(BaseModel):
    date: date
    service_id: int | None
    slots: list[str]
    degraded: bool  # true when showing the offline schedule
    empty: bool

    @classmethod
    def from_entity(cls, resolution: SlotResolution) -> "SlotsSchema":
        return cls(
            date=resolution.query.date,
            service_id=resolution.query.service_id,
            slots=list(resolution.slots),
            degraded=resolution.degraded,
            empty=resolution.is_empty,
        )


class SessionResponseSchema(BaseModel):
    session_id: str
    selection: SelectionSchema
    slots: SlotsSchema | None = None
    replace_url: str | None = None


class SlotsResponseSchema(BaseModel):
    applied: bool
    slots: SlotsSchema | None = None


class SubmitResponseSchema(BaseModel):
    confirmation_id: str | None
    message: str | None
    booking: dict[str, Any]
    selection: SelectionSchema


class AdminUserSchema(BaseModel):
    id: str
    username: str
    email: str | None = None
    display_name: str | None = None
    avatar_url: str | None = None


class AdminSessionSchema(BaseModel):
    authenticated: bool
    user: AdminUserSchema | None = None


class LogoutRequestSchema(BaseModel):
    redirect_to: str | None = None


class LogoutResponseSchema(BaseModel):
    success: bool
    redirect_target: str | None = None
