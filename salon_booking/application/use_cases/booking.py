from __future__ import annotations

import logging
from dataclasses import dataclass

from salon_booking.application.dto.booking_payload import BookingPayload
from salon_booking.application.exceptions import (
    BookingError,
    BookingTransportError,
    IncompleteBookingError,
)
from salon_booking.application.ports.booking_gateway import BookingGatewayPort
from salon_booking.application.utils.contact_rules import missing_booking_fields
from salon_booking.application.utils.localization import localized_text
from salon_booking.domain.entities.booking_confirmation import BookingConfirmation
from salon_booking.domain.entities.booking_selection import BookingSelection

UNKNOWN_REASON = "unknown"


@dataclass(frozen=True)
class SubmissionResult:
    confirmation: BookingConfirmation | None = None
    error: IncompleteBookingError | BookingError | None = None

    @property
    def ok(self) -> bool:
        return self.confirmation is not None


def build_payload(selection: BookingSelection, language: str) -> BookingPayload:
    """Snapshot the selection into the wire payload. Raises IncompleteBookingError if it is not complete."""
    missing = missing_booking_fields(selection)
    if missing:
        raise IncompleteBookingError(missing)
    service = selection.service
    contact = selection.contact
    return BookingPayload(
        service=service.id,
        service_slug=service.slug,
        service_name=localized_text(service.name, language),
        price=service.price,
        duration=service.duration,
        date=selection.date.isoformat(),
        time=selection.time,
        name=contact.name.strip(),
        email=contact.email.strip(),
        phone=contact.phone.strip(),
    )


class BookingSubmitter:
    """Validate a booking selection and create it through the gateway. Never retries."""

    def __init__(self, gateway: BookingGatewayPort) -> None:
        self._gateway = gateway
        self._logger = logging.getLogger(__name__)

    def submit(self, selection: BookingSelection, language: str = "en") -> SubmissionResult:
        try:
            payload = build_payload(selection, language)
        except IncompleteBookingError as e:
            self._logger.info("Booking blocked before submission", extra={"reason": ",".join(e.fields)})
            return SubmissionResult(error=e)

        try:
            ack = self._gateway.create_booking(payload)
        except BookingTransportError as e:
            self._logger.error("Booking request failed", extra={"service": payload.service_slug, "reason": str(e)})
            return SubmissionResult(error=BookingError(UNKNOWN_REASON, transport=True))
        except Exception as e:
            self._logger.exception("Unexpected error creating booking", extra={"reason": str(e)})
            return SubmissionResult(error=BookingError(UNKNOWN_REASON, transport=True))

        if not ack.success:
            reason = ack.message or UNKNOWN_REASON
            self._logger.warning("Booking rejected", extra={"service": payload.service_slug, "reason": reason})
            return SubmissionResult(error=BookingError(reason))

        self._logger.info(
            "Booking created",
            extra={
                "service": payload.service_slug,
                "date": payload.date,
                "confirmation_id": ack.confirmation_id,
            },
        )
        return SubmissionResult(
            confirmation=BookingConfirmation(
                confirmation_id=ack.confirmation_id,
                message=ack.message,
                payload=payload.to_wire(),
            )
        )
