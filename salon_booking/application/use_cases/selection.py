from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date

from salon_booking.application.exceptions import (
    BookingFlowError,
    InvalidDateError,
    NoDateSelectedError,
    StepGateError,
)
from salon_booking.domain.entities.booking_selection import (
    BookingSelection,
    BookingStep,
    ContactDetails,
)
from salon_booking.domain.entities.service_catalog import Service

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransitionResult:
    """Result of a selection transition. On error, `selection` is the unchanged prior selection."""

    selection: BookingSelection
    error: BookingFlowError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> BookingSelection:
        if self.error is not None:
            raise self.error
        return self.selection


def _rejected(selection: BookingSelection, error: BookingFlowError) -> TransitionResult:
    logger.info("Transition rejected", extra={"step": int(selection.step), "reason": str(error)})
    return TransitionResult(selection=selection, error=error)


def reset() -> BookingSelection:
    return BookingSelection()


def select_category(selection: BookingSelection, slug: str) -> TransitionResult:
    service = selection.service
    if service is not None and service.category != slug:
        service = None
    return TransitionResult(selection=replace(selection, category=slug, service=service))


def select_service(selection: BookingSelection, service: Service) -> TransitionResult:
    # The category follows the service so `service => category == service.category` holds.
    return TransitionResult(
        selection=replace(selection, category=service.category, service=service),
    )


def select_date(selection: BookingSelection, day: date, today: date) -> TransitionResult:
    if day < today:
        return _rejected(
            selection,
            InvalidDateError(f"{day.isoformat()} is before {today.isoformat()}"),
        )
    return TransitionResult(selection=replace(selection, date=day, time=None))


def select_time(selection: BookingSelection, label: str) -> TransitionResult:
    if selection.date is None:
        return _rejected(selection, NoDateSelectedError("Select a date before choosing a time"))
    return TransitionResult(selection=replace(selection, time=label))


def fill_contact(selection: BookingSelection, contact: ContactDetails) -> TransitionResult:
    return TransitionResult(selection=replace(selection, contact=contact))


def step_gate_met(selection: BookingSelection, step: BookingStep) -> bool:
    """Whether the completion condition of `step` holds for this selection."""
    if step == BookingStep.SERVICE_SELECTION:
        return selection.service is not None
    if step == BookingStep.DATE_TIME:
        return selection.date is not None and bool(selection.time)
    return False  # Details is terminal


def advance(selection: BookingSelection) -> TransitionResult:
    current = selection.step
    if current == BookingStep.DETAILS:
        return _rejected(selection, StepGateError("Details is the last step"))
    if not step_gate_met(selection, current):
        missing = "a service" if current == BookingStep.SERVICE_SELECTION else "a date and time"
        return _rejected(selection, StepGateError(f"Select {missing} to continue"))
    return TransitionResult(selection=replace(selection, step=BookingStep(current + 1)))


def retreat(selection: BookingSelection) -> TransitionResult:
    if selection.step == BookingStep.SERVICE_SELECTION:
        return _rejected(selection, StepGateError("Already at the first step"))
    return TransitionResult(selection=replace(selection, step=BookingStep(selection.step - 1)))


def jump_to(selection: BookingSelection, step: BookingStep) -> TransitionResult:
    """Move to `step` directly, as when clicking a step indicator."""
    target = BookingStep(step)
    for earlier in BookingStep:
        if earlier >= target:
            break
        if not step_gate_met(selection, earlier):
            return _rejected(
                selection,
                StepGateError(f"Step {int(earlier)} must be completed before step {int(target)}"),
            )
    return TransitionResult(selection=replace(selection, step=target))
