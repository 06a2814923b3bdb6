from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from salon_booking.application.exceptions import BookingError, NoDateSelectedError
from salon_booking.application.ports.service_catalog import ServiceCatalogPort
from salon_booking.application.use_cases import selection as machine
from salon_booking.application.use_cases.availability import AvailabilityResolver
from salon_booking.application.use_cases.booking import BookingSubmitter, SubmissionResult
from salon_booking.application.use_cases.selection import TransitionResult
from salon_booking.application.utils.clock import Clock
from salon_booking.application.utils.deep_link import extract_service_slug, strip_service_param
from salon_booking.domain.entities.auth_session import AuthSession
from salon_booking.domain.entities.availability import AvailabilityQuery, SlotResolution
from salon_booking.domain.entities.booking_selection import (
    BookingSelection,
    BookingStep,
    ContactDetails,
)
from salon_booking.domain.entities.service_catalog import Service, ServiceCategory

StepChangeHook = Callable[[BookingStep, BookingStep], None]

SUBMISSION_IN_PROGRESS = "Submission already in progress"


@dataclass(frozen=True)
class DeepLinkOutcome:
    service: Service | None
    replace_url: str | None  # apply with history replace, never push


class BookingSession:
    """
    One visitor's booking flow.

    Owns the BookingSelection exclusively; every change goes through the
    selection transitions. Slots shown for the selection are guarded by the
    query key they were requested for, so a late response for an older date
    or service is dropped instead of replacing newer slots.
    """

    def __init__(
        self,
        session_id: str,
        catalog: ServiceCatalogPort,
        resolver: AvailabilityResolver,
        submitter: BookingSubmitter,
        clock: Clock,
        language: str = "en",
        auth: AuthSession | None = None,
        on_step_change: StepChangeHook | None = None,
        booking_anchor: str = "booking",
    ) -> None:
        self.session_id = session_id
        self.language = language
        self._catalog = catalog
        self._resolver = resolver
        self._submitter = submitter
        self._clock = clock
        self._auth = auth or AuthSession()
        self._on_step_change = on_step_change
        self._booking_anchor = booking_anchor
        self._selection = BookingSelection()
        self._slots: SlotResolution | None = None
        self._services: list[Service] | None = None
        self._groups: list[ServiceCategory] | None = None
        self._submitting = False
        self._lock = threading.RLock()
        self._logger = logging.getLogger(__name__)

    @property
    def selection(self) -> BookingSelection:
        return self._selection

    @property
    def slots(self) -> SlotResolution | None:
        return self._slots

    @property
    def auth(self) -> AuthSession:
        return self._auth

    def today(self) -> date:
        return self._clock().date()

    # ------------------------------------------------------------------ #
    # Catalog
    # ------------------------------------------------------------------ #
    def services(self) -> list[Service]:
        with self._lock:
            cached = self._services
        if cached is None:
            fetched = list(self._catalog.fetch_services())
            with self._lock:
                if self._services is None:
                    self._services = fetched
                cached = self._services
        return list(cached)

    def service_groups(self) -> list[ServiceCategory]:
        with self._lock:
            cached = self._groups
        if cached is None:
            fetched = list(self._catalog.fetch_service_groups())
            with self._lock:
                if self._groups is None:
                    self._groups = fetched
                cached = self._groups
        return list(cached)

    def services_in_category(self, slug: str | None) -> list[Service]:
        services = self.services()
        if slug is None:
            return services
        return [s for s in services if s.category == slug]

    def find_service(self, service_id: int) -> Service | None:
        return next((s for s in self.services() if s.id == service_id), None)

    def find_service_by_slug(self, slug: str) -> Service | None:
        return next((s for s in self.services() if s.slug == slug), None)

    # ------------------------------------------------------------------ #
    # Selection transitions
    # ------------------------------------------------------------------ #
    def select_category(self, slug: str) -> TransitionResult:
        return self._apply(lambda sel: machine.select_category(sel, slug))

    def select_service(self, service: Service) -> TransitionResult:
        return self._apply(lambda sel: machine.select_service(sel, service))

    def select_date(self, day: date) -> TransitionResult:
        today = self.today()
        return self._apply(lambda sel: machine.select_date(sel, day, today))

    def select_time(self, label: str) -> TransitionResult:
        return self._apply(lambda sel: machine.select_time(sel, label))

    def fill_contact(self, contact: ContactDetails) -> TransitionResult:
        return self._apply(lambda sel: machine.fill_contact(sel, contact))

    def advance(self) -> TransitionResult:
        return self._apply(machine.advance)

    def retreat(self) -> TransitionResult:
        return self._apply(machine.retreat)

    def jump_to(self, step: BookingStep) -> TransitionResult:
        return self._apply(lambda sel: machine.jump_to(sel, step))

    def cancel(self) -> TransitionResult:
        self._logger.info("Booking cancelled", extra={"session_id": self.session_id})
        return self._apply(lambda sel: TransitionResult(selection=machine.reset()))

    def _apply(self, transition: Callable[[BookingSelection], TransitionResult]) -> TransitionResult:
        with self._lock:
            previous = self._selection
            result = transition(previous)
            if not result.ok:
                return result
            self._selection = result.selection
            if _slot_key(previous) != _slot_key(result.selection):
                self._slots = None
        if previous.step != result.selection.step and self._on_step_change is not None:
            self._on_step_change(previous.step, result.selection.step)
        return result

    # ------------------------------------------------------------------ #
    # Availability
    # ------------------------------------------------------------------ #
    def request_slots(self) -> AvailabilityQuery:
        """Key for the slots the current selection needs. Raises NoDateSelectedError without a date."""
        with self._lock:
            query = _slot_key(self._selection)
        if query is None:
            raise NoDateSelectedError("Select a date before loading time slots")
        return query

    def receive_slots(self, query: AvailabilityQuery, resolution: SlotResolution) -> bool:
        """Show `resolution` if it still matches the selection. Returns False for a stale response."""
        with self._lock:
            if query != _slot_key(self._selection):
                self._logger.info(
                    "Discarding stale slots",
                    extra={"session_id": self.session_id, "query": query.cache_key},
                )
                return False
            self._slots = resolution
            return True

    def load_slots(self) -> SlotResolution | None:
        """Resolve slots for the current selection. Returns None if the selection moved on meanwhile."""
        query = self.request_slots()
        resolution = self._resolver.resolve(query.date, query.service_id)
        if not self.receive_slots(query, resolution):
            return None
        return resolution

    # ------------------------------------------------------------------ #
    # Submission
    # ------------------------------------------------------------------ #
    def submit(self) -> SubmissionResult:
        """Submit the current selection. A second submit while one is in flight is rejected."""
        with self._lock:
            if self._submitting:
                self._logger.warning("Booking submission already in progress", extra={"session_id": self.session_id})
                return SubmissionResult(error=BookingError(SUBMISSION_IN_PROGRESS))
            self._submitting = True
            selection = self._selection

        try:
            user = self._auth.user if self._auth.authenticated else None
            self._logger.info(
                "Submitting booking",
                extra={"session_id": self.session_id, "user_id": user.id if user else None},
            )
            result = self._submitter.submit(selection, self.language)
            if result.ok:
                # Changes made while the request was in flight are kept.
                self._apply(
                    lambda current: TransitionResult(
                        selection=machine.reset() if current is selection else current,
                    )
                )
            return result
        finally:
            with self._lock:
                self._submitting = False

    # ------------------------------------------------------------------ #
    # Deep links
    # ------------------------------------------------------------------ #
    def seed_from_deep_link(self, url: str) -> DeepLinkOutcome:
        """Preselect the service named by `service=<slug>` in the URL fragment."""
        slug = extract_service_slug(url)
        if slug is None:
            return DeepLinkOutcome(service=None, replace_url=None)

        service = self.find_service_by_slug(slug)
        if service is None:
            self._logger.info("Unknown service in link", extra={"session_id": self.session_id, "service": slug})
            return DeepLinkOutcome(service=None, replace_url=None)

        replace_url = strip_service_param(url, self._booking_anchor)
        self.select_category(service.category)
        self.select_service(service)
        self._logger.info("Service preselected from link", extra={"session_id": self.session_id, "service": slug})
        return DeepLinkOutcome(service=service, replace_url=replace_url)


def _slot_key(selection: BookingSelection) -> AvailabilityQuery | None:
    if selection.date is None:
        return None
    return AvailabilityQuery(date=selection.date, service_id=selection.service_id)
