"""
Tests for the booking session: full flow, stale slots and deep links.
"""

from __future__ import annotations

import threading
from datetime import date

import pytest

from salon_booking.application.exceptions import NoDateSelectedError, StepGateError
from salon_booking.application.use_cases.booking_session import SUBMISSION_IN_PROGRESS
from salon_booking.domain.entities.availability import SlotResolution
from salon_booking.domain.entities.booking_confirmation import BookingAck
from salon_booking.domain.entities.booking_selection import BookingSelection, BookingStep, ContactDetails

from support import FACIAL, WAXING, DateChangingSource, FakeAvailabilitySource, FakeBookingGateway

JANE = ContactDetails(name="Jane", email="jane@example.com", phone="+491701234567")


def _ready_to_submit(session):
    session.select_category("facials")
    session.select_service(session.find_service(7))
    session.advance()
    session.select_date(date(2025, 3, 10))
    session.load_slots()
    session.select_time("14:00")
    session.advance()
    session.fill_contact(JANE)


def test_happy_path_books_and_resets(make_session):
    steps = []
    gateway = FakeBookingGateway()
    session = make_session(gateway=gateway, on_step_change=lambda old, new: steps.append((old, new)))

    session.select_category("facials")
    assert [s.id for s in session.services_in_category("facials")] == [7]
    session.select_service(session.find_service(7))
    assert session.advance().ok
    assert session.select_date(date(2025, 3, 10)).ok

    resolution = session.load_slots()
    assert resolution.slots == ("14:00", "15:00")
    assert session.slots == resolution

    session.select_time("14:00")
    assert session.advance().selection.step == BookingStep.DETAILS
    session.fill_contact(JANE)

    result = session.submit()

    assert result.ok
    assert result.confirmation.confirmation_id == "B-1"
    assert gateway.payloads[0].service_slug == "classic-facial"
    assert gateway.payloads[0].time == "14:00"
    assert session.selection == BookingSelection()
    assert session.slots is None
    assert steps == [
        (BookingStep.SERVICE_SELECTION, BookingStep.DATE_TIME),
        (BookingStep.DATE_TIME, BookingStep.DETAILS),
        (BookingStep.DETAILS, BookingStep.SERVICE_SELECTION),
    ]


def test_rejected_transition_leaves_selection_and_skips_hook(make_session):
    steps = []
    session = make_session(on_step_change=lambda old, new: steps.append((old, new)))

    result = session.advance()

    assert isinstance(result.error, StepGateError)
    assert session.selection == BookingSelection()
    assert steps == []


def test_past_date_rejected_against_session_clock(make_session):
    session = make_session()
    assert not session.select_date(date(2025, 2, 28)).ok
    assert session.select_date(date(2025, 3, 1)).ok


def test_late_slots_for_previous_date_are_discarded(make_session):
    source = DateChangingSource(new_date=date(2025, 3, 11), slots=["14:00", "15:00"])
    session = make_session(source=source)
    source.session = session
    session.select_service(FACIAL)
    session.select_date(date(2025, 3, 10))

    assert session.load_slots() is None

    assert source.calls == [(date(2025, 3, 10), 7), (date(2025, 3, 11), 7)]
    assert session.selection.date == date(2025, 3, 11)
    assert session.slots.query.date == date(2025, 3, 11)
    assert session.slots.slots == ("14:00", "15:00")


def test_slots_for_a_replaced_query_are_rejected(make_session):
    session = make_session()
    session.select_date(date(2025, 3, 10))
    query = session.request_slots()
    session.select_date(date(2025, 3, 11))

    resolution = SlotResolution(query=query, slots=("10:00",))

    assert session.receive_slots(query, resolution) is False
    assert session.slots is None


def test_changing_service_drops_shown_slots(make_session):
    session = make_session()
    session.select_service(FACIAL)
    session.select_date(date(2025, 3, 10))
    session.load_slots()

    session.select_service(WAXING)

    assert session.slots is None
    assert session.request_slots().service_id == 12


def test_entering_contact_keeps_shown_slots(make_session):
    session = make_session()
    session.select_date(date(2025, 3, 10))
    session.load_slots()
    session.fill_contact(JANE)
    assert session.slots is not None


def test_slots_need_a_date(make_session):
    with pytest.raises(NoDateSelectedError):
        make_session().load_slots()


def test_degraded_slots_are_flagged(make_session, unavailable):
    session = make_session(source=FakeAvailabilitySource(unavailable))
    session.select_date(date(2025, 3, 10))
    assert session.load_slots().degraded


def test_booking_failure_preserves_selection(make_session):
    gateway = FakeBookingGateway(BookingAck(success=False, message="This time slot is no longer available"))
    session = make_session(gateway=gateway)
    _ready_to_submit(session)
    before = session.selection

    result = session.submit()

    assert result.error.reason == "This time slot is no longer available"
    assert session.selection == before


def test_incomplete_submission_keeps_selection(make_session):
    gateway = FakeBookingGateway()
    session = make_session(gateway=gateway)
    session.select_service(FACIAL)

    result = session.submit()

    assert result.error.fields[0] == "date"
    assert session.selection.service == FACIAL
    assert gateway.payloads == []


def test_cancel_clears_everything(make_session):
    session = make_session()
    _ready_to_submit(session)

    session.cancel()

    assert session.selection.is_empty
    assert session.slots is None


def test_deep_link_preselects_service(make_session):
    session = make_session()

    outcome = session.seed_from_deep_link("https://salon.example/#booking?service=classic-facial")

    assert outcome.service == FACIAL
    assert outcome.replace_url == "https://salon.example/#booking"
    assert session.selection.service == FACIAL
    assert session.selection.category == "facials"
    assert session.selection.step == BookingStep.SERVICE_SELECTION


def test_deep_link_with_unknown_service_is_ignored(make_session):
    session = make_session()

    outcome = session.seed_from_deep_link("https://salon.example/#booking?service=nope")

    assert outcome.service is None
    assert outcome.replace_url is None
    assert session.selection.is_empty


def test_page_without_deep_link_is_left_alone(make_session):
    outcome = make_session().seed_from_deep_link("https://salon.example/#booking")
    assert outcome.service is None
    assert outcome.replace_url is None


def test_catalog_is_fetched_once(make_session, backend, monkeypatch):
    calls = []
    original = backend.fetch_services
    monkeypatch.setattr(backend, "fetch_services", lambda: calls.append(1) or original())
    session = make_session()

    session.services()
    session.find_service(7)
    session.find_service_by_slug("full-leg-waxing")

    assert len(calls) == 1


def test_catalog_fetch_does_not_block_transitions(make_session, backend, monkeypatch):
    session = make_session()
    original = backend.fetch_services

    def slow_fetch():
        worker = threading.Thread(target=session.select_category, args=("facials",))
        worker.start()
        worker.join(timeout=2)
        return original()

    monkeypatch.setattr(backend, "fetch_services", slow_fetch)

    session.services()

    assert session.selection.category == "facials"


class BlockingBookingGateway(FakeBookingGateway):
    """Holds create_booking until `release` is set."""

    def __init__(self) -> None:
        super().__init__()
        self.entered = threading.Event()
        self.release = threading.Event()

    def create_booking(self, payload):
        self.entered.set()
        self.release.wait(timeout=5)
        return super().create_booking(payload)


def _submit_in_background(session):
    results = []
    worker = threading.Thread(target=lambda: results.append(session.submit()))
    worker.start()
    return worker, results


def test_concurrent_submit_creates_one_booking(make_session):
    gateway = BlockingBookingGateway()
    session = make_session(gateway=gateway)
    _ready_to_submit(session)

    worker, results = _submit_in_background(session)
    assert gateway.entered.wait(timeout=5)
    second = session.submit()
    gateway.release.set()
    worker.join(timeout=5)

    assert second.error.reason == SUBMISSION_IN_PROGRESS
    assert not second.error.transport
    assert results[0].ok
    assert len(gateway.payloads) == 1
    assert session.selection.is_empty


def test_changes_made_during_submit_are_kept(make_session):
    gateway = BlockingBookingGateway()
    session = make_session(gateway=gateway)
    _ready_to_submit(session)

    worker, results = _submit_in_background(session)
    assert gateway.entered.wait(timeout=5)
    session.retreat()
    session.select_time("15:00")
    gateway.release.set()
    worker.join(timeout=5)

    assert results[0].ok
    assert gateway.payloads[0].time == "14:00"
    assert session.selection.time == "15:00"
    assert session.selection.step == BookingStep.DATE_TIME

    assert session.submit().ok
    assert len(gateway.payloads) == 2
