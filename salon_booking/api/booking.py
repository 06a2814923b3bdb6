from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from salon_booking.api.schemas import (
    CatalogResponseSchema,
    CategoryRequestSchema,
    ContactRequestSchema,
    CreateSessionRequestSchema,
    DateRequestSchema,
    JumpRequestSchema,
    ServiceGroupSchema,
    ServiceRequestSchema,
    ServiceSchema,
    SelectionSchema,
    SessionResponseSchema,
    SlotsResponseSchema,
    SlotsSchema,
    SubmitResponseSchema,
    TimeRequestSchema,
)
from salon_booking.application.exceptions import (
    BookingError,
    BookingFlowError,
    CatalogUnavailable,
    IncompleteBookingError,
    StepGateError,
)
from salon_booking.application.use_cases.booking_session import BookingSession
from salon_booking.application.use_cases.selection import TransitionResult
from salon_booking.domain.entities.booking_selection import BookingStep, ContactDetails
from salon_booking.wiring.dependencies import (
    build_booking_session,
    get_admin_session_use_case,
    get_session_store,
)


router = APIRouter(prefix="/booking")
logger = logging.getLogger(__name__)


def get_booking_session(session_id: str) -> BookingSession:
    session = get_session_store().get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Booking session not found")
    return session


def _snapshot(session: BookingSession, replace_url: str | None = None) -> SessionResponseSchema:
    return SessionResponseSchema(
        session_id=session.session_id,
        selection=SelectionSchema.from_entity(session.selection, session.language),
        slots=SlotsSchema.from_entity(session.slots) if session.slots else None,
        replace_url=replace_url,
    )


def _flow_http_error(error: BookingFlowError) -> HTTPException:
    if isinstance(error, StepGateError):
        return HTTPException(status_code=409, detail=str(error))
    if isinstance(error, IncompleteBookingError):
        return HTTPException(
            status_code=422,
            detail={"message": str(error), "fields": error.fields},
        )
    return HTTPException(status_code=400, detail=str(error))


def _respond(session: BookingSession, result: TransitionResult) -> SessionResponseSchema:
    if result.error is not None:
        raise _flow_http_error(result.error)
    return _snapshot(session)


@router.post("/sessions", response_model=SessionResponseSchema, status_code=201)
def create_session(req: CreateSessionRequestSchema) -> SessionResponseSchema:
    auth = get_admin_session_use_case().current_session()
    session = build_booking_session(language=req.language, auth=auth)
    get_session_store().put(session)
    logger.info("Booking session created", extra={"session_id": session.session_id})

    replace_url = None
    if req.url:
        try:
            replace_url = session.seed_from_deep_link(req.url).replace_url
        except CatalogUnavailable as e:
            logger.warning("Deep link ignored, catalog unavailable", extra={"reason": str(e)})
    return _snapshot(session, replace_url=replace_url)


@router.get("/sessions/{session_id}", response_model=SessionResponseSchema)
def get_session(session: BookingSession = Depends(get_booking_session)) -> SessionResponseSchema:
    return _snapshot(session)


@router.get("/sessions/{session_id}/catalog", response_model=CatalogResponseSchema)
def get_catalog(
    category: str | None = None,
    session: BookingSession = Depends(get_booking_session),
) -> CatalogResponseSchema:
    try:
        groups = session.service_groups()
        services = session.services_in_category(category)
    except CatalogUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    return CatalogResponseSchema(
        groups=[ServiceGroupSchema.from_entity(g, session.language) for g in groups],
        services=[ServiceSchema.from_entity(s, session.language) for s in services],
    )


@router.post("/sessions/{session_id}/category", response_model=SessionResponseSchema)
def select_category(
    req: CategoryRequestSchema,
    session: BookingSession = Depends(get_booking_session),
) -> SessionResponseSchema:
    return _respond(session, session.select_category(req.slug))


@router.post("/sessions/{session_id}/service", response_model=SessionResponseSchema)
def select_service(
    req: ServiceRequestSchema,
    session: BookingSession = Depends(get_booking_session),
) -> SessionResponseSchema:
    try:
        service = session.find_service(req.service_id)
    except CatalogUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    if service is None:
        raise HTTPException(status_code=404, detail="Service not found")
    return _respond(session, session.select_service(service))


@router.post("/sessions/{session_id}/date", response_model=SessionResponseSchema)
def select_date(
    req: DateRequestSchema,
    session: BookingSession = Depends(get_booking_session),
) -> SessionResponseSchema:
    return _respond(session, session.select_date(req.date))


@router.get("/sessions/{session_id}/slots", response_model=SlotsResponseSchema)
def load_slots(session: BookingSession = Depends(get_booking_session)) -> SlotsResponseSchema:
    try:
        resolution = session.load_slots()
    except BookingFlowError as e:
        raise _flow_http_error(e)
    if resolution is None:
        return SlotsResponseSchema(applied=False)
    return SlotsResponseSchema(applied=True, slots=SlotsSchema.from_entity(resolution))


@router.post("/sessions/{session_id}/time", response_model=SessionResponseSchema)
def select_time(
    req: TimeRequestSchema,
    session: BookingSession = Depends(get_booking_session),
) -> SessionResponseSchema:
    return _respond(session, session.select_time(req.time))


@router.post("/sessions/{session_id}/contact", response_model=SessionResponseSchema)
def fill_contact(
    req: ContactRequestSchema,
    session: BookingSession = Depends(get_booking_session),
) -> SessionResponseSchema:
    contact = ContactDetails(name=req.name, email=req.email, phone=req.phone)
    return _respond(session, session.fill_contact(contact))


@router.post("/sessions/{session_id}/advance", response_model=SessionResponseSchema)
def advance(session: BookingSession = Depends(get_booking_session)) -> SessionResponseSchema:
    return _respond(session, session.advance())


@router.post("/sessions/{session_id}/retreat", response_model=SessionResponseSchema)
def retreat(session: BookingSession = Depends(get_booking_session)) -> SessionResponseSchema:
    return _respond(session, session.retreat())


@router.post("/sessions/{session_id}/step", response_model=SessionResponseSchema)
def jump_to_step(
    req: JumpRequestSchema,
    session: BookingSession = Depends(get_booking_session),
) -> SessionResponseSchema:
    return _respond(session, session.jump_to(BookingStep(req.step)))


@router.post("/sessions/{session_id}/cancel", response_model=SessionResponseSchema)
def cancel(session: BookingSession = Depends(get_booking_session)) -> SessionResponseSchema:
    return _respond(session, session.cancel())


@router.post("/sessions/{session_id}/submit", response_model=SubmitResponseSchema, status_code=201)
def submit(session: BookingSession = Depends(get_booking_session)) -> SubmitResponseSchema:
    result = session.submit()
    if isinstance(result.error, IncompleteBookingError):
        raise _flow_http_error(result.error)
    if isinstance(result.error, BookingError):
        code = 502 if result.error.transport else 409
        raise HTTPException(status_code=code, detail={"reason": result.error.reason, "retryable": True})

    confirmation = result.confirmation
    return SubmitResponseSchema(
        confirmation_id=confirmation.confirmation_id,
        message=confirmation.message,
        booking=confirmation.payload,
        selection=SelectionSchema.from_entity(session.selection, session.language),
    )
