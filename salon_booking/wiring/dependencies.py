from functools import lru_cache
import logging
import uuid

from salon_booking.core.config import settings
from salon_booking.application.ports.auth import AuthPort
from salon_booking.application.ports.availability import AvailabilitySourcePort
from salon_booking.application.ports.booking_gateway import BookingGatewayPort
from salon_booking.application.ports.service_catalog import ServiceCatalogPort
from salon_booking.application.use_cases.admin_session import AdminSessionUseCase
from salon_booking.application.use_cases.availability import AvailabilityResolver
from salon_booking.application.use_cases.booking import BookingSubmitter
from salon_booking.application.use_cases.booking_session import BookingSession, StepChangeHook
from salon_booking.application.utils.clock import business_clock
from salon_booking.domain.entities.auth_session import AuthSession
from salon_booking.infrastructure.mock.mock_salon import MockSalonBackend
from salon_booking.infrastructure.salon_api.auth import HttpAuthGateway
from salon_booking.infrastructure.salon_api.availability import HttpAvailabilitySource
from salon_booking.infrastructure.salon_api.bookings import HttpBookingGateway
from salon_booking.infrastructure.salon_api.catalog import HttpServiceCatalog
from salon_booking.infrastructure.salon_api.client import SalonApiClient
from salon_booking.infrastructure.store.memory_store import MemoryBookingSessionStore


logger = logging.getLogger(__name__)

_session_store: MemoryBookingSessionStore | None = None


def _use_mock_backend() -> bool:
    if settings.SALON_API_BASE_URL:
        return False
    if settings.ENV.lower() in {"dev", "local"}:
        return True
    raise ValueError("SALON_API_BASE_URL is required outside dev/local.")


@lru_cache
def get_mock_backend() -> MockSalonBackend:
    logger.info("Using MockSalonBackend (SALON_API_BASE_URL missing, ENV=%s)", settings.ENV)
    return MockSalonBackend(
        open_hour=settings.FALLBACK_OPEN_HOUR,
        last_slot_hour=settings.FALLBACK_LAST_SLOT_HOUR,
    )


@lru_cache
def get_salon_api_client() -> SalonApiClient:
    return SalonApiClient(
        base_url=settings.SALON_API_BASE_URL or "",
        timeout=settings.SALON_API_TIMEOUT_SECONDS,
    )


def get_service_catalog() -> ServiceCatalogPort:
    if _use_mock_backend():
        return get_mock_backend()
    return HttpServiceCatalog(get_salon_api_client())


def get_availability_source() -> AvailabilitySourcePort:
    if _use_mock_backend():
        return get_mock_backend()
    return HttpAvailabilitySource(get_salon_api_client())


def get_booking_gateway() -> BookingGatewayPort:
    if _use_mock_backend():
        return get_mock_backend()
    return HttpBookingGateway(get_salon_api_client())


def get_auth() -> AuthPort:
    if _use_mock_backend():
        return get_mock_backend()
    return HttpAuthGateway(get_salon_api_client())


def get_session_store() -> MemoryBookingSessionStore:
    global _session_store
    if _session_store is None:
        _session_store = MemoryBookingSessionStore()
    return _session_store


def get_admin_session_use_case() -> AdminSessionUseCase:
    return AdminSessionUseCase(auth=get_auth(), login_path=settings.ADMIN_LOGIN_PATH)


def build_availability_resolver() -> AvailabilityResolver:
    return AvailabilityResolver(
        source=get_availability_source(),
        clock=business_clock(settings.BUSINESS_TIMEZONE),
        retry_attempts=settings.AVAILABILITY_RETRY_ATTEMPTS,
        retry_delay_seconds=settings.AVAILABILITY_RETRY_DELAY_SECONDS,
        open_hour=settings.FALLBACK_OPEN_HOUR,
        last_slot_hour=settings.FALLBACK_LAST_SLOT_HOUR,
        thinning_enabled=settings.FALLBACK_THINNING_ENABLED,
        drop_rate=settings.FALLBACK_DROP_RATE,
    )


def build_booking_session(
    language: str | None = None,
    auth: AuthSession | None = None,
    on_step_change: StepChangeHook | None = None,
) -> BookingSession:
    """New booking session with its own selection and availability cache."""
    return BookingSession(
        session_id=uuid.uuid4().hex,
        catalog=get_service_catalog(),
        resolver=build_availability_resolver(),
        submitter=BookingSubmitter(gateway=get_booking_gateway()),
        clock=business_clock(settings.BUSINESS_TIMEZONE),
        language=language or settings.DEFAULT_LANGUAGE,
        auth=auth,
        on_step_change=on_step_change,
        booking_anchor=settings.BOOKING_ANCHOR,
    )
