from __future__ import annotations

import threading

from salon_booking.application.ports.session_store import BookingSessionStorePort
from salon_booking.application.use_cases.booking_session import BookingSession


class MemoryBookingSessionStore(BookingSessionStorePort):
    def __init__(self, max_sessions: int = 1000) -> None:
        self._sessions: dict[str, BookingSession] = {}
        self._max_sessions = max_sessions
        self._lock = threading.Lock()

    def put(self, session: BookingSession) -> None:
        with self._lock:
            self._sessions.pop(session.session_id, None)
            self._sessions[session.session_id] = session
            if len(self._sessions) > self._max_sessions:
                # Dicts keep insertion order; drop the oldest session.
                oldest = next(iter(self._sessions))
                del self._sessions[oldest]

    def get(self, session_id: str) -> BookingSession | None:
        with self._lock:
            return self._sessions.get(session_id)

    def discard(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)
