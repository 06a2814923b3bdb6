from __future__ import annotations

import logging

from salon_booking.application.ports.auth import AuthPort
from salon_booking.domain.entities.auth_session import AuthSession, LogoutResult


class AdminSessionUseCase:
    def __init__(self, auth: AuthPort, login_path: str = "/admin/login") -> None:
        self._auth = auth
        self._login_path = login_path
        self._logger = logging.getLogger(__name__)

    def current_session(self) -> AuthSession:
        """Current admin session; lookup failures count as signed out."""
        try:
            return self._auth.current_session()
        except Exception as e:
            self._logger.error("Failed to fetch current user", extra={"reason": str(e)})
            return AuthSession()

    def logout(self, redirect_to: str | None = None) -> LogoutResult:
        target = redirect_to or self._login_path
        result = self._auth.logout(target)
        if result.success and not result.redirect_target:
            return LogoutResult(success=True, redirect_target=target)
        return result
