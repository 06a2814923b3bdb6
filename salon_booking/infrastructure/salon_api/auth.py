from __future__ import annotations

import logging

import httpx

from salon_booking.application.dto.salon_api import CurrentUserDTO, LogoutResponseDTO
from salon_booking.application.ports.auth import AuthPort
from salon_booking.domain.entities.auth_session import AuthSession, LogoutResult
from salon_booking.infrastructure.salon_api.client import SalonApiClient


class HttpAuthGateway(AuthPort):
    def __init__(self, client: SalonApiClient) -> None:
        self._client = client
        self._logger = logging.getLogger(__name__)

    def current_session(self) -> AuthSession:
        resp = self._client.get("/api/auth/me")
        if resp.status_code in (401, 403):
            return AuthSession()
        resp.raise_for_status()
        return CurrentUserDTO.model_validate(resp.json()).to_session()

    def logout(self, redirect_to: str) -> LogoutResult:
        try:
            resp = self._client.post("/api/auth/logout", {"redirectTo": redirect_to})
            resp.raise_for_status()
            return LogoutResponseDTO.model_validate(resp.json()).to_result()
        except (httpx.HTTPError, ValueError) as e:
            self._logger.error("Logout failed", extra={"reason": str(e)})
            return LogoutResult(success=False)
