from __future__ import annotations

import logging
from typing import Any

import httpx


class SalonApiClient:
    """Thin httpx wrapper around the salon backend's JSON API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)
        self._logger = logging.getLogger(__name__)

    def get(self, path: str, params: dict[str, Any] | None = None) -> httpx.Response:
        resp = self._client.get(path, params=params)
        self._log_failure("GET", path, resp)
        return resp

    def post(self, path: str, payload: dict[str, Any] | None = None) -> httpx.Response:
        resp = self._client.post(path, json=payload)
        self._log_failure("POST", path, resp)
        return resp

    def close(self) -> None:
        self._client.close()

    def _log_failure(self, method: str, path: str, resp: httpx.Response) -> None:
        if resp.status_code < 400:
            return
        try:
            error_message = resp.json().get("message")
        except Exception:
            error_message = resp.text[:200]
        self._logger.error(
            "Salon API request failed",
            extra={
                "method": method,
                "path": path,
                "status": resp.status_code,
                "reason": error_message,
            },
        )
