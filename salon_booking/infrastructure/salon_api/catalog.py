from __future__ import annotations

import logging
from typing import Any

import httpx

from salon_booking.application.dto.salon_api import ServiceDTO, ServiceGroupDTO
from salon_booking.application.exceptions import CatalogUnavailable
from salon_booking.application.ports.service_catalog import ServiceCatalogPort
from salon_booking.domain.entities.service_catalog import Service, ServiceCategory
from salon_booking.infrastructure.salon_api.client import SalonApiClient


class HttpServiceCatalog(ServiceCatalogPort):
    def __init__(self, client: SalonApiClient) -> None:
        self._client = client
        self._logger = logging.getLogger(__name__)

    def fetch_services(self) -> list[Service]:
        items = self._fetch_list("/api/services")
        try:
            return [ServiceDTO.model_validate(item).to_entity() for item in items]
        except ValueError as e:
            raise CatalogUnavailable(f"Invalid service in catalog: {e}") from e

    def fetch_service_groups(self) -> list[ServiceCategory]:
        items = self._fetch_list("/api/service-groups")
        try:
            return [ServiceGroupDTO.model_validate(item).to_entity() for item in items]
        except ValueError as e:
            raise CatalogUnavailable(f"Invalid service group in catalog: {e}") from e

    def _fetch_list(self, path: str) -> list[Any]:
        try:
            resp = self._client.get(path)
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            self._logger.error("Catalog request failed", extra={"path": path, "reason": str(e)})
            raise CatalogUnavailable(f"Could not load {path}") from e
        if not isinstance(data, list):
            raise CatalogUnavailable(f"Expected a JSON list from {path}")
        return data
