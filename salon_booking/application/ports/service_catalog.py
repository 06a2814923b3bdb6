from __future__ import annotations

from abc import ABC, abstractmethod

from salon_booking.domain.entities.service_catalog import Service, ServiceCategory


class ServiceCatalogPort(ABC):
    @abstractmethod
    def fetch_services(self) -> list[Service]:
        """Return every bookable service."""
        raise NotImplementedError

    @abstractmethod
    def fetch_service_groups(self) -> list[ServiceCategory]:
        """Return the service categories in display order."""
        raise NotImplementedError
