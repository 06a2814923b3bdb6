from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ServiceCategory:
    id: int
    slug: str  # stable key used in URLs
    name: dict[str, str] = field(default_factory=dict)  # language code -> text
    description: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Service:
    id: int
    slug: str
    category: str  # ServiceCategory.slug
    name: dict[str, str] = field(default_factory=dict)
    description: dict[str, str] = field(default_factory=dict)
    duration: int = 60  # minutes
    price: float = 0
    image_url: str | None = None
