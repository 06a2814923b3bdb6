from __future__ import annotations

from salon_booking.domain.entities.service_catalog import Service, ServiceCategory

SERVICE_GROUPS: list[ServiceCategory] = [
    ServiceCategory(
        id=1,
        slug="facials",
        name={"en": "Facials", "de": "Gesichtsbehandlungen", "tr": "Yüz Bakımı", "ar": "العناية بالوجه"},
        description={"en": "Cleansing and care treatments for every skin type."},
    ),
    ServiceCategory(
        id=2,
        slug="hair-removal",
        name={"en": "Hair Removal", "de": "Haarentfernung", "tr": "Epilasyon"},
        description={"en": "Waxing and sugaring."},
    ),
    ServiceCategory(
        id=3,
        slug="lashes-brows",
        name={"en": "Lashes & Brows", "de": "Wimpern & Augenbrauen"},
        description={"en": "Lamination, tinting and shaping."},
    ),
]

SERVICES: list[Service] = [
    Service(
        id=7,
        slug="classic-facial",
        category="facials",
        name={"en": "Classic Facial", "de": "Klassische Gesichtsbehandlung"},
        description={"en": "Deep cleansing, peeling and mask."},
        duration=60,
        price=80,
    ),
    Service(
        id=8,
        slug="hydra-facial",
        category="facials",
        name={"en": "Hydra Facial", "de": "Hydra Facial"},
        description={"en": "Hydrating treatment with serum infusion."},
        duration=75,
        price=120,
    ),
    Service(
        id=12,
        slug="full-leg-waxing",
        category="hair-removal",
        name={"en": "Full Leg Waxing", "de": "Beine komplett Waxing"},
        description={"en": "Warm wax, full legs."},
        duration=45,
        price=55,
    ),
    Service(
        id=15,
        slug="lash-lamination",
        category="lashes-brows",
        name={"en": "Lash Lamination + Tint", "de": "Wimpernlifting + Färben"},
        description={"en": "Lift and tint for natural lashes."},
        duration=50,
        price=65,
    ),
    Service(
        id=16,
        slug="brow-shaping",
        category="lashes-brows",
        name={"en": "Brow Shaping", "de": "Augenbrauen zupfen"},
        description={"en": "Shaping with tweezers and wax."},
        duration=20,
        price=25,
    ),
]
