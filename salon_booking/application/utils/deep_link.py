from __future__ import annotations

from urllib.parse import parse_qs, urlsplit, urlunsplit

SERVICE_PARAM = "service"


def extract_service_slug(url: str) -> str | None:
    """
    Read `service=<slug>` from the fragment of a link such as
    `https://salon.example/#booking?service=classic-facial`.
    """
    fragment = urlsplit(url).fragment
    if "?" not in fragment:
        return None
    _, query = fragment.split("?", 1)
    values = parse_qs(query).get(SERVICE_PARAM)
    if not values or not values[0].strip():
        return None
    return values[0].strip()


def strip_service_param(url: str, anchor: str = "booking") -> str:
    """Return the URL with its fragment replaced by the bare booking anchor."""
    parts = urlsplit(url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, parts.query, anchor))
