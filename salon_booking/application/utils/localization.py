from __future__ import annotations

from collections.abc import Mapping

FALLBACK_LANGUAGE = "en"


def localized_text(values: Mapping[str, str] | None, language: str) -> str:
    """Pick the text for `language`, falling back to English, then to any non-empty value."""
    if not values:
        return ""
    text = values.get(language) or values.get(FALLBACK_LANGUAGE)
    if text:
        return text
    return next((v for v in values.values() if v), "")
