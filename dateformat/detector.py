"""
OS language detection for dateformat.

Detects the preferred date language from environment variables:
- LANGUAGE
- LC_ALL
- LC_TIME
- LANG
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterable

from dateformat.translation import DEFAULT_LANGUAGE

# Checked in priority order
LOCALE_ENV_VARS = ["LANGUAGE", "LC_ALL", "LC_TIME", "LANG"]


def _locale_candidates(locale_string: str) -> list[str]:
    """
    Turn a locale string into language tags to try, most specific first.

    Handles formats like:
    - hu_HU.UTF-8
    - en-GB
    - fr.UTF-8
    - sr_RS@latin (with modifier)
    - C / POSIX (mapped to English)

    Args:
        locale_string: Raw locale string from environment

    Returns:
        Lowercase candidate tags, e.g. ["hu_hu", "hu"]
    """
    locale_lower = locale_string.lower().strip()
    if not locale_lower:
        return []
    if locale_lower in ("c", "posix"):
        return [DEFAULT_LANGUAGE]

    locale_lower = locale_lower.replace("-", "_")

    # Remove encoding and @modifier suffixes
    locale_lower = re.sub(r"\.[a-z0-9_-]+(@[a-z]+)?$", "", locale_lower)
    locale_lower = re.sub(r"@[a-z]+$", "", locale_lower)

    candidates = [locale_lower]
    if "_" in locale_lower:
        candidates.append(locale_lower.split("_")[0])
    return candidates


def match_language(locale_string: str, supported: Iterable[str]) -> str | None:
    """
    Match a locale string against supported language tags.

    Args:
        locale_string: Raw locale string (e.g., 'hu_HU.UTF-8')
        supported: Available language tags

    Returns:
        The supported tag as spelled by the caller, or None
    """
    by_lower = {tag.lower().replace("-", "_"): tag for tag in supported}
    for candidate in _locale_candidates(locale_string):
        if candidate in by_lower:
            return by_lower[candidate]
    return None


def detect_os_language(supported: Iterable[str]) -> str | None:
    """
    Detect the OS language among the supported tags.

    LANGUAGE may hold several ':'-separated entries; the first supported
    one wins.

    Args:
        supported: Available language tags

    Returns:
        Detected language tag, or None when nothing matches

    Examples:
        With LANG=hu_HU.UTF-8 and 'hu' supported: returns 'hu'
        With LC_ALL=fr_FR and 'fr' unsupported: returns None
    """
    supported = list(supported)

    for var in LOCALE_ENV_VARS:
        value = os.environ.get(var, "")
        if not value:
            continue

        parts = value.split(":") if var == "LANGUAGE" else [value]
        for part in parts:
            matched = match_language(part, supported)
            if matched:
                return matched

    return None


def get_os_locale_info(supported: Iterable[str]) -> dict[str, str | None]:
    """
    Get the locale environment for debugging.

    Returns:
        Dictionary with every relevant locale variable plus the detected language
    """
    info: dict[str, str | None] = {var: os.environ.get(var) for var in LOCALE_ENV_VARS}
    info["detected_language"] = detect_os_language(supported)
    return info
