"""
Environment configuration for dateformat.

Resolves the default date language and optional extra word tables from the
process environment:
- DATEFORMAT_LANGUAGE names the default language
- DATEFORMAT_LOCALES_DIR names a directory of extra YAML word tables

Nothing is applied at import time; the process default stays English until
configure_from_environment() is called.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from dateformat.detector import get_os_locale_info
from dateformat.exceptions import UnknownLanguage
from dateformat.formatter import DateFormatter, get_formatter
from dateformat.loader import available_locales, load_translation, load_translations
from dateformat.translation import DEFAULT_LANGUAGE

logger = logging.getLogger(__name__)

ENV_LANGUAGE = "DATEFORMAT_LANGUAGE"
ENV_LOCALES_DIR = "DATEFORMAT_LOCALES_DIR"


class FormatterConfig:
    """
    Resolves formatter settings from the environment.

    Language resolution order:
    1. DATEFORMAT_LANGUAGE environment variable
    2. OS-detected language (only when detect_os is enabled)
    3. Default (English)

    A language counts as available when it is registered or has a bundled
    word table file.
    """

    def __init__(self, formatter: DateFormatter | None = None, detect_os: bool = False):
        """
        Initialize the configuration.

        Args:
            formatter: Formatter to configure (defaults to the global one)
            detect_os: Consult the OS locale variables
        """
        self.formatter = formatter if formatter is not None else get_formatter()
        self.detect_os = detect_os

    @property
    def locales_dir(self) -> Path | None:
        value = os.environ.get(ENV_LOCALES_DIR, "").strip()
        return Path(value).expanduser() if value else None

    def available_languages(self) -> set[str]:
        languages = set(self.formatter.registry.languages())
        languages.update(available_locales())
        return languages

    def load_extra_locales(self) -> list[str]:
        """
        Load word tables from DATEFORMAT_LOCALES_DIR, if set.

        Returns:
            Tags of the languages that were loaded
        """
        locales_dir = self.locales_dir
        if locales_dir is None:
            return []
        if not locales_dir.is_dir():
            logger.warning(f"{ENV_LOCALES_DIR} is not a directory: {locales_dir}")
            return []
        return load_translations(locales_dir, self.formatter.registry)

    def get_language(self) -> str:
        """
        Get the configured default language.

        Returns:
            Language tag
        """
        return self.get_language_info()["language"]

    def get_language_info(self) -> dict[str, Any]:
        """
        Get detailed language configuration info.

        Returns:
            Dictionary with the effective language and where it came from
        """
        available = self.available_languages()

        env_lang = os.environ.get(ENV_LANGUAGE, "").strip()
        if env_lang and env_lang not in available:
            logger.warning(f"{ENV_LANGUAGE}={env_lang!r} has no word table, ignoring")
        os_locale = get_os_locale_info(available) if self.detect_os else None
        detected_lang = os_locale["detected_language"] if os_locale else None

        if env_lang in available:
            effective_lang = env_lang
            source = "environment"
        elif detected_lang:
            effective_lang = detected_lang
            source = "auto-detected"
        else:
            effective_lang = DEFAULT_LANGUAGE
            source = "default"

        return {
            "language": effective_lang,
            "source": source,
            "registered": effective_lang in self.formatter.registry,
            "env_override": env_lang or None,
            "detected_language": detected_lang,
            "os_locale": os_locale,
            "locales_dir": str(self.locales_dir) if self.locales_dir else None,
        }

    def apply(self) -> str:
        """
        Load extra word tables and set the formatter's default language.

        Bundled word tables are loaded on demand for the chosen language.

        Returns:
            The language now in effect
        """
        self.load_extra_locales()
        language = self.get_language()

        if language not in self.formatter.registry:
            try:
                load_translation(language, registry=self.formatter.registry)
            except UnknownLanguage:
                logger.warning(f"No word table for '{language}', keeping '{DEFAULT_LANGUAGE}'")
                language = DEFAULT_LANGUAGE

        self.formatter.default_language = language
        return language


def configure_from_environment(detect_os: bool = False) -> str:
    """
    Configure the global formatter from the environment.

    Args:
        detect_os: Also consult the OS locale variables

    Returns:
        The default language now in effect
    """
    return FormatterConfig(detect_os=detect_os).apply()
