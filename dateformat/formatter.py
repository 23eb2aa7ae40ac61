"""
Format interpreter for dateformat.

Renders timestamps through PHP-style format strings:
- Every unescaped token character is replaced by its computed fragment
- A backslash makes the following character literal
- Characters that are not tokens are copied verbatim
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from dateformat.timestamp import Timestamp
from dateformat.tokens import ESCAPE_CHAR, FormatContext, TokenTable
from dateformat.translation import DEFAULT_LANGUAGE, TranslationRegistry, WordTable

logger = logging.getLogger(__name__)

# An optional escaping backslash followed by any single character. A trailing
# backslash has nothing to escape and matches as a plain character.
_SCAN_PATTERN = re.compile(r"(\\?)(.)", re.DOTALL)


class DateFormatter:
    """
    Formats timestamps with a word table registry and a token table.

    Each instance owns its registry, tokens and default language, so
    independent configurations can live side by side. The module-level
    helpers share one global instance.
    """

    def __init__(
        self,
        registry: TranslationRegistry | None = None,
        tokens: TokenTable | None = None,
        default_language: str = DEFAULT_LANGUAGE,
    ):
        """
        Initialize the formatter.

        Args:
            registry: Word tables to use (defaults to a registry with English)
            tokens: Token table to use (defaults to the built-in tokens)
            default_language: Language used when a call names none
        """
        self.registry = registry if registry is not None else TranslationRegistry()
        self.tokens = tokens if tokens is not None else TokenTable()
        self._default_language = default_language

    @property
    def default_language(self) -> str:
        """Get the default language."""
        return self._default_language

    @default_language.setter
    def default_language(self, value: str) -> None:
        """Set the default language. The tag is only checked when used."""
        logger.debug(f"Default language changed from '{self._default_language}' to '{value}'")
        self._default_language = value

    def resolve_language(self, lang: str | None = None) -> str:
        return lang or self._default_language

    def format(self, timestamp: Any, format_string: str, lang: str | None = None) -> str:
        """
        Format a timestamp.

        Args:
            timestamp: Timestamp, datetime, date, or epoch seconds
            format_string: PHP-style format string
            lang: Language tag (defaults to the default language)

        Returns:
            The formatted string

        Raises:
            UnknownLanguage: If a locale-dependent token is used with a
                language that has no registered word table

        Examples:
            >>> formatter.format(datetime(2005, 1, 1, tzinfo=timezone.utc), "l jS \\o\\f F Y")
            'Saturday 1st of January 2005'
        """
        ts = Timestamp.coerce(timestamp)
        context = FormatContext(self, self.resolve_language(lang))

        def render(match: re.Match[str]) -> str:
            escaped, char = match.groups()
            if not escaped:
                func = self.tokens.get(char)
                if func is not None:
                    return func(ts, context)
            return char

        return _SCAN_PATTERN.sub(render, format_string)

    def escape(self, text: str) -> str:
        """
        Make literal text safe to embed in a format string.

        Every token character and every backslash gets a backslash prefix.

        Args:
            text: Literal text

        Returns:
            Escaped text that formats back to ``text``
        """
        escapable = self.tokens.escapable
        return "".join(ESCAPE_CHAR + char if char in escapable else char for char in text)

    def register_translation(self, language: str, table: WordTable | Mapping[str, Any]) -> None:
        """Register or replace the word table for a language."""
        self.registry.register(language, table)


# Global formatter instance
_formatter: DateFormatter | None = None


def get_formatter() -> DateFormatter:
    """
    Get or create the global formatter instance.

    Returns:
        The global DateFormatter instance
    """
    global _formatter
    if _formatter is None:
        _formatter = DateFormatter()
    return _formatter


def reset_formatter() -> None:
    """Reset the global formatter (mainly for testing)."""
    global _formatter
    _formatter = None


def format_date(timestamp: Any, format_string: str, lang: str | None = None) -> str:
    """Format a timestamp using the global formatter."""
    return get_formatter().format(timestamp, format_string, lang)


def escape(text: str) -> str:
    """Escape literal text using the global formatter's tokens."""
    return get_formatter().escape(text)


def register_translation(language: str, table: WordTable | Mapping[str, Any]) -> None:
    """Register a word table with the global formatter."""
    get_formatter().register_translation(language, table)


def set_default_language(language: str) -> None:
    """Set the global default language."""
    get_formatter().default_language = language


def get_default_language() -> str:
    """Get the global default language."""
    return get_formatter().default_language


def get_registry() -> TranslationRegistry:
    """Get the global formatter's translation registry."""
    return get_formatter().registry
