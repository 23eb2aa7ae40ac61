"""
Exception types raised by dateformat.
"""

from __future__ import annotations


class DateFormatError(Exception):
    """Base class for all dateformat errors."""


class UnknownLanguage(DateFormatError, LookupError):
    """Raised when a word table is requested for an unregistered language."""

    def __init__(self, language: str):
        self.language = language
        super().__init__(f"No word table registered for language: {language!r}")


class InvalidWordTable(DateFormatError, ValueError):
    """Raised when a word table is incomplete or malformed."""
