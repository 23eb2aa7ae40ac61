"""
Word table registry for dateformat.

Provides:
- WordTable, the per-language month/day names, ordinal suffixes and
  am/pm markers used by the locale-dependent tokens
- TranslationRegistry, mapping language tags to word tables
- The built-in English table
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from dateformat.exceptions import InvalidWordTable, UnknownLanguage

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"

# Sequence fields and the exact number of entries each must hold
SEQUENCE_FIELDS: dict[str, int] = {
    "month_names": 12,
    "month_names_short": 12,
    "day_names": 7,
    "day_names_short": 7,
    "ordinals": 4,
}
MARKER_FIELDS = ("am", "pm")


def _is_string_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value)


def _plain(value: Any) -> Any:
    return list(value) if isinstance(value, tuple) else value


class WordTable:
    """
    Constant word data for one language.

    Day sequences start on Sunday. The four ordinal suffixes apply to numbers
    ending in 1, 2 and 3, and to everything else, in that order.
    """

    __slots__ = (
        "month_names",
        "month_names_short",
        "day_names",
        "day_names_short",
        "ordinals",
        "am",
        "pm",
    )

    def __init__(
        self,
        month_names: list[str],
        month_names_short: list[str],
        day_names: list[str],
        day_names_short: list[str],
        ordinals: list[str],
        am: str,
        pm: str,
    ):
        values = {
            "month_names": month_names,
            "month_names_short": month_names_short,
            "day_names": day_names,
            "day_names_short": day_names_short,
            "ordinals": ordinals,
        }
        for name, expected in SEQUENCE_FIELDS.items():
            value = values[name]
            if not _is_string_sequence(value):
                raise InvalidWordTable(f"'{name}' must be a list of strings")
            if len(value) != expected:
                raise InvalidWordTable(
                    f"'{name}' must have {expected} entries, got {len(value)}"
                )
            object.__setattr__(self, name, tuple(value))

        for name, value in (("am", am), ("pm", pm)):
            if not isinstance(value, str):
                raise InvalidWordTable(f"'{name}' must be a string")
            object.__setattr__(self, name, value)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("WordTable is immutable")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> WordTable:
        """
        Build a word table from a mapping with one key per field.

        Args:
            data: Mapping holding every word table field

        Raises:
            InvalidWordTable: If a field is missing or malformed
        """
        if not isinstance(data, Mapping):
            raise InvalidWordTable(
                f"Word table must be a mapping, got {type(data).__name__}"
            )
        required = list(SEQUENCE_FIELDS) + list(MARKER_FIELDS)
        missing = [name for name in required if name not in data]
        if missing:
            raise InvalidWordTable(f"Word table is missing fields: {', '.join(missing)}")
        return cls(**{name: data[name] for name in required})

    def to_dict(self) -> dict[str, Any]:
        return {name: _plain(getattr(self, name)) for name in self.__slots__}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WordTable):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash(tuple(getattr(self, name) for name in self.__slots__))

    def __repr__(self) -> str:
        return f"WordTable(month_names={self.month_names[:2]}..., am={self.am!r}, pm={self.pm!r})"


ENGLISH = WordTable(
    month_names=[
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ],
    month_names_short=[
        "Jan", "Feb", "Mar", "Apr", "May", "Jun",
        "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
    ],
    day_names=["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"],
    day_names_short=["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"],
    ordinals=["st", "nd", "rd", "th"],
    am="am",
    pm="pm",
)


class TranslationRegistry:
    """
    Maps language tags to word tables.

    English is always registered when the registry is created. Registration
    overwrites silently; tags are not validated.
    """

    def __init__(self) -> None:
        self._tables: dict[str, WordTable] = {DEFAULT_LANGUAGE: ENGLISH}

    def register(self, language: str, table: WordTable | Mapping[str, Any]) -> None:
        """
        Store the word table for a language, replacing any previous one.

        Args:
            language: Language tag (e.g., 'hu')
            table: WordTable or mapping with every word table field

        Raises:
            InvalidWordTable: If a mapping is incomplete or malformed
        """
        if not isinstance(table, WordTable):
            table = WordTable.from_mapping(table)
        replaced = language in self._tables
        self._tables[language] = table
        logger.debug(f"{'Replaced' if replaced else 'Registered'} word table for '{language}'")

    def unregister(self, language: str) -> None:
        """
        Remove a language.

        Raises:
            UnknownLanguage: If the language is not registered
        """
        if language not in self._tables:
            raise UnknownLanguage(language)
        del self._tables[language]
        logger.debug(f"Unregistered word table for '{language}'")

    def lookup(self, language: str) -> WordTable:
        """
        Get the word table for a language.

        Raises:
            UnknownLanguage: If the language was never registered
        """
        try:
            return self._tables[language]
        except KeyError:
            raise UnknownLanguage(language) from None

    def languages(self) -> list[str]:
        """Registered language tags, sorted."""
        return sorted(self._tables)

    def __contains__(self, language: object) -> bool:
        return language in self._tables

    def __iter__(self) -> Iterator[str]:
        return iter(self.languages())

    def __len__(self) -> int:
        return len(self._tables)
