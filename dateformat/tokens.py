"""
Format tokens for dateformat.

Each built-in token is a single character mapped to a computation of
(timestamp, context) -> str. Tokens are grouped the way PHP's date()
documents them:
- Day, week, month and year fields
- Time of day
- Timezone
- Full date/time macros, which re-enter the formatter
"""

from __future__ import annotations

import calendar
import logging
import math
from collections.abc import Callable, Iterator
from datetime import date, timedelta
from enum import Enum
from typing import TYPE_CHECKING

from dateformat.timestamp import Timestamp
from dateformat.translation import WordTable

if TYPE_CHECKING:
    from dateformat.formatter import DateFormatter

logger = logging.getLogger(__name__)

ESCAPE_CHAR = "\\"

# Sub-formats of the composite tokens; neither may contain 'c' or 'r'
ISO_8601_FORMAT = "Y-m-d\\TH:i:sP"
RFC_2822_FORMAT = "D, d M Y H:i:s O"

THURSDAY = 3  # date.weekday() numbering
SECONDS_PER_DAY = 86400


class Token(Enum):
    """Built-in format tokens. LITERAL marks characters copied verbatim."""

    LITERAL = ""

    # Day
    DAY_OF_MONTH = "d"
    DAY_NAME_SHORT = "D"
    DAY_OF_MONTH_UNPADDED = "j"
    DAY_NAME = "l"
    ISO_DAY_OF_WEEK = "N"
    DAY_ORDINAL_SUFFIX = "S"
    DAY_OF_WEEK = "w"
    DAY_OF_YEAR = "z"

    # Week
    ISO_WEEK = "W"
    ISO_WEEK_UNPADDED = "V"
    ISO_WEEK_ORDINAL_SUFFIX = "k"

    # Month
    MONTH_NAME = "F"
    MONTH = "m"
    MONTH_NAME_SHORT = "M"
    MONTH_UNPADDED = "n"
    DAYS_IN_MONTH = "t"

    # Quarter
    QUARTER = "Q"
    QUARTER_ORDINAL_SUFFIX = "q"

    # Year
    LEAP_YEAR = "L"
    ISO_YEAR = "o"
    YEAR = "Y"
    YEAR_SHORT = "y"

    # Time
    MERIDIEM_LOWER = "a"
    MERIDIEM_UPPER = "A"
    SWATCH_BEAT = "B"
    HOUR_12_UNPADDED = "g"
    HOUR_24_UNPADDED = "G"
    HOUR_12 = "h"
    HOUR_24 = "H"
    MINUTE = "i"
    SECOND = "s"
    MICROSECOND = "u"
    MILLISECOND = "v"

    # Timezone
    ZONE_IDENTIFIER = "e"
    DAYLIGHT_SAVING = "I"
    OFFSET = "O"
    OFFSET_COLON = "P"
    ZONE_ABBREVIATION = "T"
    OFFSET_SECONDS = "Z"

    # Full date/time
    ISO_8601 = "c"
    RFC_2822 = "r"
    UNIX_SECONDS = "U"


_TOKENS_BY_CHAR: dict[str, Token] = {token.value: token for token in Token if token.value}


def resolve_token(char: str) -> Token:
    """Map a character to its built-in token, or Token.LITERAL."""
    return _TOKENS_BY_CHAR.get(char, Token.LITERAL)


class FormatContext:
    """
    Per-call state handed to token functions.

    The word table is looked up on first use, so formats without
    locale-dependent tokens never touch the registry.
    """

    def __init__(self, formatter: DateFormatter, language: str):
        self.formatter = formatter
        self.language = language
        self._words: WordTable | None = None

    @property
    def words(self) -> WordTable:
        if self._words is None:
            self._words = self.formatter.registry.lookup(self.language)
        return self._words

    def expand(self, timestamp: Timestamp, format_string: str) -> str:
        """Format a sub-format against the same timestamp and language."""
        return self.formatter.format(timestamp, format_string, self.language)


TokenFunction = Callable[[Timestamp, FormatContext], str]

BUILTIN_FORMATTERS: dict[Token, TokenFunction] = {}


def _builtin(token: Token) -> Callable[[TokenFunction], TokenFunction]:
    def decorator(func: TokenFunction) -> TokenFunction:
        BUILTIN_FORMATTERS[token] = func
        return func

    return decorator


# =============================================================================
# Helpers
# =============================================================================


def ordinal_suffix(number: int, ordinals: tuple[str, ...]) -> str:
    """
    Pick the ordinal suffix for a number.

    11, 12 and 13 always take the generic suffix.

    Examples:
        >>> ordinal_suffix(22, ("st", "nd", "rd", "th"))
        'nd'
        >>> ordinal_suffix(12, ("st", "nd", "rd", "th"))
        'th'
    """
    last_digit = number % 10
    if last_digit == 1 and number != 11:
        return ordinals[0]
    if last_digit == 2 and number != 12:
        return ordinals[1]
    if last_digit == 3 and number != 13:
        return ordinals[2]
    return ordinals[3]


def iso_week(ts: Timestamp) -> tuple[int, int]:
    """
    ISO-8601 week-numbering year and week number of a timestamp.

    The week belongs to the year of its Thursday. Week 1 is the week
    holding the year's first Thursday.

    Returns:
        Tuple of (iso_year, week_number)
    """
    day_nr = (ts.weekday + 6) % 7  # Monday=0 .. Sunday=6
    target = ts.local_date() - timedelta(days=day_nr - 3)
    first_thursday = target
    target = date(target.year, 1, 1)
    if target.weekday() != THURSDAY:
        target += timedelta(days=(THURSDAY - target.weekday()) % 7)
    week = 1 + math.ceil((first_thursday - target).days / 7)
    return first_thursday.year, week


def is_leap_year(year: int) -> bool:
    return year % 400 == 0 or (year % 100 != 0 and year % 4 == 0)


def _hour_12(ts: Timestamp) -> int:
    return ts.hour % 12 or 12


def _quarter(ts: Timestamp) -> int:
    return (ts.month - 1) // 3 + 1


def _format_offset(minutes: int, separator: str) -> str:
    sign = "-" if minutes < 0 else "+"
    hours, mins = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}{separator}{mins:02d}"


# =============================================================================
# Day
# =============================================================================


@_builtin(Token.DAY_OF_MONTH)
def _day_of_month(ts: Timestamp, ctx: FormatContext) -> str:
    return f"{ts.day:02d}"


@_builtin(Token.DAY_NAME_SHORT)
def _day_name_short(ts: Timestamp, ctx: FormatContext) -> str:
    return ctx.words.day_names_short[ts.weekday]


@_builtin(Token.DAY_OF_MONTH_UNPADDED)
def _day_of_month_unpadded(ts: Timestamp, ctx: FormatContext) -> str:
    return str(ts.day)


@_builtin(Token.DAY_NAME)
def _day_name(ts: Timestamp, ctx: FormatContext) -> str:
    return ctx.words.day_names[ts.weekday]


@_builtin(Token.ISO_DAY_OF_WEEK)
def _iso_day_of_week(ts: Timestamp, ctx: FormatContext) -> str:
    return str(ts.weekday or 7)


@_builtin(Token.DAY_ORDINAL_SUFFIX)
def _day_ordinal_suffix(ts: Timestamp, ctx: FormatContext) -> str:
    return ordinal_suffix(ts.day, ctx.words.ordinals)


@_builtin(Token.DAY_OF_WEEK)
def _day_of_week(ts: Timestamp, ctx: FormatContext) -> str:
    return str(ts.weekday)


@_builtin(Token.DAY_OF_YEAR)
def _day_of_year(ts: Timestamp, ctx: FormatContext) -> str:
    return str((ts.local_date() - date(ts.year, 1, 1)).days)


# =============================================================================
# Week
# =============================================================================


@_builtin(Token.ISO_WEEK)
def _iso_week_padded(ts: Timestamp, ctx: FormatContext) -> str:
    return f"{iso_week(ts)[1]:02d}"


@_builtin(Token.ISO_WEEK_UNPADDED)
def _iso_week_unpadded(ts: Timestamp, ctx: FormatContext) -> str:
    return str(iso_week(ts)[1])


@_builtin(Token.ISO_WEEK_ORDINAL_SUFFIX)
def _iso_week_ordinal_suffix(ts: Timestamp, ctx: FormatContext) -> str:
    return ordinal_suffix(iso_week(ts)[1], ctx.words.ordinals)


# =============================================================================
# Month and quarter
# =============================================================================


@_builtin(Token.MONTH_NAME)
def _month_name(ts: Timestamp, ctx: FormatContext) -> str:
    return ctx.words.month_names[ts.month - 1]


@_builtin(Token.MONTH)
def _month(ts: Timestamp, ctx: FormatContext) -> str:
    return f"{ts.month:02d}"


@_builtin(Token.MONTH_NAME_SHORT)
def _month_name_short(ts: Timestamp, ctx: FormatContext) -> str:
    return ctx.words.month_names_short[ts.month - 1]


@_builtin(Token.MONTH_UNPADDED)
def _month_unpadded(ts: Timestamp, ctx: FormatContext) -> str:
    return str(ts.month)


@_builtin(Token.DAYS_IN_MONTH)
def _days_in_month(ts: Timestamp, ctx: FormatContext) -> str:
    return str(calendar.monthrange(ts.year, ts.month)[1])


@_builtin(Token.QUARTER)
def _quarter_number(ts: Timestamp, ctx: FormatContext) -> str:
    return str(_quarter(ts))


@_builtin(Token.QUARTER_ORDINAL_SUFFIX)
def _quarter_ordinal_suffix(ts: Timestamp, ctx: FormatContext) -> str:
    return ordinal_suffix(_quarter(ts), ctx.words.ordinals)


# =============================================================================
# Year
# =============================================================================


@_builtin(Token.LEAP_YEAR)
def _leap_year(ts: Timestamp, ctx: FormatContext) -> str:
    return "1" if is_leap_year(ts.year) else "0"


@_builtin(Token.ISO_YEAR)
def _iso_year(ts: Timestamp, ctx: FormatContext) -> str:
    return str(iso_week(ts)[0])


@_builtin(Token.YEAR)
def _year(ts: Timestamp, ctx: FormatContext) -> str:
    return str(ts.year)


@_builtin(Token.YEAR_SHORT)
def _year_short(ts: Timestamp, ctx: FormatContext) -> str:
    return str(ts.year)[-2:]


# =============================================================================
# Time
# =============================================================================


@_builtin(Token.MERIDIEM_LOWER)
def _meridiem_lower(ts: Timestamp, ctx: FormatContext) -> str:
    return ctx.words.am if ts.hour < 12 else ctx.words.pm


@_builtin(Token.MERIDIEM_UPPER)
def _meridiem_upper(ts: Timestamp, ctx: FormatContext) -> str:
    return (ctx.words.am if ts.hour < 12 else ctx.words.pm).upper()


@_builtin(Token.SWATCH_BEAT)
def _swatch_beat(ts: Timestamp, ctx: FormatContext) -> str:
    # Biel Mean Time is UTC+1
    local_seconds = ts.hour * 3600 + ts.minute * 60 + ts.second
    bmt_seconds = (local_seconds - ts.offset_minutes * 60 + 3600) % SECONDS_PER_DAY
    return str(bmt_seconds * 1000 // SECONDS_PER_DAY)


@_builtin(Token.HOUR_12_UNPADDED)
def _hour_12_unpadded(ts: Timestamp, ctx: FormatContext) -> str:
    return str(_hour_12(ts))


@_builtin(Token.HOUR_24_UNPADDED)
def _hour_24_unpadded(ts: Timestamp, ctx: FormatContext) -> str:
    return str(ts.hour)


@_builtin(Token.HOUR_12)
def _hour_12_padded(ts: Timestamp, ctx: FormatContext) -> str:
    return f"{_hour_12(ts):02d}"


@_builtin(Token.HOUR_24)
def _hour_24(ts: Timestamp, ctx: FormatContext) -> str:
    return f"{ts.hour:02d}"


@_builtin(Token.MINUTE)
def _minute(ts: Timestamp, ctx: FormatContext) -> str:
    return f"{ts.minute:02d}"


@_builtin(Token.SECOND)
def _second(ts: Timestamp, ctx: FormatContext) -> str:
    return f"{ts.second:02d}"


@_builtin(Token.MICROSECOND)
def _microsecond(ts: Timestamp, ctx: FormatContext) -> str:
    return f"{ts.millisecond:03d}000"


@_builtin(Token.MILLISECOND)
def _millisecond(ts: Timestamp, ctx: FormatContext) -> str:
    return f"{ts.millisecond:03d}"


# =============================================================================
# Timezone
# =============================================================================


@_builtin(Token.ZONE_IDENTIFIER)
def _zone_identifier(ts: Timestamp, ctx: FormatContext) -> str:
    return ts.zone_name or ""


@_builtin(Token.DAYLIGHT_SAVING)
def _daylight_saving(ts: Timestamp, ctx: FormatContext) -> str:
    return "1" if ts.offset_minutes != ts.standard_offset_minutes else "0"


@_builtin(Token.OFFSET)
def _offset(ts: Timestamp, ctx: FormatContext) -> str:
    return _format_offset(ts.offset_minutes, "")


@_builtin(Token.OFFSET_COLON)
def _offset_colon(ts: Timestamp, ctx: FormatContext) -> str:
    return _format_offset(ts.offset_minutes, ":")


@_builtin(Token.ZONE_ABBREVIATION)
def _zone_abbreviation(ts: Timestamp, ctx: FormatContext) -> str:
    return ts.zone_abbreviation or ""


@_builtin(Token.OFFSET_SECONDS)
def _offset_seconds(ts: Timestamp, ctx: FormatContext) -> str:
    return str(ts.offset_minutes * 60)


# =============================================================================
# Full date/time
# =============================================================================


@_builtin(Token.ISO_8601)
def _iso_8601(ts: Timestamp, ctx: FormatContext) -> str:
    return ctx.expand(ts, ISO_8601_FORMAT)


@_builtin(Token.RFC_2822)
def _rfc_2822(ts: Timestamp, ctx: FormatContext) -> str:
    return ctx.expand(ts, RFC_2822_FORMAT)


@_builtin(Token.UNIX_SECONDS)
def _unix_seconds(ts: Timestamp, ctx: FormatContext) -> str:
    return str(ts.epoch_ms // 1000)


# =============================================================================
# Token table
# =============================================================================


class TokenTable:
    """
    Maps token characters to token functions.

    Built-in tokens are resolved through the Token enum; characters that
    resolve to Token.LITERAL fall back to the custom tokens, and are copied
    verbatim when none is registered. The set of characters that escape()
    must protect is recomputed after any change.
    """

    def __init__(self, include_builtins: bool = True):
        """
        Initialize the table.

        Args:
            include_builtins: Register the built-in tokens
        """
        self._builtins: dict[Token, TokenFunction] = (
            dict(BUILTIN_FORMATTERS) if include_builtins else {}
        )
        self._custom: dict[str, TokenFunction] = {}
        self._escapable: frozenset[str] | None = None

    def register(self, char: str, func: TokenFunction) -> None:
        """
        Add or replace a token.

        Registering a built-in token character replaces its computation.

        Args:
            char: Single token character
            func: Callable of (timestamp, context) returning the fragment

        Raises:
            ValueError: If char is not a single character, or is the escape character
        """
        if len(char) != 1:
            raise ValueError(f"Token must be a single character, got {char!r}")
        if char == ESCAPE_CHAR:
            raise ValueError("The escape character cannot be a token")

        token = resolve_token(char)
        if token is Token.LITERAL:
            self._custom[char] = func
        else:
            self._builtins[token] = func
        self._escapable = None
        logger.debug(f"Registered format token '{char}'")

    def unregister(self, char: str) -> None:
        """Remove a token; unknown characters are ignored."""
        token = resolve_token(char)
        if token is Token.LITERAL:
            removed = self._custom.pop(char, None)
        else:
            removed = self._builtins.pop(token, None)
        if removed is not None:
            self._escapable = None
            logger.debug(f"Unregistered format token '{char}'")

    def get(self, char: str) -> TokenFunction | None:
        """Token function for a character, or None if it is copied verbatim."""
        token = resolve_token(char)
        if token is Token.LITERAL:
            return self._custom.get(char)
        return self._builtins.get(token)

    @property
    def escapable(self) -> frozenset[str]:
        """Characters that need a backslash to be read literally."""
        if self._escapable is None:
            self._escapable = frozenset(self) | {ESCAPE_CHAR}
        return self._escapable

    def __contains__(self, char: object) -> bool:
        return isinstance(char, str) and self.get(char) is not None

    def __iter__(self) -> Iterator[str]:
        yield from (token.value for token in self._builtins)
        yield from self._custom

    def __len__(self) -> int:
        return len(self._builtins) + len(self._custom)
