"""
PHP-style date formatting with pluggable word tables.

Provides:
- Timestamp formatting through single-character format tokens
- Escaping of literal text for use inside format strings
- Per-language month/day names, ordinal suffixes and am/pm markers
- Word tables loaded from YAML files

Usage:
    from datetime import datetime, timezone

    from dateformat import escape, format_date, load_translation

    dt = datetime(2005, 1, 1, 15, 4, 5, tzinfo=timezone.utc)

    # Simple formatting
    print(format_date(dt, "l jS F Y, g:i a"))  # Saturday 1st January 2005, 3:04 pm

    # Literal words inside a format
    print(format_date(dt, "jS " + escape("of") + " F"))  # 1st of January

    # Another language
    load_translation("hu")
    print(format_date(dt, "Y. F j., l", "hu"))  # 2005. január 1., szombat

Built-in languages:
    - en: English (always registered)
    - hu: Hungarian (bundled, load with load_translation)
"""

from dateformat.config import FormatterConfig, configure_from_environment
from dateformat.exceptions import DateFormatError, InvalidWordTable, UnknownLanguage
from dateformat.formatter import (
    DateFormatter,
    escape,
    format_date,
    get_default_language,
    get_formatter,
    get_registry,
    register_translation,
    reset_formatter,
    set_default_language,
)
from dateformat.loader import available_locales, load_translation, load_translations
from dateformat.timestamp import Timestamp
from dateformat.tokens import Token, TokenTable
from dateformat.translation import TranslationRegistry, WordTable

__all__ = [
    # Formatting
    "format_date",
    "escape",
    "DateFormatter",
    "get_formatter",
    "reset_formatter",
    "Timestamp",
    "Token",
    "TokenTable",
    # Languages
    "register_translation",
    "set_default_language",
    "get_default_language",
    "get_registry",
    "TranslationRegistry",
    "WordTable",
    "load_translation",
    "load_translations",
    "available_locales",
    # Configuration
    "FormatterConfig",
    "configure_from_environment",
    # Errors
    "DateFormatError",
    "UnknownLanguage",
    "InvalidWordTable",
]
