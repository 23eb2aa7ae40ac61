"""
Word table loading for dateformat.

Word tables beyond the built-in English one are stored as YAML files named
``<language>.yaml``. The bundled tables live in the package's ``locales``
directory; callers may keep their own in any directory.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from dateformat.exceptions import InvalidWordTable, UnknownLanguage
from dateformat.translation import TranslationRegistry, WordTable

logger = logging.getLogger(__name__)

LOCALES_DIR = Path(__file__).parent / "locales"


def available_locales(directory: Path | str | None = None) -> list[str]:
    """
    List the languages that have a word table file.

    Args:
        directory: Directory to scan (defaults to the bundled locales)

    Returns:
        Sorted language tags
    """
    locales_dir = Path(directory) if directory is not None else LOCALES_DIR
    if not locales_dir.is_dir():
        return []
    return sorted(path.stem for path in locales_dir.glob("*.yaml"))


def read_word_table(path: Path | str) -> WordTable:
    """
    Read and validate one word table file.

    Args:
        path: Path to a YAML word table

    Returns:
        The parsed WordTable

    Raises:
        InvalidWordTable: If the file is unreadable, malformed, or incomplete
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise InvalidWordTable(f"Malformed YAML in {path}: {e}") from e
    except OSError as e:
        raise InvalidWordTable(f"Could not read {path}: {e}") from e

    if data is None:
        raise InvalidWordTable(f"Word table file is empty: {path}")
    try:
        return WordTable.from_mapping(data)
    except InvalidWordTable as e:
        raise InvalidWordTable(f"{path}: {e}") from e


def load_translation(
    language: str,
    directory: Path | str | None = None,
    registry: TranslationRegistry | None = None,
) -> WordTable:
    """
    Load a language's word table file and register it.

    Args:
        language: Language tag; the file read is ``<language>.yaml``
        directory: Directory holding the file (defaults to the bundled locales)
        registry: Registry to update (defaults to the global formatter's)

    Returns:
        The registered WordTable

    Raises:
        UnknownLanguage: If there is no file for the language
        InvalidWordTable: If the file is malformed or incomplete
    """
    locales_dir = Path(directory) if directory is not None else LOCALES_DIR
    path = locales_dir / f"{language}.yaml"
    if not path.is_file():
        raise UnknownLanguage(language)

    table = read_word_table(path)
    _target(registry).register(language, table)
    logger.debug(f"Loaded word table for '{language}' from {path}")
    return table


def load_translations(
    directory: Path | str | None = None,
    registry: TranslationRegistry | None = None,
) -> list[str]:
    """
    Load and register every word table file in a directory.

    Broken files are skipped with a warning.

    Args:
        directory: Directory to scan (defaults to the bundled locales)
        registry: Registry to update (defaults to the global formatter's)

    Returns:
        Sorted tags of the languages that were loaded
    """
    locales_dir = Path(directory) if directory is not None else LOCALES_DIR
    target = _target(registry)
    loaded = []

    for language in available_locales(locales_dir):
        try:
            target.register(language, read_word_table(locales_dir / f"{language}.yaml"))
        except InvalidWordTable as e:
            logger.warning(f"Skipping word table for '{language}': {e}")
            continue
        loaded.append(language)

    logger.debug(f"Loaded {len(loaded)} word table(s) from {locales_dir}")
    return loaded


def _target(registry: TranslationRegistry | None) -> TranslationRegistry:
    if registry is not None:
        return registry
    from dateformat.formatter import get_registry

    return get_registry()
