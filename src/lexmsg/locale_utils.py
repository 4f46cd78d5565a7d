"""Locale helpers backed by Babel CLDR data.

Used by Lang to fill in a display name when none is given, and by
Lang.from_system to pick up the user's locale.

Python 3.13+. External dependency: Babel (CLDR locale data).
"""

from __future__ import annotations

import functools
import locale
import logging
import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "describe_lang",
    "get_babel_locale",
    "get_system_locale",
    "normalize_locale",
]

logger = logging.getLogger(__name__)

_LOCALE_ENV_VARS = ("LC_ALL", "LC_MESSAGES", "LANG")
_PSEUDO_LOCALES = frozenset({"", "C", "POSIX"})
_DEFAULT_SYSTEM_LOCALE = "en_US"


def normalize_locale(locale_code: str) -> str:
    """Turn a BCP-47 tag into the underscore form Babel parses.

    Example:
        >>> normalize_locale("pt-BR")
        'pt_BR'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Parse locale_code into a cached Babel Locale.

    Raises:
        babel.core.UnknownLocaleError: If CLDR has no data for the code
        ValueError: If the code is not a locale identifier at all
    """
    # Babel loads CLDR data on import
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def describe_lang(lang_id: str) -> str:
    """Return the language's own CLDR display name, or the id if unknown.

    Args:
        lang_id: Language id (e.g., "en", "ja", "en_us", "pt-BR")

    Returns:
        Display name in the language itself (e.g., "English", "日本語")

    Example:
        >>> describe_lang("en")
        'English'
        >>> describe_lang("xx")
        'xx'
    """
    from babel.core import UnknownLocaleError  # noqa: PLC0415

    try:
        cldr_locale = get_babel_locale(lang_id)
    except (UnknownLocaleError, ValueError) as e:
        logger.debug("No CLDR data for language '%s': %s", lang_id, e)
        return lang_id
    return cldr_locale.display_name or lang_id


def _strip_locale(value: str | None) -> str | None:
    """Drop codeset and modifier ("de_DE.UTF-8@euro" -> "de_DE"); None for pseudo-locales."""
    if value is None:
        return None
    code = value.partition(".")[0].partition("@")[0]
    if code in _PSEUDO_LOCALES:
        return None
    return normalize_locale(code)


def get_system_locale(*, raise_on_failure: bool = False) -> str:
    """Guess the user's locale.

    The process locale is consulted first, then LC_ALL, LC_MESSAGES and LANG
    in that order. "C" and "POSIX" count as unset.

    Args:
        raise_on_failure: Raise instead of returning "en_US" when nothing is set

    Returns:
        Locale code in underscore form (e.g., "de_DE")

    Raises:
        RuntimeError: If raise_on_failure is True and no locale is set
    """
    try:
        process_locale = locale.getlocale()[0]
    except ValueError:
        process_locale = None

    candidates = (process_locale, *(os.environ.get(var) for var in _LOCALE_ENV_VARS))
    for candidate in candidates:
        code = _strip_locale(candidate)
        if code is not None:
            return code

    if raise_on_failure:
        msg = "Could not determine system locale; set LC_ALL, LC_MESSAGES or LANG"
        raise RuntimeError(msg)
    logger.debug("No system locale set, using %s", _DEFAULT_SYSTEM_LOCALE)
    return _DEFAULT_SYSTEM_LOCALE
