"""Language identity and the FALLBACK routing sentinel.

Python 3.13+. External dependency: Babel (display names, on demand).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from lexmsg.constants import FALLBACK_LANG_ID, FALLBACK_LANG_NAME
from lexmsg.locale_utils import describe_lang, get_system_locale
from lexmsg.localization.types import LangId

__all__ = ["FALLBACK", "Lang"]


@dataclass(frozen=True, slots=True)
class Lang:
    """A language: id plus human-readable display name.

    Equality and hashing use ``id`` only, case-sensitively. Case folding,
    if wanted, is the caller's job.

    When ``display_name`` is omitted, it is looked up in CLDR through Babel
    (the language's own name); unknown ids use the id itself.

    Example:
        >>> Lang("en").display_name
        'English'
        >>> Lang("en", "Eng") == Lang("en", "English")
        True
        >>> Lang("xx").display_name
        'xx'

    Attributes:
        id: Language id, as used in resource file names
        display_name: Human-readable name
    """

    FALLBACK: ClassVar[Lang]

    id: LangId
    display_name: str = field(default=None, compare=False)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        """Validate the id and fill in the display name.

        Raises:
            ValueError: If id is empty
        """
        if not self.id:
            msg = "Language id cannot be empty"
            raise ValueError(msg)
        if self.display_name is None:
            object.__setattr__(self, "display_name", describe_lang(self.id))

    def __str__(self) -> str:
        return self.id

    @property
    def is_fallback(self) -> bool:
        """True only for the FALLBACK sentinel instance itself."""
        return self is FALLBACK

    @classmethod
    def from_system(cls) -> Lang:
        """Build a Lang for the operating system's locale, lowercased.

        Example:
            >>> # With LANG=de_DE.UTF-8
            >>> Lang.from_system().id
            'de_de'
        """
        return cls(get_system_locale().lower())


FALLBACK: Lang = Lang(FALLBACK_LANG_ID, FALLBACK_LANG_NAME)
"""Routing sentinel: "use the formatter's configured fallback language here".

Recognized by identity. A Lang("default") built elsewhere compares equal
by id but is not treated as the sentinel.
"""

Lang.FALLBACK = FALLBACK
