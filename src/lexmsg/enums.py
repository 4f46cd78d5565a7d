"""Enumerations for lexmsg type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class LoadStatus(StrEnum):
    """Outcome of reading one resource provider for one language.

    StrEnum provides automatic string conversion: str(LoadStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """Resource was read and parsed."""

    NOT_FOUND = "not_found"
    """Provider has no resource for this language (expected for optional sources)."""

    ERROR = "error"
    """Resource exists but could not be read or decoded."""


class MissPolicy(StrEnum):
    """What a resolution does when no candidate language has the message.

    StrEnum provides automatic string conversion: str(MissPolicy.STRICT) == "strict"
    """

    LENIENT = "lenient"
    """Return None; nested references degrade to the literal text 'null'."""

    STRICT = "strict"
    """Raise LocaleNotFoundError at the first unresolved message."""


__all__ = [
    "LoadStatus",
    "MissPolicy",
]
