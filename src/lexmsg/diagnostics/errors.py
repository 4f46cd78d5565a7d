"""lexmsg exception hierarchy with structured diagnostics.

All exceptions can carry a Diagnostic object for rich error information.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .codes import Diagnostic
from .templates import ErrorTemplate

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from lexmsg.objects import Formattable
    from lexmsg.runtime.lang import Lang

__all__ = [
    "CyclicReferenceError",
    "DepthLimitExceededError",
    "IllegalKeyError",
    "LexMsgError",
    "LocaleAlreadyExistsError",
    "LocaleNotFoundError",
]


class LexMsgError(Exception):
    """Base exception for all lexmsg errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LexMsgError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class LocaleAlreadyExistsError(LexMsgError):
    """Attempted to load a language the store already tracks.

    Callers must reload() it, or remove() and load() again.

    Attributes:
        lang: The language that is already loaded
    """

    def __init__(self, lang: Lang) -> None:
        super().__init__(ErrorTemplate.locale_already_exists(lang.id))
        self.lang = lang


class IllegalKeyError(LexMsgError):
    """A loaded resource contained keys that fail message-id validation.

    The load is rejected as a whole: no entry is stored for the language.

    Attributes:
        lang: Language whose resources were being loaded
        keys: Every invalid key found after merging all resources
    """

    def __init__(self, lang: Lang, keys: Iterable[str]) -> None:
        key_tuple = tuple(keys)
        super().__init__(ErrorTemplate.illegal_key(lang.id, key_tuple))
        self.lang = lang
        self.keys = key_tuple


class LocaleNotFoundError(LexMsgError):
    """Strict resolution exhausted every candidate without a result.

    Exactly one of message_id / obj is set: message_id when a single id
    lookup failed, obj when a formattable object failed as a whole (for
    example across every formatter of a FormatterChain).

    Attributes:
        langs: Candidate languages that were tried, as given by the caller
        message_id: The requested message id, if the failure is an id lookup
        obj: The formattable object, if the failure is an object build
    """

    def __init__(
        self,
        langs: Sequence[Lang],
        message_id: str | None = None,
        obj: Formattable | None = None,
    ) -> None:
        lang_tuple = tuple(langs)
        lang_ids = [lang.id for lang in lang_tuple]
        if message_id is not None:
            diagnostic = ErrorTemplate.message_not_found(message_id, lang_ids)
        else:
            diagnostic = ErrorTemplate.object_not_resolved(repr(obj), lang_ids)
        super().__init__(diagnostic)
        self.langs = lang_tuple
        self.message_id = message_id
        self.obj = obj


class CyclicReferenceError(LexMsgError):
    """A template references itself directly or through other templates.

    Example:
        hello=<$world>
        world=<$hello>    <- Infinite expansion

    Attributes:
        path: Message ids forming the cycle, first id repeated at the end
    """

    def __init__(self, path: Iterable[str]) -> None:
        path_tuple = tuple(path)
        super().__init__(ErrorTemplate.cyclic_reference(path_tuple))
        self.path = path_tuple


class DepthLimitExceededError(LexMsgError):
    """Raised when nested reference expansion exceeds the depth limit.

    Attributes:
        max_depth: The limit that was exceeded
    """

    def __init__(self, max_depth: int) -> None:
        super().__init__(ErrorTemplate.max_depth_exceeded(max_depth))
        self.max_depth = max_depth
