"""FormatterChain: build one object across several independently configured formatters.

Typical use is a plugin with its own resources layered over a host
application's: each side has its own store and formatter, and the chain
tries them together.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from typing import TYPE_CHECKING

from lexmsg.diagnostics import LocaleNotFoundError
from lexmsg.runtime.lang import FALLBACK

if TYPE_CHECKING:
    from lexmsg.objects import Formattable
    from lexmsg.runtime.formatter import Formatter
    from lexmsg.runtime.lang import Lang
    from lexmsg.runtime.store import EntryStore

__all__ = ["FormatterChain"]

logger = logging.getLogger(__name__)


class FormatterChain:
    """Ordered formatters tried per language.

    Language preference dominates formatter preference: for each language
    in order, every formatter is tried in order, and the first non-None
    result wins.

    Thread Safety:
        The formatter tuple is replaced atomically on add/remove; builds
        iterate a snapshot.

    Example:
        >>> chain = FormatterChain(plugin_formatter, host_formatter)
        >>> chain.build(Message.of("greeting", "World"), [Lang("ja"), Lang("en")])
        'Hello World!'
    """

    __slots__ = ("_formatters", "_lock")

    def __init__(self, *formatters: Formatter) -> None:
        self._formatters: tuple[Formatter, ...] = formatters
        self._lock = threading.Lock()

    @property
    def formatters(self) -> tuple[Formatter, ...]:
        """Snapshot of the formatters, in priority order."""
        return self._formatters

    def add(self, formatter: Formatter) -> None:
        """Append formatter with the lowest priority."""
        with self._lock:
            self._formatters = (*self._formatters, formatter)

    def remove(self, formatter: Formatter) -> bool:
        """Remove the first occurrence of formatter. Returns True if removed."""
        with self._lock:
            formatters = list(self._formatters)
            try:
                formatters.remove(formatter)
            except ValueError:
                return False
            self._formatters = tuple(formatters)
            return True

    def __len__(self) -> int:
        return len(self._formatters)

    def __repr__(self) -> str:
        return f"FormatterChain(formatters={len(self._formatters)})"

    def build(self, obj: Formattable, langs: Sequence[Lang]) -> str | None:
        """Build obj leniently, one (language, formatter) pair at a time.

        Returns:
            First non-None result, or None if every pair failed
        """
        formatters = self._formatters
        for lang in langs:
            for formatter in formatters:
                result = obj.build(formatter, (lang,))
                if result is not None:
                    return result
        logger.debug("No formatter resolved %r in %s", obj, [lang.id for lang in langs])
        return None

    def build_required(self, obj: Formattable, langs: Sequence[Lang]) -> str:
        """Build obj, raising once every (language, formatter) pair has failed.

        A pair fails when the lenient build returns None, so a single
        formatter's miss never aborts the search.

        Raises:
            LocaleNotFoundError: Carrying langs and obj
        """
        result = self.build(obj, langs)
        if result is None:
            raise LocaleNotFoundError(langs, obj=obj)
        return result

    def build_by_fallback(self, obj: Formattable) -> str | None:
        return self.build(obj, (FALLBACK,))

    def build_with_fallback(self, obj: Formattable, langs: Sequence[Lang]) -> str | None:
        return self.build(obj, (*langs, FALLBACK))

    def build_required_by_fallback(self, obj: Formattable) -> str:
        return self.build_required(obj, (FALLBACK,))

    def build_required_with_fallback(self, obj: Formattable, langs: Sequence[Lang]) -> str:
        return self.build_required(obj, (*langs, FALLBACK))

    def stores(self) -> tuple[EntryStore, ...]:
        """Distinct stores referenced by the formatters, in first-seen order."""
        seen: dict[int, EntryStore] = {}
        for formatter in self._formatters:
            seen.setdefault(id(formatter.store), formatter.store)
        return tuple(seen.values())

    def reload(self) -> None:
        """Reload every distinct store referenced by the chain.

        Raises:
            IllegalKeyError: From the first store whose resources fail validation
        """
        for store in self.stores():
            store.reload()
