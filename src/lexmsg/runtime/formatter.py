"""Formatter: resolves message ids into text across ordered candidate languages.

Resolution of one id:
    1. Try each candidate language in order (FALLBACK routes to the
       configured fallback language); first language with the id wins.
    2. Turn every literal two-character ``\\n`` into a newline.
    3. Expand ``<$id>`` references one at a time, leftmost first, with the
       same candidates and miss policy.
    4. Substitute ``<args[N]>`` markers with the positional arguments.

Python 3.13+.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from lexmsg.constants import (
    ARG_MARKER,
    MAX_DEPTH,
    MISSING_REFERENCE_TEXT,
    NEWLINE_ESCAPE,
    REFERENCE_REGEX,
)
from lexmsg.core.depth_guard import depth_clamp
from lexmsg.diagnostics import LocaleNotFoundError
from lexmsg.enums import MissPolicy
from lexmsg.objects import Message, MessageGroup
from lexmsg.runtime.resolution_context import ResolutionContext

if TYPE_CHECKING:
    from lexmsg.localization.types import MessageId
    from lexmsg.runtime.lang import Lang
    from lexmsg.runtime.store import EntryStore

__all__ = ["FallbackInfo", "Formatter"]

logger = logging.getLogger(__name__)

_REFERENCE_PATTERN = re.compile(REFERENCE_REGEX)


@dataclass(frozen=True, slots=True)
class FallbackInfo:
    """Information about a language fallback event.

    Provided to the on_fallback callback when a Formatter serves a message
    from a language other than the first candidate.

    Attributes:
        requested_lang: The first candidate as given by the caller (may be FALLBACK)
        resolved_lang: The language that actually contained the message
        message_id: The message identifier that was resolved

    Example:
        >>> def log_fallback(info: FallbackInfo) -> None:
        ...     print(f"Fallback: {info.message_id} resolved from "
        ...           f"{info.resolved_lang.id} (requested {info.requested_lang.id})")
        >>> formatter = Formatter(store, Lang("en"), on_fallback=log_fallback)
    """

    requested_lang: Lang
    resolved_lang: Lang
    message_id: str


class Formatter:
    """Resolves message templates held by an EntryStore.

    The store is shared, not owned: several formatters may read one store.
    Formatters hold no lock; each public call builds its own
    ResolutionContext, so one instance is safe to use from many threads.

    Two entry points share one resolution routine:
        format_message: lenient, returns None when no candidate has the id;
            unresolved nested references become the literal text "null"
        format_message_required: strict, raises LocaleNotFoundError

    Self-referencing templates raise CyclicReferenceError and overly deep
    reference chains raise DepthLimitExceededError under both policies.

    Example:
        >>> formatter = Formatter(store, fallback_lang=Lang("en"))
        >>> formatter.format_message("greeting", [Lang("ja"), FALLBACK], "World")
        'Hello World!'
    """

    __slots__ = ("_fallback_lang", "_max_depth", "_on_fallback", "_store")

    def __init__(
        self,
        store: EntryStore,
        fallback_lang: Lang | None = None,
        *,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
        max_depth: int = MAX_DEPTH,
    ) -> None:
        """Initialize Formatter.

        Args:
            store: Entry store to read templates from
            fallback_lang: Language substituted for the FALLBACK sentinel
            on_fallback: Optional callback invoked when a message is served by
                a language other than the first candidate
            max_depth: Maximum nesting depth of <$id> references, lowered once
                here to what the interpreter stack can hold

        Raises:
            ValueError: If fallback_lang is the FALLBACK sentinel or max_depth
                is not positive
        """
        self._store = store
        self._fallback_lang: Lang | None = None
        self.fallback_lang = fallback_lang
        self._on_fallback = on_fallback
        self._max_depth = depth_clamp(max_depth)

    @property
    def store(self) -> EntryStore:
        return self._store

    @property
    def fallback_lang(self) -> Lang | None:
        """Language used wherever FALLBACK appears in the candidates."""
        return self._fallback_lang

    @fallback_lang.setter
    def fallback_lang(self, value: Lang | None) -> None:
        if value is not None and value.is_fallback:
            msg = "fallback_lang cannot be the FALLBACK sentinel itself"
            raise ValueError(msg)
        self._fallback_lang = value

    @property
    def max_depth(self) -> int:
        return self._max_depth

    def __repr__(self) -> str:
        fallback = self._fallback_lang.id if self._fallback_lang is not None else None
        return f"Formatter(store={self._store!r}, fallback_lang={fallback!r})"

    def format_message(
        self, message_id: MessageId, langs: Sequence[Lang], *args: object
    ) -> str | None:
        """Resolve message_id, returning None if no candidate has it.

        Args:
            message_id: Message identifier
            langs: Candidate languages, highest priority first
            *args: Positional arguments for <args[N]> markers; Message and
                MessageGroup arguments are built leniently first

        Returns:
            Resolved text, or None

        Raises:
            CyclicReferenceError: If the template references itself
            DepthLimitExceededError: If references nest deeper than max_depth
        """
        return self._format(message_id, langs, args, MissPolicy.LENIENT)

    def format_message_required(
        self, message_id: MessageId, langs: Sequence[Lang], *args: object
    ) -> str:
        """Resolve message_id, raising if it or any nested reference is missing.

        Args:
            message_id: Message identifier
            langs: Candidate languages, highest priority first
            *args: Positional arguments for <args[N]> markers; Message and
                MessageGroup arguments are built strictly first

        Returns:
            Resolved text

        Raises:
            LocaleNotFoundError: If no candidate has message_id or a nested id
            CyclicReferenceError: If the template references itself
            DepthLimitExceededError: If references nest deeper than max_depth
        """
        text = self._format(message_id, langs, args, MissPolicy.STRICT)
        assert text is not None  # Type narrowing: STRICT raises on a miss
        return text

    def _format(
        self,
        message_id: MessageId,
        langs: Sequence[Lang],
        args: Sequence[object],
        policy: MissPolicy,
    ) -> str | None:
        context = ResolutionContext(max_depth=self._max_depth)
        text = self._resolve(message_id, langs, policy, context)
        if text is None:
            return None
        return self._substitute_args(text, langs, args, policy)

    def _lookup(self, message_id: MessageId, langs: Sequence[Lang]) -> tuple[Lang, str] | None:
        """Find the first candidate language holding message_id."""
        for lang in langs:
            if lang.is_fallback:
                if self._fallback_lang is None:
                    continue
                lang = self._fallback_lang  # noqa: PLW2901
            entry = self._store.get(lang)
            if entry is None:
                continue
            template = entry.get(message_id)
            if template is not None:
                return lang, template
        return None

    def _resolve(
        self,
        message_id: MessageId,
        langs: Sequence[Lang],
        policy: MissPolicy,
        context: ResolutionContext,
    ) -> str | None:
        """Resolve one id, expanding its nested references.

        Returns None only under the LENIENT policy.
        """
        with context.expanding(message_id):
            found = self._lookup(message_id, langs)
            if found is None:
                logger.debug(
                    "Message '%s' not found in %s", message_id, [lang.id for lang in langs]
                )
                if policy is MissPolicy.STRICT:
                    raise LocaleNotFoundError(langs, message_id=message_id)
                return None

            resolved_lang, text = found
            if context.depth == 1:
                self._report_fallback(message_id, langs, resolved_lang)

            text = text.replace(NEWLINE_ESCAPE, "\n")
            while (match := _REFERENCE_PATTERN.search(text)) is not None:
                nested = self._resolve(match.group(1), langs, policy, context)
                if nested is None:
                    nested = MISSING_REFERENCE_TEXT
                text = f"{text[: match.start()]}{nested}{text[match.end() :]}"
            return text

    def _report_fallback(
        self, message_id: MessageId, langs: Sequence[Lang], resolved_lang: Lang
    ) -> None:
        requested = langs[0]
        if requested.is_fallback and resolved_lang == self._fallback_lang:
            return
        if resolved_lang == requested:
            return
        logger.debug(
            "Message '%s' served by '%s' instead of '%s'",
            message_id,
            resolved_lang.id,
            requested.id,
        )
        if self._on_fallback is not None:
            self._on_fallback(
                FallbackInfo(
                    requested_lang=requested,
                    resolved_lang=resolved_lang,
                    message_id=message_id,
                )
            )

    def _substitute_args(
        self,
        text: str,
        langs: Sequence[Lang],
        args: Sequence[object],
        policy: MissPolicy,
    ) -> str:
        for index, value in enumerate(args):
            marker = ARG_MARKER.format(index=index)
            if marker not in text:
                continue
            if isinstance(value, (Message, MessageGroup)):
                if policy is MissPolicy.STRICT:
                    value = value.build_required(self, langs)  # noqa: PLW2901
                else:
                    value = value.build(self, langs)  # noqa: PLW2901
            text = text.replace(marker, "" if value is None else str(value))
        return text
