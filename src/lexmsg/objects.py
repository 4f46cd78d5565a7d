"""Formattable objects: a localizable message as a leaf or a composite tree.

Formattable is a closed union of two final classes:
    Message - one message id plus positional arguments
    MessageGroup - ordered children with optional decorations

Both delegate to a Formatter and offer a lenient ``build`` (None when
something is missing) and a strict ``build_required`` (raises
LocaleNotFoundError). Compose new shapes by nesting these two classes.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, Self, final

from lexmsg.enums import MissPolicy
from lexmsg.runtime.lang import FALLBACK

if TYPE_CHECKING:
    from lexmsg.localization.types import MessageId
    from lexmsg.runtime.formatter import Formatter
    from lexmsg.runtime.lang import Lang

__all__ = ["Formattable", "Message", "MessageGroup"]


class _Buildable(Protocol):
    """Anything with a lenient and a strict build."""

    def build(self, formatter: Formatter, langs: Sequence[Lang]) -> str | None: ...

    def build_required(self, formatter: Formatter, langs: Sequence[Lang]) -> str: ...


class _FallbackForms:
    """Fallback convenience forms shared by Message and MessageGroup.

    Subclasses provide ``build`` and ``build_required``.
    """

    __slots__ = ()

    def build_by_fallback(self: _Buildable, formatter: Formatter) -> str | None:
        """Build with the formatter's fallback language only."""
        return self.build(formatter, (FALLBACK,))

    def build_with_fallback(
        self: _Buildable, formatter: Formatter, langs: Sequence[Lang]
    ) -> str | None:
        """Build with langs, then the formatter's fallback language last."""
        return self.build(formatter, (*langs, FALLBACK))

    def build_required_by_fallback(self: _Buildable, formatter: Formatter) -> str:
        return self.build_required(formatter, (FALLBACK,))

    def build_required_with_fallback(
        self: _Buildable, formatter: Formatter, langs: Sequence[Lang]
    ) -> str:
        return self.build_required(formatter, (*langs, FALLBACK))


@final
@dataclass(frozen=True, slots=True, init=False)
class Message(_FallbackForms):
    """Leaf: one message id with positional arguments.

    Arguments may themselves be Message or MessageGroup instances; they are
    built with the same languages and policy before substitution.

    Example:
        >>> greeting = Message.of("greeting", "World")
        >>> greeting.build(formatter, [Lang("en")])
        'Hello World!'

    Attributes:
        id: Message identifier
        args: Positional arguments for <args[N]> markers
    """

    id: MessageId
    args: tuple[object, ...]

    def __init__(self, id: MessageId, args: Sequence[object] = ()) -> None:  # noqa: A002
        object.__setattr__(self, "id", id)
        object.__setattr__(self, "args", tuple(args))

    @classmethod
    def of(cls, id: MessageId, *args: object) -> Message:  # noqa: A002
        return cls(id, args)

    def build(self, formatter: Formatter, langs: Sequence[Lang]) -> str | None:
        return formatter.format_message(self.id, langs, *self.args)

    def build_required(self, formatter: Formatter, langs: Sequence[Lang]) -> str:
        return formatter.format_message_required(self.id, langs, *self.args)


type Decoration = str | Message | MessageGroup | None
"""A decoration slot: literal text, a nested formattable, or nothing."""


@final
class MessageGroup(_FallbackForms):
    """Composite: children joined with optional decorations.

    Output is::

        first + before + child1 + after + separator + before + child2 + after + last

    ``separator`` appears only between consecutive children. Each slot holds
    literal text, a nested Message/MessageGroup (built once per occurrence),
    or None (contributes nothing). Children are fixed at construction;
    decorations may be changed afterwards.

    Example:
        >>> group = MessageGroup.of(Message.of("a"), Message.of("b"))
        >>> group.set_separator(",").set_before("[").set_after("]")
        >>> group.build(formatter, [Lang("en")])
        '[A],[B]'
    """

    __slots__ = ("_children", "after", "before", "first", "last", "separator")

    def __init__(
        self,
        children: Sequence[Formattable] = (),
        *,
        first: Decoration = None,
        last: Decoration = None,
        separator: Decoration = None,
        before: Decoration = None,
        after: Decoration = None,
    ) -> None:
        self._children: tuple[Formattable, ...] = tuple(children)
        self.first = first
        self.last = last
        self.separator = separator
        self.before = before
        self.after = after

    @classmethod
    def of(cls, *children: Formattable) -> MessageGroup:
        return cls(children)

    @property
    def children(self) -> tuple[Formattable, ...]:
        return self._children

    def set_first(self, value: Decoration) -> Self:
        self.first = value
        return self

    def set_last(self, value: Decoration) -> Self:
        self.last = value
        return self

    def set_separator(self, value: Decoration) -> Self:
        self.separator = value
        return self

    def set_before(self, value: Decoration) -> Self:
        self.before = value
        return self

    def set_after(self, value: Decoration) -> Self:
        self.after = value
        return self

    def __repr__(self) -> str:
        return (
            f"MessageGroup(children={list(self._children)!r}, first={self.first!r}, "
            f"last={self.last!r}, separator={self.separator!r}, "
            f"before={self.before!r}, after={self.after!r})"
        )

    def build(self, formatter: Formatter, langs: Sequence[Lang]) -> str | None:
        """Build leniently: None if any child or decoration fails to resolve."""
        return self._build(formatter, langs, MissPolicy.LENIENT)

    def build_required(self, formatter: Formatter, langs: Sequence[Lang]) -> str:
        """Build strictly, failing at the first unresolved piece.

        Raises:
            LocaleNotFoundError: If any child or decoration fails to resolve
        """
        text = self._build(formatter, langs, MissPolicy.STRICT)
        assert text is not None  # Type narrowing: STRICT raises on a miss
        return text

    def _build(self, formatter: Formatter, langs: Sequence[Lang], policy: MissPolicy) -> str | None:
        def piece(value: Decoration) -> str | None:
            match value:
                case None:
                    return ""
                case str():
                    return value
                case _ if policy is MissPolicy.STRICT:
                    return value.build_required(formatter, langs)
                case _:
                    return value.build(formatter, langs)

        parts: list[str] = []

        def append(value: Decoration) -> bool:
            text = piece(value)
            if text is None:
                return False
            parts.append(text)
            return True

        if not append(self.first):
            return None
        for index, child in enumerate(self._children):
            if index > 0 and not append(self.separator):
                return None
            if not (append(self.before) and append(child) and append(self.after)):
                return None
        if not append(self.last):
            return None
        return "".join(parts)


type Formattable = Message | MessageGroup
"""Anything a Formatter or FormatterChain can build."""
