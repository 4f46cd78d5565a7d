"""Entry: the message templates of one language."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from lexmsg.localization.types import MessageId
from lexmsg.runtime.lang import Lang

__all__ = ["Entry"]


class Entry:
    """All templates loaded for a single language.

    Both the language and the template mapping are fixed for the lifetime
    of the entry. A reload builds a new Entry and the store swaps it in
    whole, so an Entry handed out by the store never changes underneath
    its reader.

    Example:
        >>> entry = Entry(Lang("en"), {"greeting": "Hello <args[0]>!"})
        >>> entry.get("greeting")
        'Hello <args[0]>!'
        >>> "farewell" in entry
        False
    """

    __slots__ = ("_lang", "_templates")

    def __init__(self, lang: Lang, templates: Mapping[MessageId, str] | None = None) -> None:
        self._lang = lang
        self._templates: Mapping[MessageId, str] = MappingProxyType(dict(templates or {}))

    @property
    def lang(self) -> Lang:
        """Language of this entry."""
        return self._lang

    @property
    def templates(self) -> Mapping[MessageId, str]:
        """Read-only view of message id to raw template."""
        return self._templates

    def get(self, message_id: MessageId) -> str | None:
        """Return the raw template for message_id, or None if absent."""
        return self._templates.get(message_id)

    def has(self, message_id: MessageId) -> bool:
        return message_id in self._templates

    def message_ids(self) -> tuple[MessageId, ...]:
        """All message ids in this entry, in load order."""
        return tuple(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    def __contains__(self, message_id: object) -> bool:
        return message_id in self._templates

    def __iter__(self) -> Iterator[MessageId]:
        return iter(self._templates)

    def __repr__(self) -> str:
        return f"Entry(lang={self._lang.id!r}, messages={len(self._templates)})"
