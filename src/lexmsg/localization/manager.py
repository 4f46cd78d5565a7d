"""LocalizationManager: one store plus one formatter, wired from configuration.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from lexmsg.runtime.formatter import Formatter
from lexmsg.runtime.store import EntryStore

if TYPE_CHECKING:
    from lexmsg.localization.config import ManagerConfig
    from lexmsg.objects import Formattable
    from lexmsg.runtime.lang import Lang

__all__ = ["LocalizationManager"]

logger = logging.getLogger(__name__)


class LocalizationManager:
    """Application-facing facade over an EntryStore and its Formatter.

    Use create() rather than the constructor: it builds any missing
    component, loads the configured languages and sets the fallback.

    Example:
        >>> config = ManagerConfig(
        ...     ResourceConfig("org.example", "myapp", "/var/lib/myapp", package="myapp"),
        ...     langs=(Lang("en"), Lang("ja")),
        ...     fallback_lang=Lang("en"),
        ... )
        >>> manager = LocalizationManager.create(config)
        >>> Message.of("greeting", "World").build(manager.formatter, [Lang("ja"), FALLBACK])
        'こんにちは World!'
    """

    __slots__ = ("_formatter", "_store")

    def __init__(self, store: EntryStore, formatter: Formatter) -> None:
        self._store = store
        self._formatter = formatter

    @classmethod
    def create(
        cls,
        config: ManagerConfig,
        store: EntryStore | None = None,
        formatter: Formatter | None = None,
    ) -> LocalizationManager:
        """Build, load and configure a manager.

        Args:
            config: Resource locations, languages and fallback
            store: Store to use; defaults to the formatter's store, or a new
                store reading config.resources
            formatter: Formatter to use; defaults to a new one over the store

        Raises:
            ValueError: If formatter is given with a different store
            LocaleAlreadyExistsError: If the store already tracks a configured language
            IllegalKeyError: If a resource contains invalid message ids
        """
        if store is None and formatter is not None:
            store = formatter.store
        elif store is None:
            store = EntryStore.from_config(config.resources)
        if formatter is None:
            formatter = Formatter(store)
        elif formatter.store is not store:
            msg = "formatter must read from the manager's store"
            raise ValueError(msg)

        store.load(*config.langs)
        formatter.fallback_lang = config.fallback_lang
        logger.info(
            "Localization ready for %s (fallback: %s)",
            [lang.id for lang in config.langs],
            config.fallback_lang.id if config.fallback_lang is not None else None,
        )
        return cls(store, formatter)

    @property
    def store(self) -> EntryStore:
        return self._store

    @property
    def formatter(self) -> Formatter:
        return self._formatter

    def reload(self) -> None:
        """Re-read resources of every loaded language."""
        self._store.reload()

    def build(self, obj: Formattable, langs: Sequence[Lang]) -> str | None:
        return obj.build(self._formatter, langs)

    def build_required(self, obj: Formattable, langs: Sequence[Lang]) -> str:
        return obj.build_required(self._formatter, langs)

    def __repr__(self) -> str:
        return f"LocalizationManager(store={self._store!r})"
