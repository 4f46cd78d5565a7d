"""EntryStore: thread-safe registry of per-language entries.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from typing import TYPE_CHECKING

from lexmsg.constants import RESOURCE_ENCODING
from lexmsg.core.identifier_validation import find_invalid_ids
from lexmsg.diagnostics import IllegalKeyError, LocaleAlreadyExistsError
from lexmsg.enums import LoadStatus
from lexmsg.localization.loading import (
    LoadSummary,
    PackageResourceProvider,
    PathResourceProvider,
    ResourceLoadResult,
    parse_lang_source,
)
from lexmsg.runtime.entry import Entry

if TYPE_CHECKING:
    from lexmsg.localization.config import ResourceConfig
    from lexmsg.localization.loading import ResourceProvider
    from lexmsg.localization.types import MessageId
    from lexmsg.runtime.lang import Lang

__all__ = ["EntryStore"]

logger = logging.getLogger(__name__)


def _reject_fallback(lang: Lang) -> None:
    if lang.is_fallback:
        msg = "The FALLBACK sentinel cannot be stored; configure Formatter.fallback_lang instead"
        raise ValueError(msg)


class EntryStore:
    """Holds at most one Entry per language and (re)loads them from providers.

    Providers are read in priority order for each language; keys from later
    providers overwrite keys from earlier ones. Missing or unreadable
    resources are logged and recorded in the load summary, never raised.

    Thread Safety:
        Every public method runs under one re-entrant lock. Entries are
        swapped whole, so a concurrent reader sees the templates from before
        or after a reload, never a partial update.

    Example:
        >>> store = EntryStore.from_config(ResourceConfig("org.example", "myapp", "data"))
        >>> store.load(Lang("en"), Lang("ja"))
        >>> store.get(Lang("en")).get("greeting")
        'Hello <args[0]>!'
    """

    __slots__ = ("_entries", "_load_results", "_lock", "_providers")

    def __init__(self, providers: Iterable[ResourceProvider] = ()) -> None:
        """Initialize an empty store.

        Args:
            providers: Resource providers in priority order (lowest first)
        """
        self._providers: tuple[ResourceProvider, ...] = tuple(providers)
        self._entries: dict[Lang, Entry] = {}
        self._load_results: dict[Lang, tuple[ResourceLoadResult, ...]] = {}
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config: ResourceConfig) -> EntryStore:
        """Create a store reading the bundled resource, then the override file."""
        providers: list[ResourceProvider] = []
        if config.package is not None:
            providers.append(PackageResourceProvider(config.package, config.bundled_path_template))
        providers.append(PathResourceProvider(config.override_path_template))
        return cls(providers)

    @property
    def providers(self) -> tuple[ResourceProvider, ...]:
        """Installed providers, in priority order."""
        return self._providers

    def _read_provider(
        self, provider: ResourceProvider, lang: Lang, templates: dict[MessageId, str]
    ) -> ResourceLoadResult:
        """Read and parse one provider, merging into templates.

        Returns:
            ResourceLoadResult indicating success, not_found, or error
        """
        source_path = provider.describe_path(lang.id)
        try:
            source = provider.read(lang.id).decode(RESOURCE_ENCODING)
        except FileNotFoundError as e:
            logger.warning("Resource not found for '%s': %s", lang.id, source_path)
            return ResourceLoadResult(
                lang_id=lang.id,
                status=LoadStatus.NOT_FOUND,
                error=e,
                source_path=source_path,
            )
        except (OSError, ValueError) as e:
            # Permission errors, decode errors, unsafe language ids
            logger.warning("Failed to read resource for '%s' from %s: %s", lang.id, source_path, e)
            return ResourceLoadResult(
                lang_id=lang.id,
                status=LoadStatus.ERROR,
                error=e,
                source_path=source_path,
            )

        parsed, skipped = parse_lang_source(source, origin=source_path)
        templates.update(parsed)
        return ResourceLoadResult(
            lang_id=lang.id,
            status=LoadStatus.SUCCESS,
            source_path=source_path,
            message_count=len(parsed),
            skipped_lines=skipped,
        )

    def _force_load(self, lang: Lang) -> Entry:
        """Read every provider for lang and build a validated Entry.

        Nothing is stored here; the caller swaps the entry in.

        Raises:
            IllegalKeyError: If any merged key is not a valid message id
        """
        templates: dict[MessageId, str] = {}
        results = tuple(self._read_provider(p, lang, templates) for p in self._providers)

        invalid = find_invalid_ids(templates)
        if invalid:
            raise IllegalKeyError(lang, invalid)

        self._load_results.pop(lang, None)
        self._load_results[lang] = results
        logger.info(
            "Loaded %d messages for '%s' (%d of %d resources found)",
            len(templates),
            lang.id,
            sum(1 for r in results if r.is_success),
            len(results),
        )
        return Entry(lang, templates)

    def _insert(self, entry: Entry) -> None:
        """Drop any entry with the same language id, then add entry last."""
        self._entries.pop(entry.lang, None)
        self._entries[entry.lang] = entry

    def load(self, *langs: Lang) -> None:
        """Load languages that are not tracked yet, in order.

        The first failure propagates; languages before it stay loaded.

        Raises:
            ValueError: If a lang is the FALLBACK sentinel
            LocaleAlreadyExistsError: If a lang is already tracked
            IllegalKeyError: If a resource contains invalid message ids
        """
        with self._lock:
            for lang in langs:
                _reject_fallback(lang)
                if lang in self._entries:
                    raise LocaleAlreadyExistsError(lang)
                self._insert(self._force_load(lang))

    def reload(self, lang: Lang | None = None) -> None:
        """Re-read resources for one language, or for every tracked language.

        With a lang, its entry is dropped and the fresh one added last (an
        untracked lang is simply loaded). Without one, every tracked language is reloaded; the first
        failure propagates and earlier replacements are kept.

        Raises:
            ValueError: If lang is the FALLBACK sentinel
            IllegalKeyError: If a resource contains invalid message ids
        """
        with self._lock:
            targets = (lang,) if lang is not None else tuple(self._entries)
            for target in targets:
                _reject_fallback(target)
                self._insert(self._force_load(target))

    def get(self, lang: Lang) -> Entry | None:
        with self._lock:
            return self._entries.get(lang)

    def put(self, entry: Entry) -> None:
        """Insert an entry last, first dropping any entry with the same language id.

        Raises:
            ValueError: If the entry's language is the FALLBACK sentinel
        """
        _reject_fallback(entry.lang)
        with self._lock:
            self._load_results.pop(entry.lang, None)
            self._insert(entry)

    def remove(self, lang: Lang) -> bool:
        """Drop the entry for lang. Returns True if one was removed."""
        with self._lock:
            self._load_results.pop(lang, None)
            return self._entries.pop(lang, None) is not None

    def has(self, lang: Lang) -> bool:
        with self._lock:
            return lang in self._entries

    def list_entries(self) -> tuple[Entry, ...]:
        """Snapshot of all entries, in insertion order."""
        with self._lock:
            return tuple(self._entries.values())

    @property
    def langs(self) -> tuple[Lang, ...]:
        """Snapshot of tracked languages, in insertion order."""
        with self._lock:
            return tuple(self._entries)

    def get_message_ids(self) -> tuple[MessageId, ...]:
        """Union of message ids across all entries, first-seen order."""
        with self._lock:
            entries = tuple(self._entries.values())
        seen: dict[MessageId, None] = {}
        for entry in entries:
            seen.update(dict.fromkeys(entry.message_ids()))
        return tuple(seen)

    def get_load_summary(self) -> LoadSummary:
        """Results of the most recent forced load of every tracked language.

        Entries inserted with put() have no load results.
        """
        with self._lock:
            return LoadSummary(
                results=tuple(
                    result
                    for lang in self._entries
                    for result in self._load_results.get(lang, ())
                )
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, lang: object) -> bool:
        with self._lock:
            return lang in self._entries

    def __repr__(self) -> str:
        with self._lock:
            lang_ids = [lang.id for lang in self._entries]
        return f"EntryStore(langs={lang_ids!r}, providers={len(self._providers)})"
