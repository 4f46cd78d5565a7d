"""Tests for runtime/store.py: EntryStore loading, reloading and mutation.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

import pytest
from hypothesis import HealthCheck, event, given, settings

from lexmsg import (
    FALLBACK,
    Entry,
    EntryStore,
    IllegalKeyError,
    Lang,
    LocaleAlreadyExistsError,
    ResourceConfig,
)
from lexmsg.enums import LoadStatus
from lexmsg.localization import PackageResourceProvider, PathResourceProvider
from tests.helpers.providers import DictProvider, FailingProvider
from tests.strategies import lang_sources, to_lang_source

EN = Lang("en", "English")
JA = Lang("ja", "Japanese")
FR = Lang("fr", "French")


def _store(**sources: str) -> tuple[EntryStore, DictProvider]:
    provider = DictProvider({k: v.encode() for k, v in sources.items()})
    return EntryStore([provider]), provider


class TestLoad:
    """load() semantics."""

    def test_load_single(self) -> None:
        store, _ = _store(en="greeting=Hello")
        store.load(EN)

        entry = store.get(EN)
        assert entry is not None
        assert entry.get("greeting") == "Hello"
        assert entry.lang == EN

    def test_load_several(self) -> None:
        store, _ = _store(en="a=A", ja="a=Ei")
        store.load(EN, JA)

        assert store.langs == (EN, JA)
        assert len(store) == 2

    def test_double_load_raises(self) -> None:
        """Loading a tracked language fails; after remove it succeeds."""
        store, _ = _store(en="a=A")
        store.load(EN)

        with pytest.raises(LocaleAlreadyExistsError) as exc_info:
            store.load(Lang("en", "Other name"))
        assert exc_info.value.lang == EN

        assert store.remove(EN) is True
        store.load(EN)
        assert store.has(EN)

    def test_first_failure_keeps_earlier_langs(self) -> None:
        store, _ = _store(en="a=A", ja="a=Ei")
        store.load(JA)

        with pytest.raises(LocaleAlreadyExistsError):
            store.load(EN, JA, FR)

        assert store.has(EN)
        assert not store.has(FR)

    def test_no_resources_gives_empty_entry(self) -> None:
        store, _ = _store()
        store.load(FR)

        entry = store.get(FR)
        assert entry is not None
        assert len(entry) == 0

    def test_no_providers_gives_empty_entry(self) -> None:
        store = EntryStore()
        store.load(EN)

        assert len(store.get(EN) or ()) == 0

    def test_fallback_sentinel_rejected(self) -> None:
        store, _ = _store()

        with pytest.raises(ValueError, match="FALLBACK"):
            store.load(FALLBACK)

    def test_illegal_keys_reject_whole_language(self) -> None:
        store, _ = _store(en="good=1\nBad=2\nalso-bad=3\nfine=4")

        with pytest.raises(IllegalKeyError) as exc_info:
            store.load(EN)

        assert exc_info.value.lang == EN
        assert exc_info.value.keys == ("Bad", "also-bad")
        assert not store.has(EN)

    def test_later_provider_overrides(self) -> None:
        bundled = DictProvider({"en": b"a=bundled\nb=only bundled"}, name="bundled")
        override = DictProvider({"en": b"a=override"}, name="override")
        store = EntryStore([bundled, override])

        store.load(EN)

        entry = store.get(EN)
        assert entry is not None
        assert entry.get("a") == "override"
        assert entry.get("b") == "only bundled"

    def test_invalid_key_in_any_provider_rejects(self) -> None:
        store = EntryStore([DictProvider({"en": b"a=1"}), DictProvider({"en": b"B=2"})])

        with pytest.raises(IllegalKeyError):
            store.load(EN)

    def test_utf8_decoding(self) -> None:
        store = EntryStore([DictProvider({"ja": "greeting=こんにちは".encode()})])
        store.load(JA)

        entry = store.get(JA)
        assert entry is not None
        assert entry.get("greeting") == "こんにちは"


class TestProviderFailures:
    """Provider failures are logged and recorded, never raised."""

    def test_not_found_recorded(self, caplog: pytest.LogCaptureFixture) -> None:
        store, _ = _store()

        with caplog.at_level(logging.WARNING, logger="lexmsg.runtime.store"):
            store.load(EN)

        summary = store.get_load_summary()
        assert summary.not_found == 1
        assert summary.get_not_found()[0].source_path == "memory:en.lang"
        assert "memory:en.lang" in caplog.text

    def test_os_error_recorded(self) -> None:
        store = EntryStore([FailingProvider(PermissionError("denied")), DictProvider({"en": b"a=A"})])
        store.load(EN)

        summary = store.get_load_summary()
        assert summary.errors == 1
        assert isinstance(summary.get_errors()[0].error, PermissionError)
        assert summary.successful == 1
        assert store.get(EN) is not None

    def test_decode_error_recorded(self) -> None:
        store = EntryStore([DictProvider({"en": b"a=\xff\xfe"})])
        store.load(EN)

        summary = store.get_load_summary()
        assert summary.errors == 1
        assert isinstance(summary.get_errors()[0].error, UnicodeDecodeError)
        assert len(store.get(EN) or ()) == 0

    def test_unsafe_lang_id_recorded_as_error(self, tmp_path: Path) -> None:
        store = EntryStore([PathResourceProvider(str(tmp_path / "{lang}.lang"))])
        store.load(Lang("../x", "x"))

        assert store.get_load_summary().get_errors()[0].status == LoadStatus.ERROR

    def test_skipped_lines_reported(self) -> None:
        store, _ = _store(en="a=A\nbroken\n")
        store.load(EN)

        result = store.get_load_summary().get_successful()[0]
        assert result.skipped_lines == (2,)
        assert result.message_count == 1


class TestReload:
    """reload() semantics."""

    def test_reload_one_picks_up_changes(self) -> None:
        store, provider = _store(en="a=old")
        store.load(EN)
        provider.sources["en"] = b"a=new"

        store.reload(EN)

        entry = store.get(EN)
        assert entry is not None
        assert entry.get("a") == "new"

    def test_reload_untracked_loads(self) -> None:
        store, _ = _store(en="a=A")

        store.reload(EN)

        assert store.has(EN)

    def test_reload_all(self) -> None:
        store, provider = _store(en="a=A", ja="a=Ei")
        store.load(EN, JA)
        provider.sources = {"en": b"a=A2", "ja": b"a=Ei2"}

        store.reload()

        assert [entry.get("a") for entry in store.list_entries()] == ["A2", "Ei2"]

    def test_reload_all_stops_at_first_error(self) -> None:
        store, provider = _store(en="a=A", ja="a=Ei")
        store.load(EN, JA)
        provider.sources = {"en": b"a=A2", "ja": b"Bad=x"}

        with pytest.raises(IllegalKeyError):
            store.reload()

        en_entry = store.get(EN)
        ja_entry = store.get(JA)
        assert en_entry is not None
        assert en_entry.get("a") == "A2"
        assert ja_entry is not None
        assert ja_entry.get("a") == "Ei"

    def test_failed_reload_keeps_previous_entry(self) -> None:
        store, provider = _store(en="a=A")
        store.load(EN)
        provider.sources["en"] = b"NotValid=1"

        with pytest.raises(IllegalKeyError):
            store.reload(EN)

        entry = store.get(EN)
        assert entry is not None
        assert entry.get("a") == "A"

    @settings(suppress_health_check=[HealthCheck.too_slow])
    @given(lang_sources(min_size=1))
    def test_reload_idempotent(self, templates: dict[str, str]) -> None:
        """reload() under unchanged resources leaves content identical."""
        event(f"size={len(templates)}")
        store, _ = _store(en=to_lang_source(templates), ja=to_lang_source(templates))
        store.load(EN, JA)
        before = {entry.lang: dict(entry.templates) for entry in store.list_entries()}

        store.reload()

        after = {entry.lang: dict(entry.templates) for entry in store.list_entries()}
        assert after == before
        assert store.langs == (EN, JA)


class TestMutation:
    """put/get/remove/has/list."""

    def test_put_inserts_and_replaces(self) -> None:
        store = EntryStore()
        store.put(Entry(EN, {"a": "1"}))
        store.put(Entry(Lang("en", "Other"), {"a": "2"}))

        assert len(store) == 1
        entry = store.get(EN)
        assert entry is not None
        assert entry.get("a") == "2"

    def test_put_replaces_language_key(self) -> None:
        """A replaced entry's Lang, not the old one, is what the store reports."""
        store = EntryStore()
        store.put(Entry(Lang("en", "Old"), {"a": "1"}))
        store.put(Entry(Lang("en", "New"), {"a": "2"}))

        assert [lang.display_name for lang in store.langs] == ["New"]
        entry = store.get(EN)
        assert entry is not None
        assert entry.lang.display_name == "New"

    def test_put_moves_entry_last(self) -> None:
        store = EntryStore()
        store.put(Entry(EN))
        store.put(Entry(JA))

        store.put(Entry(EN, {"a": "A"}))

        assert store.langs == (JA, EN)

    def test_reload_reports_callers_lang(self) -> None:
        store, _ = _store(en="a=A")
        store.load(Lang("en", "Old"))

        store.reload(Lang("en", "New"))

        assert [lang.display_name for lang in store.langs] == ["New"]
        assert store.get_load_summary().successful == 1

    def test_listed_entries_cannot_change_store(self) -> None:
        store, _ = _store(en="greeting=Hello")
        store.load(EN)
        listed = store.list_entries()[0]

        with pytest.raises(AttributeError):
            listed.templates = {"greeting": "Changed", "bad key": "x"}  # type: ignore[misc]
        with pytest.raises(TypeError):
            listed.templates["greeting"] = "Changed"  # type: ignore[index]

        entry = store.get(EN)
        assert entry is not None
        assert entry.get("greeting") == "Hello"
        assert entry.message_ids() == ("greeting",)

    def test_put_fallback_rejected(self) -> None:
        with pytest.raises(ValueError, match="FALLBACK"):
            EntryStore().put(Entry(FALLBACK, {}))

    def test_remove_missing_returns_false(self) -> None:
        assert EntryStore().remove(EN) is False

    def test_get_missing_returns_none(self) -> None:
        assert EntryStore().get(EN) is None

    def test_contains(self) -> None:
        store = EntryStore()
        store.put(Entry(EN))

        assert EN in store
        assert JA not in store

    def test_list_entries_is_snapshot(self) -> None:
        store = EntryStore()
        store.put(Entry(EN))
        snapshot = store.list_entries()

        store.put(Entry(JA))

        assert len(snapshot) == 1
        assert len(store.list_entries()) == 2

    def test_message_id_union(self) -> None:
        store = EntryStore()
        store.put(Entry(EN, {"a": "A", "b": "B"}))
        store.put(Entry(JA, {"b": "Bi", "c": "Ci"}))

        assert store.get_message_ids() == ("a", "b", "c")

    def test_put_clears_load_results(self) -> None:
        store, _ = _store(en="a=A")
        store.load(EN)
        store.put(Entry(EN, {"a": "manual"}))

        assert store.get_load_summary().total_attempted == 0


class TestFromConfig:
    """from_config() provider wiring."""

    def test_override_only_without_package(self, tmp_path: Path) -> None:
        store = EntryStore.from_config(ResourceConfig("org.example", "demo", tmp_path))

        assert len(store.providers) == 1
        provider = store.providers[0]
        assert isinstance(provider, PathResourceProvider)
        assert provider.describe_path("en") == str(tmp_path / "langs" / "en.lang")

    def test_bundled_then_override(self, tmp_path: Path) -> None:
        store = EntryStore.from_config(
            ResourceConfig("org.example", "demo", tmp_path, package="demo_pkg")
        )

        bundled, override = store.providers
        assert isinstance(bundled, PackageResourceProvider)
        assert bundled.path_template == "assets/org/example/demo/langs/{lang}.lang"
        assert isinstance(override, PathResourceProvider)

    def test_loads_override_file(self, tmp_path: Path) -> None:
        langs_dir = tmp_path / "langs"
        langs_dir.mkdir()
        (langs_dir / "en.lang").write_text("greeting=Hello <args[0]>!\n", encoding="utf-8")
        store = EntryStore.from_config(ResourceConfig("org.example", "demo", tmp_path))

        store.load(EN, JA)

        entry = store.get(EN)
        assert entry is not None
        assert entry.get("greeting") == "Hello <args[0]>!"
        assert store.get_load_summary().not_found == 1


class TestThreadSafety:
    """Concurrent readers never observe a partial entry."""

    def test_concurrent_reload_and_read(self) -> None:
        old = "".join(f"k{i}=old\n" for i in range(50))
        new = "".join(f"k{i}=new\n" for i in range(50))
        store, provider = _store(en=old)
        store.load(EN)
        observed: list[set[str]] = []
        stop = threading.Event()

        def reader() -> None:
            while not stop.is_set():
                entry = store.get(EN)
                assert entry is not None
                observed.append(set(entry.templates.values()))

        threads = [threading.Thread(target=reader) for _ in range(4)]
        for thread in threads:
            thread.start()
        for i in range(20):
            provider.sources["en"] = (new if i % 2 == 0 else old).encode()
            store.reload(EN)
        stop.set()
        for thread in threads:
            thread.join()

        assert all(values in ({"old"}, {"new"}) for values in observed)
