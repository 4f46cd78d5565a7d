"""pytest-benchmark configuration for lexmsg benchmarks.

Python 3.13+.
"""

from __future__ import annotations

import pytest

from lexmsg import Entry, EntryStore, Formatter, Lang


def pytest_benchmark_update_json(config, benchmarks, output_json):  # noqa: ARG001
    """Add lexmsg metadata to benchmark results.

    Args:
        config: pytest config (required by pytest-benchmark hook signature)
        benchmarks: benchmark results (required by pytest-benchmark hook signature)
        output_json: JSON output dict to modify
    """
    output_json["project"] = "lexmsg"
    output_json["python_version"] = "3.13+"


@pytest.fixture
def two_lang_formatter() -> Formatter:
    """Formatter over a full 'en' entry and a sparse 'lv' entry, falling back to 'en'."""
    en = Lang("en", "English")
    store = EntryStore()
    store.put(
        Entry(
            en,
            {
                "home": "Home",
                "about": "About",
                "greeting": "Hello <args[0]>, you have <args[1]> new messages",
                "title": "<$home> | <$about>",
                "deep": "<$title> / <$title> / <$title>",
            },
        )
    )
    store.put(Entry(Lang("lv", "Latvian"), {"home": "Mājas"}))
    return Formatter(store, fallback_lang=en)
