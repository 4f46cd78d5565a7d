"""Pytest configuration for the lexmsg test suite.

Single Source of Truth for Hypothesis max_examples:
- dev: Local development with 500 examples (thorough property testing)
- ci: CI runs with 50 examples (fast feedback)
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- HYPOTHESIS_PROFILE env var -> explicit override
- CI=true environment variable -> "ci" profile
- Otherwise -> "dev" profile (local development)

Override manually: HYPOTHESIS_PROFILE=verbose pytest tests/
"""

from __future__ import annotations

import os
from collections.abc import Callable

import pytest
from hypothesis import Phase, Verbosity, settings

from lexmsg import EntryStore, Formatter, Lang
from tests.helpers.providers import DictProvider

# =============================================================================
# HYPOTHESIS PROFILES - SINGLE SOURCE OF TRUTH
# =============================================================================

settings.register_profile(
    "dev",
    max_examples=500,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    """Detect appropriate Hypothesis profile based on execution context.

    Priority:
    1. HYPOTHESIS_PROFILE env var (explicit override)
    2. CI=true env var
    3. Default to "dev" (local development)
    """
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit

    if os.environ.get("CI") == "true":
        return "ci"

    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# SHARED FIXTURES
# =============================================================================

EN = Lang("en", "English")
JA = Lang("ja", "Japanese")
FR = Lang("fr", "French")


@pytest.fixture
def make_store() -> Callable[..., EntryStore]:
    """Factory: build a store over in-memory .lang sources and load them.

    Usage:
        store = make_store(en="greeting=Hello", ja="greeting=Konnichiwa")
    """

    def _make(**sources: str) -> EntryStore:
        store = EntryStore([DictProvider({k: v.encode() for k, v in sources.items()})])
        store.load(*(Lang(lang_id, lang_id) for lang_id in sources))
        return store

    return _make


@pytest.fixture
def en_ja_formatter(make_store: Callable[..., EntryStore]) -> Formatter:
    """Formatter over 'en' (complete) and 'ja' (partial), falling back to 'en'."""
    store = make_store(
        en=(
            "greeting=Hello <args[0]>!\n"
            "farewell=Goodbye\n"
            "part1=Foo\n"
            "part2=Bar\n"
            "both=<$part1><$part2>\n"
            "a=A\n"
            "b=B\n"
        ),
        ja="farewell=Sayonara\npart1=Fuu\n",
    )
    return Formatter(store, fallback_lang=EN)
