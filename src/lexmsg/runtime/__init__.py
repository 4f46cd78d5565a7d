"""lexmsg runtime package.

Provides languages, per-language entries, the thread-safe EntryStore and
the Formatter that resolves templates.

Python 3.13+.
"""

from .entry import Entry
from .formatter import FallbackInfo, Formatter
from .lang import FALLBACK, Lang
from .resolution_context import ResolutionContext
from .store import EntryStore

__all__ = [
    "FALLBACK",
    "Entry",
    "EntryStore",
    "FallbackInfo",
    "Formatter",
    "Lang",
    "ResolutionContext",
]
