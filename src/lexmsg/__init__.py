"""lexmsg - message id resolution with nested references and language fallback.

Resolves message ids into locale-specific text from simple ``key=value``
.lang resources. Templates may reference other messages (``<$id>``), take
positional arguments (``<args[0]>``) and contain ``\\n`` escapes.

Public API:
    Lang / FALLBACK - Language identity and the fallback routing sentinel
    EntryStore - Thread-safe per-language template store
    Formatter - Lenient and strict message resolution
    Message / MessageGroup - Formattable leaf and composite objects
    FormatterChain - Several formatters tried per language
    LocalizationManager - Store + formatter wired from configuration

Exceptions:
    LexMsgError - Base exception class
    LocaleAlreadyExistsError - Language loaded twice
    IllegalKeyError - Resource keys failing message id validation
    LocaleNotFoundError - Strict resolution found nothing
    CyclicReferenceError - Template references itself
    DepthLimitExceededError - Reference chain too deep

Submodules:
    lexmsg.localization - Resource providers, configuration, load summaries
    lexmsg.core - Message id validation and depth guards
    lexmsg.diagnostics - Error types and structured diagnostics
"""

# Essential Public API
from .diagnostics import (
    CyclicReferenceError,
    DepthLimitExceededError,
    IllegalKeyError,
    LexMsgError,
    LocaleAlreadyExistsError,
    LocaleNotFoundError,
)
from .localization import (
    FormatterChain,
    LocalizationManager,
    ManagerConfig,
    ResourceConfig,
)
from .objects import Formattable, Message, MessageGroup
from .runtime import FALLBACK, Entry, EntryStore, FallbackInfo, Formatter, Lang

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("lexmsg")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

# Resource encoding of .lang files
__recommended_encoding__ = "UTF-8"

__all__ = [
    "FALLBACK",
    "CyclicReferenceError",
    "DepthLimitExceededError",
    "Entry",
    "EntryStore",
    "FallbackInfo",
    "Formattable",
    "Formatter",
    "FormatterChain",
    "IllegalKeyError",
    "Lang",
    "LexMsgError",
    "LocaleAlreadyExistsError",
    "LocaleNotFoundError",
    "LocalizationManager",
    "ManagerConfig",
    "Message",
    "MessageGroup",
    "ResourceConfig",
    "__recommended_encoding__",
    "__version__",
]
