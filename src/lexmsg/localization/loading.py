"""Resource loading infrastructure for EntryStore.

Provides the .lang source parser, the protocol for resource providers,
a bundled-package and a filesystem implementation with path-traversal
checks, and result/summary data structures for tracking load attempts.

Components:
    parse_lang_source - Parse .lang text into a template mapping
    ResourceProvider - Protocol for reading raw .lang bytes (structural typing)
    PackageResourceProvider - importlib.resources based provider (bundled assets)
    PathResourceProvider - Disk-based provider
    ResourceLoadResult - Immutable result of a single provider read
    LoadSummary - Immutable aggregate of load results

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Protocol

from lexmsg.constants import LANG_FILE_SUFFIX
from lexmsg.enums import LoadStatus
from lexmsg.localization.types import LangId, MessageId, TemplateSource

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Parser
    "parse_lang_source",
    # Protocol
    "ResourceProvider",
    # Concrete providers
    "PackageResourceProvider",
    "PathResourceProvider",
    # Load result types
    "ResourceLoadResult",
    "LoadSummary",
]

logger = logging.getLogger(__name__)

_COMMENT_PREFIXES = ("#", "!")
_SEPARATOR = "="
_LANG_PLACEHOLDER = "{lang}"


def parse_lang_source(
    source: TemplateSource, *, origin: str = "<string>"
) -> tuple[dict[MessageId, str], tuple[int, ...]]:
    """Parse .lang text into a message id to template mapping.

    One ``key=value`` pair per line, split on the first ``=``. The key is
    stripped and so is the whitespace around the separator; trailing
    whitespace of the value is kept. Blank lines and lines starting with
    ``#`` or ``!`` are ignored. Lines without ``=`` are skipped and their
    1-based line numbers returned. Escapes such as ``\\n`` are left as-is.
    A later duplicate key overwrites an earlier one.

    Keys are NOT validated here; EntryStore validates after merging.

    Args:
        source: Decoded .lang text
        origin: Human-readable source name for log messages

    Returns:
        Tuple of (templates, skipped line numbers)

    Example:
        >>> parse_lang_source("# header\\ngreeting = Hello <args[0]>!\\n")
        ({'greeting': 'Hello <args[0]>!'}, ())
    """
    templates: dict[MessageId, str] = {}
    skipped: list[int] = []

    for lineno, raw_line in enumerate(source.splitlines(), start=1):
        line = raw_line.lstrip()
        if not line or line.startswith(_COMMENT_PREFIXES):
            continue
        key, sep, value = line.partition(_SEPARATOR)
        if not sep:
            logger.warning("Skipping malformed line %d in %s: no '=' found", lineno, origin)
            skipped.append(lineno)
            continue
        templates[key.strip()] = value.lstrip()

    return templates, tuple(skipped)


def _validate_lang_id(lang_id: LangId) -> None:
    """Reject language ids that would escape the resource directory.

    Raises:
        ValueError: If lang_id is empty or contains unsafe path components
    """
    if not lang_id:
        msg = "Language id cannot be empty"
        raise ValueError(msg)
    if ".." in lang_id:
        msg = f"Path traversal sequences not allowed in language id: '{lang_id}'"
        raise ValueError(msg)
    if "/" in lang_id or "\\" in lang_id:
        msg = f"Path separators not allowed in language id: '{lang_id}'"
        raise ValueError(msg)


def _validate_template(path_template: str) -> None:
    if _LANG_PLACEHOLDER not in path_template:
        msg = (
            f"path_template must contain '{{lang}}' placeholder for language substitution, "
            f"got: '{path_template}'"
        )
        raise ValueError(msg)


class ResourceProvider(Protocol):
    """Protocol for reading raw .lang bytes for a language.

    This is a Protocol (structural typing) rather than ABC so any object
    with matching methods can be installed in an EntryStore.

    Example:
        >>> class MemoryProvider:
        ...     def __init__(self, data: dict[str, bytes]) -> None:
        ...         self.data = data
        ...     def read(self, lang_id: str) -> bytes:
        ...         try:
        ...             return self.data[lang_id]
        ...         except KeyError:
        ...             raise FileNotFoundError(lang_id) from None
        ...     def describe_path(self, lang_id: str) -> str:
        ...         return f"memory:{lang_id}"
        ...
        >>> store = EntryStore([MemoryProvider({"en": b"hello=Hello"})])
    """

    def read(self, lang_id: LangId) -> bytes:
        """Read the raw resource for a language.

        Args:
            lang_id: Language id (e.g., 'en', 'ja')

        Returns:
            Undecoded resource bytes

        Raises:
            FileNotFoundError: If no resource exists for this language
            OSError: If the resource cannot be read
        """

    def describe_path(self, lang_id: LangId) -> str:
        """Return human-readable location for diagnostics."""
        return f"{lang_id}{LANG_FILE_SUFFIX}"


@dataclass(frozen=True, slots=True)
class PackageResourceProvider:
    """Provider reading resources bundled inside an importable package.

    Uses importlib.resources, so it works for regular directories and
    zipped distributions alike.

    Example:
        >>> provider = PackageResourceProvider("myapp", "assets/org/myapp/langs/{lang}.lang")
        >>> provider.read("en")  # myapp/assets/org/myapp/langs/en.lang

    Attributes:
        package: Dotted name of the package holding the assets
        path_template: '/'-separated path relative to the package, with {lang}
    """

    package: str
    path_template: str

    def __post_init__(self) -> None:
        """Validate the template.

        Raises:
            ValueError: If package is empty or the template lacks {lang}
        """
        if not self.package:
            msg = "package cannot be empty"
            raise ValueError(msg)
        _validate_template(self.path_template)

    def describe_path(self, lang_id: LangId) -> str:
        """Return "package:relative/path" for diagnostics."""
        return f"{self.package}:{self.path_template.replace(_LANG_PLACEHOLDER, lang_id)}"

    def read(self, lang_id: LangId) -> bytes:
        """Read the bundled resource.

        Raises:
            ValueError: If lang_id contains path traversal sequences
            FileNotFoundError: If the package or the resource does not exist
            OSError: If the resource cannot be read
        """
        _validate_lang_id(lang_id)
        relative = self.path_template.replace(_LANG_PLACEHOLDER, lang_id)
        try:
            root = resources.files(self.package)
        except ModuleNotFoundError as e:
            msg = f"Package '{self.package}' not found"
            raise FileNotFoundError(msg) from e
        return root.joinpath(*relative.split("/")).read_bytes()


@dataclass(frozen=True, slots=True)
class PathResourceProvider:
    """File system provider using a path template.

    Security:
        Language ids containing path separators or ".." are rejected, so
        the resolved file always stays in the template's directory.

    Example:
        >>> provider = PathResourceProvider("/var/lib/myapp/langs/{lang}.lang")
        >>> provider.read("en")  # /var/lib/myapp/langs/en.lang

    Attributes:
        path_template: Filesystem path with {lang} placeholder
    """

    path_template: str

    def __post_init__(self) -> None:
        """Validate the template.

        Raises:
            ValueError: If path_template lacks {lang}
        """
        _validate_template(self.path_template)

    def describe_path(self, lang_id: LangId) -> str:
        """Return the substituted filesystem path."""
        # replace() instead of format() so other braces in the path survive
        return self.path_template.replace(_LANG_PLACEHOLDER, lang_id)

    def read(self, lang_id: LangId) -> bytes:
        """Read the resource file from disk.

        Raises:
            ValueError: If lang_id contains path traversal sequences
            FileNotFoundError: If the file does not exist
            OSError: If the file cannot be read
        """
        _validate_lang_id(lang_id)
        return Path(self.describe_path(lang_id)).read_bytes()


@dataclass(frozen=True, slots=True)
class ResourceLoadResult:
    """Result of reading one provider for one language.

    Attributes:
        lang_id: Language id the read was for
        status: Load status (success, not_found, error)
        error: Exception if status is NOT_FOUND or ERROR, None otherwise
        source_path: Human-readable location of the resource
        message_count: Number of templates parsed from the resource
        skipped_lines: Line numbers skipped as malformed
    """

    lang_id: LangId
    status: LoadStatus
    error: Exception | None = None
    source_path: str | None = None
    message_count: int = 0
    skipped_lines: tuple[int, ...] = ()

    @property
    def is_success(self) -> bool:
        """Check if the resource loaded successfully."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_not_found(self) -> bool:
        """Check if the resource was not found (expected for optional overrides)."""
        return self.status == LoadStatus.NOT_FOUND

    @property
    def is_error(self) -> bool:
        """Check if the resource failed to load."""
        return self.status == LoadStatus.ERROR

    @property
    def has_skipped_lines(self) -> bool:
        """Check if the resource had malformed lines."""
        return len(self.skipped_lines) > 0


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of resource load results.

    All statistics are computed properties derived from ``results``.

    Example:
        >>> store.load(Lang("en"), Lang("ja"))
        >>> summary = store.get_load_summary()
        >>> for result in summary.get_errors():
        ...     print(f"Failed: {result.source_path}: {result.error}")

    Attributes:
        results: All individual load results (immutable tuple)
    """

    results: tuple[ResourceLoadResult, ...]

    def __repr__(self) -> str:
        return (
            f"LoadSummary(total={self.total_attempted}, "
            f"ok={self.successful}, "
            f"not_found={self.not_found}, "
            f"errors={self.errors})"
        )

    @property
    def total_attempted(self) -> int:
        """Total number of provider reads."""
        return len(self.results)

    @property
    def successful(self) -> int:
        """Number of successful reads."""
        return sum(1 for r in self.results if r.is_success)

    @property
    def not_found(self) -> int:
        """Number of resources not found."""
        return sum(1 for r in self.results if r.is_not_found)

    @property
    def errors(self) -> int:
        """Number of load errors."""
        return sum(1 for r in self.results if r.is_error)

    def get_errors(self) -> tuple[ResourceLoadResult, ...]:
        return tuple(r for r in self.results if r.is_error)

    def get_not_found(self) -> tuple[ResourceLoadResult, ...]:
        return tuple(r for r in self.results if r.is_not_found)

    def get_successful(self) -> tuple[ResourceLoadResult, ...]:
        return tuple(r for r in self.results if r.is_success)

    def get_by_lang(self, lang_id: LangId) -> tuple[ResourceLoadResult, ...]:
        """Get all results for a specific language."""
        return tuple(r for r in self.results if r.lang_id == lang_id)

    @property
    def has_errors(self) -> bool:
        """Check if any resource failed to load with an error."""
        return self.errors > 0

    @property
    def all_successful(self) -> bool:
        """True if no read errored and every resource was found."""
        return self.errors == 0 and self.not_found == 0
