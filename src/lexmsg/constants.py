"""Shared constants for lexmsg.

This module provides centralized configuration constants used across
the core, runtime and localization packages. Placing constants here avoids
circular imports and provides a single source of truth.

Constants are grouped by domain:
- Identifier grammar: Message id syntax shared by validator and formatter
- Template markers: The template mini-language (references, arguments, escapes)
- Depth limits: Recursion protection for nested reference expansion
- Resource layout: Path conventions for bundled and override .lang files

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Identifier grammar
    "ID_SEGMENT_REGEX",
    "ID_REGEX",
    # Template markers
    "REFERENCE_REGEX",
    "ARG_MARKER",
    "NEWLINE_ESCAPE",
    "MISSING_REFERENCE_TEXT",
    # Depth limits
    "MAX_DEPTH",
    # Reserved languages
    "FALLBACK_LANG_ID",
    "FALLBACK_LANG_NAME",
    # Resource layout
    "LANG_FILE_SUFFIX",
    "BUNDLED_PATH_TEMPLATE",
    "OVERRIDE_PATH_TEMPLATE",
    "RESOURCE_ENCODING",
]

# ============================================================================
# IDENTIFIER GRAMMAR
# ============================================================================

# One id segment: lowercase letter or digit, then any ASCII letters/digits.
ID_SEGMENT_REGEX: str = "[a-z0-9][a-zA-Z0-9]*"

# Complete id: one or more segments concatenated with no delimiter.
ID_REGEX: str = f"{ID_SEGMENT_REGEX}(?:{ID_SEGMENT_REGEX})*"

# ============================================================================
# TEMPLATE MARKERS
# ============================================================================

# Nested message reference: <$identifier>. Group 1 captures the identifier.
REFERENCE_REGEX: str = rf"<\$({ID_REGEX})>"

# Positional argument placeholder, zero-based: <args[0]>, <args[1]>, ...
# Format string - use ARG_MARKER.format(index=i)
ARG_MARKER: str = "<args[{index}]>"

# The only recognized escape: the two characters backslash + 'n'.
NEWLINE_ESCAPE: str = "\\n"

# Text spliced in place of a nested reference that failed to resolve
# in lenient mode.
MISSING_REFERENCE_TEXT: str = "null"

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum nesting depth for <$id> expansion within one resolution call.
# Clamped at runtime against sys.getrecursionlimit() by depth_clamp().
MAX_DEPTH: int = 100

# ============================================================================
# RESERVED LANGUAGES
# ============================================================================

# Identity of the FALLBACK routing sentinel. Never stored in an EntryStore.
FALLBACK_LANG_ID: str = "default"
FALLBACK_LANG_NAME: str = "Default"

# ============================================================================
# RESOURCE LAYOUT
# ============================================================================

LANG_FILE_SUFFIX: str = ".lang"

# Bundled resource, relative to the resource package root.
# Format strings - {domain_path} is the domain with dots replaced by slashes.
BUNDLED_PATH_TEMPLATE: str = "assets/{domain_path}/{app_id}/langs/{lang}" + LANG_FILE_SUFFIX

# Override resource, relative to the host application's data folder.
OVERRIDE_PATH_TEMPLATE: str = "langs/{lang}" + LANG_FILE_SUFFIX

RESOURCE_ENCODING: str = "utf-8"
