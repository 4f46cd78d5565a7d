"""Message id validation.

This module provides the single source of truth for message id grammar,
shared by the entry store (key validation at load time) and the formatter
(reference marker recognition).

Message Id Grammar:
    [a-z0-9][a-zA-Z0-9]*  repeated one or more times, no delimiter

    - Start: lowercase ASCII letter or ASCII digit
    - Continue: ASCII letter or ASCII digit
    - No separators: '.', '-', '_' and whitespace are rejected

Thread Safety:
    All functions in this module are pure functions with no shared state.
    Safe for concurrent use across multiple threads.

Python 3.13+.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from lexmsg.constants import ID_REGEX

if TYPE_CHECKING:
    from collections.abc import Iterable

__all__ = [
    "ID_PATTERN",
    "find_invalid_ids",
    "is_valid_id",
    "is_valid_ids",
]

# Compiled once at module load; fullmatch anchors both ends.
ID_PATTERN: re.Pattern[str] = re.compile(ID_REGEX)


def is_valid_id(message_id: str) -> bool:
    """Validate a complete message id.

    Args:
        message_id: Candidate id

    Returns:
        True if the id matches the grammar, False otherwise

    Example:
        >>> is_valid_id("welcomeMessage")
        True
        >>> is_valid_id("404page")
        True
        >>> is_valid_id("Welcome")
        False
        >>> is_valid_id("menu.title")
        False
        >>> is_valid_id("")
        False
    """
    return ID_PATTERN.fullmatch(message_id) is not None


def is_valid_ids(message_ids: Iterable[str]) -> bool:
    """Check that every id in a collection is valid.

    An empty collection is valid.

    Args:
        message_ids: Candidate ids

    Returns:
        True if all ids are valid
    """
    return all(is_valid_id(message_id) for message_id in message_ids)


def find_invalid_ids(message_ids: Iterable[str]) -> tuple[str, ...]:
    """Collect the ids that fail validation, preserving input order.

    Args:
        message_ids: Candidate ids

    Returns:
        Tuple of invalid ids; empty if all are valid

    Example:
        >>> find_invalid_ids(["title", "Menu", "ok", "a-b"])
        ('Menu', 'a-b')
    """
    return tuple(message_id for message_id in message_ids if not is_valid_id(message_id))
