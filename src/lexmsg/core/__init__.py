"""Core utilities shared across runtime and localization layers.

This package provides foundational utilities that both the runtime layer
(store, formatter) and localization layer (loading, manager) depend on.

Exports:
    DepthGuard: Context manager for recursion depth limiting
    is_valid_id / is_valid_ids / find_invalid_ids: Message id validator

Python 3.13+.
"""

from .depth_guard import DepthGuard, depth_clamp
from .identifier_validation import ID_PATTERN, find_invalid_ids, is_valid_id, is_valid_ids

__all__ = [
    "ID_PATTERN",
    "DepthGuard",
    "depth_clamp",
    "find_invalid_ids",
    "is_valid_id",
    "is_valid_ids",
]
