"""Nesting limit for <$id> reference expansion.

Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import Self

from lexmsg.constants import MAX_DEPTH
from lexmsg.diagnostics import DepthLimitExceededError

__all__ = ["DepthGuard", "depth_clamp"]

logger = logging.getLogger(__name__)

# _resolve, expanding(), its contextmanager wrapper and DepthGuard.__enter__
_FRAMES_PER_LEVEL = 4


def depth_clamp(requested_depth: int, reserve_frames: int = 50) -> int:
    """Return requested_depth, lowered to what the interpreter stack can hold.

    Args:
        requested_depth: Desired maximum number of nested references
        reserve_frames: Frames kept free for the caller (default: 50)

    Raises:
        ValueError: If requested_depth is not positive
    """
    if requested_depth <= 0:
        msg = f"max_depth must be positive, got {requested_depth}"
        raise ValueError(msg)
    limit = sys.getrecursionlimit()
    ceiling = (limit - reserve_frames) // _FRAMES_PER_LEVEL
    if requested_depth <= ceiling:
        return requested_depth
    logger.warning(
        "Clamping reference depth %d to %d (recursion limit %d)",
        requested_depth,
        ceiling,
        limit,
    )
    return ceiling


@dataclass(slots=True)
class DepthGuard:
    """Counts open reference expansions and refuses to go past max_depth.

    Entered once per nested <$id>. Mutable on purpose: the count moves on
    every __enter__/__exit__. One guard belongs to one resolution call.

    Example:
        >>> guard = DepthGuard(max_depth=2)
        >>> with guard, guard:
        ...     guard.remaining
        0
    """

    max_depth: int = MAX_DEPTH
    current_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.max_depth = depth_clamp(self.max_depth)

    @property
    def depth(self) -> int:
        return self.current_depth

    @property
    def remaining(self) -> int:
        """Expansions still allowed before the limit trips."""
        return self.max_depth - self.current_depth

    def __enter__(self) -> Self:
        # Checked before counting: __exit__ does not run when __enter__ raises.
        if self.remaining <= 0:
            raise DepthLimitExceededError(self.max_depth)
        self.current_depth += 1
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.current_depth -= 1
