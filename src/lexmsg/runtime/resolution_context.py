"""Per-call resolution state for nested message references.

Thread Safety:
    ResolutionContext is created per public format call for full isolation.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from lexmsg.constants import MAX_DEPTH
from lexmsg.core.depth_guard import DepthGuard
from lexmsg.diagnostics import CyclicReferenceError

__all__ = ["ResolutionContext"]


@dataclass(slots=True)
class ResolutionContext:
    """Explicit context for one message resolution.

    Uses both a list (ordered path for errors) and a set (O(1) lookup) for
    cycle detection, and a DepthGuard for the nesting limit.

    Attributes:
        stack: Message ids currently being expanded, outermost first
        max_depth: Maximum nesting depth of <$id> references
    """

    stack: list[str] = field(default_factory=list)
    _seen: set[str] = field(default_factory=set)
    max_depth: int = MAX_DEPTH
    _guard: DepthGuard = field(init=False)

    def __post_init__(self) -> None:
        self._guard = DepthGuard(max_depth=self.max_depth)

    @property
    def depth(self) -> int:
        """Current nesting depth."""
        return len(self.stack)

    def get_cycle_path(self, message_id: str) -> list[str]:
        """Get the cycle path for error reporting, starting at the repeated id."""
        start = self.stack.index(message_id) if message_id in self._seen else 0
        return [*self.stack[start:], message_id]

    @contextmanager
    def expanding(self, message_id: str) -> Iterator[ResolutionContext]:
        """Mark message_id as under expansion for the duration of the block.

        Usage:
            with context.expanding(nested_id):
                text = self._resolve(nested_id, ...)

        Raises:
            CyclicReferenceError: If message_id is already being expanded
            DepthLimitExceededError: If nesting would exceed max_depth
        """
        if message_id in self._seen:
            raise CyclicReferenceError(self.get_cycle_path(message_id))
        with self._guard:
            self.stack.append(message_id)
            self._seen.add(message_id)
            try:
                yield self
            finally:
                self.stack.pop()
                self._seen.discard(message_id)
