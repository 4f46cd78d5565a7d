"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Lookup errors (missing messages)
        2000-2999: Resolution errors (nested expansion failures)
        3000-3999: Store errors (loading and key validation)
    """

    # Lookup errors (1000-1999)
    MESSAGE_NOT_FOUND = 1001
    OBJECT_NOT_RESOLVED = 1002

    # Resolution errors (2000-2999)
    CYCLIC_REFERENCE = 2001
    MAX_DEPTH_EXCEEDED = 2002

    # Store errors (3000-3999)
    LOCALE_ALREADY_EXISTS = 3001
    ILLEGAL_KEY = 3002


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        resolution_path: Message ids under expansion when the error occurred
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    resolution_path: tuple[str, ...] | None = None

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic with code, message and optional hint.

        Example output:
            error[MESSAGE_NOT_FOUND]: Message 'hello' not found in languages [en, ja]
              = help: Check that the message is defined in a loaded .lang resource

        Returns:
            Formatted error message
        """
        lines = [f"error[{self.code.name}]: {self.message}"]
        if self.resolution_path:
            lines.append(f"  = path: {' -> '.join(self.resolution_path)}")
        if self.hint:
            lines.append(f"  = help: {self.hint}")
        return "\n".join(lines)
