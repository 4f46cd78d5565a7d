"""Diagnostic system for lexmsg errors.

Provides structured error diagnostics with codes and hints.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    CyclicReferenceError,
    DepthLimitExceededError,
    IllegalKeyError,
    LexMsgError,
    LocaleAlreadyExistsError,
    LocaleNotFoundError,
)
from .templates import ErrorTemplate

__all__ = [
    "CyclicReferenceError",
    "DepthLimitExceededError",
    "Diagnostic",
    "DiagnosticCode",
    "ErrorTemplate",
    "IllegalKeyError",
    "LexMsgError",
    "LocaleAlreadyExistsError",
    "LocaleNotFoundError",
]
