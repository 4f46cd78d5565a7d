"""Type aliases for the localization domain.

Provides semantic type aliases used throughout lexmsg and by user code
when annotating call sites.

Python 3.13+. Zero external dependencies.
"""



__all__ = [
    "LangId",
    "MessageId",
    "TemplateSource",
]

type MessageId = str
"""Identifier for a message (e.g., 'welcome', 'error404', 'menuTitle')."""

type LangId = str
"""Language identifier as used in resource file names (e.g., 'en', 'ja', 'en_us')."""

type TemplateSource = str
"""Raw decoded .lang source text."""
