"""Hypothesis strategies for lexmsg property-based testing.

Usage:
    from tests.strategies import message_ids, invalid_message_ids
    from tests.strategies.messages import lang_sources, to_lang_source
"""

from .messages import (
    id_segments,
    invalid_message_ids,
    lang_sources,
    message_ids,
    plain_text,
    to_lang_source,
)

__all__ = [
    "id_segments",
    "invalid_message_ids",
    "lang_sources",
    "message_ids",
    "plain_text",
    "to_lang_source",
]
