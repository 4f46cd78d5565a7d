"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable

from .codes import Diagnostic, DiagnosticCode


def _lang_list(lang_ids: Iterable[str]) -> str:
    return "[" + ", ".join(lang_ids) + "]"


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here so exception constructors stay free
    of message formatting and tests can match on a single wording.
    """

    @staticmethod
    def message_not_found(message_id: str, lang_ids: Iterable[str]) -> Diagnostic:
        """Message id not found in any candidate language.

        Args:
            message_id: The message identifier that was not found
            lang_ids: Ids of the languages that were tried, in order

        Returns:
            Diagnostic for MESSAGE_NOT_FOUND
        """
        msg = f"Message '{message_id}' not found in languages {_lang_list(lang_ids)}"
        return Diagnostic(
            code=DiagnosticCode.MESSAGE_NOT_FOUND,
            message=msg,
            hint="Check that the message is defined in a loaded .lang resource",
        )

    @staticmethod
    def object_not_resolved(description: str, lang_ids: Iterable[str]) -> Diagnostic:
        """Formattable object could not be built by any formatter/language pair.

        Args:
            description: repr() of the object that failed
            lang_ids: Ids of the languages that were tried, in order

        Returns:
            Diagnostic for OBJECT_NOT_RESOLVED
        """
        msg = f"{description} could not be resolved in languages {_lang_list(lang_ids)}"
        return Diagnostic(
            code=DiagnosticCode.OBJECT_NOT_RESOLVED,
            message=msg,
            hint="Check that every formatter has the referenced messages loaded",
        )

    @staticmethod
    def cyclic_reference(resolution_path: Iterable[str]) -> Diagnostic:
        """Circular <$id> reference detected.

        Args:
            resolution_path: The path of message references forming the cycle

        Returns:
            Diagnostic for CYCLIC_REFERENCE
        """
        path = tuple(resolution_path)
        msg = f"Circular reference detected: {' -> '.join(path)}"
        return Diagnostic(
            code=DiagnosticCode.CYCLIC_REFERENCE,
            message=msg,
            hint="Break the circular dependency by removing one of the references",
            resolution_path=path,
        )

    @staticmethod
    def max_depth_exceeded(max_depth: int) -> Diagnostic:
        """Nested reference expansion went deeper than allowed.

        Args:
            max_depth: Maximum allowed depth

        Returns:
            Diagnostic for MAX_DEPTH_EXCEEDED
        """
        msg = f"Maximum reference depth ({max_depth}) exceeded"
        return Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
            message=msg,
            hint="Reduce the nesting of <$id> references",
        )

    @staticmethod
    def locale_already_exists(lang_id: str) -> Diagnostic:
        """Language is already tracked by the store.

        Args:
            lang_id: Id of the language being loaded

        Returns:
            Diagnostic for LOCALE_ALREADY_EXISTS
        """
        msg = f"Language '{lang_id}' is already loaded"
        return Diagnostic(
            code=DiagnosticCode.LOCALE_ALREADY_EXISTS,
            message=msg,
            hint="Use reload(), or remove() the language before loading it again",
        )

    @staticmethod
    def illegal_key(lang_id: str, keys: Iterable[str]) -> Diagnostic:
        """Loaded resource contains keys that are not valid message ids.

        Args:
            lang_id: Id of the language being loaded
            keys: The invalid keys

        Returns:
            Diagnostic for ILLEGAL_KEY
        """
        rendered = ", ".join(repr(key) for key in keys)
        msg = f"Invalid message ids in language '{lang_id}': {rendered}"
        return Diagnostic(
            code=DiagnosticCode.ILLEGAL_KEY,
            message=msg,
            hint="Message ids must start with a-z or 0-9 and contain only ASCII letters and digits",
        )
