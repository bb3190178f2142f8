"""Exception hierarchy for message resolution and catalog loading."""

from __future__ import annotations

from collections.abc import Iterable


class FluentHelperError(Exception):
    """Base class for all errors raised by the helper."""


class MissingParameter(FluentHelperError, KeyError):
    """Raised when a pattern references parameters that were not supplied.

    :param message_id: Id of the message being resolved.
    :param language_id: Language the catalog belongs to.
    :param names: Names of the absent parameters.
    """

    def __init__(self, message_id: str, language_id: str, names: Iterable[str]) -> None:
        self.message_id: str = message_id
        self.language_id: str = language_id
        self.names: list[str] = sorted(names)
        super().__init__(f'Missing parameters for {language_id}/{message_id}: {self.names}')

    def __str__(self) -> str:
        # KeyError.__str__ wraps the message in quotes
        return str(self.args[0])


class InvalidPattern(FluentHelperError, ValueError):
    """Raised when a message pattern cannot be parsed as a format string."""

    def __init__(self, message_id: str, reason: str) -> None:
        self.message_id: str = message_id
        super().__init__(f'Invalid pattern for message {message_id!r}: {reason}')


class CatalogError(FluentHelperError, ValueError):
    """Raised when a catalog resource is malformed."""

    def __init__(self, source: str, line: int, reason: str) -> None:
        self.source: str = source
        self.line: int = line
        super().__init__(f'{source}:{line}: {reason}')


class InvalidLanguage(FluentHelperError, ValueError):
    """Raised for language identifiers that cannot name a catalog."""

    def __init__(self, language_id: object) -> None:
        self.language_id: object = language_id
        super().__init__(f'Invalid language identifier: {language_id!r}')
