"""Loads message catalogs from locale directories or in-memory mappings."""

from __future__ import annotations

import logging
import re
import textwrap
import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Protocol, runtime_checkable

from .exceptions import CatalogError, InvalidLanguage

logger: logging.Logger = logging.getLogger(__name__)

RESOURCE_SUFFIX: str = '.messages'

_LANGUAGE_RE = re.compile(r'^[A-Za-z]{2,8}(?:-[A-Za-z0-9]{1,8})*$')
_MESSAGE_RE = re.compile(r'^([A-Za-z][A-Za-z0-9_.-]*)\s*=(.*)$')


@runtime_checkable
class CatalogSource(Protocol):
    """Anything able to hand out the catalog for a language."""

    def catalog_for(self, language_id: str) -> Mapping[str, str]: ...

    def languages(self) -> list[str]: ...


def validate_language(language_id: object) -> str:
    """Return ``language_id`` if it can name a catalog.

    :raises InvalidLanguage: for non-strings and malformed identifiers.
    """
    if not isinstance(language_id, str) or not _LANGUAGE_RE.match(language_id):
        raise InvalidLanguage(language_id)
    return language_id


@dataclass
class _Entry:
    message_id: str
    line: int
    head: str
    body: list[str] = field(default_factory=list)

    def value(self) -> str:
        lines: list[str] = list(self.body)
        while lines and not lines[-1].strip():
            lines.pop()
        while lines and not lines[0].strip():
            lines.pop(0)
        parts: list[str] = [self.head] if self.head else []
        if lines:
            parts.append(textwrap.dedent('\n'.join(lines)))
        return '\n'.join(parts)


def _store(messages: dict[str, str], entry: _Entry, source: str) -> None:
    if entry.message_id in messages:
        raise CatalogError(source, entry.line, f'duplicate message id {entry.message_id!r}')
    messages[entry.message_id] = entry.value()


def parse_catalog(text: str, *, source: str = '<string>') -> dict[str, str]:
    """Parse ``id = pattern`` resources.

    Indented lines continue the previous message, blank lines between them
    are kept so patterns may span several paragraphs. Lines starting with
    ``#`` are comments.

    :param text: Resource contents.
    :param source: Name used in error messages.
    :raises CatalogError: on malformed lines or duplicate ids.
    :returns: Message id to pattern mapping.
    """
    messages: dict[str, str] = {}
    entry: _Entry | None = None
    for lineno, raw_line in enumerate(text.splitlines(), start=1):
        line: str = raw_line.rstrip()
        if entry is not None and (not line or line[0] in ' \t'):
            entry.body.append(line)
            continue
        if entry is not None:
            _store(messages, entry, source)
            entry = None
        if not line or line.startswith('#'):
            continue
        match = _MESSAGE_RE.match(line)
        if match is None:
            raise CatalogError(source, lineno, 'expected "id = pattern"')
        entry = _Entry(match.group(1), lineno, match.group(2).strip())
    if entry is not None:
        _store(messages, entry, source)
    return messages


def read_resource(path: Path) -> dict[str, str]:
    """Read and parse a single resource file."""
    text: str = path.read_text(encoding='utf-8')
    return parse_catalog(text, source=str(path))


class CatalogLoader:
    """Reads ``<locales_dir>/<language>/*.messages`` plus shared core resources.

    The catalog for a language is layered: core resources first, then the
    fallback language, then the language itself. Results are memoised per
    existing language directory, other ids share the fallback catalog.
    """

    def __init__(
        self,
        locales_dir: Path | str,
        fallback_language: str,
        core_resources: Iterable[Path | str] = (),
    ) -> None:
        self.locales_dir: Path = Path(locales_dir)
        self.fallback_language: str = validate_language(fallback_language)
        # relative core paths live next to the language directories
        self.core_resources: tuple[Path, ...] = tuple(
            path if path.is_absolute() else self.locales_dir / path
            for path in (Path(item) for item in core_resources)
        )
        self._cache: dict[str, Mapping[str, str]] = {}
        self._lock = threading.Lock()

    def languages(self) -> list[str]:
        """Return names of the available language directories."""
        if not self.locales_dir.is_dir():
            return []
        return sorted(path.name for path in self.locales_dir.iterdir() if path.is_dir())

    def catalog_for(self, language_id: str) -> Mapping[str, str]:
        """Return the read-only merged catalog for ``language_id``."""
        language: str = validate_language(language_id)
        if language != self.fallback_language and not (self.locales_dir / language).is_dir():
            logger.info('No catalog for %s, using %s', language, self.fallback_language)
            language = self.fallback_language
        with self._lock:
            catalog: Mapping[str, str] | None = self._cache.get(language)
            if catalog is None:
                catalog = self._build(language)
                self._cache[language] = catalog
        return catalog

    def _build(self, language: str) -> Mapping[str, str]:
        merged: dict[str, str] = {}
        for path in self.core_resources:
            merged.update(read_resource(path))
        merged.update(self._load_language(self.fallback_language))
        if language != self.fallback_language:
            merged.update(self._load_language(language))
        logger.debug('Loaded %d messages for %s', len(merged), language)
        return MappingProxyType(merged)

    def _load_language(self, language: str) -> dict[str, str]:
        directory: Path = self.locales_dir / language
        if not directory.is_dir():
            logger.warning('Locale directory %s does not exist', directory)
            return {}
        messages: dict[str, str] = {}
        for path in sorted(directory.glob(f'*{RESOURCE_SUFFIX}')):
            for message_id, pattern in read_resource(path).items():
                if message_id in messages:
                    raise CatalogError(str(path), 0, f'message id {message_id!r} defined in several files')
                messages[message_id] = pattern
        return messages


class StaticCatalog:
    """In-memory catalogs keyed by language, with the same layering."""

    def __init__(self, catalogs: Mapping[str, Mapping[str, str]], fallback_language: str) -> None:
        self.fallback_language: str = validate_language(fallback_language)
        base: dict[str, str] = dict(catalogs.get(fallback_language, {}))
        self._catalogs: dict[str, Mapping[str, str]] = {
            validate_language(language): MappingProxyType({**base, **messages})
            for language, messages in catalogs.items()
        }
        self._default: Mapping[str, str] = MappingProxyType(base)

    def languages(self) -> list[str]:
        return sorted(self._catalogs)

    def catalog_for(self, language_id: str) -> Mapping[str, str]:
        language: str = validate_language(language_id)
        return self._catalogs.get(language, self._default)
