"""Resolves message ids against a catalog with strict parameter checks."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from string import Formatter

from .exceptions import InvalidPattern, MissingParameter
from .params import ParamValue, coerce_param

logger: logging.Logger = logging.getLogger(__name__)

DEFAULT_FALLBACK: str = 'Unknown localization {message_id}'

FallbackPolicy = str | Callable[[str, str], str]

FALLBACK_FIELDS: frozenset[str] = frozenset({'message_id', 'language_id'})

_FIELD_ACCESS_RE = re.compile(r'[.\[]')


def extract_placeholders(pattern: str, *, message_id: str = '<pattern>') -> set[str]:
    """Collect the parameter names referenced by a pattern.

    :param pattern: String with ``{name}`` placeholders.
    :param message_id: Id used in error messages.
    :raises InvalidPattern: on unbalanced braces, positional or attribute fields.
    :returns: Set of placeholder names.
    """
    try:
        parsed = list(Formatter().parse(pattern))
    except ValueError as exc:
        raise InvalidPattern(message_id, str(exc)) from exc

    fields: set[str] = set()
    for _, field_name, format_spec, _ in parsed:
        if field_name is None:
            continue
        if not field_name or field_name.isdigit():
            raise InvalidPattern(message_id, 'positional placeholders are not supported')
        if _FIELD_ACCESS_RE.search(field_name):
            raise InvalidPattern(message_id, f'attribute or index access in {{{field_name}}}')
        fields.add(field_name)
        if format_spec and '{' in format_spec:
            fields |= extract_placeholders(format_spec, message_id=message_id)
    return fields


def validate_fallback(policy: FallbackPolicy | None) -> FallbackPolicy | None:
    """Check that a format-string policy only names ``message_id`` and ``language_id``.

    :raises InvalidPattern: for unknown, positional or badly formatted fields.
    :returns: The policy unchanged.
    """
    if policy is None or callable(policy):
        return policy
    unknown: list[str] = sorted(extract_placeholders(policy, message_id='<fallback>') - FALLBACK_FIELDS)
    if unknown:
        raise InvalidPattern('<fallback>', f'unknown fields {unknown}, expected message_id or language_id')
    try:
        policy.format(message_id='', language_id='')
    except ValueError as exc:
        raise InvalidPattern('<fallback>', str(exc)) from exc
    return policy


def render_fallback(policy: FallbackPolicy | None, message_id: str, language_id: str) -> str:
    """Produce the marker shown in place of an unknown message."""
    if policy is None:
        policy = DEFAULT_FALLBACK
    if callable(policy):
        return policy(message_id, language_id)
    return policy.format(message_id=message_id, language_id=language_id)


def resolve(
    catalog: Mapping[str, str],
    language_id: str,
    message_id: str,
    params: Mapping[str, ParamValue] | None = None,
    *,
    fallback: FallbackPolicy | None = None,
) -> str:
    """Render a message from the catalog selected for ``language_id``.

    :param catalog: Message id to pattern mapping for one language.
    :param language_id: Language the catalog was selected for.
    :param message_id: Key of the message.
    :param params: Named values for the placeholders.
    :param fallback: Format string or callable used for unknown ids.
    :raises ValueError: if ``message_id`` is empty.
    :raises TypeError: for values other than text, numbers or ``TextBlock``.
    :raises MissingParameter: if a referenced placeholder has no value.
    :raises InvalidPattern: if the stored pattern or the fallback policy is malformed.
    :returns: Rendered text or the fallback marker.
    """
    if not message_id:
        raise ValueError('message_id must be a non-empty string')
    validate_fallback(fallback)

    pattern: str | None = catalog.get(message_id)
    if pattern is None:
        logger.warning('Unknown message id %s for language %s', message_id, language_id)
        return render_fallback(fallback, message_id, language_id)

    provided: dict[str, str] = {name: str(coerce_param(value)) for name, value in (params or {}).items()}
    expected: set[str] = extract_placeholders(pattern, message_id=message_id)

    missing: set[str] = expected - set(provided)
    if missing:
        raise MissingParameter(message_id, language_id, missing)

    unused: list[str] = sorted(set(provided) - expected)
    if unused:
        logger.debug('Ignoring unused parameters for %s: %s', message_id, unused)

    values: dict[str, str] = {name: value for name, value in provided.items() if name in expected}
    try:
        return pattern.format_map(values)
    except (ValueError, TypeError) as exc:
        # bad format spec for the supplied value, e.g. ``{name:d}`` with text
        raise InvalidPattern(message_id, str(exc)) from exc
