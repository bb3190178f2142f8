"""Parameter values accepted by message patterns."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

logger: logging.Logger = logging.getLogger(__name__)

PARAGRAPH_SEPARATOR: str = '\n\n'


@dataclass(frozen=True)
class TextBlock:
    """Multi-paragraph parameter value.

    :param paragraphs: Ordered paragraphs, each an ordered tuple of lines.
    """

    paragraphs: tuple[tuple[str, ...], ...]

    @classmethod
    def from_text(cls, text: str) -> TextBlock:
        """Split text into paragraphs on ``\\n\\n`` and lines on ``\\n``.

        Nothing is dropped: ``str(TextBlock.from_text(text)) == text``.
        """
        return cls(tuple(tuple(paragraph.split('\n')) for paragraph in text.split(PARAGRAPH_SEPARATOR)))

    def __str__(self) -> str:
        return PARAGRAPH_SEPARATOR.join('\n'.join(lines) for lines in self.paragraphs)


ParamValue = str | int | float | TextBlock


def _format_number(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def coerce_param(value: object) -> str | TextBlock:
    """Convert a supported value into text or a text block.

    :param value: Raw parameter value.
    :raises TypeError: for anything other than ``str``, numbers or ``TextBlock``.
    :returns: Value ready for substitution.
    """
    if isinstance(value, (str, TextBlock)):
        return value
    # bool is an int subclass but never a meaningful message argument
    if isinstance(value, bool):
        raise TypeError('Boolean values are not valid message parameters')
    if isinstance(value, (int, float)):
        return _format_number(value)
    raise TypeError(f'Unsupported message parameter type: {type(value).__name__}')


def coerce_params(params: Mapping[str, object], *, strict: bool = False) -> dict[str, str | TextBlock]:
    """Coerce every parameter, dropping unsupported values unless ``strict``."""
    coerced: dict[str, str | TextBlock] = {}
    for name, value in params.items():
        try:
            coerced[name] = coerce_param(value)
        except TypeError:
            if strict:
                raise
            logger.debug('Skipping parameter %s of type %s', name, type(value).__name__)
    return coerced
