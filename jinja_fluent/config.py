"""Helper configuration: reading environment variables."""

import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

load_dotenv(find_dotenv(usecwd=True))


def _env_bool(value: str | None, *, default: bool = False) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if not normalized:
        return default
    return normalized in {'1', 'true', 'yes', 'on'}


def _env_list(value: str | None) -> tuple[str, ...]:
    if value is None:
        return ()
    return tuple(item.strip() for item in value.split(',') if item.strip())


# Directory holding one sub-directory per language
FLUENT_LOCALES_DIR: Path = Path(os.getenv('FLUENT_LOCALES_DIR', './locales'))

# Language used for messages missing from the requested catalog
FLUENT_FALLBACK_LANGUAGE: str = os.getenv('FLUENT_FALLBACK_LANGUAGE', 'en').strip() or 'en'

# Resources shared by every language, relative to FLUENT_LOCALES_DIR
FLUENT_CORE_RESOURCES: tuple[str, ...] = _env_list(os.getenv('FLUENT_CORE_RESOURCES'))

# HTML-escape messages written by the template extension
FLUENT_ESCAPE: bool = _env_bool(os.getenv('FLUENT_ESCAPE'), default=True)

# Text rendered for unknown message ids
FLUENT_FALLBACK_TEMPLATE: str = os.getenv('FLUENT_FALLBACK_TEMPLATE') or 'Unknown localization {message_id}'

# Log level for root/primary handlers
LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO').strip() or 'INFO'

# Optional path to JSON logging configuration
_LOGGING_CONFIG_ENV: str | None = os.getenv('LOGGING_CONFIG_PATH')
LOGGING_CONFIG_PATH: Path | None = Path(_LOGGING_CONFIG_ENV) if _LOGGING_CONFIG_ENV else None
