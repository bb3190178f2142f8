"""Logging setup shared by the CLI and embedding applications."""

from __future__ import annotations

import json
import logging
import logging.config
from pathlib import Path
from typing import Any

from jinja_fluent.config import LOG_LEVEL, LOGGING_CONFIG_PATH


def _resolve_log_level(target_level: str | None) -> str | None:
    """Return valid logging level name (DEBUG/INFO/...)."""
    if not target_level:
        return None
    normalized: str = target_level.strip()
    if not normalized:
        return None
    if normalized.isdigit():
        resolved = logging.getLevelName(int(normalized))
        return resolved if isinstance(resolved, str) and not resolved.startswith('Level ') else None
    upper_level: str = normalized.upper()
    lookup = logging.getLevelName(upper_level)
    return upper_level if isinstance(lookup, int) else None


def _apply_log_level_override(config_data: dict[str, Any], level_name: str) -> None:
    """Update levels of handlers and the root logger."""
    handlers_obj: object = config_data.get('handlers')
    if isinstance(handlers_obj, dict):
        for handler_cfg in handlers_obj.values():
            if isinstance(handler_cfg, dict):
                handler_cfg['level'] = level_name

    root_config: object | None = config_data.get('root')
    if isinstance(root_config, dict):
        root_config['level'] = level_name


def configure_logging(config_path: Path | None = None, *, level: str | None = None) -> None:
    """Load logging configuration from ``logging.conf`` or apply defaults.

    :param config_path: JSON ``dictConfig`` file, defaults to ``LOGGING_CONFIG_PATH``
        or ``logging.conf`` in the project root.
    :param level: Level overriding ``LOG_LEVEL``.
    """
    target_path: Path = (
        config_path or LOGGING_CONFIG_PATH or Path(__file__).resolve().parents[1] / 'logging.conf'
    )
    level_name: str | None = _resolve_log_level(level or LOG_LEVEL)
    try:
        with target_path.open('r', encoding='utf-8') as config_file:
            config_data: dict[str, Any] = json.load(config_file)
    except FileNotFoundError:
        logging.basicConfig(level=level_name or logging.INFO)
        logging.getLogger(__name__).warning('logging.conf not found (%s), using basic configuration', target_path)
    except json.JSONDecodeError as exc:
        logging.basicConfig(level=level_name or logging.INFO)
        logging.getLogger(__name__).warning(
            'Could not read logging.conf (%s): %s, using basic configuration',
            target_path,
            exc,
        )
    else:
        if level_name:
            _apply_log_level_override(config_data, level_name)
        logging.config.dictConfig(config_data)
