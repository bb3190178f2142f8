"""Checks loading of the JSON logging configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from jinja_fluent import utils


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    root: logging.Logger = logging.getLogger()
    handlers: list[logging.Handler] = list(root.handlers)
    level: int = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.parametrize(
    ('raw', 'expected'),
    [('debug', 'DEBUG'), (' warning ', 'WARNING'), ('10', 'DEBUG'), ('15', None), ('bogus', None), ('', None), (None, None)],
)
def test_resolve_log_level(raw: str | None, expected: str | None) -> None:
    assert utils._resolve_log_level(raw) == expected


def test_configure_logging_applies_level_override(tmp_path: Path) -> None:
    config_path: Path = tmp_path / 'logging.conf'
    config_path.write_text(
        json.dumps({
            'version': 1,
            'disable_existing_loggers': False,
            'handlers': {'null': {'class': 'logging.NullHandler', 'level': 'INFO'}},
            'root': {'level': 'INFO', 'handlers': ['null']},
        }),
        encoding='utf-8',
    )

    utils.configure_logging(config_path, level='debug')

    root: logging.Logger = logging.getLogger()
    assert root.level == logging.DEBUG
    assert [handler.level for handler in root.handlers] == [logging.DEBUG]


def test_configure_logging_missing_file(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        utils.configure_logging(tmp_path / 'absent.conf')

    assert 'logging.conf not found' in caplog.text


def test_configure_logging_invalid_json(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    config_path: Path = tmp_path / 'logging.conf'
    config_path.write_text('{not json', encoding='utf-8')

    with caplog.at_level(logging.WARNING):
        utils.configure_logging(config_path)

    assert 'Could not read logging.conf' in caplog.text
