"""Validates environment parsing in the configuration module."""

from __future__ import annotations

import importlib
from collections.abc import Iterator
from pathlib import Path

import pytest

import jinja_fluent.config as config


@pytest.fixture()
def reload_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    """Reloads the config module after the test restores the environment."""
    yield monkeypatch
    monkeypatch.undo()
    importlib.reload(config)


@pytest.mark.parametrize(
    ('raw', 'default', 'expected'),
    [
        (None, True, True),
        ('', True, True),
        ('yes', False, True),
        (' On ', False, True),
        ('0', True, False),
        ('off', True, False),
    ],
)
def test_env_bool(raw: str | None, default: bool, expected: bool) -> None:
    assert config._env_bool(raw, default=default) is expected


def test_env_list() -> None:
    assert config._env_list(None) == ()
    assert config._env_list(' core.messages, ,extra.messages ') == ('core.messages', 'extra.messages')


def test_values_read_from_environment(reload_config: pytest.MonkeyPatch, tmp_path: Path) -> None:
    reload_config.setenv('FLUENT_LOCALES_DIR', str(tmp_path))
    reload_config.setenv('FLUENT_FALLBACK_LANGUAGE', 'fr')
    reload_config.setenv('FLUENT_CORE_RESOURCES', 'core.messages')
    reload_config.setenv('FLUENT_ESCAPE', 'false')
    reload_config.setenv('FLUENT_FALLBACK_TEMPLATE', '!{message_id}!')
    reload_config.setenv('LOGGING_CONFIG_PATH', str(tmp_path / 'logging.conf'))

    importlib.reload(config)

    assert config.FLUENT_LOCALES_DIR == tmp_path
    assert config.FLUENT_FALLBACK_LANGUAGE == 'fr'
    assert config.FLUENT_CORE_RESOURCES == ('core.messages',)
    assert config.FLUENT_ESCAPE is False
    assert config.FLUENT_FALLBACK_TEMPLATE == '!{message_id}!'
    assert config.LOGGING_CONFIG_PATH == tmp_path / 'logging.conf'


def test_blank_values_use_defaults(reload_config: pytest.MonkeyPatch) -> None:
    reload_config.setenv('FLUENT_FALLBACK_LANGUAGE', '  ')
    reload_config.setenv('FLUENT_FALLBACK_TEMPLATE', '')
    reload_config.setenv('LOG_LEVEL', '')

    importlib.reload(config)

    assert config.FLUENT_FALLBACK_LANGUAGE == 'en'
    assert config.FLUENT_FALLBACK_TEMPLATE == 'Unknown localization {message_id}'
    assert config.LOG_LEVEL == 'INFO'
