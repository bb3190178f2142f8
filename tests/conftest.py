"""Shared fixtures: locale directories and in-memory catalogs."""

from __future__ import annotations

from pathlib import Path

import pytest

from jinja_fluent.catalog import CatalogLoader, StaticCatalog
from jinja_fluent.localizer import Localizer
from jinja_fluent.resolver import DEFAULT_FALLBACK

EN_MAIN: str = (
    'welcome = Hello!\n'
    'greeting = Hello {name}!\n'
    'interpolated-message = Value: {var}\n'
    'block =\n'
    '    {var1}\n'
    '\n'
    '    {var2}\n'
)

FR_MAIN: str = (
    'welcome = Bonjour!\n'
    'greeting = Bonjour {name}!\n'
)


@pytest.fixture()
def locales_dir(tmp_path: Path) -> Path:
    """Creates ``locales/{en,fr}`` with a shared ``core.messages``."""
    root: Path = tmp_path / 'locales'
    (root / 'en').mkdir(parents=True)
    (root / 'fr').mkdir()
    (root / 'core.messages').write_text('product = jinja-fluent\n', encoding='utf-8')
    (root / 'en' / 'main.messages').write_text(EN_MAIN, encoding='utf-8')
    (root / 'fr' / 'main.messages').write_text(FR_MAIN, encoding='utf-8')
    return root


@pytest.fixture()
def catalog_loader(locales_dir: Path) -> CatalogLoader:
    return CatalogLoader(locales_dir, 'en', ['core.messages'])


@pytest.fixture()
def static_localizer() -> Localizer:
    """Localizer over in-memory catalogs with the default fallback marker."""
    source = StaticCatalog(
        {
            'en': {
                'welcome': 'Hello!',
                'greeting': 'Hello {name}!',
                'count': 'n={n}',
                'block': '{var1}\n\n{var2}',
            },
            'fr': {'welcome': 'Bonjour!'},
        },
        'en',
    )
    return Localizer(source, fallback=DEFAULT_FALLBACK)
