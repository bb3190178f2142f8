"""Message catalog lookup for Jinja2 templates."""

from __future__ import annotations

from .catalog import CatalogLoader, CatalogSource, StaticCatalog, parse_catalog
from .exceptions import CatalogError, FluentHelperError, InvalidLanguage, InvalidPattern, MissingParameter
from .localizer import Localizer
from .params import ParamValue, TextBlock
from .resolver import DEFAULT_FALLBACK, extract_placeholders, resolve

__all__: list[str] = [
    'CatalogError',
    'CatalogLoader',
    'CatalogSource',
    'DEFAULT_FALLBACK',
    'FluentHelperError',
    'InvalidLanguage',
    'InvalidPattern',
    'Localizer',
    'MissingParameter',
    'ParamValue',
    'StaticCatalog',
    'TextBlock',
    'extract_placeholders',
    'parse_catalog',
    'resolve',
]
