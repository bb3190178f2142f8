"""Binds a catalog source to the resolver."""

from __future__ import annotations

from collections.abc import Mapping

from jinja_fluent.catalog import CatalogLoader, CatalogSource
from jinja_fluent.config import (
    FLUENT_CORE_RESOURCES,
    FLUENT_FALLBACK_LANGUAGE,
    FLUENT_FALLBACK_TEMPLATE,
    FLUENT_LOCALES_DIR,
)
from jinja_fluent.params import ParamValue
from jinja_fluent.resolver import FallbackPolicy, resolve, validate_fallback


class Localizer:
    """Looks up messages for a language in a :class:`CatalogSource`.

    :param source: Loader handing out catalogs per language.
    :param fallback: Policy for unknown ids, defaults to ``FLUENT_FALLBACK_TEMPLATE``.
    :raises InvalidPattern: if a format-string policy names unknown fields.
    """

    def __init__(self, source: CatalogSource, *, fallback: FallbackPolicy | None = None) -> None:
        self.source: CatalogSource = source
        policy: FallbackPolicy = fallback if fallback is not None else FLUENT_FALLBACK_TEMPLATE
        validate_fallback(policy)
        self.fallback: FallbackPolicy = policy

    def lookup(
        self,
        language_id: str,
        message_id: str,
        params: Mapping[str, ParamValue] | None = None,
    ) -> str:
        """Resolve ``message_id`` in the catalog for ``language_id``."""
        catalog: Mapping[str, str] = self.source.catalog_for(language_id)
        return resolve(catalog, language_id, message_id, params, fallback=self.fallback)


def build_localizer() -> Localizer:
    """Create a localizer reading catalogs from the configured locale directory."""
    loader = CatalogLoader(FLUENT_LOCALES_DIR, FLUENT_FALLBACK_LANGUAGE, FLUENT_CORE_RESOURCES)
    return Localizer(loader)
