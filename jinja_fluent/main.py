"""Command line entrypoint: render a template file with localized messages."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from jinja2 import FileSystemLoader, TemplateError

from jinja_fluent.catalog import CatalogLoader
from jinja_fluent.config import FLUENT_CORE_RESOURCES, FLUENT_ESCAPE, FLUENT_FALLBACK_LANGUAGE, FLUENT_LOCALES_DIR
from jinja_fluent.exceptions import FluentHelperError
from jinja_fluent.extension import create_environment
from jinja_fluent.localizer import Localizer
from jinja_fluent.utils import configure_logging

logger: logging.Logger = logging.getLogger(__name__)


def _parse_assignment(value: str) -> tuple[str, str]:
    key, sep, text = value.partition('=')
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f'expected key=value, got {value!r}')
    return key.strip(), text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='jinja-fluent', description='Render a template with localized messages.')
    parser.add_argument('template', type=Path, help='Template file to render')
    parser.add_argument('--lang', required=True, help='Language identifier, e.g. en or fr')
    parser.add_argument('--locales', type=Path, default=FLUENT_LOCALES_DIR, help='Locale directory')
    parser.add_argument('--fallback-language', default=FLUENT_FALLBACK_LANGUAGE)
    parser.add_argument(
        '--core',
        action='append',
        default=None,
        help='Resource shared by all languages (repeatable)',
    )
    parser.add_argument(
        '--set',
        dest='variables',
        action='append',
        type=_parse_assignment,
        default=[],
        metavar='KEY=VALUE',
        help='Extra template variable (repeatable)',
    )
    parser.add_argument('--no-escape', action='store_true', help='Write messages without HTML escaping')
    parser.add_argument('--log-level', default=None)
    return parser


def render_file(
    template: Path,
    localizer: Localizer,
    lang: str,
    variables: dict[str, str] | None = None,
    *,
    escape_messages: bool = FLUENT_ESCAPE,
) -> str:
    """Render ``template`` with ``lang`` and ``variables`` as context."""
    environment = create_environment(
        localizer,
        loader=FileSystemLoader(str(template.parent)),
        escape_messages=escape_messages,
        keep_trailing_newline=True,
    )
    data: dict[str, str] = dict(variables or {})
    data['lang'] = lang
    return environment.get_template(template.name).render(data)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level)

    core: Sequence[str] = args.core if args.core is not None else FLUENT_CORE_RESOURCES
    escape_messages: bool = FLUENT_ESCAPE and not args.no_escape
    try:
        loader = CatalogLoader(args.locales, args.fallback_language, core)
        output: str = render_file(
            args.template,
            Localizer(loader),
            args.lang,
            dict(args.variables),
            escape_messages=escape_messages,
        )
    except (FluentHelperError, TemplateError, OSError) as exc:
        logger.error('Failed to render %s: %s', args.template, exc)
        return 1
    sys.stdout.write(output)
    return 0


if __name__ == '__main__':
    sys.exit(main())
