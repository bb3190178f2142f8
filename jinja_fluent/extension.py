"""Jinja2 extension exposing message lookup as template tags.

Inline form::

    {% fluent "greeting" name="world" %}

Block form, where parameters are captured template output::

    {% fluentblock "block" %}
    {% fluentparam "var1" %}
    This is some multi-line content for
    the first variable parameter named var1.
    {% endfluentparam %}
    {% endfluentblock %}

The language is taken from the ``lang`` variable of the render context.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from jinja2 import BaseLoader, Environment, nodes
from jinja2.exceptions import TemplateRuntimeError
from jinja2.ext import Extension
from jinja2.parser import Parser
from jinja2.runtime import Context, Undefined
from markupsafe import Markup, escape

from jinja_fluent.config import FLUENT_ESCAPE
from jinja_fluent.exceptions import FluentHelperError
from jinja_fluent.localizer import Localizer
from jinja_fluent.params import ParamValue, TextBlock, coerce_params

logger: logging.Logger = logging.getLogger(__name__)

LANG_VARIABLE: str = 'lang'


def _trim_tag_layout(text: str) -> str:
    """Drop the single newline each ``fluentparam`` tag leaves on its own line."""
    if text.startswith('\n'):
        text = text[1:]
    if text.endswith('\n'):
        text = text[:-1]
    return text


class FluentExtension(Extension):
    """Adds ``fluent`` and ``fluentblock`` tags backed by a :class:`Localizer`."""

    tags = {'fluent', 'fluentblock'}

    def __init__(self, environment: Environment) -> None:
        super().__init__(environment)
        environment.extend(fluent_localizer=None, fluent_escape=FLUENT_ESCAPE)

    def parse(self, parser: Parser) -> nodes.Node | list[nodes.Node]:
        token = next(parser.stream)
        lineno: int = token.lineno
        message_id: nodes.Expr = parser.parse_expression()
        hash_params: list[nodes.Pair] = self._parse_hash_params(parser)
        if token.value == 'fluent':
            return nodes.Output([self._lookup_call(message_id, hash_params, [], lineno)], lineno=lineno)

        body: list[nodes.Node] = []
        block_params: list[nodes.Pair] = []
        while True:
            # text between parameter blocks is not part of the message
            parser.parse_statements(('name:fluentparam', 'name:endfluentblock'))
            tag = next(parser.stream)
            if tag.value == 'endfluentblock':
                break
            param_name: nodes.Expr = parser.parse_expression()
            captured: list[nodes.Node] = parser.parse_statements(('name:endfluentparam',), drop_needle=True)
            target: str = f'_fluent_param_{len(block_params)}'
            body.append(nodes.AssignBlock(nodes.Name(target, 'store'), None, captured, lineno=tag.lineno))
            block_params.append(nodes.Pair(param_name, nodes.Name(target, 'load'), lineno=tag.lineno))

        body.append(nodes.Output([self._lookup_call(message_id, hash_params, block_params, lineno)], lineno=lineno))
        return nodes.Scope(body, lineno=lineno)

    @staticmethod
    def _parse_hash_params(parser: Parser) -> list[nodes.Pair]:
        params: list[nodes.Pair] = []
        while parser.stream.current.type != 'block_end':
            parser.stream.skip_if('comma')
            key = parser.stream.expect('name')
            parser.stream.expect('assign')
            value: nodes.Expr = parser.parse_expression()
            params.append(nodes.Pair(nodes.Const(key.value), value, lineno=key.lineno))
        return params

    def _lookup_call(
        self,
        message_id: nodes.Expr,
        hash_params: list[nodes.Pair],
        block_params: list[nodes.Pair],
        lineno: int,
    ) -> nodes.Call:
        args: list[nodes.Expr] = [
            nodes.ContextReference(),
            message_id,
            nodes.Dict(hash_params),
            nodes.Dict(block_params),
        ]
        return self.call_method('_lookup', args, lineno=lineno)

    def _lookup(
        self,
        context: Context,
        message_id: Any,  # noqa: ANN401
        hash_params: Mapping[str, object],
        block_params: Mapping[str, object],
    ) -> Markup:
        localizer: Localizer | None = self.environment.fluent_localizer  # type: ignore[attr-defined]
        if localizer is None:
            raise TemplateRuntimeError("Helper 'fluent' has no localizer installed")
        if not isinstance(message_id, str):
            raise TemplateRuntimeError("Type error in helper 'fluent', the message id must be a string")

        lang: object = context.get(LANG_VARIABLE)
        if lang is None or isinstance(lang, Undefined):
            raise TemplateRuntimeError(f"Helper 'fluent' requires a '{LANG_VARIABLE}' variable in the template data")
        if not isinstance(lang, str):
            raise TemplateRuntimeError(f"Type error in helper 'fluent', the '{LANG_VARIABLE}' variable must be a string")

        params: dict[str, ParamValue] = dict(coerce_params(hash_params))
        for name, content in block_params.items():
            params[str(name)] = TextBlock.from_text(_trim_tag_layout(str(content)))

        try:
            message: str = localizer.lookup(lang, message_id, params)
        except (FluentHelperError, ValueError) as exc:
            raise TemplateRuntimeError(str(exc)) from exc

        if self.environment.fluent_escape:  # type: ignore[attr-defined]
            return escape(message)
        return Markup(message)


def install_localizer(environment: Environment, localizer: Localizer, *, escape_messages: bool | None = None) -> None:
    """Attach ``localizer`` to an environment that already loads :class:`FluentExtension`."""
    if FluentExtension.identifier not in environment.extensions:
        environment.add_extension(FluentExtension)
    environment.fluent_localizer = localizer  # type: ignore[attr-defined]
    if escape_messages is not None:
        environment.fluent_escape = escape_messages  # type: ignore[attr-defined]


def create_environment(
    localizer: Localizer,
    *,
    loader: BaseLoader | None = None,
    escape_messages: bool = FLUENT_ESCAPE,
    **options: Any,  # noqa: ANN401
) -> Environment:
    """Build an environment with the extension loaded and ``localizer`` attached."""
    extensions: list[Any] = list(options.pop('extensions', []))
    extensions.append(FluentExtension)
    environment = Environment(loader=loader, extensions=extensions, **options)
    install_localizer(environment, localizer, escape_messages=escape_messages)
    return environment
