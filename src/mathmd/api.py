#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mathmd/api.py
"""Public rendering API.

``render`` is a pure function: it performs no I/O and keeps no state between
calls. The cached default ``MarkdownEngine`` holds only frozen option
objects; every call builds its own parser and renderer, so the engine can be
shared across threads.
"""

from __future__ import annotations

import logging
from dataclasses import fields
from functools import lru_cache
from typing import Any, Optional

from mathmd.ast import Document
from mathmd.exceptions import ValidationError
from mathmd.options.html import HtmlRendererOptions
from mathmd.options.markdown import MarkdownParserOptions
from mathmd.options.render import RenderOptions
from mathmd.parsers.markdown import MarkdownParser
from mathmd.renderers.base import BaseRenderer
from mathmd.renderers.html import HtmlRenderer

logger = logging.getLogger(__name__)

_PARSER_FIELDS = frozenset(f.name for f in fields(MarkdownParserOptions))
_RENDERER_FIELDS = frozenset(f.name for f in fields(HtmlRendererOptions))


def _split_option_kwargs(kwargs: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split keyword arguments between parser and renderer option fields.

    Parameters
    ----------
    kwargs : dict
        Keyword arguments to split

    Returns
    -------
    tuple[dict, dict]
        (parser_kwargs, renderer_kwargs)

    Raises
    ------
    ValidationError
        If a keyword matches neither options class

    """
    parser_kwargs: dict[str, Any] = {}
    renderer_kwargs: dict[str, Any] = {}
    unmatched = []

    for key, value in kwargs.items():
        if key in _PARSER_FIELDS:
            parser_kwargs[key] = value
        elif key in _RENDERER_FIELDS:
            renderer_kwargs[key] = value
        else:
            unmatched.append(key)

    if unmatched:
        raise ValidationError(
            f"Unknown rendering options: {', '.join(sorted(unmatched))}",
            parameter_name="kwargs",
            parameter_value=unmatched,
        )

    return parser_kwargs, renderer_kwargs


class MarkdownEngine:
    """Configured markdown-to-HTML pipeline.

    Parameters
    ----------
    parser_options : MarkdownParserOptions or None, default None
        Block and inline syntax toggles
    renderer_options : HtmlRendererOptions or None, default None
        HTML output options

    Examples
    --------
        >>> engine = MarkdownEngine()
        >>> engine.render("**hi**")
        '<p class="md__p"><strong>hi</strong></p>'

    """

    def __init__(
        self,
        parser_options: Optional[MarkdownParserOptions] = None,
        renderer_options: Optional[HtmlRendererOptions] = None,
    ):
        MarkdownParser._validate_options_type(parser_options, MarkdownParserOptions, "markdown")
        BaseRenderer._validate_options_type(renderer_options, HtmlRendererOptions, "html")
        self.parser_options = parser_options or MarkdownParserOptions()
        self.renderer_options = renderer_options or HtmlRendererOptions()

    def with_options(self, **kwargs: Any) -> MarkdownEngine:
        """Return a new engine with some option fields replaced.

        Parameters
        ----------
        **kwargs : Any
            Fields of ``MarkdownParserOptions`` or ``HtmlRendererOptions``

        Returns
        -------
        MarkdownEngine
            New engine; this one is left unchanged

        """
        parser_kwargs, renderer_kwargs = _split_option_kwargs(kwargs)
        return MarkdownEngine(
            parser_options=self.parser_options.create_updated(**parser_kwargs),
            renderer_options=self.renderer_options.create_updated(**renderer_kwargs),
        )

    def parse(self, source: str, options: Optional[RenderOptions] = None) -> Document:
        """Parse author text into an AST Document.

        Parameters
        ----------
        source : str
            Author-supplied text
        options : RenderOptions or None, default None
            URL resolver hooks

        Returns
        -------
        Document
            Parsed document

        Raises
        ------
        ValidationError
            If ``source`` is not a string or ``options`` is not RenderOptions

        """
        if not isinstance(source, str):
            raise ValidationError(
                f"source must be a str, got {type(source).__name__}",
                parameter_name="source",
                parameter_value=type(source),
            )
        if options is not None and not isinstance(options, RenderOptions):
            raise ValidationError(
                f"options must be RenderOptions, got {type(options).__name__}",
                parameter_name="options",
                parameter_value=type(options),
            )
        return MarkdownParser(self.parser_options, render_options=options).parse(source)

    def render(self, source: str, options: Optional[RenderOptions] = None) -> str:
        """Render author text to HTML.

        Parameters
        ----------
        source : str
            Author-supplied text
        options : RenderOptions or None, default None
            URL resolver hooks; exceptions raised by a hook propagate unchanged

        Returns
        -------
        str
            HTML fragment (or document, in standalone mode)

        """
        document = self.parse(source, options)
        return HtmlRenderer(self.renderer_options).render_to_string(document)


@lru_cache(maxsize=1)
def get_default_engine() -> MarkdownEngine:
    """Return the shared engine built with default options."""
    return MarkdownEngine()


def parse(source: str, options: Optional[RenderOptions] = None, **kwargs: Any) -> Document:
    """Parse author text into an AST Document.

    Parameters
    ----------
    source : str
        Author-supplied text
    options : RenderOptions or None, default None
        URL resolver hooks
    **kwargs : Any
        ``MarkdownParserOptions`` fields overriding the defaults

    Returns
    -------
    Document
        Parsed document

    """
    engine = get_default_engine()
    if kwargs:
        engine = engine.with_options(**kwargs)
    return engine.parse(source, options)


def render(source: str, options: Optional[RenderOptions] = None, **kwargs: Any) -> str:
    """Render author-supplied markdown to HTML safe for direct DOM injection.

    Parameters
    ----------
    source : str
        Author-supplied text mixing prose, markup and ``$$`` display math
    options : RenderOptions or None, default None
        URL resolver hooks applied before sanitization
    **kwargs : Any
        ``MarkdownParserOptions`` or ``HtmlRendererOptions`` fields overriding
        the defaults (for example ``parse_tables=False``)

    Returns
    -------
    str
        HTML fragment with blocks joined by newlines

    Examples
    --------
    >>> render("$$a=b$$")
    '<div class="md__math">$$a=b$$</div>'
    >>> render("[x](javascript:void)")
    '<p class="md__p"><a class="link" href="#" target="_blank" rel="noopener noreferrer">x</a></p>'

    """
    engine = get_default_engine()
    if kwargs:
        engine = engine.with_options(**kwargs)
    return engine.render(source, options)
