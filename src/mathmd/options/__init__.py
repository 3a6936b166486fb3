#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the mathmd rendering pipeline.

Using frozen dataclasses provides type safety, default values and a clean
API; ``create_updated`` returns modified copies.
"""

from __future__ import annotations

from mathmd.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from mathmd.options.html import HtmlRendererOptions
from mathmd.options.markdown import MarkdownParserOptions
from mathmd.options.render import RenderOptions, UrlResolver

__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "HtmlRendererOptions",
    "MarkdownParserOptions",
    "RenderOptions",
    "UrlResolver",
]
