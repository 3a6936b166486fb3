#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mathmd/renderers/__init__.py
"""Renderers serializing the mathmd AST."""

from mathmd.renderers.base import BaseRenderer, InlineContentMixin
from mathmd.renderers.html import HtmlRenderer

__all__ = ["BaseRenderer", "HtmlRenderer", "InlineContentMixin"]
