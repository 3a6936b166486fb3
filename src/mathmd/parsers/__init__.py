#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mathmd/parsers/__init__.py
"""Parsers turning author text into the mathmd AST."""

from mathmd.parsers.base import BaseParser
from mathmd.parsers.fences import Segment, split_fenced_segments
from mathmd.parsers.inline import InlineFormatter
from mathmd.parsers.markdown import BlockRun, MarkdownParser

__all__ = [
    "BaseParser",
    "BlockRun",
    "InlineFormatter",
    "MarkdownParser",
    "Segment",
    "split_fenced_segments",
]
