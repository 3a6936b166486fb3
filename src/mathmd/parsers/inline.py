#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mathmd/parsers/inline.py
"""Inline formatting for a single line of author text.

The formatter escapes the raw text first and then recognizes markup on the
escaped string, so no rule can ever produce raw ``<`` or ``"`` from author
text. Rules run in a fixed order:

1. code spans (their interior is never touched again)
2. ``**strong**`` then ``*emphasis*``
3. ``![alt](url)`` images
4. ``[text](url)`` links

Code and emphasis rules only rewrite ``Text`` nodes that earlier rules left
unclaimed, descending into ``Strong`` and ``Emphasis`` content. Image and
link rules also match across ``Strong`` and ``Emphasis`` siblings, so
``[**bold**](url)`` is a link whose text is bold. Code spans, and emphasis
holding code, links or images, are never crossed, and a URL is only ever
taken from unclaimed text. Patterns exclude their own delimiters from their
bodies, so matching stays linear in the input.
"""

from __future__ import annotations

import html
import logging
import re
from typing import Callable, Iterator, Optional

from mathmd.ast.nodes import (
    INLINE_CONTAINER_TYPES,
    Code,
    Emphasis,
    Image,
    ImagePlaceholder,
    Link,
    Node,
    Strong,
    Text,
)
from mathmd.constants import DEFAULT_IMAGE_ALT
from mathmd.options.render import RenderOptions, UrlResolver
from mathmd.utils.html_utils import escape_html
from mathmd.utils.security import strip_null_bytes
from mathmd.utils.url_policy import sanitize_image_url, sanitize_link_url

logger = logging.getLogger(__name__)

# Stands in for one Strong or Emphasis node while image and link syntax is
# matched; author text never contains it because format() strips NULs.
CONTAINER_MARK = "\x00"

CODE_SPAN_PATTERN = re.compile(r"`([^`]+)`")
STRONG_PATTERN = re.compile(r"\*\*([^*]+)\*\*")
EMPHASIS_PATTERN = re.compile(r"\*([^*]+)\*")
IMAGE_PATTERN = re.compile(r"!\[([^\[\]]*)\]\(([^()\x00]+)\)")
LINK_PATTERN = re.compile(r"\[([^\[\]]+)\]\(([^()\x00]+)\)")

NodeFactory = Callable[["re.Match[str]"], Node]
LabelFactory = Callable[[list[Node], str], Node]
PROTECTED_TYPES = (Code, Link, Image, ImagePlaceholder)


def _split_text(text: str, pattern: re.Pattern[str], factory: NodeFactory) -> list[Node]:
    """Split one escaped string into Text pieces and the nodes ``factory`` builds."""
    nodes: list[Node] = []
    last = 0
    for match in pattern.finditer(text):
        if match.start() > last:
            nodes.append(Text(content=text[last : match.start()]))
        nodes.append(factory(match))
        last = match.end()
    if last == 0:
        return [Text(content=text)]
    if last < len(text):
        nodes.append(Text(content=text[last:]))
    return nodes


def _apply_rule(nodes: list[Node], pattern: re.Pattern[str], factory: NodeFactory) -> list[Node]:
    """Apply one inline rule to every unclaimed Text node in ``nodes``."""
    result: list[Node] = []
    for node in nodes:
        if isinstance(node, Text):
            result.extend(_split_text(node.content, pattern, factory))
        elif isinstance(node, INLINE_CONTAINER_TYPES):
            node.content = _apply_rule(node.content, pattern, factory)
            result.append(node)
        else:
            result.append(node)
    return result


def _holds_protected(node: Node) -> bool:
    """Whether a Strong or Emphasis node contains code, a link or an image."""
    for child in node.content:
        if isinstance(child, PROTECTED_TYPES):
            return True
        if isinstance(child, INLINE_CONTAINER_TYPES) and _holds_protected(child):
            return True
    return False


def _plain_text(nodes: list[Node]) -> str:
    """Concatenate the escaped text of ``nodes``, dropping emphasis markup."""
    parts = []
    for node in nodes:
        if isinstance(node, Text):
            parts.append(node.content)
        elif isinstance(node, INLINE_CONTAINER_TYPES):
            parts.append(_plain_text(node.content))
    return "".join(parts)


def _expand(segment: str, containers: Iterator[Node]) -> list[Node]:
    """Turn a marked segment back into Text pieces and the containers it stands for."""
    nodes: list[Node] = []
    for index, piece in enumerate(segment.split(CONTAINER_MARK)):
        if index:
            nodes.append(next(containers))
        if piece:
            nodes.append(Text(content=piece))
    return nodes


def _split_run(run: list[Node], pattern: re.Pattern[str], factory: LabelFactory) -> list[Node]:
    """Match ``pattern`` across a run of Text and unprotected container nodes.

    Group 1 of ``pattern`` is the bracketed label, which may span containers;
    group 2 is the URL, which the pattern keeps inside unclaimed text.
    """
    marked = "".join(node.content if isinstance(node, Text) else CONTAINER_MARK for node in run)
    matches = list(pattern.finditer(marked))
    if not matches:
        return run

    containers = iter([node for node in run if not isinstance(node, Text)])
    nodes: list[Node] = []
    last = 0
    for match in matches:
        nodes.extend(_expand(marked[last : match.start()], containers))
        nodes.append(factory(_expand(match.group(1), containers), match.group(2)))
        last = match.end()
    nodes.extend(_expand(marked[last:], containers))
    return nodes


def _apply_label_rule(nodes: list[Node], pattern: re.Pattern[str], factory: LabelFactory) -> list[Node]:
    """Apply an image or link rule, letting its label span emphasis nodes."""
    result: list[Node] = []
    run: list[Node] = []
    for node in nodes:
        if isinstance(node, INLINE_CONTAINER_TYPES):
            node.content = _apply_label_rule(node.content, pattern, factory)
            if not _holds_protected(node):
                run.append(node)
                continue
        elif isinstance(node, Text):
            run.append(node)
            continue
        result.extend(_split_run(run, pattern, factory))
        result.append(node)
        run = []
    result.extend(_split_run(run, pattern, factory))
    return result


class InlineFormatter:
    """Turn one line of raw author text into inline nodes.

    Parameters
    ----------
    render_options : RenderOptions or None, default None
        URL resolver hooks applied before the link and image policies

    Examples
    --------
    >>> nodes = InlineFormatter().format("a <b> **c**")
    >>> [type(node).__name__ for node in nodes]
    ['Text', 'Strong']
    >>> nodes[0].content
    'a &lt;b&gt; '

    """

    def __init__(self, render_options: Optional[RenderOptions] = None):
        options = render_options or RenderOptions()
        self._resolve_link: Optional[UrlResolver] = options.resolve_link_url
        self._resolve_image: Optional[UrlResolver] = options.resolve_image_url

    def format(self, raw: str) -> list[Node]:
        """Format one raw line.

        Parameters
        ----------
        raw : str
            Unescaped author text (a line, heading rest, list item or cell)

        Returns
        -------
        list of Node
            Inline nodes; empty when ``raw`` is empty

        """
        raw = strip_null_bytes(raw)
        if not raw:
            return []

        nodes: list[Node] = [Text(content=escape_html(raw))]
        nodes = _apply_rule(nodes, CODE_SPAN_PATTERN, self._make_code)
        nodes = _apply_rule(nodes, STRONG_PATTERN, self._make_strong)
        nodes = _apply_rule(nodes, EMPHASIS_PATTERN, self._make_emphasis)
        nodes = _apply_label_rule(nodes, IMAGE_PATTERN, self._make_image)
        nodes = _apply_label_rule(nodes, LINK_PATTERN, self._make_link)
        return nodes

    @staticmethod
    def _make_code(match: re.Match[str]) -> Node:
        # Code payloads are literal; the renderer escapes them once
        return Code(content=html.unescape(match.group(1)))

    @staticmethod
    def _make_strong(match: re.Match[str]) -> Node:
        return Strong(content=[Text(content=match.group(1))])

    @staticmethod
    def _make_emphasis(match: re.Match[str]) -> Node:
        return Emphasis(content=[Text(content=match.group(1))])

    def _make_image(self, label: list[Node], escaped_url: str) -> Node:
        # Alt text is an attribute, so emphasis inside it is reduced to its text
        alt_text = _plain_text(label).strip()
        raw_url = html.unescape(escaped_url)
        resolved = self._resolve_image(raw_url) if self._resolve_image else raw_url
        url = sanitize_image_url(resolved)
        if url is None:
            return ImagePlaceholder(alt_text=alt_text or DEFAULT_IMAGE_ALT)
        return Image(url=url, alt_text=alt_text)

    def _make_link(self, label: list[Node], escaped_url: str) -> Node:
        raw_url = html.unescape(escaped_url)
        resolved = self._resolve_link(raw_url) if self._resolve_link else raw_url
        return Link(url=sanitize_link_url(resolved), content=label)
