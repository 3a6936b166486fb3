#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mathmd/ast/__init__.py
"""Abstract Syntax Tree (AST) module for rendered problem text.

The parser builds a ``Document`` of block and inline nodes; the HTML renderer
walks it with a visitor. Keeping the two stages apart lets the block rules,
the inline rules and the serializer be tested in isolation.

Examples
--------
    >>> from mathmd.ast import Document, Heading, Text
    >>> from mathmd.renderers.html import HtmlRenderer
    >>> doc = Document(children=[Heading(level=1, content=[Text(content="Title")])])
    >>> HtmlRenderer().render_to_string(doc)
    '<h1 class="md__h">Title</h1>'

"""

from __future__ import annotations

from mathmd.ast.nodes import (
    BlockQuote,
    Code,
    CodeBlock,
    Document,
    Emphasis,
    Heading,
    Image,
    ImagePlaceholder,
    LineBreak,
    Link,
    List,
    ListItem,
    MathBlock,
    Node,
    Paragraph,
    SourceLocation,
    Spacer,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    get_node_children,
)
from mathmd.ast.visitors import NodeVisitor, ValidationVisitor

__all__ = [
    "BlockQuote",
    "Code",
    "CodeBlock",
    "Document",
    "Emphasis",
    "Heading",
    "Image",
    "ImagePlaceholder",
    "LineBreak",
    "Link",
    "List",
    "ListItem",
    "MathBlock",
    "Node",
    "NodeVisitor",
    "Paragraph",
    "SourceLocation",
    "Spacer",
    "Strong",
    "Table",
    "TableCell",
    "TableRow",
    "Text",
    "ValidationVisitor",
    "get_node_children",
]
