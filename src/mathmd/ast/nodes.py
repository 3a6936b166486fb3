#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mathmd/ast/nodes.py
"""AST node classes for rendered problem text.

This module defines the node hierarchy produced by the markdown parser and
consumed by the HTML renderer. Every node supports the visitor pattern.

Node Hierarchy
--------------
Block-level nodes:
    - Document, Heading, Paragraph, List, ListItem, BlockQuote
    - CodeBlock, MathBlock, Table, TableRow, TableCell, Spacer

Inline nodes:
    - Text, Emphasis, Strong, Code
    - Link, Image, ImagePlaceholder, LineBreak

Payload invariants
------------------
``Text.content`` is already HTML-escaped. ``Code``, ``CodeBlock`` and
``MathBlock`` hold literal source text that is escaped exactly once when
serialized. ``Link.url`` and ``Image.url`` hold sanitized, unescaped URLs that
the renderer escapes into attribute values.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from mathmd.constants import MAX_HEADING_LEVEL, Alignment, TaskStatus


@dataclass
class SourceLocation:
    """Source location information for AST nodes.

    Parameters
    ----------
    line : int
        1-based line number in the source text
    column : int or None, default = None
        Column number in the source line

    """

    line: int
    column: Optional[int] = None


class Node(ABC):
    """Base class for all AST nodes.

    All document nodes inherit from this base class and support the visitor
    pattern for traversal and rendering.

    """

    source_location: Optional[SourceLocation]

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Document(Node):
    """Root document node containing the ordered block sequence.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in source order
    metadata : dict, default = empty dict
        Document-level metadata (title, language)
    source_location : SourceLocation or None, default = None
        Source location information

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_document``."""
        return visitor.visit_document(self)


@dataclass
class Heading(Node):
    """Heading node (h1-h6).

    Parameters
    ----------
    level : int
        Heading level (1-6, where 1 is most important)
    content : list of Node, default = empty list
        Inline nodes representing heading text
    source_location : SourceLocation or None, default = None
        Source location information

    """

    level: int
    content: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = None

    def __post_init__(self) -> None:
        """Validate heading level is between 1 and 6."""
        if not 1 <= self.level <= MAX_HEADING_LEVEL:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_heading``."""
        return visitor.visit_heading(self)


@dataclass
class Paragraph(Node):
    """Paragraph node containing inline content."""

    content: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_paragraph``."""
        return visitor.visit_paragraph(self)


@dataclass
class CodeBlock(Node):
    """Fenced code block node.

    Parameters
    ----------
    content : str
        Literal code text; never interpreted as markup
    language : str or None, default = None
        Sanitized language hint from the opening fence
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: str
    language: Optional[str] = None
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_code_block``."""
        return visitor.visit_code_block(self)


@dataclass
class MathBlock(Node):
    """Display math block node.

    Unlike most markdown ASTs, ``content`` keeps the ``$$`` delimiters and the
    interior newlines exactly as written, because an external typesetter scans
    the rendered DOM text for them. The only exception is input normalization:
    every ``\\r`` and ``\\x00`` is removed from the source before blocks are
    recognized, so math written with CRLF line endings or NUL characters is
    stored without them.

    Parameters
    ----------
    content : str
        Literal math source including delimiters
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: str
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_math_block``."""
        return visitor.visit_math_block(self)


@dataclass
class BlockQuote(Node):
    """Block quote node.

    Children are ``Paragraph`` and ``Spacer`` nodes only; quotes and lists do
    not nest.

    """

    children: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_block_quote``."""
        return visitor.visit_block_quote(self)


@dataclass
class ListItem(Node):
    """List item node with inline content.

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline nodes of the item text
    task_status : {'checked', 'unchecked'} or None, default = None
        For task list items
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: list[Node] = field(default_factory=list)
    task_status: Optional[TaskStatus] = None
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_list_item``."""
        return visitor.visit_list_item(self)


@dataclass
class List(Node):
    """List node (ordered or unordered).

    Parameters
    ----------
    ordered : bool
        True for ordered lists, False for unordered
    items : list of ListItem, default = empty list
        List items
    start : int, default = 1
        Starting number for ordered lists
    source_location : SourceLocation or None, default = None
        Source location information

    """

    ordered: bool
    items: list[ListItem] = field(default_factory=list)
    start: int = 1
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_list``."""
        return visitor.visit_list(self)


@dataclass
class TableCell(Node):
    """Table cell node with inline content."""

    content: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_table_cell``."""
        return visitor.visit_table_cell(self)


@dataclass
class TableRow(Node):
    """Table row node containing cells."""

    cells: list[TableCell] = field(default_factory=list)
    is_header: bool = False
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_table_row``."""
        return visitor.visit_table_row(self)


@dataclass
class Table(Node):
    """Table node with header row and per-column alignment.

    Parameters
    ----------
    header : TableRow
        Header row; its cell count fixes the column count
    alignments : list, default = empty list
        Column alignments ('left', 'center', 'right', or None)
    rows : list of TableRow, default = empty list
        Body rows, each with exactly ``len(header.cells)`` cells
    source_location : SourceLocation or None, default = None
        Source location information

    """

    header: TableRow
    alignments: list[Optional[Alignment]] = field(default_factory=list)
    rows: list[TableRow] = field(default_factory=list)
    source_location: Optional[SourceLocation] = None

    @property
    def column_count(self) -> int:
        """Number of columns, taken from the header row."""
        return len(self.header.cells)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_table``."""
        return visitor.visit_table(self)


@dataclass
class Spacer(Node):
    """Blank-line marker rendered as a visual paragraph break."""

    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_spacer``."""
        return visitor.visit_spacer(self)


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Text(Node):
    """Text node holding already-escaped text."""

    content: str
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_text``."""
        return visitor.visit_text(self)


@dataclass
class Emphasis(Node):
    """Emphasis (italic) node."""

    content: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_emphasis``."""
        return visitor.visit_emphasis(self)


@dataclass
class Strong(Node):
    """Strong (bold) node."""

    content: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_strong``."""
        return visitor.visit_strong(self)


@dataclass
class Code(Node):
    """Inline code span with literal (unescaped) content."""

    content: str
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_code``."""
        return visitor.visit_code(self)


@dataclass
class Link(Node):
    """Link node.

    Parameters
    ----------
    url : str
        Sanitized link destination (``#`` when the author's URL was refused)
    content : list of Node, default = empty list
        Inline nodes representing link text
    source_location : SourceLocation or None, default = None
        Source location information

    """

    url: str
    content: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_link``."""
        return visitor.visit_link(self)


@dataclass
class Image(Node):
    """Image node with a sanitized source URL.

    Parameters
    ----------
    url : str
        Accepted image source; never empty
    alt_text : str
        Escaped alternative text
    source_location : SourceLocation or None, default = None
        Source location information

    """

    url: str
    alt_text: str
    source_location: Optional[SourceLocation] = None

    def __post_init__(self) -> None:
        """Refuse to build an image without a source."""
        if not self.url:
            raise ValueError("Image url must not be empty; use ImagePlaceholder instead")

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_image``."""
        return visitor.visit_image(self)


@dataclass
class ImagePlaceholder(Node):
    """Visible stand-in for an image whose source was refused."""

    alt_text: str
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_image_placeholder``."""
        return visitor.visit_image_placeholder(self)


@dataclass
class LineBreak(Node):
    """Hard line break."""

    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_line_break``."""
        return visitor.visit_line_break(self)


INLINE_CONTAINER_TYPES = (Emphasis, Strong)


def get_node_children(node: Node) -> list[Node]:
    """Return the direct children of a node in document order.

    Parameters
    ----------
    node : Node
        Node to inspect

    Returns
    -------
    list of Node
        Child nodes; empty for leaf nodes

    """
    if isinstance(node, (Document, BlockQuote)):
        return list(node.children)
    if isinstance(node, List):
        return list(node.items)
    if isinstance(node, Table):
        return [node.header, *node.rows]
    if isinstance(node, TableRow):
        return list(node.cells)
    if isinstance(node, (Heading, Paragraph, ListItem, TableCell, Emphasis, Strong, Link)):
        return list(node.content)
    return []
