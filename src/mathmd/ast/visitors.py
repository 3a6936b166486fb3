#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mathmd/ast/visitors.py
"""Visitor pattern implementation for AST traversal.

Visitors separate algorithms (HTML serialization, validation) from the node
structure itself. ``NodeVisitor`` declares one ``visit_*`` method per node
type; ``ValidationVisitor`` checks the payload invariants the renderer relies
on.

"""

from __future__ import annotations

import html
from abc import ABC, abstractmethod
from typing import Any

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
    Spacer,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
)
from mathmd.constants import IMAGE_URL_POLICY, LINK_URL_POLICY, MATH_DELIMITER, REJECTED_LINK_HREF
from mathmd.utils.url_policy import apply_url_policy


class NodeVisitor(ABC):
    """Abstract base class for AST node visitors.

    Subclasses implement a ``visit_*`` method for each node type. Every node's
    ``accept`` method dispatches to the matching method.

    Examples
    --------
    Count text nodes:

        >>> class TextCounter(NodeVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...     def visit_text(self, node):
        ...         self.count += 1
        ...     def generic_visit(self, node):
        ...         for child in get_node_children(node):
        ...             child.accept(self)

    """

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Visit a Document node."""

    @abstractmethod
    def visit_heading(self, node: Heading) -> Any:
        """Visit a Heading node."""

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph node."""

    @abstractmethod
    def visit_code_block(self, node: CodeBlock) -> Any:
        """Visit a CodeBlock node."""

    @abstractmethod
    def visit_math_block(self, node: MathBlock) -> Any:
        """Visit a MathBlock node."""

    @abstractmethod
    def visit_block_quote(self, node: BlockQuote) -> Any:
        """Visit a BlockQuote node."""

    @abstractmethod
    def visit_list(self, node: List) -> Any:
        """Visit a List node."""

    @abstractmethod
    def visit_list_item(self, node: ListItem) -> Any:
        """Visit a ListItem node."""

    @abstractmethod
    def visit_table(self, node: Table) -> Any:
        """Visit a Table node."""

    def visit_table_row(self, node: TableRow) -> Any:
        """Visit a TableRow node."""
        return self.generic_visit(node)

    def visit_table_cell(self, node: TableCell) -> Any:
        """Visit a TableCell node."""
        return self.generic_visit(node)

    @abstractmethod
    def visit_spacer(self, node: Spacer) -> Any:
        """Visit a Spacer node."""

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node."""

    @abstractmethod
    def visit_emphasis(self, node: Emphasis) -> Any:
        """Visit an Emphasis node."""

    @abstractmethod
    def visit_strong(self, node: Strong) -> Any:
        """Visit a Strong node."""

    @abstractmethod
    def visit_code(self, node: Code) -> Any:
        """Visit a Code node."""

    @abstractmethod
    def visit_link(self, node: Link) -> Any:
        """Visit a Link node."""

    @abstractmethod
    def visit_image(self, node: Image) -> Any:
        """Visit an Image node."""

    @abstractmethod
    def visit_image_placeholder(self, node: ImagePlaceholder) -> Any:
        """Visit an ImagePlaceholder node."""

    @abstractmethod
    def visit_line_break(self, node: LineBreak) -> Any:
        """Visit a LineBreak node."""

    def generic_visit(self, node: Node) -> Any:
        """Fallback visitor for nodes without a dedicated handler.

        Parameters
        ----------
        node : Node
            The node to visit

        Returns
        -------
        Any
            Result of processing (default: None)

        """
        return None


class ValidationVisitor(NodeVisitor):
    """Visitor that checks the payload invariants of a parsed document.

    The checks are:
    - ``Text`` payloads are fully escaped (escaping them again after
      unescaping yields the same string)
    - ``MathBlock`` payloads start with ``$$``
    - ``Link`` and ``Image`` URLs are accepted by their URL policies
    - headings, paragraphs and list items contain only inline nodes

    Parameters
    ----------
    strict : bool, default = True
        Whether to raise ``ValueError`` on the first failure. When False,
        failures are collected in ``errors``.

    Examples
    --------
        >>> validator = ValidationVisitor(strict=False)
        >>> doc.accept(validator)
        >>> validator.errors
        []

    """

    INLINE_NODES = frozenset({Text, Emphasis, Strong, Code, Link, Image, ImagePlaceholder, LineBreak})

    def __init__(self, strict: bool = True):
        """Initialize the validator."""
        self.strict = strict
        self.errors: list[str] = []

    def _add_error(self, message: str) -> None:
        self.errors.append(message)
        if self.strict:
            raise ValueError(message)

    def _validate_inline(self, children: list[Node], context: str) -> None:
        for i, child in enumerate(children):
            if type(child) not in self.INLINE_NODES:
                self._add_error(f"{context} can only contain inline nodes, but child {i} is {type(child).__name__}")
            child.accept(self)

    def visit_document(self, node: Document) -> None:
        """Validate a Document node."""
        for child in node.children:
            child.accept(self)

    def visit_heading(self, node: Heading) -> None:
        """Validate a Heading node."""
        self._validate_inline(node.content, "Heading")

    def visit_paragraph(self, node: Paragraph) -> None:
        """Validate a Paragraph node."""
        self._validate_inline(node.content, "Paragraph")

    def visit_code_block(self, node: CodeBlock) -> None:
        """Code block payloads are literal; nothing to check."""

    def visit_math_block(self, node: MathBlock) -> None:
        """Validate a MathBlock node."""
        if not node.content.strip().startswith(MATH_DELIMITER):
            self._add_error(f"MathBlock must start with {MATH_DELIMITER}: {node.content[:50]!r}")

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Validate a BlockQuote node."""
        for child in node.children:
            if not isinstance(child, (Paragraph, Spacer)):
                self._add_error(f"BlockQuote can only contain paragraphs and spacers, got {type(child).__name__}")
            child.accept(self)

    def visit_list(self, node: List) -> None:
        """Validate a List node."""
        if not node.items:
            self._add_error("List must contain at least one item")
        for item in node.items:
            item.accept(self)

    def visit_list_item(self, node: ListItem) -> None:
        """Validate a ListItem node."""
        self._validate_inline(node.content, "ListItem")

    def visit_table(self, node: Table) -> None:
        """Validate a Table node."""
        columns = node.column_count
        if len(node.alignments) != columns:
            self._add_error(f"Table has {columns} columns but {len(node.alignments)} alignments")
        for row in node.rows:
            if len(row.cells) != columns:
                self._add_error(f"Table row has {len(row.cells)} cells, expected {columns}")
        for row in [node.header, *node.rows]:
            for cell in row.cells:
                self._validate_inline(cell.content, "TableCell")

    def visit_spacer(self, node: Spacer) -> None:
        """Spacers carry no payload."""

    def visit_text(self, node: Text) -> None:
        """Validate that a Text payload is escaped."""
        if html.escape(html.unescape(node.content)) != node.content:
            self._add_error(f"Text payload is not escaped: {node.content[:50]!r}")

    def visit_emphasis(self, node: Emphasis) -> None:
        """Validate an Emphasis node."""
        self._validate_inline(node.content, "Emphasis")

    def visit_strong(self, node: Strong) -> None:
        """Validate a Strong node."""
        self._validate_inline(node.content, "Strong")

    def visit_code(self, node: Code) -> None:
        """Code span payloads are literal; nothing to check."""

    def visit_link(self, node: Link) -> None:
        """Validate a Link node."""
        if node.url != REJECTED_LINK_HREF and apply_url_policy(node.url, LINK_URL_POLICY) is None:
            self._add_error(f"Link URL is not allowed by the link policy: {node.url[:50]!r}")
        self._validate_inline(node.content, "Link")

    def visit_image(self, node: Image) -> None:
        """Validate an Image node."""
        if apply_url_policy(node.url, IMAGE_URL_POLICY) is None:
            self._add_error(f"Image URL is not allowed by the image policy: {node.url[:50]!r}")
        self.visit_text(Text(content=node.alt_text))

    def visit_image_placeholder(self, node: ImagePlaceholder) -> None:
        """Validate an ImagePlaceholder node."""
        self.visit_text(Text(content=node.alt_text))

    def visit_line_break(self, node: LineBreak) -> None:
        """Line breaks carry no payload."""
