#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mathmd/parsers/markdown.py
"""Markdown parser for problem statements with display math.

This module turns author text into the mathmd AST. Fenced code is split off
first (see :mod:`mathmd.parsers.fences`); every prose segment is then read
line by line with an explicit run state (``BlockRun``) that tracks whether a
list or blockquote is currently open.

Block rules in priority order:

1. ATX heading (``# Title``)
2. display math opened by a line starting with ``$$``
3. list item (``-``/``*`` bullets, ``1.``/``1)`` numbers)
4. blockquote line (``>``)
5. pipe table (header row followed by a ``---`` separator row)
6. blank line (spacer)
7. paragraph, one per non-blank line

Malformed input never raises: an unclosed ``$$`` becomes literal text, and an
unclosed fence is parsed as prose.
"""

from __future__ import annotations

import bisect
import logging
import re
from enum import Enum
from typing import Optional, Union

from mathmd.ast import (
    BlockQuote,
    CodeBlock,
    Document,
    Heading,
    LineBreak,
    List,
    ListItem,
    MathBlock,
    Node,
    Paragraph,
    SourceLocation,
    Spacer,
    Table,
    TableCell,
    TableRow,
)
from mathmd.constants import MATH_DELIMITER, MIN_SINGLE_LINE_MATH_LENGTH, Alignment
from mathmd.options.markdown import MarkdownParserOptions
from mathmd.options.render import RenderOptions
from mathmd.parsers.base import BaseParser
from mathmd.parsers.fences import Segment, split_fenced_segments
from mathmd.parsers.inline import InlineFormatter
from mathmd.utils.security import strip_null_bytes

logger = logging.getLogger(__name__)

HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.*)$")
BULLET_ITEM_PATTERN = re.compile(r"^\s*[-*]\s+(.*)$")
ORDERED_ITEM_PATTERN = re.compile(r"^\s*(\d{1,9})[.)]\s+(.*)$")
TASK_MARKER_PATTERN = re.compile(r"^\[([ xX])\](?:\s+(.*))?$")
BLOCKQUOTE_PATTERN = re.compile(r"^\s*>\s?(.*)$")
TABLE_SEPARATOR_CELL_PATTERN = re.compile(r"^:?-+:?$")


class BlockRun(Enum):
    """Multi-line construct currently open in the block parser."""

    NONE = "none"
    LIST = "list"
    QUOTE = "quote"


def split_table_row(line: str) -> list[str]:
    """Split a pipe-table row into stripped cell strings.

    A single leading and trailing pipe are optional and ignored.

    Examples
    --------
    >>> split_table_row("| a | b |")
    ['a', 'b']
    >>> split_table_row("a|b")
    ['a', 'b']

    """
    row = line.strip()
    if row.startswith("|"):
        row = row[1:]
    if row.endswith("|"):
        row = row[:-1]
    return [cell.strip() for cell in row.split("|")]


def parse_alignment(cell: str) -> Optional[Alignment]:
    """Map a separator cell (``:--``, ``:-:``, ``--:``) to a column alignment."""
    starts = cell.startswith(":")
    ends = cell.endswith(":")
    if starts and ends:
        return "center"
    if ends:
        return "right"
    if starts:
        return "left"
    return None


class MarkdownParser(BaseParser):
    """Convert author text into an AST Document.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Syntax toggles for the block rules
    render_options : RenderOptions or None, default = None
        URL resolver hooks handed to the inline formatter

    Examples
    --------
        >>> parser = MarkdownParser()
        >>> doc = parser.parse("# Title\\n$$\\na=b\\n$$")
        >>> [type(node).__name__ for node in doc.children]
        ['Heading', 'MathBlock']

    Notes
    -----
    A parser instance keeps per-call state; build one per ``parse`` call
    when sharing across threads.

    """

    def __init__(
        self, options: MarkdownParserOptions | None = None, render_options: RenderOptions | None = None
    ):
        BaseParser._validate_options_type(options, MarkdownParserOptions, "markdown")
        options = options or MarkdownParserOptions()
        BaseParser.__init__(self, options)
        self.options: MarkdownParserOptions = options
        self._inline = InlineFormatter(render_options)

        self._blocks: list[Node] = []
        self._run = BlockRun.NONE
        self._open_list: Optional[List] = None
        self._open_quote: Optional[BlockQuote] = None

    def parse(self, source: str) -> Document:
        """Parse author text into an AST Document.

        Parameters
        ----------
        source : str
            Author-supplied text

        Returns
        -------
        Document
            Root node whose children are the blocks in source order

        """
        self._blocks = []
        self._run = BlockRun.NONE
        self._open_list = None
        self._open_quote = None

        for segment in split_fenced_segments(strip_null_bytes(source)):
            if segment.kind == "code":
                self._blocks.append(
                    CodeBlock(
                        content=segment.text,
                        language=segment.language,
                        source_location=SourceLocation(line=segment.start_line),
                    )
                )
            else:
                self._parse_prose(segment)

        return Document(children=self._blocks)

    # ------------------------------------------------------------------
    # Run state
    # ------------------------------------------------------------------

    def _close_run(self) -> None:
        """Flush the open list or quote, if any."""
        if self._run is BlockRun.LIST and self._open_list is not None:
            self._blocks.append(self._open_list)
        elif self._run is BlockRun.QUOTE and self._open_quote is not None:
            self._blocks.append(self._open_quote)
        self._run = BlockRun.NONE
        self._open_list = None
        self._open_quote = None

    def _emit(self, node: Node) -> None:
        self._close_run()
        self._blocks.append(node)

    # ------------------------------------------------------------------
    # Line classification
    # ------------------------------------------------------------------

    def _is_math_open(self, line: str) -> bool:
        return self.options.parse_math and line.strip().startswith(MATH_DELIMITER)

    def _match_list_item(self, line: str) -> Optional[tuple[bool, int, str]]:
        """Return ``(ordered, number, rest)`` for a list item line."""
        match = BULLET_ITEM_PATTERN.match(line)
        if match:
            return False, 1, match.group(1)
        if self.options.parse_ordered_lists:
            match = ORDERED_ITEM_PATTERN.match(line)
            if match:
                return True, int(match.group(1)), match.group(2)
        return None

    def _table_header_cells(self, lines: list[str], index: int) -> Optional[list[str]]:
        """Return header cells when ``lines[index]`` starts a pipe table."""
        if not self.options.parse_tables or index + 1 >= len(lines):
            return None
        header, separator = lines[index], lines[index + 1]
        if "|" not in header or "-" not in separator:
            return None
        header_cells = split_table_row(header)
        separator_cells = split_table_row(separator)
        if len(header_cells) != len(separator_cells) or len(header_cells) > self.options.max_table_columns:
            return None
        if not all(TABLE_SEPARATOR_CELL_PATTERN.match(cell) for cell in separator_cells):
            return None
        return header_cells

    def _starts_block(self, lines: list[str], index: int) -> bool:
        """Return True when ``lines[index]`` starts any non-paragraph construct."""
        line = lines[index]
        return bool(
            not line.strip()
            or HEADING_PATTERN.match(line)
            or self._is_math_open(line)
            or self._match_list_item(line)
            or BLOCKQUOTE_PATTERN.match(line)
            or self._table_header_cells(lines, index) is not None
        )

    # ------------------------------------------------------------------
    # Prose segments
    # ------------------------------------------------------------------

    def _parse_prose(self, segment: Segment) -> None:
        """Run the block rules over one prose segment."""
        lines = segment.text.split("\n")
        # Lines that could close a display math block, for linear lookup
        math_closers = (
            [i for i, line in enumerate(lines) if line.strip().endswith(MATH_DELIMITER)]
            if self.options.parse_math
            else []
        )

        i = 0
        while i < len(lines):
            line = lines[i]
            location = SourceLocation(line=segment.start_line + i)

            heading = HEADING_PATTERN.match(line)
            if heading:
                level = len(heading.group(1))
                self._emit(
                    Heading(level=level, content=self._inline.format(heading.group(2).strip()), source_location=location)
                )
                i += 1
                continue

            if self._is_math_open(line):
                i = self._parse_math(lines, i, math_closers, location)
                continue

            item = self._match_list_item(line)
            if item is not None:
                self._add_list_item(*item, location=location)
                i += 1
                continue

            quote = BLOCKQUOTE_PATTERN.match(line)
            if quote:
                self._add_quote_line(quote.group(1), location)
                i += 1
                continue

            header_cells = self._table_header_cells(lines, i)
            if header_cells is not None:
                i = self._parse_table(lines, i, header_cells, location)
                continue

            if not line.strip():
                self._emit(Spacer(source_location=location))
                i += 1
                continue

            self._emit(Paragraph(content=self._inline.format(line.strip()), source_location=location))
            i += 1

        self._close_run()

    def _parse_math(self, lines: list[str], start: int, math_closers: list[int], location: SourceLocation) -> int:
        """Parse a display math block opened at ``lines[start]``.

        Returns
        -------
        int
            Index of the first line after the consumed lines

        """
        opening = lines[start]
        trimmed = opening.strip()

        if len(trimmed) >= MIN_SINGLE_LINE_MATH_LENGTH and trimmed.endswith(MATH_DELIMITER):
            self._emit(MathBlock(content=opening, source_location=location))
            return start + 1

        pos = bisect.bisect_right(math_closers, start)
        if pos < len(math_closers):
            end = math_closers[pos]
            self._emit(MathBlock(content="\n".join(lines[start : end + 1]), source_location=location))
            return end + 1

        logger.debug("Unterminated display math at line %d; rendering as text", location.line)
        content: list[Node] = self._inline.format(trimmed)
        end = start + 1
        while end < len(lines) and not self._starts_block(lines, end):
            content.append(LineBreak())
            content.extend(self._inline.format(lines[end].strip()))
            end += 1
        self._emit(Paragraph(content=content, source_location=location))
        return end

    def _add_list_item(self, ordered: bool, number: int, rest: str, location: SourceLocation) -> None:
        """Append an item to the open list, opening a new list when needed."""
        if self._run is not BlockRun.LIST or self._open_list is None or self._open_list.ordered != ordered:
            self._close_run()
            self._open_list = List(ordered=ordered, start=number if ordered else 1, source_location=location)
            self._run = BlockRun.LIST

        task_status = None
        text = rest.strip()
        if self.options.parse_task_lists:
            task = TASK_MARKER_PATTERN.match(text)
            if task:
                task_status = "unchecked" if task.group(1) == " " else "checked"
                text = (task.group(2) or "").strip()

        self._open_list.items.append(
            ListItem(content=self._inline.format(text), task_status=task_status, source_location=location)
        )

    def _add_quote_line(self, rest: str, location: SourceLocation) -> None:
        """Append a line to the open quote, opening one when needed."""
        if self._run is not BlockRun.QUOTE or self._open_quote is None:
            self._close_run()
            self._open_quote = BlockQuote(source_location=location)
            self._run = BlockRun.QUOTE

        child: Union[Spacer, Paragraph]
        if not rest.strip():
            child = Spacer(source_location=location)
        else:
            child = Paragraph(content=self._inline.format(rest.strip()), source_location=location)
        self._open_quote.children.append(child)

    def _parse_table(self, lines: list[str], start: int, header_cells: list[str], location: SourceLocation) -> int:
        """Parse a pipe table whose header is ``lines[start]``.

        Returns
        -------
        int
            Index of the first line after the table

        """
        columns = len(header_cells)
        alignments = [parse_alignment(cell) for cell in split_table_row(lines[start + 1])]

        header = TableRow(
            cells=[TableCell(content=self._inline.format(cell)) for cell in header_cells],
            is_header=True,
            source_location=location,
        )

        rows: list[TableRow] = []
        end = start + 2
        while end < len(lines) and "|" in lines[end] and not self._starts_block(lines, end):
            cells = split_table_row(lines[end])[:columns]
            cells.extend([""] * (columns - len(cells)))
            rows.append(
                TableRow(
                    cells=[TableCell(content=self._inline.format(cell)) for cell in cells],
                    source_location=SourceLocation(line=location.line + end - start),
                )
            )
            end += 1

        self._emit(Table(header=header, alignments=alignments, rows=rows, source_location=location))
        return end
