#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for parsing problem-text markdown.

The core rule set (headings, bullet lists, blockquotes, fenced code and
display math) is always on. Options toggle the compatible extensions.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from mathmd.constants import (
    DEFAULT_MAX_TABLE_COLUMNS,
    DEFAULT_PARSE_MATH,
    DEFAULT_PARSE_ORDERED_LISTS,
    DEFAULT_PARSE_TABLES,
    DEFAULT_PARSE_TASK_LISTS,
)
from mathmd.options.base import BaseParserOptions


@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Configuration options for the markdown block and inline parser.

    Parameters
    ----------
    parse_math : bool, default True
        Recognize ``$$`` display math blocks. When False, ``$$`` lines are
        ordinary paragraphs.
    parse_tables : bool, default True
        Recognize pipe tables (header row followed by a ``---`` separator row).
    parse_task_lists : bool, default True
        Recognize ``[ ]`` / ``[x]`` at the start of list items.
    parse_ordered_lists : bool, default True
        Recognize ``1.`` / ``1)`` list items as ordered lists.
    max_table_columns : int, default 64
        Header rows with more cells than this are not treated as tables.

    """

    parse_math: bool = field(
        default=DEFAULT_PARSE_MATH,
        metadata={"help": "Recognize $$ display math blocks", "cli_name": "no-math", "importance": "core"},
    )
    parse_tables: bool = field(
        default=DEFAULT_PARSE_TABLES,
        metadata={"help": "Recognize pipe tables", "cli_name": "no-tables", "importance": "core"},
    )
    parse_task_lists: bool = field(
        default=DEFAULT_PARSE_TASK_LISTS,
        metadata={"help": "Recognize [ ] and [x] task list items", "cli_name": "no-task-lists", "importance": "core"},
    )
    parse_ordered_lists: bool = field(
        default=DEFAULT_PARSE_ORDERED_LISTS,
        metadata={"help": "Recognize numbered list items", "importance": "advanced"},
    )
    max_table_columns: int = field(
        default=DEFAULT_MAX_TABLE_COLUMNS,
        metadata={"help": "Maximum number of table columns", "type": int, "importance": "security"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If max_table_columns is not positive.

        """
        if self.max_table_columns < 1:
            raise ValueError(f"max_table_columns must be positive, got {self.max_table_columns}")
