#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mathmd/parsers/fences.py
"""Split author text into prose and fenced-code segments.

A fence line is any line whose stripped content starts with three
backticks. Fence lines pair up in order; the text after the backticks on an
opening fence is the language hint. A trailing opening fence without a
partner degrades to prose, so no text is dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Optional

from mathmd.constants import FENCE_MARKER
from mathmd.utils.security import sanitize_language_identifier

logger = logging.getLogger(__name__)

SegmentKind = Literal["prose", "code"]


@dataclass(frozen=True)
class Segment:
    """A contiguous region of the source.

    Parameters
    ----------
    kind : {'prose', 'code'}
        Whether block rules apply to the region
    text : str
        Region text; for code, the lines between the fences joined by newline
    language : str or None, default None
        Sanitized language hint (code segments only)
    start_line : int, default 1
        1-based source line of the region's first line (the opening fence for code)

    """

    kind: SegmentKind
    text: str
    language: Optional[str] = None
    start_line: int = 1


def split_lines(source: str) -> list[str]:
    """Split text into lines with carriage returns removed.

    A final newline terminates the last line rather than starting an empty
    one, so ``"a\\n"`` is one line.
    """
    text = source.replace("\r", "")
    if not text:
        return []
    if text.endswith("\n"):
        text = text[:-1]
    return text.split("\n")


def is_fence_line(line: str) -> bool:
    """Return True when ``line`` opens or closes a code fence."""
    return line.strip().startswith(FENCE_MARKER)


def _fence_language(line: str) -> Optional[str]:
    hint = line.strip().lstrip("`").strip()
    if not hint:
        return None
    # Only the first word is the language; the rest is an info string
    language = sanitize_language_identifier(hint.split()[0])
    return language or None


def split_fenced_segments(source: str) -> list[Segment]:
    """Split ``source`` into alternating prose and code segments.

    Parameters
    ----------
    source : str
        Author text

    Returns
    -------
    list of Segment
        Segments in source order. Never raises for any input.

    Examples
    --------
    >>> [s.kind for s in split_fenced_segments("a\\n```py\\nx\\n```\\nb")]
    ['prose', 'code', 'prose']

    """
    lines = split_lines(source)
    fence_indices = [i for i, line in enumerate(lines) if is_fence_line(line)]

    segments: list[Segment] = []
    cursor = 0

    for pair_start in range(0, len(fence_indices) - 1, 2):
        open_idx = fence_indices[pair_start]
        close_idx = fence_indices[pair_start + 1]

        if open_idx > cursor:
            segments.append(Segment(kind="prose", text="\n".join(lines[cursor:open_idx]), start_line=cursor + 1))

        segments.append(
            Segment(
                kind="code",
                text="\n".join(lines[open_idx + 1 : close_idx]),
                language=_fence_language(lines[open_idx]),
                start_line=open_idx + 1,
            )
        )
        cursor = close_idx + 1

    if len(fence_indices) % 2 == 1:
        logger.debug("Unterminated code fence at line %d; rendering remainder as prose", fence_indices[-1] + 1)

    if cursor < len(lines):
        segments.append(Segment(kind="prose", text="\n".join(lines[cursor:]), start_line=cursor + 1))

    return segments
