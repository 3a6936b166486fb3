"""Utility functions for cli output."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mathmd/cli/output.py
import argparse
import sys
from pathlib import Path
from typing import IO, Optional

from rich.console import Console
from rich.syntax import Syntax

from mathmd.exceptions import OutputWriteError


def should_use_rich_output(args: argparse.Namespace, stream: Optional[IO[str]] = None) -> bool:
    """Determine if Rich output should be used based on TTY and args.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command line arguments
    stream : optional, default None
        Uses sys.stdout unless otherwise specified.

    Returns
    -------
    bool
        True if Rich output should be used

    Notes
    -----
    Rich output is used when the --rich flag is set, no --out file was
    given, and the target stream is a TTY.

    """
    if not args.rich or args.out:
        return False

    target = stream or sys.stdout
    isatty = getattr(target, "isatty", None)
    if not callable(isatty):
        return False
    try:
        return bool(isatty())
    except ValueError:
        # Closed stream
        return False


def print_rich_html(html_text: str, stream: Optional[IO[str]] = None, theme: str = "monokai") -> None:
    """Print HTML with Rich syntax highlighting."""
    console = Console(file=stream) if stream is not None else Console()
    console.print(Syntax(html_text, "html", theme=theme, word_wrap=True))


def write_output(html_text: str, out_path: Optional[str], stream: Optional[IO[str]] = None) -> None:
    """Write rendered HTML to ``out_path`` or the output stream.

    Parameters
    ----------
    html_text : str
        Rendered HTML
    out_path : str or None
        Destination file; None writes to ``stream``
    stream : optional, default None
        Uses sys.stdout unless otherwise specified.

    Raises
    ------
    OutputWriteError
        If the destination file cannot be written

    """
    if out_path is None:
        target = stream or sys.stdout
        target.write(html_text)
        if not html_text.endswith("\n"):
            target.write("\n")
        return

    path = Path(out_path)
    try:
        path.write_text(html_text + "\n", encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(file_path=str(path), original_error=e) from e
