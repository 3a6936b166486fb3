#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mathmd/cli/builder.py
"""Argument parser construction and exit codes for the mathmd CLI."""

from __future__ import annotations

import argparse
from dataclasses import fields

from mathmd import __version__
from mathmd.exceptions import FileError, RenderingError, ValidationError
from mathmd.options.html import HtmlRendererOptions
from mathmd.options.markdown import MarkdownParserOptions

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_RENDERING_ERROR = 7

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _field_help(options_class: type, name: str) -> str:
    """Return the ``help`` metadata of an options field."""
    for field in fields(options_class):
        if field.name == name:
            return str(field.metadata.get("help", ""))
    raise KeyError(f"{options_class.__name__} has no field {name!r}")


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Option flags default to ``None`` so that values from a configuration
    file are only overridden by flags the user actually passed.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser

    """
    parser = argparse.ArgumentParser(
        prog="mathmd",
        description="Render problem-statement markdown with $$ display math to safe HTML.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Input markdown file, or '-' to read from stdin (default: stdin)",
    )
    parser.add_argument("--out", "-o", metavar="FILE", help="Write HTML to FILE instead of stdout")
    parser.add_argument("--version", action="version", version=f"mathmd {__version__}")

    html_group = parser.add_argument_group("HTML output")
    html_group.add_argument(
        "--standalone",
        action="store_true",
        default=None,
        help=_field_help(HtmlRendererOptions, "standalone"),
    )
    html_group.add_argument("--title", metavar="TITLE", help=_field_help(HtmlRendererOptions, "title"))
    html_group.add_argument("--language", metavar="LANG", help=_field_help(HtmlRendererOptions, "language"))
    html_group.add_argument(
        "--allow-remote-scripts",
        action="store_true",
        default=None,
        help=_field_help(HtmlRendererOptions, "allow_remote_scripts"),
    )
    html_group.add_argument(
        "--api-base-url",
        metavar="URL",
        help="Base URL used to resolve /files/share/<key> image paths (default: $MATHMD_API_BASE_URL or /api/v1)",
    )

    syntax_group = parser.add_argument_group("Markdown syntax")
    syntax_group.add_argument(
        "--no-math",
        dest="parse_math",
        action="store_false",
        default=None,
        help=f"Disable: {_field_help(MarkdownParserOptions, 'parse_math')}",
    )
    syntax_group.add_argument(
        "--no-tables",
        dest="parse_tables",
        action="store_false",
        default=None,
        help=f"Disable: {_field_help(MarkdownParserOptions, 'parse_tables')}",
    )
    syntax_group.add_argument(
        "--no-task-lists",
        dest="parse_task_lists",
        action="store_false",
        default=None,
        help=f"Disable: {_field_help(MarkdownParserOptions, 'parse_task_lists')}",
    )

    config_group = parser.add_argument_group("Configuration")
    config_group.add_argument("--config", metavar="FILE", help="Configuration file (.toml, .yaml, .yml or .json)")
    config_group.add_argument(
        "--no-config", action="store_true", help="Ignore MATHMD_CONFIG and auto-discovered configuration files"
    )

    display_group = parser.add_argument_group("Display and logging")
    display_group.add_argument(
        "--rich", action="store_true", help="Pretty-print the HTML with syntax highlighting when stdout is a terminal"
    )
    display_group.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    display_group.add_argument("--log-file", metavar="FILE", help="Also write log messages to FILE")
    display_group.add_argument(
        "--trace", action="store_true", help="Enable trace logging with timestamps and logger names"
    )

    return parser


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR

    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR

    # All other errors (unexpected errors)
    return EXIT_ERROR
