"""Command-line interface for the mathmd renderer.

Reads markdown from a file or stdin, renders it to safe HTML and writes the
result to stdout or a file.

Configuration
-------------
Settings are merged with priority CLI flags > configuration file > defaults.
The configuration file is taken from ``--config``, else ``MATHMD_CONFIG``,
else discovered from the working directory upward (``--no-config`` skips the
last two). ``MATHMD_API_BASE_URL`` and ``MATHMD_USE_MOCK`` configure the
share-URL resolver; ``MATHMD_MATHJAX_URLS`` overrides the MathJax CDN list.

Examples
--------
Render a file to stdout::

    $ mathmd problem.md

Render a standalone page that loads MathJax::

    $ mathmd problem.md --standalone --allow-remote-scripts --out problem.html

Read from stdin::

    $ cat problem.md | mathmd - --rich

"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import IO, Any, Optional

from mathmd.api import MarkdownEngine
from mathmd.cli.builder import (
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    create_parser,
    get_exit_code_for_exception,
)
from mathmd.cli.config import load_config_with_priority, split_config
from mathmd.cli.output import print_rich_html, should_use_rich_output, write_output
from mathmd.constants import ENV_CONFIG
from mathmd.exceptions import FileAccessError, FileNotFoundError, MathMdError, RenderingError
from mathmd.logging_utils import configure_logging
from mathmd.options import HtmlRendererOptions, MarkdownParserOptions, RenderOptions
from mathmd.utils.share_urls import ShareUrlResolver

logger = logging.getLogger(__name__)

__all__ = ["create_parser", "main"]


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments."""
    # --trace takes precedence over --log-level
    log_level = logging.DEBUG if parsed_args.trace else getattr(logging, parsed_args.log_level)
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _read_input(input_arg: str, stdin: Optional[IO[str]] = None) -> str:
    """Read the markdown source from a path or stdin (``-``).

    Raises
    ------
    FileNotFoundError
        If the input path does not exist
    FileAccessError
        If the input cannot be read or decoded

    """
    if input_arg == "-":
        return (stdin or sys.stdin).read()

    path = Path(input_arg)
    if not path.exists():
        raise FileNotFoundError(file_path=str(path))
    if not path.is_file():
        raise FileAccessError(file_path=str(path), message=f"Input path is not a file: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileAccessError(file_path=str(path), original_error=e) from e


def build_engine_settings(
    parsed_args: argparse.Namespace, config: dict[str, Any]
) -> tuple[MarkdownParserOptions, HtmlRendererOptions, Optional[str]]:
    """Merge configuration-file values with explicitly passed CLI flags.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments; unset flags are None
    config : dict
        Flat configuration table

    Returns
    -------
    tuple
        (parser options, renderer options, api_base_url or None)

    Raises
    ------
    argparse.ArgumentTypeError
        If the configuration holds unknown keys or invalid values

    """
    parser_kwargs, renderer_kwargs, extra = split_config(config)

    for name in ("parse_math", "parse_tables", "parse_task_lists"):
        value = getattr(parsed_args, name)
        if value is not None:
            parser_kwargs[name] = value

    for name in ("standalone", "title", "language", "allow_remote_scripts"):
        value = getattr(parsed_args, name)
        if value is not None:
            renderer_kwargs[name] = value

    api_base_url = parsed_args.api_base_url or extra.get("api_base_url")

    try:
        return MarkdownParserOptions(**parser_kwargs), HtmlRendererOptions(**renderer_kwargs), api_base_url
    except (TypeError, ValueError) as e:
        raise argparse.ArgumentTypeError(f"Invalid option value: {e}") from e


def main(args: list[str] | None = None) -> int:
    """Execute the CLI and return a process exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    env_config = None if parsed_args.no_config else os.environ.get(ENV_CONFIG)
    try:
        if parsed_args.no_config and not parsed_args.config:
            config: dict[str, Any] = {}
        else:
            config = load_config_with_priority(explicit_path=parsed_args.config, env_var_path=env_config)
        parser_options, renderer_options, api_base_url = build_engine_settings(parsed_args, config)
    except argparse.ArgumentTypeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    resolver = ShareUrlResolver.from_env()
    if api_base_url:
        resolver.api_base_url = api_base_url
    render_options = RenderOptions(resolve_image_url=resolver)

    try:
        source = _read_input(parsed_args.input)
        engine = MarkdownEngine(parser_options=parser_options, renderer_options=renderer_options)
        try:
            html_text = engine.render(source, render_options)
        except MathMdError:
            raise
        except Exception as e:
            raise RenderingError(
                f"Failed to render {parsed_args.input}: {e}", rendering_stage="render", original_error=e
            ) from e

        if should_use_rich_output(parsed_args):
            print_rich_html(html_text)
        else:
            write_output(html_text, parsed_args.out)
    except MathMdError as e:
        logger.debug("Rendering failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
