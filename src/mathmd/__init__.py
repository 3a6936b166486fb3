"""mathmd - safe Markdown-to-HTML rendering for problem statements.

mathmd renders author-supplied problem statements and solutions (free-form
text mixing prose, lightweight markup and ``$$`` display math) into HTML that
can be injected into a browser DOM directly. Author text is escaped before any
markup is recognized, link and image URLs pass through declarative scheme
policies, and display math is emitted verbatim inside ``md__math``
containers for an external TeX typesetter.

Pipeline
--------
1. Fence splitter separates fenced code from prose
2. Block parser recognizes headings, lists, quotes, tables and display math
3. Inline formatter recognizes code spans, emphasis, images and links
4. URL policies sanitize every link and image destination
5. HtmlRenderer serializes the AST with fixed class hooks

Examples
--------
Render a fragment:

    >>> from mathmd import render
    >>> render("# Sum\\n$$\\na=b+c\\n$$")
    '<h1 class="md__h">Sum</h1>\\n<div class="md__math">$$\\na=b+c\\n$$</div>'

Resolve share paths to absolute URLs before sanitization:

    >>> from mathmd import RenderOptions, ShareUrlResolver
    >>> options = RenderOptions(resolve_image_url=ShareUrlResolver("https://api.example.com/v1"))
    >>> html = render("![fig](/api/v1/files/share/abc)", options)

"""

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        f"mathmd requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from mathmd.api import MarkdownEngine, get_default_engine, parse, render  # noqa: E402
from mathmd.exceptions import (  # noqa: E402
    InvalidOptionsError,
    MathMdError,
    RenderingError,
    ValidationError,
)
from mathmd.options import HtmlRendererOptions, MarkdownParserOptions, RenderOptions  # noqa: E402
from mathmd.utils.share_urls import ShareUrlResolver, build_file_share_url  # noqa: E402

__all__ = [
    "HtmlRendererOptions",
    "InvalidOptionsError",
    "MarkdownEngine",
    "MarkdownParserOptions",
    "MathMdError",
    "RenderOptions",
    "RenderingError",
    "ShareUrlResolver",
    "ValidationError",
    "__version__",
    "build_file_share_url",
    "get_default_engine",
    "parse",
    "render",
]
