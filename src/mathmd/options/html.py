#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for HTML rendering.

This module defines options for serializing the AST into an HTML fragment
or a standalone HTML document.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from mathmd.constants import (
    DEFAULT_ALLOW_REMOTE_SCRIPTS,
    DEFAULT_HTML_LANGUAGE,
    DEFAULT_HTML_STANDALONE,
    DEFAULT_HTML_TITLE,
    DEFAULT_LAZY_IMAGES,
    DEFAULT_MATHJAX_URLS,
    ENV_MATHJAX_URLS,
)
from mathmd.options.base import BaseRendererOptions

logger = logging.getLogger(__name__)


def mathjax_urls_from_env() -> tuple[str, ...]:
    """Return the MathJax CDN list, honoring ``MATHMD_MATHJAX_URLS``.

    The variable holds a comma-separated list of script URLs tried in order.
    Entries that are not ``https://`` URLs are skipped with a warning. An
    unset or blank variable yields the built-in CDN list.

    Returns
    -------
    tuple of str
        Script URLs in priority order

    """
    raw = os.environ.get(ENV_MATHJAX_URLS, "")
    urls = []
    for part in raw.split(","):
        url = part.strip()
        if not url:
            continue
        if not url.startswith("https://"):
            logger.warning("Ignoring non-https MathJax URL from %s: %s", ENV_MATHJAX_URLS, url)
            continue
        urls.append(url)
    return tuple(urls) or DEFAULT_MATHJAX_URLS


@dataclass(frozen=True)
class HtmlRendererOptions(BaseRendererOptions):
    """Configuration options for rendering AST to HTML.

    Parameters
    ----------
    standalone : bool, default False
        Generate a complete HTML document with <html>, <head>, <body> tags.
        If False, generates only the content fragment.
    title : str, default "Document"
        Document title used in standalone mode.
    language : str, default "en"
        Document language code for the <html lang="..."> attribute.
    allow_remote_scripts : bool, default False
        Allow loading the MathJax typesetter from a CDN in standalone mode.
        Default is False for security; when False a warning is logged and the
        math is left as literal ``$$`` text.
    mathjax_urls : tuple of str
        CDN URLs tried in order by the standalone MathJax loader. Defaults to
        ``MATHMD_MATHJAX_URLS`` or the built-in jsdelivr/cdnjs/unpkg list.
    lazy_images : bool, default True
        Add ``loading="lazy"`` to rendered images.

    """

    standalone: bool = field(
        default=DEFAULT_HTML_STANDALONE,
        metadata={"help": "Generate complete HTML document (vs content fragment)", "importance": "core"},
    )
    title: str = field(
        default=DEFAULT_HTML_TITLE,
        metadata={"help": "Document title for standalone output", "importance": "core"},
    )
    language: str = field(
        default=DEFAULT_HTML_LANGUAGE,
        metadata={"help": "Document language code for HTML lang attribute", "importance": "advanced"},
    )
    allow_remote_scripts: bool = field(
        default=DEFAULT_ALLOW_REMOTE_SCRIPTS,
        metadata={
            "help": "Allow loading MathJax from a CDN in standalone output (default: False for security)",
            "importance": "security",
        },
    )
    mathjax_urls: tuple[str, ...] = field(
        default_factory=mathjax_urls_from_env,
        metadata={"help": "MathJax CDN URLs tried in order", "importance": "advanced"},
    )
    lazy_images: bool = field(
        default=DEFAULT_LAZY_IMAGES,
        metadata={"help": "Add loading=\"lazy\" to images", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate dependent field constraints.

        Raises
        ------
        ValueError
            If the remote script loader is enabled without any URL, or a URL is not https.

        """
        if not isinstance(self.mathjax_urls, tuple):
            object.__setattr__(self, "mathjax_urls", tuple(self.mathjax_urls))

        if self.allow_remote_scripts and not self.mathjax_urls:
            raise ValueError("allow_remote_scripts=True requires at least one entry in mathjax_urls")

        for url in self.mathjax_urls:
            if not url.startswith("https://"):
                raise ValueError(f"mathjax_urls entries must use https://, got {url!r}")
