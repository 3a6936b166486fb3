#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the mathmd library.

This module centralizes the hardcoded values used across mathmd so that the
rendering rules, class hooks and URL policies are discoverable in one place.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Markup Rules - Block and inline syntax constants
3. HTML Class Hooks - CSS classes emitted for each node kind
4. Security Constants - URL policy tables for links and images
5. Standalone Output - Document wrapper and math loader defaults
6. CLI and Configuration - Config file names and environment variables
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

Alignment = Literal["left", "center", "right"]
TaskStatus = Literal["checked", "unchecked"]

# =============================================================================
# Markup Rules
# =============================================================================

FENCE_MARKER = "```"
MATH_DELIMITER = "$$"

# A single-line display math block must be longer than its two delimiters
MIN_SINGLE_LINE_MATH_LENGTH = 5

MAX_HEADING_LEVEL = 6
MAX_LANGUAGE_IDENTIFIER_LENGTH = 50
SAFE_LANGUAGE_IDENTIFIER_PATTERN = r"^[a-zA-Z0-9_+#.\-]+$"

DEFAULT_IMAGE_ALT = "image"

DEFAULT_PARSE_MATH = True
DEFAULT_PARSE_TABLES = True
DEFAULT_PARSE_TASK_LISTS = True
DEFAULT_PARSE_ORDERED_LISTS = True
DEFAULT_MAX_TABLE_COLUMNS = 64

# =============================================================================
# HTML Class Hooks
# =============================================================================

CSS_CLASS_HEADING = "md__h"
CSS_CLASS_PARAGRAPH = "md__p"
CSS_CLASS_UNORDERED_LIST = "md__ul"
CSS_CLASS_ORDERED_LIST = "md__ol"
CSS_CLASS_LIST_ITEM = "md__li"
CSS_CLASS_TASK_CHECKBOX = "md__task"
CSS_CLASS_BLOCKQUOTE = "md__blockquote"
CSS_CLASS_SPACER = "md__spacer"
CSS_CLASS_CODE_BLOCK = "md__pre"
CSS_CLASS_INLINE_CODE = "md__code"
CSS_CLASS_MATH_BLOCK = "md__math"
CSS_CLASS_TABLE = "md__table"
CSS_CLASS_IMAGE = "md__img"
CSS_CLASS_IMAGE_PLACEHOLDER = "md__img_placeholder"
CSS_CLASS_LINK = "link"

LINK_TARGET = "_blank"
LINK_REL = "noopener noreferrer"

# =============================================================================
# Security Constants
# =============================================================================


@dataclass(frozen=True)
class UrlPolicy:
    """Declarative URL scheme policy.

    Parameters
    ----------
    name : str
        Policy name used in log messages
    rejected_prefixes : tuple of str
        Lowercase prefixes that are always refused
    accepted_prefixes : tuple of str
        Lowercase prefixes that are allowed; anything else is refused

    """

    name: str
    rejected_prefixes: tuple[str, ...]
    accepted_prefixes: tuple[str, ...]


RELATIVE_URL_PREFIXES = ("/", "./", "../")

LINK_URL_POLICY = UrlPolicy(
    name="link",
    rejected_prefixes=("javascript:", "vbscript:", "data:"),
    accepted_prefixes=("http://", "https://", "mailto:", "tel:", "#") + RELATIVE_URL_PREFIXES,
)

SAFE_DATA_IMAGE_TYPES = ("image/png", "image/jpeg", "image/webp", "image/gif")

IMAGE_URL_POLICY = UrlPolicy(
    name="image",
    rejected_prefixes=("javascript:", "vbscript:"),
    accepted_prefixes=("http://", "https://", "blob:")
    + RELATIVE_URL_PREFIXES
    + tuple(f"data:{mime}{sep}" for mime in SAFE_DATA_IMAGE_TYPES for sep in (";", ",")),
)

REJECTED_LINK_HREF = "#"

# =============================================================================
# Standalone Output
# =============================================================================

DEFAULT_HTML_STANDALONE = False
DEFAULT_HTML_TITLE = "Document"
DEFAULT_HTML_LANGUAGE = "en"
DEFAULT_ALLOW_REMOTE_SCRIPTS = False  # Secure by default - require opt-in for CDN scripts
DEFAULT_LAZY_IMAGES = True

DEFAULT_MATHJAX_URLS = (
    "https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-svg.js",
    "https://cdnjs.cloudflare.com/ajax/libs/mathjax/3.2.2/es5/tex-svg.js",
    "https://unpkg.com/mathjax@3/es5/tex-svg.js",
)

# =============================================================================
# File Share URLs
# =============================================================================

DEFAULT_API_BASE_URL = "/api/v1"
FILE_SHARE_ROUTE = "/files/share/"
DEFAULT_SHARE_PREFIXES = ("/api/v1/files/share/", "/files/share/")

# =============================================================================
# CLI and Configuration
# =============================================================================

CONFIG_FILENAMES = [".mathmd.toml", ".mathmd.yaml", ".mathmd.yml", ".mathmd.json", "pyproject.toml"]

ENV_CONFIG = "MATHMD_CONFIG"
ENV_API_BASE_URL = "MATHMD_API_BASE_URL"
ENV_USE_MOCK = "MATHMD_USE_MOCK"
ENV_MATHJAX_URLS = "MATHMD_MATHJAX_URLS"
