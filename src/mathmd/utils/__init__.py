#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mathmd/utils/__init__.py
"""Utility modules for the mathmd package.

This package contains the URL policy sanitizer, HTML escaping helpers,
file-share URL resolution and other small security helpers.
"""

from mathmd.utils.html_utils import escape_attribute, escape_html
from mathmd.utils.share_urls import ShareUrlResolver, build_file_share_url
from mathmd.utils.url_policy import apply_url_policy, sanitize_image_url, sanitize_link_url

__all__ = [
    "ShareUrlResolver",
    "apply_url_policy",
    "build_file_share_url",
    "escape_attribute",
    "escape_html",
    "sanitize_image_url",
    "sanitize_link_url",
]
