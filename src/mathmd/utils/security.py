#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Security helpers shared by the parser and renderer.

Functions
---------
- sanitize_language_identifier: Sanitize code fence language identifiers
- strip_null_bytes: Remove NUL characters from author text
"""

import logging
import re

from mathmd.constants import MAX_LANGUAGE_IDENTIFIER_LENGTH, SAFE_LANGUAGE_IDENTIFIER_PATTERN

logger = logging.getLogger(__name__)

_SAFE_LANGUAGE_RE = re.compile(SAFE_LANGUAGE_IDENTIFIER_PATTERN)


def sanitize_language_identifier(language: str) -> str:
    r"""Sanitize a code fence language identifier.

    The identifier ends up inside a ``class="language-..."`` attribute, so it
    may only contain alphanumerics and ``_ + # . -``.

    Parameters
    ----------
    language : str
        Raw language identifier string to sanitize

    Returns
    -------
    str
        Sanitized language identifier, or empty string if invalid

    Examples
    --------
    >>> sanitize_language_identifier("python")
    'python'
    >>> sanitize_language_identifier("c++")
    'c++'
    >>> sanitize_language_identifier('python" onclick="x')
    ''
    >>> sanitize_language_identifier("x" * 100)
    ''

    """
    if not language:
        return ""

    language = language.strip()

    if len(language) > MAX_LANGUAGE_IDENTIFIER_LENGTH:
        logger.debug("Language identifier exceeds maximum length (%d): %s...", MAX_LANGUAGE_IDENTIFIER_LENGTH, language[:50])
        return ""

    if not _SAFE_LANGUAGE_RE.match(language):
        logger.debug("Dropped language identifier containing invalid characters: %s", language[:50])
        return ""

    return language


def strip_null_bytes(content: str) -> str:
    """Remove NUL characters, which browsers replace or drop inconsistently.

    Parameters
    ----------
    content : str
        Author text

    Returns
    -------
    str
        Text without ``\\x00`` characters

    """
    if "\x00" not in content:
        return content
    logger.debug("Removed %d null byte(s) from input", content.count("\x00"))
    return content.replace("\x00", "")
