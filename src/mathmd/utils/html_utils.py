"""HTML-related utility helpers."""

from __future__ import annotations

from html import escape as _html_escape


def escape_html(text: str, *, enabled: bool = True) -> str:
    """Escape HTML special characters (including quotes) when enabled."""
    if not enabled:
        return text
    return _html_escape(text, quote=True)


def escape_attribute(value: str) -> str:
    """Escape a value for use inside a double-quoted HTML attribute.

    Parameters
    ----------
    value : str
        Raw attribute value (for example a sanitized URL)

    Returns
    -------
    str
        Attribute-safe string with ``& < > " '`` replaced by entities

    """
    return _html_escape(value, quote=True)
