#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mathmd/utils/url_policy.py
"""URL scheme policies for links and images.

Policies are plain data (``UrlPolicy`` tables in :mod:`mathmd.constants`);
this module only applies them. Sanitization always runs on the URL *after*
any resolver hook, so a hook cannot smuggle a dangerous scheme through.

Functions
---------
- apply_url_policy: Check a URL against a policy table
- sanitize_link_url: Link policy, rejected URLs become ``#``
- sanitize_image_url: Image policy, rejected URLs become ``None``
"""

from __future__ import annotations

import logging
from typing import Optional

from mathmd.constants import IMAGE_URL_POLICY, LINK_URL_POLICY, REJECTED_LINK_HREF, UrlPolicy

logger = logging.getLogger(__name__)

# Browsers drop these before resolving a scheme, so "java\tscript:" is still javascript:
_IGNORED_SCHEME_CHARS = dict.fromkeys(map(ord, "\t\n\r\x00"), None)


def _scheme_probe(url: str) -> str:
    """Return a lowercase form of ``url`` suitable for prefix matching."""
    return url.translate(_IGNORED_SCHEME_CHARS).lower()


def apply_url_policy(url: str, policy: UrlPolicy) -> Optional[str]:
    """Check ``url`` against ``policy``.

    Parameters
    ----------
    url : str
        Candidate URL (already resolved and unescaped)
    policy : UrlPolicy
        Policy table to apply

    Returns
    -------
    str or None
        The trimmed URL when accepted, otherwise None

    Examples
    --------
    >>> apply_url_policy(" https://example.com ", LINK_URL_POLICY)
    'https://example.com'
    >>> apply_url_policy("JavaScript:alert(1)", LINK_URL_POLICY) is None
    True

    """
    candidate = url.strip()
    if not candidate:
        logger.debug("Rejected empty %s URL", policy.name)
        return None

    probe = _scheme_probe(candidate)

    if probe.startswith(policy.rejected_prefixes):
        logger.debug("Rejected %s URL with blocked scheme: %s", policy.name, candidate[:80])
        return None

    if not probe.startswith(policy.accepted_prefixes):
        logger.debug("Rejected %s URL outside the allow-list: %s", policy.name, candidate[:80])
        return None

    # Allowed prefix must also be the literal prefix, not one reached by dropping control chars
    if probe != candidate.lower():
        logger.debug("Rejected %s URL containing control characters: %r", policy.name, candidate[:80])
        return None

    return candidate


def sanitize_link_url(url: str) -> str:
    """Return a safe ``href`` for a link, falling back to ``#``.

    Parameters
    ----------
    url : str
        Resolved link destination

    Returns
    -------
    str
        The accepted URL, or ``"#"`` when the link policy refuses it

    """
    accepted = apply_url_policy(url, LINK_URL_POLICY)
    if accepted is None:
        return REJECTED_LINK_HREF
    return accepted


def sanitize_image_url(url: str) -> Optional[str]:
    """Return a safe ``src`` for an image, or None when it must not load."""
    return apply_url_policy(url, IMAGE_URL_POLICY)
