#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mathmd/utils/share_urls.py
"""File share URL helpers.

Problem statements reference uploaded images by their share route
(``/api/v1/files/share/<key>``). Storage backends may hand out internal
URLs, so for browser access the stable controller route
``{api_base_url}/files/share/{key}`` is preferred. In mock mode an in-memory
registry maps share keys to ``data:`` URLs so previews work without a
backend.

The resolver is plugged into rendering through
:attr:`mathmd.options.RenderOptions.resolve_image_url`; the image URL policy
still runs on whatever it returns.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional
from urllib.parse import quote, unquote

from mathmd.constants import (
    DEFAULT_API_BASE_URL,
    DEFAULT_SHARE_PREFIXES,
    ENV_API_BASE_URL,
    ENV_USE_MOCK,
    FILE_SHARE_ROUTE,
)

logger = logging.getLogger(__name__)

# Characters left alone by encodeURIComponent in addition to unreserved ones
_SHARE_KEY_SAFE_CHARS = "!*'()"

_TRUTHY_VALUES = frozenset({"1", "true", "yes", "on"})


def build_file_share_url(share_key: str, api_base_url: str = DEFAULT_API_BASE_URL) -> str:
    """Build the public share URL for a file share key.

    Parameters
    ----------
    share_key : str
        File share key
    api_base_url : str, default '/api/v1'
        Base URL of the API; a trailing slash is ignored

    Returns
    -------
    str
        ``{base}/files/share/{quoted key}``, or an empty string when the key is empty

    Examples
    --------
    >>> build_file_share_url("abc 1", "https://api.example.com/v1/")
    'https://api.example.com/v1/files/share/abc%201'
    >>> build_file_share_url("  ")
    ''

    """
    cleaned = (share_key or "").strip()
    if not cleaned:
        return ""
    base = api_base_url.rstrip("/")
    return f"{base}{FILE_SHARE_ROUTE}{quote(cleaned, safe=_SHARE_KEY_SAFE_CHARS)}"


def env_flag(value: Optional[str]) -> bool:
    """Interpret an environment variable value as a boolean flag."""
    return (value or "").strip().lower() in _TRUTHY_VALUES


class ShareUrlResolver:
    """Resolver hook mapping author-written share paths to absolute URLs.

    Parameters
    ----------
    api_base_url : str, default '/api/v1'
        Base URL used to build share URLs
    share_prefixes : tuple of str, optional
        Path prefixes that identify a share route in author text
    mock_data_urls : Mapping[str, str] or None, default None
        Share key to ``data:`` URL registry. When given, registered keys
        resolve to their data URL instead of the share route.

    Examples
    --------
    >>> resolver = ShareUrlResolver(api_base_url="https://api.example.com/v1")
    >>> resolver("/api/v1/files/share/k1")
    'https://api.example.com/v1/files/share/k1'
    >>> resolver("https://example.com/a.png")
    'https://example.com/a.png'

    """

    def __init__(
        self,
        api_base_url: str = DEFAULT_API_BASE_URL,
        share_prefixes: tuple[str, ...] = DEFAULT_SHARE_PREFIXES,
        mock_data_urls: Optional[Mapping[str, str]] = None,
    ):
        if not share_prefixes:
            raise ValueError("share_prefixes must contain at least one prefix")
        self.api_base_url = api_base_url
        # Longest prefix first so "/api/v1/files/share/" wins over "/files/share/"
        self.share_prefixes = tuple(sorted(share_prefixes, key=len, reverse=True))
        self.use_mock = mock_data_urls is not None
        self._mock_data_urls: dict[str, str] = dict(mock_data_urls or {})

    @classmethod
    def from_env(
        cls, mock_data_urls: Optional[Mapping[str, str]] = None, environ: Optional[Mapping[str, str]] = None
    ) -> ShareUrlResolver:
        """Build a resolver from ``MATHMD_API_BASE_URL`` and ``MATHMD_USE_MOCK``.

        Parameters
        ----------
        mock_data_urls : Mapping[str, str] or None, default None
            Registry used only when ``MATHMD_USE_MOCK`` is set
        environ : Mapping[str, str] or None, default None
            Environment to read; defaults to ``os.environ``

        Returns
        -------
        ShareUrlResolver
            Configured resolver

        """
        env = os.environ if environ is None else environ
        api_base_url = env.get(ENV_API_BASE_URL) or DEFAULT_API_BASE_URL
        use_mock = env_flag(env.get(ENV_USE_MOCK))
        registry = dict(mock_data_urls or {}) if use_mock else None
        return cls(api_base_url=api_base_url, mock_data_urls=registry)

    def register_mock_data_url(self, share_key: str, data_url: str) -> None:
        """Register a data URL preview for a share key (mock mode only)."""
        if not self.use_mock:
            raise RuntimeError("Mock data URLs can only be registered when mock mode is enabled")
        self._mock_data_urls[share_key] = data_url

    def get_mock_data_url(self, share_key: str) -> Optional[str]:
        """Return the registered data URL for ``share_key``, if any."""
        return self._mock_data_urls.get(share_key)

    def to_public_url(self, share_key: str) -> str:
        """Return the browser-usable URL for a share key.

        Parameters
        ----------
        share_key : str
            File share key

        Returns
        -------
        str
            Registered data URL in mock mode, else the share route URL
            (empty string for an empty key)

        """
        cleaned = (share_key or "").strip()
        if not cleaned:
            return ""
        if self.use_mock:
            data_url = self.get_mock_data_url(cleaned)
            if data_url:
                return data_url
        return build_file_share_url(cleaned, self.api_base_url)

    def __call__(self, raw_url: str) -> str:
        """Map a raw author URL; anything that is not a share path passes through."""
        candidate = raw_url.strip()
        for prefix in self.share_prefixes:
            if candidate.startswith(prefix):
                break
        else:
            return raw_url

        remainder = candidate[len(prefix) :]
        cut = min((idx for idx in (remainder.find("?"), remainder.find("#")) if idx >= 0), default=len(remainder))
        share_key = unquote(remainder[:cut])
        if not share_key.strip():
            return raw_url

        resolved = self.to_public_url(share_key)
        logger.debug("Resolved share path %s to %s", candidate[:80], resolved[:80])
        return resolved
