#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Caller-supplied hooks for a render call."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from mathmd.options.base import CloneFrozenMixin

UrlResolver = Callable[[str], str]


@dataclass(frozen=True)
class RenderOptions(CloneFrozenMixin):
    """Per-call URL resolution hooks.

    Each hook maps the URL an author wrote (entities already decoded) to the
    URL that should be used, for example turning a share path into an
    absolute URL. The link or image policy is applied to the hook's result,
    so a hook cannot introduce an unsafe scheme. Hooks are called at most
    once per occurrence and their exceptions propagate unchanged.

    Parameters
    ----------
    resolve_link_url : callable or None, default None
        ``(raw_url) -> url`` for ``[text](url)``; None means identity
    resolve_image_url : callable or None, default None
        ``(raw_url) -> url`` for ``![alt](url)``; None means identity

    """

    resolve_link_url: Optional[UrlResolver] = field(
        default=None,
        metadata={"help": "Map author-written link URLs before sanitization"},
    )
    resolve_image_url: Optional[UrlResolver] = field(
        default=None,
        metadata={"help": "Map author-written image URLs before sanitization"},
    )

    def __post_init__(self) -> None:
        """Check that the hooks are callable.

        Raises
        ------
        TypeError
            If a hook is neither None nor callable.

        """
        for name in ("resolve_link_url", "resolve_image_url"):
            hook = getattr(self, name)
            if hook is not None and not callable(hook):
                raise TypeError(f"{name} must be callable or None, got {type(hook).__name__}")
